#!/usr/bin/env python3
# tickconsole/plugins/host/__init__.py
CATEGORY_DESCRIPTION = "Host program controls."
