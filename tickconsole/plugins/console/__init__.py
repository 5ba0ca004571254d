#!/usr/bin/env python3
# tickconsole/plugins/console/__init__.py
CATEGORY_DESCRIPTION = "Output, help and alias management."
