#!/usr/bin/env python3
# tickconsole/plugins/__init__.py
"""Built-in console commands, one subpackage per category."""
