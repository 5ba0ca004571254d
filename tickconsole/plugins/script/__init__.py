#!/usr/bin/env python3
# tickconsole/plugins/script/__init__.py
"""Script execution and tick-based pacing."""
