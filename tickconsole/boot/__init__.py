#!/usr/bin/env python3
# tickconsole/boot/__init__.py
from __future__ import annotations
"""
Boot sequence package.

Exports:
- boot_sequence: config -> logger -> console -> commands -> autoexec, with [ OK ] / [FAILED] lines.
- BootState: Dataclass containing console, logger, config and command count.
"""


from .boot import BootState, boot_sequence

__all__ = ["boot_sequence", "BootState"]
