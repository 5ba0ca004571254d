#!/usr/bin/env python3
# tickconsole/config/__init__.py
from __future__ import annotations

"""
Console configuration.

Provides the `ConsoleConfig` dataclass and a loader layering built-in
defaults, config files in the working directory and CONSOLE_* environment
variables.
"""

from .config import DEFAULTS, ENV_PREFIX, ConsoleConfig, config_from_mapping, load_config

__all__ = [
    "DEFAULTS",
    "ENV_PREFIX",
    "ConsoleConfig",
    "config_from_mapping",
    "load_config",
]
