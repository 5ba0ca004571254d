#!/usr/bin/env python3
# tickconsole/interface/loader.py
from __future__ import annotations

"""
Dynamic command loader (the built-in command registration entry point).

Features:
- Imports all modules under a given package (default: 'tickconsole.plugins').
- Registers functions tagged with @command, plus COMMAND/COMMANDS exports.
- Supports 'entrypoint.py' inside a subpackage.
- Derives categories from subpackage names if not explicitly set.
- Collects category descriptions from CATEGORY_DESCRIPTION or the package docstring.
"""

import dataclasses
import importlib
import logging
import pkgutil
from pathlib import Path
from types import ModuleType
from typing import TYPE_CHECKING, Iterable

from tickconsole.commands import COMMAND_ATTR, Command, DuplicateNameError

if TYPE_CHECKING:
    from tickconsole.context import ConsoleContext

logger = logging.getLogger(__name__)

DEFAULT_COMMANDS_PACKAGE = "tickconsole.plugins"


def _commands_in_module(module: ModuleType) -> list[Command]:
    """Collect commands defined by a module, in definition order."""
    found: list[Command] = []
    for value in vars(module).values():
        command_obj = getattr(value, COMMAND_ATTR, None)
        if isinstance(command_obj, Command) and command_obj.module == module.__name__:
            found.append(command_obj)

    exported = getattr(module, "COMMAND", None)
    if isinstance(exported, Command):
        found.append(exported)
    exported_many = getattr(module, "COMMANDS", None)
    if isinstance(exported_many, Iterable) and not isinstance(exported_many, (str, bytes)):
        found.extend(item for item in exported_many if isinstance(item, Command))
    return found


def _with_category(command_obj: Command, commands_package: str) -> Command:
    """Derive category from the first subpackage segment (e.g. 'script.entrypoint')."""
    prefix = f"{commands_package}."
    if command_obj.category != "general" or not command_obj.module.startswith(prefix):
        return command_obj
    segments = command_obj.module[len(prefix):].split(".")
    if len(segments) >= 2:
        return dataclasses.replace(command_obj, category=segments[0])
    return command_obj


def _register_all(console: "ConsoleContext", commands: Iterable[Command], commands_package: str) -> int:
    registered = 0
    for command_obj in commands:
        try:
            console.register_command(_with_category(command_obj, commands_package))
        except DuplicateNameError as exc:
            logger.warning("Skipping command from %s: %s", command_obj.module or "?", exc)
            continue
        registered += 1
    return registered


def load_commands(console: "ConsoleContext", commands_package: str = DEFAULT_COMMANDS_PACKAGE) -> int:
    """
    Import all modules under `commands_package` and register their commands.

    Supported layouts:
      1) Plain modules: plugins/foo.py  -> import plugins.foo
      2) Packages with an entrypoint: plugins/bar/entrypoint.py
         -> import plugins.bar.entrypoint

    Returns the number of commands registered. Name collisions are logged and
    skipped; they never abort loading.
    """
    package = importlib.import_module(commands_package)
    package_paths = [str(p) for p in getattr(package, "__path__", [])]

    if not package_paths:
        raise RuntimeError(
            f"'{commands_package}' must be a package (folder) with modules.")

    registered = 0
    discovered_subpackages: set[str] = set()

    for base_path in package_paths:
        for modinfo in sorted(pkgutil.iter_modules([base_path]), key=lambda m: m.name):
            module_name = modinfo.name
            if module_name.startswith("_"):
                continue

            if modinfo.ispkg:
                discovered_subpackages.add(module_name)
                entrypoint_path = Path(base_path) / module_name / "entrypoint.py"
                target = (f"{commands_package}.{module_name}.entrypoint"
                          if entrypoint_path.exists()
                          else f"{commands_package}.{module_name}")
            else:
                target = f"{commands_package}.{module_name}"

            module = importlib.import_module(target)
            registered += _register_all(
                console, _commands_in_module(module), commands_package)

    _collect_category_descriptions(console, commands_package, discovered_subpackages)
    console.sort()
    logger.debug("Loaded %d command(s) from %s", registered, commands_package)
    return registered


def _collect_category_descriptions(
    console: "ConsoleContext", commands_package: str, subpackages: set[str]
) -> None:
    """
    Category description is taken from:
      1) <package>.<category>.CATEGORY_DESCRIPTION (string), or
      2) <package>.<category> module docstring (__doc__), else "".
    """
    for category in subpackages:
        module = importlib.import_module(f"{commands_package}.{category}")
        value = getattr(module, "CATEGORY_DESCRIPTION", None)
        if isinstance(value, str):
            description_text = value.strip()
        else:
            description_text = (module.__doc__ or "").strip()
        console.category_descriptions[category] = description_text


def register_commands(console: "ConsoleContext") -> int:
    """Register the built-in command set named by the console configuration."""
    return load_commands(console, console.config.commands_package)
