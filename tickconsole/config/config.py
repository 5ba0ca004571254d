#!/usr/bin/env python3
# tickconsole/config/config.py
from __future__ import annotations

"""
Configuration loader (stdlib-only, Python 3.11+).

Precedence (low → high):
  1) Built-in defaults
  2) Files in CWD: .env, console.ini, console.json, console.toml
  3) Environment variables prefixed with CONSOLE_ (e.g. CONSOLE_MAX_OUT_LINES)

Validation:
  - MAX_INPUT_LEN / MAX_HIST_LINES / MAX_OUT_LINES: int >= 1
  - TICK_RATE: int >= 1 (host ticks per second for the bundled frontend)
  - INPUT_PREFIX: str (kept verbatim, trailing spaces included)
  - COMMENT_PREFIXES: comma-separated list, blank entries dropped
  - SCRIPT_PATH: normalized path; LOG_FILE_PATH / AUTOEXEC: None or value
  - LOG_LEVEL: None or one of {'DEBUG','INFO','WARNING','ERROR','CRITICAL'}
  - ECHO_INPUT / SUGGEST_ON_MISS: bool
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping
import configparser
import json
import os
import re
import tomllib

ENV_PREFIX = "CONSOLE_"

# ---------- defaults ----------

DEFAULTS: dict[str, Any] = {
    "MAX_INPUT_LEN": 128,
    "MAX_HIST_LINES": 50,
    "MAX_OUT_LINES": 100,
    "INPUT_PREFIX": "> ",
    "COMMENT_PREFIXES": "#,//",
    "SCRIPT_PATH": ".",
    "COMMANDS_PACKAGE": "tickconsole.plugins",
    "LOG_LEVEL": None,
    "LOG_FILE_PATH": None,
    "ECHO_INPUT": True,
    "SUGGEST_ON_MISS": True,
    "TICK_RATE": 30,
    "AUTOEXEC": None,
}


# ---------- data model ----------

@dataclass(frozen=True)
class ConsoleConfig:
    max_input_len: int = DEFAULTS["MAX_INPUT_LEN"]
    max_hist_lines: int = DEFAULTS["MAX_HIST_LINES"]
    max_out_lines: int = DEFAULTS["MAX_OUT_LINES"]
    input_prefix: str = DEFAULTS["INPUT_PREFIX"]
    comment_prefixes: tuple[str, ...] = ("#", "//")
    script_path: Path = Path(".")
    commands_package: str = DEFAULTS["COMMANDS_PACKAGE"]
    log_level: str | None = None
    log_file_path: Path | None = None
    echo_input: bool = True
    suggest_on_miss: bool = True
    tick_rate: int = DEFAULTS["TICK_RATE"]
    autoexec: str | None = None

    # Unrecognized keys preserved for debugging/forward-compat
    extra: dict[str, Any] = field(default_factory=dict)


# ---------- file loaders (stdlib) ----------

def _load_env_file(path: Path) -> dict[str, str]:
    """Very small .env parser: KEY=VALUE, supports quotes; ignores comments/blank lines."""
    out: dict[str, str] = {}
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return out

    line_re = re.compile(r"""^\s*([A-Za-z_][A-Za-z0-9_]*)\s*=\s*(.*?)\s*$""")
    for raw in text.splitlines():
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        m = line_re.match(line)
        if not m:
            continue
        k, v = m.group(1), m.group(2)
        if (v.startswith("'") and v.endswith("'")) or (v.startswith('"') and v.endswith('"')):
            v = v[1:-1]
        out[k] = v
    return out


def _load_ini_file(path: Path) -> dict[str, str]:
    cfg = configparser.ConfigParser(interpolation=None)
    try:
        with path.open("r", encoding="utf-8") as f:
            cfg.read_file(f)
    except FileNotFoundError:
        return {}
    flat: dict[str, str] = {}
    for sec in cfg.sections():
        for k, v in cfg.items(sec):
            flat[k.upper()] = v
    return flat


def _load_json_file(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (FileNotFoundError, json.JSONDecodeError):
        return {}
    return data if isinstance(data, dict) else {}


def _load_toml_file(path: Path) -> dict[str, Any]:
    try:
        with path.open("rb") as f:
            return tomllib.load(f)
    except (FileNotFoundError, tomllib.TOMLDecodeError):
        return {}


def _flatten_mapping(obj: Any, prefix: str = "") -> dict[str, Any]:
    """
    Flatten nested dicts to UPPER_SNAKE keys.
    Example: {'console': {'max_out_lines': 200}} -> {'CONSOLE_MAX_OUT_LINES': 200}
    """
    flat: dict[str, Any] = {}
    if isinstance(obj, Mapping):
        for k, v in obj.items():
            key = f"{prefix}_{k}" if prefix else str(k)
            if isinstance(v, Mapping):
                flat.update(_flatten_mapping(v, key))
            else:
                flat[str(key).upper()] = v
    return flat


def _find_config_files(base: Path | None = None) -> list[Path]:
    cwd = base or Path.cwd()
    return [
        cwd / ".env",
        cwd / "console.ini",
        cwd / "console.json",
        cwd / "console.toml",
    ]


# ---------- normalization & coercion ----------

_BOOL_TRUE = {"1", "true", "yes", "y", "on"}
_BOOL_FALSE = {"0", "false", "no", "n", "off"}


def _as_bool(val: Any) -> bool:
    if isinstance(val, bool):
        return val
    s = str(val).strip().lower()
    if s in _BOOL_TRUE:
        return True
    if s in _BOOL_FALSE:
        return False
    raise ValueError(f"Expected boolean, got: {val!r}")


def _as_int(val: Any) -> int:
    if isinstance(val, int) and not isinstance(val, bool):
        return val
    try:
        return int(str(val).strip())
    except Exception as exc:  # noqa: BLE001
        raise ValueError(f"Expected integer, got: {val!r}") from exc


def _as_positive_int(key: str, val: Any) -> int:
    n = _as_int(val)
    if n < 1:
        raise ValueError(f"{key} must be >= 1, got {n}")
    return n


def _as_opt_str(val: Any) -> str | None:
    return None if val is None or str(val).strip().lower() in {"", "none"} else str(val)


def _as_log_level(val: Any) -> str | None:
    lv = _as_opt_str(val)
    if lv is None:
        return None
    up = lv.strip().upper()
    allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
    if up not in allowed:
        raise ValueError(
            f"LOG_LEVEL must be one of {sorted(allowed)}, got {lv!r}")
    return up


def _as_path(val: Any) -> Path:
    s = os.path.expandvars(os.path.expanduser(str(val)))
    return Path(s).resolve()


def _as_opt_path(val: Any) -> Path | None:
    v = _as_opt_str(val)
    return None if v is None else _as_path(v)


def _as_prefixes(val: Any) -> tuple[str, ...]:
    if isinstance(val, (list, tuple)):
        items = [str(v) for v in val]
    else:
        items = str(val).split(",")
    return tuple(item.strip() for item in items if item.strip())


def _normalize_keys(d: Mapping[str, Any]) -> dict[str, Any]:
    """Upper-case keys and drop the CONSOLE_ prefix if present."""
    out: dict[str, Any] = {}
    for k, v in d.items():
        key = str(k).upper()
        if key.startswith(ENV_PREFIX):
            key = key[len(ENV_PREFIX):]
        out[key] = v
    return out


# ---------- merge & load ----------

def _merge_sources(
    base: Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> dict[str, Any]:
    merged: dict[str, Any] = dict(DEFAULTS)

    for file in _find_config_files(base):
        if file.suffix == ".env" or file.name == ".env":
            merged.update(_normalize_keys(_load_env_file(file)))
        elif file.suffix == ".ini":
            merged.update(_normalize_keys(_load_ini_file(file)))
        elif file.suffix == ".json":
            merged.update(_normalize_keys(
                _flatten_mapping(_load_json_file(file))))
        elif file.suffix == ".toml":
            merged.update(_normalize_keys(
                _flatten_mapping(_load_toml_file(file))))

    # Environment variables override all; only CONSOLE_* keys are taken
    env = os.environ if environ is None else environ
    env_overrides = {k: v for k, v in env.items()
                     if k.startswith(ENV_PREFIX) and re.fullmatch(r"[A-Z0-9_]+", k)}
    merged.update(_normalize_keys(env_overrides))
    return merged


def _validate_and_build(config: Mapping[str, Any]) -> ConsoleConfig:
    def get(key: str) -> Any:
        return config.get(key, DEFAULTS[key])

    prefixes = _as_prefixes(get("COMMENT_PREFIXES"))
    commands_package = _as_opt_str(get("COMMANDS_PACKAGE"))
    if commands_package is None:
        raise ValueError("COMMANDS_PACKAGE must not be empty")

    recognized = set(DEFAULTS.keys())
    extra = {k: v for k, v in config.items() if k not in recognized}

    return ConsoleConfig(
        max_input_len=_as_positive_int("MAX_INPUT_LEN", get("MAX_INPUT_LEN")),
        max_hist_lines=_as_positive_int("MAX_HIST_LINES", get("MAX_HIST_LINES")),
        max_out_lines=_as_positive_int("MAX_OUT_LINES", get("MAX_OUT_LINES")),
        input_prefix=str(get("INPUT_PREFIX") or ""),
        comment_prefixes=prefixes,
        script_path=_as_path(get("SCRIPT_PATH")),
        commands_package=commands_package,
        log_level=_as_log_level(get("LOG_LEVEL")),
        log_file_path=_as_opt_path(get("LOG_FILE_PATH")),
        echo_input=_as_bool(get("ECHO_INPUT")),
        suggest_on_miss=_as_bool(get("SUGGEST_ON_MISS")),
        tick_rate=_as_positive_int("TICK_RATE", get("TICK_RATE")),
        autoexec=_as_opt_str(get("AUTOEXEC")),
        extra=extra,
    )


# ---------- public API ----------

def load_config(
    base: Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> ConsoleConfig:
    """
    Load, merge, normalize, and validate configuration.
    No filesystem side-effects.
    """
    return _validate_and_build(_merge_sources(base, environ))


def config_from_mapping(values: Mapping[str, Any]) -> ConsoleConfig:
    """Build a config from explicit values layered over the defaults."""
    merged: dict[str, Any] = dict(DEFAULTS)
    merged.update(_normalize_keys(values))
    return _validate_and_build(merged)
