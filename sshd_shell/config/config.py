#!/usr/bin/env python3
# sshd_shell/config/config.py
from __future__ import annotations

"""
Configuration loader (stdlib-only).

Precedence (low → high):
  1) Built-in defaults
  2) Files in the working directory: .env, config.ini, config.json, config.toml
  3) Environment variables prefixed with SSHD_SHELL_

Validation:
  - ENABLED / SHOW_BANNER / STRICT_COMMANDS: bool
  - VERBOSE_ERRORS: None (follow LOG_LEVEL=DEBUG) or bool
  - PLUGIN_PACKAGE: dotted module name
  - PROMPT: non-empty str
  - LOG_LEVEL: None or one of {'DEBUG','INFO','WARNING','ERROR','CRITICAL'}
  - LOG_FILE_PATH: None or normalized path
  - NEWLINE: 'crlf' or 'lf'
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping, Optional
import configparser
import json
import os
import re
import tomllib

ENV_PREFIX = "SSHD_SHELL_"

DEFAULTS: dict[str, Any] = {
    "ENABLED": True,
    "PLUGIN_PACKAGE": "plugins",
    "PROMPT": "app",
    "LOG_LEVEL": None,              # 'DEBUG'/'INFO'/'WARNING'/'ERROR'/'CRITICAL'
    "LOG_FILE_PATH": None,
    "VERBOSE_ERRORS": None,         # None -> verbose only when logging at DEBUG
    "STRICT_COMMANDS": False,       # reject commands overriding another handler's
    "SHOW_BANNER": True,
    "NEWLINE": "crlf",
}

_NEWLINES = {"crlf": "\r\n", "lf": "\n"}

# ---------- data model ----------


@dataclass(frozen=True)
class ShellConfig:
    enabled: bool
    plugin_package: str
    prompt: str
    log_level: str | None
    log_file_path: Path | None
    verbose_errors: bool | None
    strict_commands: bool
    show_banner: bool
    newline: str

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
    cfg = configparser.ConfigParser()
    if not cfg.read(path, encoding="utf-8"):
        return {}
    flat: dict[str, str] = {}
    for sec in cfg.sections():
        for k, v in cfg.items(sec):
            flat[k.upper()] = v
    return flat


def _load_json_file(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in {path}: {exc}") from exc
    return data if isinstance(data, dict) else {}


def _load_toml_file(path: Path) -> dict[str, Any]:
    try:
        with path.open("rb") as f:
            return tomllib.load(f)
    except FileNotFoundError:
        return {}
    except tomllib.TOMLDecodeError as exc:
        raise ValueError(f"Invalid TOML in {path}: {exc}") from exc


def _flatten_mapping(obj: Any, prefix: str = "") -> dict[str, Any]:
    """
    Flatten nested tables to UPPER_SNAKE keys.
    Example: {'log': {'level': 'DEBUG'}} -> {'LOG_LEVEL': 'DEBUG'}
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


def _normalize_keys(d: Mapping[str, Any]) -> dict[str, Any]:
    return {str(k).upper(): v for k, v in d.items()}


# ---------- normalization & coercion ----------

_BOOL_TRUE = {"1", "true", "yes", "y", "on"}
_BOOL_FALSE = {"0", "false", "no", "n", "off"}


def _as_bool(key: str, val: Any) -> bool:
    if isinstance(val, bool):
        return val
    s = str(val).strip().lower()
    if s in _BOOL_TRUE:
        return True
    if s in _BOOL_FALSE:
        return False
    raise ValueError(f"{key} must be a boolean, got {val!r}")


def _as_opt_str(val: Any) -> str | None:
    return None if val is None or str(val).strip().lower() in {"", "none"} else str(val).strip()


def _as_opt_bool(key: str, val: Any) -> bool | None:
    return None if _as_opt_str(val) is None else _as_bool(key, val)


def _as_log_level(val: Any) -> str | None:
    lv = _as_opt_str(val)
    if lv is None:
        return None
    up = lv.upper()
    allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
    if up not in allowed:
        raise ValueError(
            f"LOG_LEVEL must be one of {sorted(allowed)}, got {lv!r}")
    return up


def _as_opt_path(val: Any, base: Path) -> Path | None:
    v = _as_opt_str(val)
    if v is None:
        return None
    p = Path(os.path.expandvars(os.path.expanduser(v)))
    return (p if p.is_absolute() else base / p).resolve()


def _as_module_name(val: Any) -> str:
    name = _as_opt_str(val) or ""
    if not re.fullmatch(r"[A-Za-z_]\w*(\.[A-Za-z_]\w*)*", name):
        raise ValueError(f"PLUGIN_PACKAGE must be a dotted module name, got {val!r}")
    return name


# ---------- merge & load ----------

def _find_config_files(base: Path) -> list[Path]:
    return [
        base / ".env",
        base / "config.ini",
        base / "config.json",
        base / "config.toml",
    ]


def _merge_sources(
    base: Path,
    environ: Mapping[str, str],
) -> dict[str, Any]:
    merged: dict[str, Any] = dict(DEFAULTS)

    for file in _find_config_files(base):
        if file.name == ".env":
            merged.update(_normalize_keys(_load_env_file(file)))
        elif file.suffix == ".ini":
            merged.update(_normalize_keys(_load_ini_file(file)))
        elif file.suffix == ".json":
            merged.update(_normalize_keys(
                _flatten_mapping(_load_json_file(file))))
        elif file.suffix == ".toml":
            merged.update(_normalize_keys(
                _flatten_mapping(_load_toml_file(file))))

    # Environment variables override all; only take prefixed keys
    env_overrides = {
        k[len(ENV_PREFIX):]: v for k, v in environ.items()
        if k.startswith(ENV_PREFIX) and re.fullmatch(r"[A-Z0-9_]+", k)
    }
    merged.update(env_overrides)
    return merged


# ---------- validation ----------

def _validate_and_build(config: dict[str, Any], base: Path) -> ShellConfig:
    prompt = _as_opt_str(config.get("PROMPT", DEFAULTS["PROMPT"]))
    if prompt is None:
        raise ValueError("PROMPT must not be empty")

    newline_key = str(config.get("NEWLINE", DEFAULTS["NEWLINE"])).strip().lower()
    if newline_key not in _NEWLINES:
        raise ValueError(f"NEWLINE must be one of {sorted(_NEWLINES)}, got {newline_key!r}")

    recognized = set(DEFAULTS)
    extra = {k: v for k, v in config.items() if k not in recognized}

    return ShellConfig(
        enabled=_as_bool("ENABLED", config.get("ENABLED", DEFAULTS["ENABLED"])),
        plugin_package=_as_module_name(config.get("PLUGIN_PACKAGE", DEFAULTS["PLUGIN_PACKAGE"])),
        prompt=prompt,
        log_level=_as_log_level(config.get("LOG_LEVEL", DEFAULTS["LOG_LEVEL"])),
        log_file_path=_as_opt_path(config.get("LOG_FILE_PATH", DEFAULTS["LOG_FILE_PATH"]), base),
        verbose_errors=_as_opt_bool(
            "VERBOSE_ERRORS", config.get("VERBOSE_ERRORS", DEFAULTS["VERBOSE_ERRORS"])),
        strict_commands=_as_bool(
            "STRICT_COMMANDS", config.get("STRICT_COMMANDS", DEFAULTS["STRICT_COMMANDS"])),
        show_banner=_as_bool("SHOW_BANNER", config.get("SHOW_BANNER", DEFAULTS["SHOW_BANNER"])),
        newline=_NEWLINES[newline_key],
        extra=extra,
    )


# ---------- public API ----------

def load_config(
    base: Optional[Path] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> ShellConfig:
    """
    Load, merge, normalize, and validate configuration.

    `base` defaults to the working directory and `environ` to os.environ.
    Raises ValueError naming the offending key on invalid values.
    """
    base = (base or Path.cwd()).resolve()
    raw = _merge_sources(base, os.environ if environ is None else environ)
    return _validate_and_build(raw, base)
