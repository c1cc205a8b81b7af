#!/usr/bin/env python3
# shellkit/config.py
from __future__ import annotations

"""
Configuration loader (stdlib-only).

Precedence (low → high):
  1) Built-in defaults
  2) Files in CWD: .env, config.ini, config.json, config.toml
  3) Environment variables prefixed with SHELLKIT_ (prefix stripped)

Validation:
  - PROJECT_NAME: non-empty str
  - HISTORY_PATH: None (-> <tempdir>/<project>-shell) or normalized path
  - LOG_FILE_PATH: None or normalized path
  - CASE_INSENSITIVE / ENABLE_COMPLETION / SHOW_BANNER: bool
  - PROMPT: None or str
  - LOG_LEVEL: None or one of {'DEBUG','INFO','WARNING','ERROR','CRITICAL'}
  - PLUGIN_PACKAGE: None or dotted module path
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping
import configparser
import json
import os
import re
import tempfile
import tomllib

ENV_PREFIX = "SHELLKIT_"

# ---------- defaults ----------

DEFAULTS: dict[str, Any] = {
    "PROJECT_NAME": "shellkit",
    "HISTORY_PATH": None,
    "CASE_INSENSITIVE": False,
    "PROMPT": None,
    "LOG_LEVEL": None,              # 'DEBUG'/'INFO'/'WARNING'/'ERROR'/'CRITICAL'
    "LOG_FILE_PATH": None,
    "ENABLE_COMPLETION": True,
    "SHOW_BANNER": True,
    "PLUGIN_PACKAGE": "shellkit.plugins",
}


def default_history_path(project_name: str) -> Path:
    """History lives in the system temp directory, one file per project."""
    return Path(tempfile.gettempdir()) / f"{project_name}-shell"


# ---------- data model ----------

@dataclass(frozen=True)
class ShellConfig:
    project_name: str
    history_path: Path
    case_insensitive: bool
    prompt: str | None
    log_level: str | None
    log_file_path: Path | None
    enable_completion: bool
    show_banner: bool
    plugin_package: str | None

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
        return json.loads(path.read_text(encoding="utf-8"))
    except (FileNotFoundError, json.JSONDecodeError):
        return {}


def _load_toml_file(path: Path) -> dict[str, Any]:
    try:
        with path.open("rb") as f:
            return tomllib.load(f)
    except (FileNotFoundError, tomllib.TOMLDecodeError):
        return {}


def _flatten_mapping(obj: Any, prefix: str = "") -> dict[str, Any]:
    """
    Flatten nested dicts to UPPER_SNAKE keys.
    Example: {'log': {'level': 'debug'}} -> {'LOG_LEVEL': 'debug'}
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
        cwd / "config.ini",
        cwd / "config.json",
        cwd / "config.toml",
    ]


# ---------- normalization & coercion ----------

_BOOL_TRUE = {"1", "true", "yes", "y", "on"}
_BOOL_FALSE = {"0", "false", "no", "n", "off"}


def _as_bool(val: Any, key: str) -> bool:
    if isinstance(val, bool):
        return val
    s = str(val).strip().lower()
    if s in _BOOL_TRUE:
        return True
    if s in _BOOL_FALSE:
        return False
    raise ValueError(f"{key}: expected boolean, got {val!r}")


def _as_opt_str(val: Any) -> str | None:
    return None if val is None or str(val).strip().lower() in {"", "none"} else str(val)


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


def _as_path(val: Any) -> Path:
    # expand both ~ and env vars
    s = os.path.expandvars(os.path.expanduser(str(val)))
    return Path(s).resolve()


def _as_opt_path(val: Any) -> Path | None:
    v = _as_opt_str(val)
    return None if v is None else _as_path(v)


def _as_module_path(val: Any) -> str | None:
    v = _as_opt_str(val)
    if v is not None and not re.fullmatch(r"[A-Za-z_]\w*(\.[A-Za-z_]\w*)*", v):
        raise ValueError(f"PLUGIN_PACKAGE must be a dotted module path, got {v!r}")
    return v


# ---------- merge & load ----------

def _normalize_keys(d: Mapping[str, Any]) -> dict[str, Any]:
    return {str(k).upper(): v for k, v in d.items()}


def _merge_sources(
    base: Path | None = None, environ: Mapping[str, str] | None = None
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

    # Environment variables override all; only our prefixed keys
    env = os.environ if environ is None else environ
    merged.update({k[len(ENV_PREFIX):]: v for k, v in env.items()
                   if k.startswith(ENV_PREFIX) and len(k) > len(ENV_PREFIX)})
    return merged


# ---------- validation ----------

def _validate_and_build(config: dict[str, Any]) -> ShellConfig:
    project_name = _as_opt_str(config.get("PROJECT_NAME", DEFAULTS["PROJECT_NAME"]))
    if project_name is None:
        raise ValueError("PROJECT_NAME must not be empty")

    history_path = _as_opt_path(config.get("HISTORY_PATH", DEFAULTS["HISTORY_PATH"]))
    if history_path is None:
        history_path = default_history_path(project_name)

    recognized = set(DEFAULTS.keys())
    extra = {k: v for k, v in config.items() if k not in recognized}

    return ShellConfig(
        project_name=project_name,
        history_path=history_path,
        case_insensitive=_as_bool(config.get(
            "CASE_INSENSITIVE", DEFAULTS["CASE_INSENSITIVE"]), "CASE_INSENSITIVE"),
        prompt=_as_opt_str(config.get("PROMPT", DEFAULTS["PROMPT"])),
        log_level=_as_log_level(config.get("LOG_LEVEL", DEFAULTS["LOG_LEVEL"])),
        log_file_path=_as_opt_path(config.get("LOG_FILE_PATH", DEFAULTS["LOG_FILE_PATH"])),
        enable_completion=_as_bool(config.get(
            "ENABLE_COMPLETION", DEFAULTS["ENABLE_COMPLETION"]), "ENABLE_COMPLETION"),
        show_banner=_as_bool(config.get("SHOW_BANNER", DEFAULTS["SHOW_BANNER"]), "SHOW_BANNER"),
        plugin_package=_as_module_path(config.get("PLUGIN_PACKAGE", DEFAULTS["PLUGIN_PACKAGE"])),
        extra=extra,
    )


# ---------- public API ----------

def load_config(
    *,
    base: Path | None = None,
    environ: Mapping[str, str] | None = None,
    overrides: Mapping[str, Any] | None = None,
) -> ShellConfig:
    """
    Load, merge, normalize, and validate configuration.
    No filesystem side-effects (no directory creation).
    """
    raw = _merge_sources(base, environ)
    if overrides:
        raw.update(_normalize_keys(overrides))
    return _validate_and_build(raw)
