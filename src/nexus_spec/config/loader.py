"""
nexus-spec — settings loader.

File: src/nexus_spec/config/loader.py
Last updated: 2026-10-19

Purpose
- Build effective ``SpecSettings`` from defaults, a TOML file, env vars and
  explicit overrides.

What should be included in this file
- Precedence logic: overrides > env (NEXUS_SPEC_) > file > defaults.
- TOML loading via ``tomllib`` from ``nexus_spec.toml`` or the
  ``[tool.nexus_spec]`` table of ``pyproject.toml``.
- Deterministic environment variable mapping and coercion.

Functional requirements
- Unknown keys and ill-typed values raise ``ConfigLoadError``.
"""

from __future__ import annotations

import os
import tomllib
from collections.abc import Mapping
from dataclasses import fields
from pathlib import Path
from typing import Any, Final, Literal

from nexus_spec.config.settings import SpecSettings
from nexus_spec.constants import DEFAULT_CONFIG_FILE, ENV_PREFIX, PYPROJECT_FILE, PYPROJECT_TABLE

_BOOLEAN_TRUE: Final[frozenset[str]] = frozenset({"1", "true", "t", "yes", "y", "on"})
_BOOLEAN_FALSE: Final[frozenset[str]] = frozenset({"0", "false", "f", "no", "n", "off"})

ValueKind = Literal["str", "int", "bool", "optional_int"]

_FIELD_KINDS: Final[dict[str, ValueKind]] = {
    "fspec_iterations": "int",
    "explain_iterations": "int",
    "check_num_tests": "int",
    "max_workers": "int",
    "seed": "optional_int",
    "log_level": "str",
    "log_json": "bool",
}


class ConfigLoadError(ValueError):
    """Raised when settings cannot be loaded or values cannot be coerced."""


def load_settings(
    config_path: str | Path | None = None,
    *,
    environ: Mapping[str, str] | None = None,
    overrides: Mapping[str, object] | None = None,
    search_dir: str | Path | None = None,
) -> SpecSettings:
    """Load effective settings with precedence: overrides > env > file > defaults."""

    env_map = dict(os.environ if environ is None else environ)
    if config_path is not None:
        payload = load_settings_file(config_path)
    else:
        payload = _discover_file_payload(Path.cwd() if search_dir is None else Path(search_dir))

    merged: dict[str, Any] = {}
    merged.update(_validate_payload(payload, source="config file"))
    merged.update(_collect_env_overrides(env_map))
    merged.update(_validate_payload(dict(overrides or {}), source="override"))

    try:
        return SpecSettings(**merged)
    except (TypeError, ValueError) as exc:
        raise ConfigLoadError(f"invalid settings: {exc}") from exc


def load_settings_file(path: str | Path) -> dict[str, Any]:
    """Read a settings file; ``pyproject.toml`` is read from its ``[tool.nexus_spec]`` table."""

    resolved = Path(path).expanduser().resolve()
    parsed = _load_toml_file(resolved, required=True)
    if resolved.name == PYPROJECT_FILE:
        return _pyproject_table(parsed, resolved)
    return parsed


def _discover_file_payload(directory: Path) -> dict[str, Any]:
    dedicated = (directory / DEFAULT_CONFIG_FILE).resolve()
    if dedicated.exists():
        return _load_toml_file(dedicated, required=True)
    pyproject = (directory / PYPROJECT_FILE).resolve()
    if pyproject.exists():
        return _pyproject_table(_load_toml_file(pyproject, required=True), pyproject)
    return {}


def _pyproject_table(parsed: Mapping[str, Any], path: Path) -> dict[str, Any]:
    table: object = parsed
    for key in PYPROJECT_TABLE:
        if not isinstance(table, Mapping):
            return {}
        table = table.get(key, {})
    if not isinstance(table, Mapping):
        raise ConfigLoadError(f"[{'.'.join(PYPROJECT_TABLE)}] must be a table: {path}")
    return dict(table)


def _load_toml_file(path: Path, *, required: bool) -> dict[str, Any]:
    if not path.exists():
        if required:
            raise ConfigLoadError(f"config file not found: {path}")
        return {}

    try:
        with path.open("rb") as handle:
            parsed = tomllib.load(handle)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigLoadError(f"invalid TOML in {path}: {exc}") from exc
    except OSError as exc:
        raise ConfigLoadError(f"unable to read config file {path}: {exc}") from exc

    return parsed


def _validate_payload(payload: Mapping[str, object], *, source: str) -> dict[str, Any]:
    known = {field.name for field in fields(SpecSettings)}
    unknown = sorted(key for key in payload if key not in known)
    if unknown:
        raise ConfigLoadError(f"unknown {source} keys: {', '.join(unknown)}")
    validated: dict[str, Any] = {}
    for key in sorted(payload):
        value = payload[key]
        kind = _FIELD_KINDS[key]
        if kind == "bool" and not isinstance(value, bool):
            raise ConfigLoadError(f"{source} key {key!r} must be a boolean")
        if kind in ("int", "optional_int"):
            if value is None and kind == "optional_int":
                validated[key] = None
                continue
            if isinstance(value, bool) or not isinstance(value, int):
                raise ConfigLoadError(f"{source} key {key!r} must be an integer")
        if kind == "str" and not isinstance(value, str):
            raise ConfigLoadError(f"{source} key {key!r} must be a string")
        validated[key] = value
    return validated


def _collect_env_overrides(environ: Mapping[str, str]) -> dict[str, Any]:
    overrides: dict[str, Any] = {}
    for key in sorted(_FIELD_KINDS):
        env_name = _env_name_for_key(key)
        raw = environ.get(env_name)
        if raw is None:
            continue
        overrides[key] = _coerce_env(raw, _FIELD_KINDS[key], env_name)
    return overrides


def _coerce_env(raw: str, value_type: ValueKind, env_name: str) -> object:
    value = raw.strip()
    if value_type == "str":
        return value
    if value_type in ("int", "optional_int"):
        if value_type == "optional_int" and value.lower() in ("", "none"):
            return None
        try:
            return int(value)
        except ValueError as exc:
            raise ConfigLoadError(f"{env_name} must be an integer") from exc

    lowered = value.lower()
    if lowered in _BOOLEAN_TRUE:
        return True
    if lowered in _BOOLEAN_FALSE:
        return False
    raise ConfigLoadError(f"{env_name} must be a boolean (true/false/1/0/yes/no/on/off)")


def _env_name_for_key(key: str) -> str:
    return f"{ENV_PREFIX}{key.upper()}"


__all__ = ["ConfigLoadError", "load_settings", "load_settings_file"]
