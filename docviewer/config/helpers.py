"""Utility helpers shared by the docviewer configuration loader."""

from __future__ import annotations

import typing as typ

from docviewer.exceptions import ConfigError


def _section(raw: typ.Mapping[str, typ.Any], key: str) -> typ.Mapping[str, typ.Any]:
    """Return the mapping stored under ``key``, or an empty mapping when absent."""
    value = raw.get(key)
    if value is None:
        return {}
    if not isinstance(value, dict):
        msg = f"Configuration section '{key}' must be a mapping."
        raise ConfigError(msg)
    return value


def _optional_str(value: object | None) -> str | None:
    """Return a stripped string value or None when empty."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _require_str(payload: typ.Mapping[str, typ.Any], key: str, default: str) -> str:
    """Return the string under ``key``, falling back to ``default``."""
    value = payload.get(key, default)
    if not isinstance(value, str):
        msg = f"'{key}' must be a string, got {type(value).__name__}."
        raise ConfigError(msg)
    return value


def _require_bool(payload: typ.Mapping[str, typ.Any], key: str, default: bool) -> bool:  # noqa: FBT001
    """Return the boolean under ``key``, falling back to ``default``."""
    value = payload.get(key, default)
    if not isinstance(value, bool):
        msg = f"'{key}' must be true or false, got {value!r}."
        raise ConfigError(msg)
    return value


def _string_mapping(
    payload: typ.Mapping[str, typ.Any], key: str, default: typ.Mapping[str, str]
) -> dict[str, str]:
    """Return a ``str -> str`` mapping under ``key``, preserving its order."""
    value = payload.get(key)
    if value is None:
        return dict(default)
    if not isinstance(value, dict):
        msg = f"'{key}' must be a mapping."
        raise ConfigError(msg)
    return {str(name): str(label) for name, label in value.items()}


def _string_tuple(
    payload: typ.Mapping[str, typ.Any], key: str, default: tuple[str, ...]
) -> tuple[str, ...]:
    """Return a tuple of non-empty strings under ``key``."""
    value = payload.get(key)
    if value is None:
        return default
    if isinstance(value, str):
        value = value.split()
    if not isinstance(value, list):
        msg = f"'{key}' must be a list of strings."
        raise ConfigError(msg)
    normalized: list[str] = []
    for item in value:
        text = str(item).strip()
        if text:
            normalized.append(text)
    return tuple(normalized)


__all__ = [
    "_optional_str",
    "_require_bool",
    "_require_str",
    "_section",
    "_string_mapping",
    "_string_tuple",
]
