"""Utility helpers shared by the wireframe configuration and catalog loaders."""

from __future__ import annotations

import typing as typ

from ruamel.yaml import YAML

from .models import WireframeConfigError

if typ.TYPE_CHECKING:
    from pathlib import Path


def _yaml_loader() -> YAML:
    """Return a safe YAML 1.2 loader."""
    loader = YAML(typ="safe")
    loader.version = (1, 2)
    return loader


def _load_yaml_mapping(path: Path) -> dict[str, typ.Any]:
    """Load ``path`` and return its top-level mapping.

    An empty document yields an empty mapping.

    Raises
    ------
    FileNotFoundError
        If ``path`` does not exist.
    TypeError
        If the top-level YAML structure is not a mapping.
    """
    if not path.exists():
        msg = f"Configuration file '{path}' not found."
        raise FileNotFoundError(msg)
    with path.open("r", encoding="utf-8") as handle:
        loaded = _yaml_loader().load(handle) or {}
    if not isinstance(loaded, dict):
        msg = f"Top-level YAML structure in '{path}' must be a mapping."
        raise TypeError(msg)
    return dict(loaded)


def _section(payload: typ.Mapping[str, typ.Any], key: str) -> dict[str, typ.Any]:
    """Return the nested mapping under ``key``, or an empty mapping."""
    value = payload.get(key)
    match value:
        case None:
            return {}
        case dict():
            return dict(value)
        case _:
            msg = f"'{key}' must be a mapping, got {type(value).__name__}."
            raise WireframeConfigError(msg)


def _fraction(value: object, name: str) -> float:
    """Return ``value`` as a float in ``[0, 1]``."""
    if isinstance(value, bool) or not isinstance(value, int | float):
        msg = f"'{name}' must be a number between 0 and 1, got {value!r}."
        raise WireframeConfigError(msg)
    if not 0.0 <= value <= 1.0:
        msg = f"'{name}' must be between 0 and 1, got {value!r}."
        raise WireframeConfigError(msg)
    return float(value)


def _positive_int(value: object, name: str) -> int:
    """Return ``value`` as a strictly positive integer."""
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        msg = f"'{name}' must be a positive integer, got {value!r}."
        raise WireframeConfigError(msg)
    return value


def _non_negative_int(value: object, name: str) -> int:
    """Return ``value`` as an integer that is zero or greater."""
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        msg = f"'{name}' must be a non-negative integer, got {value!r}."
        raise WireframeConfigError(msg)
    return value


def _optional_str(value: object | None) -> str | None:
    """Return a stripped string value or None when empty."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


__all__ = [
    "_fraction",
    "_load_yaml_mapping",
    "_non_negative_int",
    "_optional_str",
    "_positive_int",
    "_section",
    "_yaml_loader",
]
