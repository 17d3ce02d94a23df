"""Adapt externally supplied structural markers into semantic elements.

Markers come from markup-parsing collaborators (see :mod:`copy_wireframe.markup`)
or from callers that already know their document structure. Their labels are
trusted as given: nothing here re-scores or reclassifies the text.

Examples
--------
>>> from copy_wireframe.adapter import adapt_markers
>>> elements = adapt_markers([
...     {"type": "heading", "level": 1, "content": "Our Services"},
...     {"type": "list_item", "content": "Strategy"},
... ])
>>> [(element.type.value, element.level) for element in elements]
[('heading', 1), ('bullet', None)]
"""

from __future__ import annotations

import collections.abc as cabc
import logging
import typing as typ

from .models import (
    ElementType,
    InvalidInputError,
    MarkerType,
    SemanticElement,
    StructuralMarker,
)

logger = logging.getLogger(__name__)

DEFAULT_HEADING_LEVEL = 2
MAX_HEADING_LEVEL = 3

_ELEMENT_TYPES: dict[MarkerType, ElementType] = {
    MarkerType.HEADING: ElementType.HEADING,
    MarkerType.PARAGRAPH: ElementType.PARAGRAPH,
    MarkerType.LIST_ITEM: ElementType.BULLET,
}


def _coerce_marker_type(value: object) -> MarkerType:
    match value:
        case MarkerType():
            return value
        case str() as text:
            try:
                return MarkerType(text.strip().lower())
            except ValueError:
                msg = f"Unknown structural marker type '{text}'."
                raise InvalidInputError(msg) from None
        case _:
            msg = f"Structural marker type must be a string, got {type(value).__name__}."
            raise InvalidInputError(msg)


def _coerce_level(value: object) -> int | None:
    match value:
        case None:
            return None
        case bool():
            msg = "Structural marker level must be an integer."
            raise InvalidInputError(msg)
        case int():
            return value
        case _:
            msg = f"Structural marker level must be an integer, got {value!r}."
            raise InvalidInputError(msg)


def coerce_marker(raw: StructuralMarker | typ.Mapping[str, typ.Any]) -> StructuralMarker:
    """Return ``raw`` as a validated :class:`StructuralMarker`.

    Parameters
    ----------
    raw : StructuralMarker or Mapping
        A marker instance, or a mapping with ``type``, ``content`` and an
        optional ``level`` key.

    Returns
    -------
    StructuralMarker
        The validated marker.

    Raises
    ------
    InvalidInputError
        If ``raw`` is neither a marker nor a mapping, names an unknown marker
        type, or carries non-string content or a non-integer level.
    """
    match raw:
        case StructuralMarker():
            marker_type, content, level = raw.type, raw.content, raw.level
        case cabc.Mapping():
            marker_type = raw.get("type")
            content = raw.get("content", "")
            level = raw.get("level")
        case _:
            msg = f"Unsupported structural marker: {type(raw).__name__}."
            raise InvalidInputError(msg)
    if content is None:
        content = ""
    if not isinstance(content, str):
        msg = "Structural marker content must be a string."
        raise InvalidInputError(msg)
    return StructuralMarker(
        type=_coerce_marker_type(marker_type),
        content=content,
        level=_coerce_level(level),
    )


def _clamp_level(level: int | None) -> int:
    if level is None:
        return DEFAULT_HEADING_LEVEL
    return max(1, min(level, MAX_HEADING_LEVEL))


def adapt_marker(marker: StructuralMarker) -> SemanticElement | None:
    """Convert one marker, returning ``None`` for containers and empty text."""
    content = marker.content.strip()
    element_type = _ELEMENT_TYPES.get(marker.type)
    if element_type is None or not content:
        return None
    level = _clamp_level(marker.level) if element_type is ElementType.HEADING else None
    return SemanticElement(type=element_type, content=content, level=level)


def adapt_markers(
    markers: typ.Iterable[StructuralMarker | typ.Mapping[str, typ.Any]],
) -> list[SemanticElement]:
    """Convert supplied markers into semantic elements in source order.

    ``list_container`` markers only wrap their items, so they are skipped;
    markers with blank content are skipped as well.

    Raises
    ------
    InvalidInputError
        If any marker fails validation (see :func:`coerce_marker`).
    """
    elements: list[SemanticElement] = []
    skipped = 0
    for raw in markers:
        element = adapt_marker(coerce_marker(raw))
        if element is None:
            skipped += 1
            continue
        elements.append(element)
    if skipped:
        logger.debug("Skipped %d container or empty marker(s)", skipped)
    return elements


__all__ = ["adapt_marker", "adapt_markers", "coerce_marker"]
