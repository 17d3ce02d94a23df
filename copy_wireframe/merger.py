"""Fold single-element sections into a same-typed successor.

Examples
--------
>>> from copy_wireframe.grouper import build_section
>>> from copy_wireframe.models import ElementType, SectionType, SemanticElement
>>> heading = SemanticElement(ElementType.HEADING, "Pricing", level=2)
>>> body = SemanticElement(ElementType.PARAGRAPH, "Plans for every team.")
>>> merged = merge_tiny_sections([
...     build_section([heading], SectionType.CONTENT),
...     build_section([body], SectionType.CONTENT),
... ])
>>> [len(section.elements) for section in merged]
[2]
"""

from __future__ import annotations

import logging
import typing as typ

from .grouper import build_section
from .models import Section

logger = logging.getLogger(__name__)


def merge_tiny_sections(sections: typ.Sequence[Section]) -> list[Section]:
    """Merge each one-element section into the next section of the same type.

    A single left-to-right pass; merged sections are not revisited, so a
    merged pair is never merged again. Section types are expected to be
    provisional labels assigned before the call.

    Parameters
    ----------
    sections : Sequence[Section]
        Typed sections in source order.

    Returns
    -------
    list[Section]
        Sections where every qualifying singleton has been prepended to its
        successor. Element order is preserved.
    """
    merged: list[Section] = []
    index = 0
    while index < len(sections):
        section = sections[index]
        following = sections[index + 1] if index + 1 < len(sections) else None
        if (
            following is not None
            and len(section.elements) == 1
            and following.type is section.type
        ):
            logger.debug(
                "Merged single-element %s section %d into its successor",
                section.type.value,
                index,
            )
            merged.append(
                build_section([*section.elements, *following.elements], section.type)
            )
            index += 2
            continue
        merged.append(section)
        index += 1
    return merged


__all__ = ["merge_tiny_sections"]
