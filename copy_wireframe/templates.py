"""Pick a layout template for each typed section.

Selection is a small decision table. The section's shape decides its
complexity variant, the table maps ``(type, complexity)`` to a template key,
and three overrides run afterwards in a fixed order:

(a) three or more list items force the bullet-list template;
(b) otherwise a features section with two or three list items takes the icon
    grid;
(c) blacklisted sidebar layouts are swapped for a type-specific replacement.

Unknown keys resolve to the text block through the catalog.
"""

from __future__ import annotations

import logging
import re

from . import _constants
from .catalog import TemplateCatalog, default_catalog
from .models import Complexity, ContentShapeSignals, ElementType, Section, SectionType, Template
from .normalizer import split_sentences

logger = logging.getLogger(__name__)

LONG_SECTION_CHARS = 500
COMPLEX_SENTENCES = 6
COMPLEX_ELEMENTS = 6
SIMPLE_SENTENCES = 2
SIMPLE_ELEMENTS = 2
BULLET_LIST_MIN_ITEMS = 3
ICON_GRID_MIN_ITEMS = 2
ICON_GRID_MAX_ITEMS = 3

NUMBER_PATTERN = re.compile(r"\d")
QUOTE_PATTERN = re.compile(r"[\"“”]")

BLACKLISTED_LAYOUTS = frozenset({"text_sidebar"})

BASE_TEMPLATES: dict[SectionType, dict[Complexity, str]] = {
    SectionType.HERO: {
        Complexity.SIMPLE: "hero_centered",
        Complexity.MODERATE: "hero_image_left",
        Complexity.COMPLEX: "hero_full_width",
    },
    SectionType.PROBLEM: {
        Complexity.SIMPLE: "problem_centered",
        Complexity.MODERATE: "problem_centered",
        Complexity.COMPLEX: "problem_split",
    },
    SectionType.SOLUTION: {
        Complexity.SIMPLE: "solution_callout",
        Complexity.MODERATE: "solution_callout",
        Complexity.COMPLEX: "solution_steps",
    },
    SectionType.ABOUT: {
        Complexity.SIMPLE: "about_centered",
        Complexity.MODERATE: "about_image_right",
        Complexity.COMPLEX: "text_with_sidebar",
    },
    SectionType.FEATURES: {
        Complexity.SIMPLE: "features_grid",
        Complexity.MODERATE: "features_two_column",
        Complexity.COMPLEX: "features_three_column",
    },
    SectionType.TESTIMONIAL: {
        Complexity.SIMPLE: "testimonial_cards",
        Complexity.MODERATE: "testimonial_cards",
        Complexity.COMPLEX: "testimonial_cards",
    },
    SectionType.CTA: {
        Complexity.SIMPLE: "cta_centered",
        Complexity.MODERATE: "cta_centered",
        Complexity.COMPLEX: "cta_banner",
    },
    SectionType.CONTENT: {
        Complexity.SIMPLE: "text_block",
        Complexity.MODERATE: "text_block",
        Complexity.COMPLEX: "text_with_sidebar",
    },
}

BLACKLIST_REPLACEMENTS: dict[SectionType, str] = {
    SectionType.HERO: "hero_image_left",
    SectionType.ABOUT: "about_image_right",
    SectionType.FEATURES: _constants.ICON_GRID_TEMPLATE_KEY,
}


def analyze_content_shape(section: Section) -> ContentShapeSignals:
    """Derive the counts and flags that drive template selection.

    Examples
    --------
    >>> from copy_wireframe.grouper import build_section
    >>> from copy_wireframe.models import ElementType, SectionType, SemanticElement
    >>> items = [SemanticElement(ElementType.BULLET, f"Benefit {n}") for n in "ABC"]
    >>> signals = analyze_content_shape(build_section(items, SectionType.FEATURES))
    >>> signals.list_item_count, signals.should_use_icon_grid, signals.should_use_bullet_list
    (3, True, False)
    """
    text = section.text
    list_items = sum(1 for e in section.elements if e.type is ElementType.BULLET)
    icon_grid = (
        section.type is SectionType.FEATURES
        and ICON_GRID_MIN_ITEMS <= list_items <= ICON_GRID_MAX_ITEMS
    )
    return ContentShapeSignals(
        element_count=len(section.elements),
        list_item_count=list_items,
        has_lists=list_items > 0,
        has_headings=any(e.type is ElementType.HEADING for e in section.elements),
        is_long=len(text) > LONG_SECTION_CHARS,
        has_numbers=NUMBER_PATTERN.search(text) is not None,
        has_quotes=QUOTE_PATTERN.search(text) is not None,
        sentence_count=sum(len(split_sentences(e.content)) for e in section.elements),
        should_use_bullet_list=list_items >= BULLET_LIST_MIN_ITEMS and not icon_grid,
        should_use_icon_grid=icon_grid,
    )


def infer_complexity(
    signals: ContentShapeSignals, hint: Complexity | None = None
) -> Complexity:
    """Return the template variant for a section with ``signals``.

    An explicit ``hint`` always wins.
    """
    if hint is not None:
        return hint
    if (
        signals.is_long
        or signals.sentence_count > COMPLEX_SENTENCES
        or signals.element_count > COMPLEX_ELEMENTS
    ):
        return Complexity.COMPLEX
    if (
        signals.sentence_count <= SIMPLE_SENTENCES
        and signals.element_count <= SIMPLE_ELEMENTS
    ):
        return Complexity.SIMPLE
    return Complexity.MODERATE


def base_template_key(
    section_type: SectionType, complexity: Complexity, signals: ContentShapeSignals
) -> str:
    """Look up the decision table, applying content refinements first."""
    if section_type is SectionType.SOLUTION and signals.has_numbers:
        return "solution_steps"
    if section_type is SectionType.TESTIMONIAL and signals.has_quotes:
        return "testimonial_quote"
    variants = BASE_TEMPLATES.get(section_type, BASE_TEMPLATES[SectionType.CONTENT])
    return variants[complexity]


def select_template(
    section: Section,
    signals: ContentShapeSignals | None = None,
    *,
    catalog: TemplateCatalog | None = None,
    complexity: Complexity | None = None,
) -> Template:
    """Return the template for a typed ``section``.

    Parameters
    ----------
    section : Section
        Section carrying its final type.
    signals : ContentShapeSignals or None, optional
        Precomputed shape signals; derived from ``section`` when omitted.
    catalog : TemplateCatalog or None, optional
        Catalog to read from; the bundled catalog when omitted.
    complexity : Complexity or None, optional
        Explicit variant hint overriding the inferred complexity.

    Returns
    -------
    Template
        The selected template. Never raises for unknown keys.
    """
    templates = catalog or default_catalog()
    shape = signals or analyze_content_shape(section)
    key = base_template_key(section.type, infer_complexity(shape, complexity), shape)

    if shape.should_use_bullet_list:
        logger.debug("Bullet-list override replaced '%s'", key)
        key = _constants.BULLET_LIST_TEMPLATE_KEY
    elif shape.should_use_icon_grid:
        logger.debug("Icon-grid override replaced '%s'", key)
        key = _constants.ICON_GRID_TEMPLATE_KEY

    template = templates.get(key)
    if template.layout_key in BLACKLISTED_LAYOUTS:
        replacement = BLACKLIST_REPLACEMENTS.get(section.type, _constants.DEFAULT_TEMPLATE_KEY)
        logger.debug(
            "Layout '%s' is not emitted; using '%s' for %s",
            template.layout_key,
            replacement,
            section.type.value,
        )
        template = templates.get(replacement)
    return template


__all__ = [
    "BASE_TEMPLATES",
    "BLACKLISTED_LAYOUTS",
    "analyze_content_shape",
    "base_template_key",
    "infer_complexity",
    "select_template",
]
