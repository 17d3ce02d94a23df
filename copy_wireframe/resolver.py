"""Assign final semantic types to grouped sections.

Resolution walks an explicit, ordered list of :class:`TypeRule` entries and
stops at the first rule that returns a type:

1. ``position``: the first section is the hero unless it is a pure list.
2. ``keywords``: phrase tables in the order problem, solution, about,
   testimonial, cta.
3. ``bullets``: three or more bullets make a features section.
4. ``framework``: the strongest signal of the dominant framework family.
5. ``default``: generic content.

After every section is typed, a hero is synthesized and prepended when the
first section is not a hero, and a call to action is synthesized and appended
when no section is one.
"""

from __future__ import annotations

import dataclasses as dc
import logging
import typing as typ

from . import _constants
from .classifier import detect_framework
from .grouper import build_section
from .heuristics import FRAMEWORK_FAMILIES, FRAMEWORK_SIGNAL_TYPES, SECTION_KEYWORD_TABLES
from .models import (
    ElementType,
    FrameworkFamily,
    FrameworkScores,
    Section,
    SectionType,
    SemanticElement,
)
from .tokenizer import framework_scores

logger = logging.getLogger(__name__)

FEATURE_BULLET_MIN = 3

SectionRule = typ.Callable[[Section, int], "SectionType | None"]


@dc.dataclass(frozen=True, slots=True)
class TypeRule:
    """One named step of the resolution order."""

    name: str
    resolve: SectionRule


def _is_pure_list(section: Section) -> bool:
    return (
        section.bullet_count >= FEATURE_BULLET_MIN
        and section.bullet_count == len(section.elements)
    )


def _position_rule(section: Section, index: int) -> SectionType | None:
    if index == 0 and not _is_pure_list(section):
        return SectionType.HERO
    return None


def _keyword_rule(section: Section, _index: int) -> SectionType | None:
    text = section.text
    for table in SECTION_KEYWORD_TABLES:
        if table.matches(text):
            return table.section_type
    return None


def _bullet_rule(section: Section, _index: int) -> SectionType | None:
    if section.bullet_count >= FEATURE_BULLET_MIN:
        return SectionType.FEATURES
    return None


def section_scores(section: Section) -> FrameworkScores:
    """Return framework signal totals summed over the section's elements."""
    totals = {field.name: 0.0 for field in dc.fields(FrameworkScores)}
    for element in section.elements:
        scores = framework_scores(element.content)
        for signal in totals:
            totals[signal] += scores.get(signal)
    return FrameworkScores(**totals)


def _framework_rule(section: Section, _index: int) -> SectionType | None:
    scores = section_scores(section)
    family = detect_framework(scores)
    if family is FrameworkFamily.GENERIC:
        return None
    signals = dict(FRAMEWORK_FAMILIES)[family]
    strongest = max(signals, key=scores.get)
    return FRAMEWORK_SIGNAL_TYPES[strongest]


def _default_rule(_section: Section, _index: int) -> SectionType | None:
    return SectionType.CONTENT


TYPE_RULES: tuple[TypeRule, ...] = (
    TypeRule("position", _position_rule),
    TypeRule("keywords", _keyword_rule),
    TypeRule("bullets", _bullet_rule),
    TypeRule("framework", _framework_rule),
    TypeRule("default", _default_rule),
)


def resolve_section_type(section: Section, index: int) -> SectionType:
    """Return the semantic type of ``section`` at position ``index``.

    Parameters
    ----------
    section : Section
        Grouped section to label.
    index : int
        Position of the section in the sequence.

    Returns
    -------
    SectionType
        The result of the first matching rule in :data:`TYPE_RULES`.
    """
    for rule in TYPE_RULES:
        resolved = rule.resolve(section, index)
        if resolved is not None:
            logger.debug(
                "Section %d resolved to %s by %s rule", index, resolved.value, rule.name
            )
            return resolved
    return SectionType.CONTENT  # pragma: no cover - the default rule always matches


def assign_provisional_types(sections: typ.Sequence[Section]) -> list[Section]:
    """Label grouped sections before merging.

    The first section is already the hero here, so a one-element opener merges
    into a following section that also reads as a hero.
    """
    return [
        dc.replace(section, type=resolve_section_type(section, index))
        for index, section in enumerate(sections)
    ]


def fallback_elements(section_type: SectionType) -> list[SemanticElement]:
    """Return placeholder copy for a synthesized section of ``section_type``."""
    match section_type:
        case SectionType.HERO:
            return [
                SemanticElement(ElementType.HEADING, _constants.FALLBACK_HERO_HEADLINE, 1),
                SemanticElement(ElementType.PARAGRAPH, _constants.FALLBACK_HERO_DESCRIPTION),
            ]
        case SectionType.CTA:
            return [
                SemanticElement(ElementType.HEADING, _constants.FALLBACK_CTA_HEADLINE, 2),
                SemanticElement(ElementType.PARAGRAPH, _constants.FALLBACK_CTA_DESCRIPTION),
                SemanticElement(ElementType.PARAGRAPH, _constants.FALLBACK_CTA_BUTTON),
            ]
        case _:
            title = section_type.value.replace("_", " ").title()
            return [SemanticElement(ElementType.HEADING, title, 2)]


def synthesize_section(section_type: SectionType) -> Section:
    """Build a placeholder section flagged as synthesized."""
    section = build_section(fallback_elements(section_type), section_type)
    return dc.replace(section, synthesized=True)


def resolve_sections(sections: typ.Sequence[Section]) -> list[Section]:
    """Type every section and enforce the hero-first and cta-present rules.

    Parameters
    ----------
    sections : Sequence[Section]
        Merged sections in source order; may be empty.

    Returns
    -------
    list[Section]
        Typed sections. The first is always a hero and at least one is a cta;
        empty input yields exactly a synthesized hero and cta.
    """
    typed = [
        dc.replace(section, type=resolve_section_type(section, index))
        for index, section in enumerate(sections)
    ]
    if not typed or typed[0].type is not SectionType.HERO:
        logger.info("No leading hero section found; synthesizing one")
        typed.insert(0, synthesize_section(SectionType.HERO))
    if not any(section.type is SectionType.CTA for section in typed):
        logger.info("No call-to-action section found; synthesizing one")
        typed.append(synthesize_section(SectionType.CTA))
    return typed


__all__ = [
    "TYPE_RULES",
    "TypeRule",
    "assign_provisional_types",
    "fallback_elements",
    "resolve_section_type",
    "resolve_sections",
    "section_scores",
    "synthesize_section",
]
