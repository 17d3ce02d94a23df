"""Partition the element stream into contiguous sections.

Both strategies are left-to-right folds over an accumulator holding the
closed sections and the open draft. A predicate decides, per element, whether
the draft closes before the element is appended; once closed, a section is
never reopened. The line strategy reads classifier break scores, the marker
strategy trusts supplied headings and uses higher ceilings, and the forced
re-split anchors on section-opening phrases when either strategy returns too
few sections for non-trivial input.
"""

from __future__ import annotations

import dataclasses as dc
import logging
import typing as typ

from .config.models import MarkerGroupingConfig, PipelineConfig, TextGroupingConfig
from .heuristics import EMBEDDED_OPENER_PATTERN, FRAMEWORK_FAMILIES, SECTION_OPENER_PATTERN
from .models import ElementType, FrameworkFamily, Section, SectionType, SemanticElement
from .normalizer import count_words

logger = logging.getLogger(__name__)

RESPLIT_MAX_SECTIONS = 2

_FAMILY_ORDER = tuple(family for family, _ in FRAMEWORK_FAMILIES)


def dominant_family(elements: typ.Iterable[SemanticElement]) -> FrameworkFamily:
    """Return the non-generic family matched by the most elements.

    Ties resolve in declaration order; sections without framework matches are
    generic.
    """
    counts = {family: 0 for family in _FAMILY_ORDER}
    for element in elements:
        if element.framework_match in counts:
            counts[element.framework_match] += 1
    best = max(_FAMILY_ORDER, key=lambda family: counts[family])
    return best if counts[best] else FrameworkFamily.GENERIC


def build_section(
    elements: typ.Sequence[SemanticElement],
    section_type: SectionType = SectionType.CONTENT,
) -> Section:
    """Build a :class:`Section` and its derived counts from ``elements``."""
    return Section(
        elements=tuple(elements),
        type=section_type,
        bullet_count=sum(1 for e in elements if e.type is ElementType.BULLET),
        heading_count=sum(1 for e in elements if e.type is ElementType.HEADING),
        total_words=sum(count_words(e.content) for e in elements),
        dominant_framework=dominant_family(elements),
    )


@dc.dataclass(slots=True)
class SectionDraft:
    """The open section while grouping."""

    elements: list[SemanticElement] = dc.field(default_factory=list)
    words: int = 0

    @property
    def dominant_framework(self) -> FrameworkFamily:
        return dominant_family(self.elements)

    @property
    def last(self) -> SemanticElement:
        return self.elements[-1]

    def add(self, element: SemanticElement) -> None:
        self.elements.append(element)
        self.words += count_words(element.content)


@dc.dataclass(slots=True)
class GroupingState:
    """Fold accumulator: closed sections plus the open draft, if any."""

    sections: list[Section] = dc.field(default_factory=list)
    current: SectionDraft | None = None

    def push(self, element: SemanticElement, *, starts_section: bool) -> GroupingState:
        """Append ``element``, closing the open draft first when asked."""
        if self.current is None or starts_section:
            self._close()
            self.current = SectionDraft()
        self.current.add(element)
        return self

    def finish(self) -> list[Section]:
        """Close the open draft and return the sections."""
        self._close()
        return self.sections

    def _close(self) -> None:
        if self.current is not None and self.current.elements:
            self.sections.append(build_section(self.current.elements))
        self.current = None


BreakPredicate = typ.Callable[[SectionDraft, SemanticElement], bool]


def fold_sections(
    elements: typ.Iterable[SemanticElement], should_break: BreakPredicate
) -> list[Section]:
    """Group ``elements`` with ``should_break`` deciding each boundary.

    The first element always opens a section, and the predicate is only
    consulted when a draft is open.
    """
    state = GroupingState()
    for element in elements:
        starts = state.current is not None and should_break(state.current, element)
        state = state.push(element, starts_section=starts)
    return state.finish()


def _exceeds_ceiling(
    draft: SectionDraft, element: SemanticElement, *, max_elements: int, max_words: int
) -> bool:
    if len(draft.elements) >= max_elements:
        return True
    return draft.words + count_words(element.content) > max_words


def line_break_predicate(config: TextGroupingConfig) -> BreakPredicate:
    """Return the boundary rule for classified raw-text lines.

    A draft closes when the incoming element's break score exceeds the
    threshold, when a word or element ceiling would be exceeded, or when the
    framework family changes with high confidence in an established section.
    Consecutive bullets only split on the ceilings, so lists stay whole.
    """

    def should_break(draft: SectionDraft, element: SemanticElement) -> bool:
        if _exceeds_ceiling(
            draft, element, max_elements=config.max_elements, max_words=config.max_words
        ):
            return True
        if element.type is ElementType.BULLET and draft.last.type is ElementType.BULLET:
            return False
        if element.section_break_score > config.break_threshold:
            return True
        current_family = draft.dominant_framework
        return (
            element.framework_match is not FrameworkFamily.GENERIC
            and current_family is not FrameworkFamily.GENERIC
            and element.framework_match is not current_family
            and element.confidence > config.family_change_confidence
            and len(draft.elements) > config.family_change_min_elements
        )

    return should_break


def marker_break_predicate(config: MarkerGroupingConfig) -> BreakPredicate:
    """Return the boundary rule for supplied structural markers."""

    def should_break(draft: SectionDraft, element: SemanticElement) -> bool:
        if _exceeds_ceiling(
            draft, element, max_elements=config.max_elements, max_words=config.max_words
        ):
            return True
        if element.type is not ElementType.HEADING:
            return False
        level = element.level or config.major_heading_level
        return level <= config.major_heading_level or bool(
            SECTION_OPENER_PATTERN.match(element.content)
        )

    return should_break


def resplit_predicate(*, max_elements: int, max_words: int) -> BreakPredicate:
    """Return the keyword-anchored boundary rule used by the forced re-split."""

    def should_break(draft: SectionDraft, element: SemanticElement) -> bool:
        if _exceeds_ceiling(draft, element, max_elements=max_elements, max_words=max_words):
            return True
        return EMBEDDED_OPENER_PATTERN.search(element.content) is not None

    return should_break


def group_lines(
    elements: typ.Sequence[SemanticElement], config: TextGroupingConfig | None = None
) -> list[Section]:
    """Group classified raw-text elements with the line-score strategy."""
    return fold_sections(elements, line_break_predicate(config or TextGroupingConfig()))


def group_markers(
    elements: typ.Sequence[SemanticElement], config: MarkerGroupingConfig | None = None
) -> list[Section]:
    """Group adapted marker elements with the marker strategy."""
    return fold_sections(elements, marker_break_predicate(config or MarkerGroupingConfig()))


def force_resplit(
    elements: typ.Sequence[SemanticElement], *, max_elements: int, max_words: int
) -> list[Section]:
    """Group ``elements`` at every element containing a sentence-initial opener."""
    return fold_sections(
        elements, resplit_predicate(max_elements=max_elements, max_words=max_words)
    )


def group_elements(
    elements: typ.Sequence[SemanticElement],
    *,
    from_markers: bool,
    total_chars: int,
    config: PipelineConfig | None = None,
) -> list[Section]:
    """Group ``elements`` with the matching strategy and re-split if needed.

    Parameters
    ----------
    elements : Sequence[SemanticElement]
        Classified or adapted elements in source order.
    from_markers : bool
        ``True`` for the supplied-structure path.
    total_chars : int
        Size of the input, used to decide whether it is trivial.
    config : PipelineConfig or None, optional
        Thresholds and ceilings; defaults apply when omitted.

    Returns
    -------
    list[Section]
        Sections whose concatenated elements equal ``elements``. When the
        strategy yields two sections or fewer for non-trivial input, the
        forced re-split result is returned instead if it has more sections.
    """
    settings = config or PipelineConfig()
    if from_markers:
        sections = group_markers(elements, settings.markers)
        ceilings = settings.markers.max_elements, settings.markers.max_words
    else:
        sections = group_lines(elements, settings.text)
        ceilings = settings.text.max_elements, settings.text.max_words

    if len(sections) > RESPLIT_MAX_SECTIONS or total_chars <= settings.trivial_input_chars:
        return sections
    resplit = force_resplit(elements, max_elements=ceilings[0], max_words=ceilings[1])
    if len(resplit) > len(sections):
        logger.debug(
            "Forced re-split raised section count from %d to %d",
            len(sections),
            len(resplit),
        )
        return resplit
    return sections


__all__ = [
    "GroupingState",
    "SectionDraft",
    "build_section",
    "dominant_family",
    "fold_sections",
    "force_resplit",
    "group_elements",
    "group_lines",
    "group_markers",
    "line_break_predicate",
    "marker_break_predicate",
    "resplit_predicate",
]
