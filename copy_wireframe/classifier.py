"""Assign a discrete element type, framework family, and break score per line.

Decision order is fixed: bullets first, then headings, then paragraphs. The
framework family is the one whose aggregate signal is strictly highest for
the line, with ties resolved by the declaration order of
:data:`copy_wireframe.heuristics.FRAMEWORK_FAMILIES`.
"""

from __future__ import annotations

import logging
import typing as typ

from .heuristics import (
    ALL_CAPS_HEADING_PATTERN,
    BOLD_HEADING_LINE_PATTERN,
    BULLET_PREFIX_PATTERN,
    EXPLICIT_HEADING_PATTERNS,
    FRAMEWORK_FAMILIES,
    LIST_ITEM_PATTERN,
    MARKDOWN_HEADING_PATTERN,
    NUMBERED_PATTERN,
    SECTION_OPENER_PATTERN,
    STRONG_BREAK_SIGNALS,
)
from .models import (
    AtomicLine,
    ClassifiedLine,
    ElementType,
    FrameworkFamily,
    FrameworkScores,
    SemanticElement,
)

logger = logging.getLogger(__name__)

BULLET_THRESHOLD = 0.7
HEADING_THRESHOLD = 0.5
PARAGRAPH_CONFIDENCE = 0.8
EXPLICIT_BULLET_CONFIDENCE = 0.75
EXPLICIT_HEADING_CONFIDENCE = 0.6
TOP_LEVEL_HEADING_CONFIDENCE = 0.9
SUBHEADING_MAX_CHARS = 80
MAX_HEADING_LEVEL = 3

STRONG_HEADING_SCORE = 0.7
STRONG_HEADING_BONUS = 0.6
WEAK_HEADING_BONUS = 0.3
FIRST_LINE_BONUS = 0.3
STRONG_SIGNAL_THRESHOLD = 0.5
STRONG_SIGNAL_BONUS = 0.4
OPENER_BONUS = 0.6
LENGTH_OUTLIER_RATIO = 2.0
LENGTH_OUTLIER_BONUS = 0.2


def detect_framework(scores: FrameworkScores) -> FrameworkFamily:
    """Return the family with the strictly highest aggregate signal.

    Examples
    --------
    >>> from copy_wireframe.models import FrameworkScores
    >>> detect_framework(FrameworkScores(problem=0.8, solution=0.8, action=0.9))
    <FrameworkFamily.PAS: 'pas'>
    >>> detect_framework(FrameworkScores())
    <FrameworkFamily.GENERIC: 'generic'>
    """
    best = FrameworkFamily.GENERIC
    best_total = 0.0
    for family, signals in FRAMEWORK_FAMILIES:
        total = sum(scores.get(signal) for signal in signals)
        if total > best_total:
            best, best_total = family, total
    return best


def _is_explicit_heading(text: str) -> bool:
    if ALL_CAPS_HEADING_PATTERN.match(text):
        return True
    return any(pattern.match(text) for pattern in EXPLICIT_HEADING_PATTERNS)


def heading_level(line: AtomicLine) -> int:
    """Choose a heading level from markup, position, score, and shape."""
    if markdown := MARKDOWN_HEADING_PATTERN.match(line.text):
        return min(len(markdown.group(1)), MAX_HEADING_LEVEL)
    if line.index == 0 or line.heading_score >= TOP_LEVEL_HEADING_CONFIDENCE:
        return 1
    if line.length < SUBHEADING_MAX_CHARS and line.text.endswith(":"):
        return 3
    return 2


def strip_heading_markup(text: str) -> str:
    """Remove Markdown hashes, and bold markers wrapping the whole line.

    Examples
    --------
    >>> strip_heading_markup("## **Why us**:")
    'Why us:'
    >>> strip_heading_markup("**Note** the **best** part")
    '**Note** the **best** part'
    """
    unhashed = MARKDOWN_HEADING_PATTERN.sub("", text, count=1)
    return BOLD_HEADING_LINE_PATTERN.sub(r"\1\2", unhashed).strip() or text


def strip_bullet_glyph(text: str) -> str:
    """Remove a leading list glyph or number from bullet text."""
    return BULLET_PREFIX_PATTERN.sub("", text, count=1).strip() or text


def section_break_score(
    line: AtomicLine,
    element_type: ElementType,
    average_length: float | None,
) -> float:
    """Return how strongly ``line`` suggests the start of a new section.

    Parameters
    ----------
    line : AtomicLine
        Line being scored.
    element_type : ElementType
        Classifier verdict for ``line``.
    average_length : float or None
        Mean length of the lines before ``line``; ``None`` for the first line.

    Returns
    -------
    float
        Sum of the heading, first-line, strong-signal, opener, and
        length-outlier bonuses, clamped to ``[0, 1]``.
    """
    score = 0.0
    if element_type is ElementType.HEADING:
        strong = line.heading_score >= STRONG_HEADING_SCORE
        score += STRONG_HEADING_BONUS if strong else WEAK_HEADING_BONUS
    if line.index == 0:
        score += FIRST_LINE_BONUS
    if any(
        line.framework_scores.get(signal) >= STRONG_SIGNAL_THRESHOLD
        for signal in STRONG_BREAK_SIGNALS
    ):
        score += STRONG_SIGNAL_BONUS
    if SECTION_OPENER_PATTERN.match(line.text):
        score += OPENER_BONUS
    if average_length and line.length > LENGTH_OUTLIER_RATIO * average_length:
        score += LENGTH_OUTLIER_BONUS
    return max(0.0, min(1.0, score))


def classify_line(
    line: AtomicLine, average_length: float | None = None
) -> ClassifiedLine:
    """Classify one tokenized line.

    Parameters
    ----------
    line : AtomicLine
        Line to classify.
    average_length : float or None, optional
        Mean length of the lines before ``line``; ``None`` for the first line.

    Returns
    -------
    ClassifiedLine
        The verdict with ``confidence`` in ``[0, 1]``.
    """
    text = line.text
    if line.bullet_score >= BULLET_THRESHOLD or LIST_ITEM_PATTERN.match(text):
        element_type = ElementType.BULLET
        confidence = max(line.bullet_score, EXPLICIT_BULLET_CONFIDENCE)
        subtype = "numbered" if NUMBERED_PATTERN.match(text) else "bulleted"
        level = None
    elif line.heading_score >= HEADING_THRESHOLD or _is_explicit_heading(text):
        element_type = ElementType.HEADING
        confidence = max(line.heading_score, EXPLICIT_HEADING_CONFIDENCE)
        level = heading_level(line)
        subtype = f"h{level}"
    else:
        element_type = ElementType.PARAGRAPH
        confidence = PARAGRAPH_CONFIDENCE
        subtype = "body"
        level = None

    return ClassifiedLine(
        line=line,
        type=element_type,
        confidence=min(1.0, confidence),
        subtype=subtype,
        level=level,
        framework_match=detect_framework(line.framework_scores),
        section_break_score=section_break_score(line, element_type, average_length),
    )


def classify_lines(lines: typ.Sequence[AtomicLine]) -> list[ClassifiedLine]:
    """Classify every line of a tokenized document in order."""
    classified: list[ClassifiedLine] = []
    total_length = 0
    for position, line in enumerate(lines):
        average = total_length / position if position else None
        classified.append(classify_line(line, average))
        total_length += line.length
    logger.debug(
        "Classified %d line(s): %s",
        len(classified),
        ", ".join(item.type.value for item in classified),
    )
    return classified


def to_element(classified: ClassifiedLine) -> SemanticElement:
    """Convert a classified line into the element shape the grouper reads."""
    match classified.type:
        case ElementType.BULLET:
            content = strip_bullet_glyph(classified.text)
        case ElementType.HEADING:
            content = strip_heading_markup(classified.text)
        case _:
            content = classified.text
    return SemanticElement(
        type=classified.type,
        content=content,
        level=classified.level,
        confidence=classified.confidence,
        framework_match=classified.framework_match,
        section_break_score=classified.section_break_score,
    )


__all__ = [
    "classify_line",
    "classify_lines",
    "detect_framework",
    "heading_level",
    "section_break_score",
    "strip_bullet_glyph",
    "strip_heading_markup",
    "to_element",
]
