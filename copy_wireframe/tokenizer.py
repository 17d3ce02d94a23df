"""Split normalized copy into atomic lines and score each one.

Copy pasted from documents frequently arrives as one or two enormous lines.
When that happens the tokenizer applies a secondary split: paragraph breaks
first, then sentence-initial section openers such as "You're not" or
"Introducing", and finally pairs of sentences for runs that are still very
long. Every scoring function is a pure function of the line text and index.

Examples
--------
>>> from copy_wireframe.tokenizer import tokenize
>>> [line.text for line in tokenize("Welcome aboard\\n- Fast setup\\n- Friendly support")]
['Welcome aboard', '- Fast setup', '- Friendly support']
>>> tokenize("- Fast setup")[0].bullet_score
1.0
"""

from __future__ import annotations

import logging
import typing as typ

from .heuristics import (
    BULLET_RULES,
    FRAMEWORK_RULES,
    HEADING_POSITION_WEIGHTS,
    HEADING_RULES,
    OPENER_SPLIT_PATTERN,
    PARAGRAPH_BREAK_PATTERN,
    score_rules,
)
from .models import AtomicLine, FrameworkScores
from .normalizer import count_words, split_sentences

logger = logging.getLogger(__name__)

SPLIT_TRIGGER_CHARS = 200
SPLIT_TRIGGER_LINES = 2
LONG_RUN_CHARS = 300
SENTENCES_PER_CHUNK = 2
MIN_LINE_CHARS = 6


def bullet_score(text: str) -> float:
    """Return the list-item likelihood of ``text`` in ``[0, 1]``."""
    return score_rules(BULLET_RULES, text)


def heading_score(text: str, index: int) -> float:
    """Return the heading likelihood of ``text`` at position ``index``.

    Short length, a trailing colon, the absence of internal sentence
    punctuation, section-starter words, and a position near the top of the
    document all add weight. The result is clamped to ``[0, 1]``.
    """
    position = next(
        (weight for limit, weight in HEADING_POSITION_WEIGHTS if index < limit), 0.0
    )
    return min(1.0, score_rules(HEADING_RULES, text) + position)


def framework_scores(text: str) -> FrameworkScores:
    """Return the strongest matched weight for each rhetorical signal."""
    strongest: dict[str, float] = {}
    for rule in FRAMEWORK_RULES:
        if rule.matches(text):
            strongest[rule.feature] = max(strongest.get(rule.feature, 0.0), rule.weight)
    return FrameworkScores(**strongest)


def _split_long_run(piece: str) -> list[str]:
    """Chunk a long run into groups of sentences."""
    if len(piece) <= LONG_RUN_CHARS:
        return [piece]
    sentences = split_sentences(piece)
    return [
        " ".join(sentences[start : start + SENTENCES_PER_CHUNK])
        for start in range(0, len(sentences), SENTENCES_PER_CHUNK)
    ]


def intelligent_split(text: str) -> list[str]:
    """Split an oversized line at paragraph breaks, openers, and sentences.

    Parameters
    ----------
    text : str
        A single candidate line, typically hundreds of characters long.

    Returns
    -------
    list[str]
        Non-empty, stripped pieces whose concatenation carries every
        whitespace-separated token of ``text`` in the original order.
    """
    pieces: list[str] = []
    for paragraph in PARAGRAPH_BREAK_PATTERN.split(text):
        for segment in OPENER_SPLIT_PATTERN.split(paragraph):
            stripped = segment.strip()
            if stripped:
                pieces.extend(_split_long_run(stripped))
    return pieces


def _fold_fragments(pieces: typ.Iterable[str]) -> list[str]:
    """Fold fragments shorter than ``MIN_LINE_CHARS`` into a neighbour.

    A fragment joins the preceding line; leading fragments join the first
    real line instead. Input made only of fragments becomes a single line.
    """
    merged: list[str] = []
    pending = ""
    for piece in pieces:
        if len(piece) < MIN_LINE_CHARS:
            if merged:
                merged[-1] = f"{merged[-1]} {piece}"
            else:
                pending = f"{pending} {piece}".strip()
            continue
        if pending:
            piece = f"{pending} {piece}"
            pending = ""
        merged.append(piece)
    if pending:
        merged.append(pending)
    return merged


def split_lines(text: str) -> list[str]:
    """Return the candidate line texts for normalized ``text``."""
    lines = [line.strip() for line in text.split("\n")]
    lines = [line for line in lines if line]
    if len(lines) <= SPLIT_TRIGGER_LINES and len(text) > SPLIT_TRIGGER_CHARS:
        expanded = [piece for line in lines for piece in intelligent_split(line)]
        logger.debug(
            "Intelligent split expanded %d line(s) into %d", len(lines), len(expanded)
        )
        lines = expanded
    return _fold_fragments(lines)


def build_atomic_line(index: int, text: str) -> AtomicLine:
    """Compute the feature bundle for one line."""
    return AtomicLine(
        index=index,
        text=text,
        length=len(text),
        word_count=count_words(text),
        bullet_score=bullet_score(text),
        heading_score=heading_score(text, index),
        framework_scores=framework_scores(text),
    )


def tokenize(text: str) -> list[AtomicLine]:
    """Split normalized ``text`` into scored atomic lines.

    Parameters
    ----------
    text : str
        Output of :func:`copy_wireframe.normalizer.normalize_content`.

    Returns
    -------
    list[AtomicLine]
        One record per candidate line, indexed from zero. Empty text yields an
        empty list.
    """
    return [build_atomic_line(index, line) for index, line in enumerate(split_lines(text))]


__all__ = [
    "MIN_LINE_CHARS",
    "bullet_score",
    "build_atomic_line",
    "framework_scores",
    "heading_score",
    "intelligent_split",
    "split_lines",
    "tokenize",
]
