r"""Canonicalise raw marketing copy before tokenization.

Example
-------
>>> from copy_wireframe.normalizer import normalize_content
>>> normalize_content("Hello\r\n\r\n\r\n\r\nWorld  ")
'Hello\n\nWorld'
"""

from __future__ import annotations

import re

LINE_ENDING_PATTERN = re.compile(r"\r\n?")
BLANK_LINE_PATTERN = re.compile(r"^[ \t\f\v]+$", re.MULTILINE)
EXCESS_BLANK_PATTERN = re.compile(r"\n{3,}")
WORD_PATTERN = re.compile(r"\S+")
LETTER_PATTERN = re.compile(r"[^\W\d_]")
SENTENCE_BOUNDARY_PATTERN = re.compile(r"(?<=[.!?])\s+")


def normalize_content(content: str) -> str:
    """Return ``content`` with canonical line endings and collapsed blank runs.

    Parameters
    ----------
    content : str
        Raw copy as pasted by the user.

    Returns
    -------
    str
        Text using ``\n`` line endings, where whitespace-only lines are
        emptied, runs of blank lines collapse to a single blank line, and
        leading/trailing whitespace is trimmed. Empty input yields ``""``.
    """
    unified = LINE_ENDING_PATTERN.sub("\n", content)
    emptied = BLANK_LINE_PATTERN.sub("", unified)
    return EXCESS_BLANK_PATTERN.sub("\n\n", emptied).strip()


def content_words(text: str) -> list[str]:
    """Return whitespace tokens that carry at least one letter.

    List glyphs and bare numbering such as ``-``, ``•`` or ``1.`` are markup
    rather than content, so they never count as words.
    """
    return [token for token in WORD_PATTERN.findall(text) if LETTER_PATTERN.search(token)]


def count_words(text: str) -> int:
    """Return the number of content words in ``text``."""
    return len(content_words(text))


def split_sentences(text: str) -> list[str]:
    """Split ``text`` after sentence-ending punctuation, keeping every token."""
    return [part for part in SENTENCE_BOUNDARY_PATTERN.split(text.strip()) if part]


__all__ = [
    "content_words",
    "count_words",
    "normalize_content",
    "split_sentences",
]
