"""Turn rich-text documents into structural markers.

These parsers sit in front of the semantic-structure adapter. HTML is walked
with BeautifulSoup in document order; Markdown is rendered to HTML first and
then walked the same way, so both inputs share one set of rules.

Examples
--------
>>> from copy_wireframe.markup import parse_markdown_markers
>>> [(m.type.value, m.level, m.content) for m in parse_markdown_markers(
...     "# Studio\\n\\nWe design.\\n\\n- Brand\\n- Web"
... )]  # doctest: +NORMALIZE_WHITESPACE
[('heading', 1, 'Studio'), ('paragraph', None, 'We design.'),
 ('list_container', None, ''), ('list_item', None, 'Brand'),
 ('list_item', None, 'Web')]
"""

from __future__ import annotations

import re
import typing as typ

from bs4 import BeautifulSoup
from markdown import Markdown

from .models import MarkerType, StructuralMarker

if typ.TYPE_CHECKING:
    from bs4.element import PageElement, Tag

BOLD_HEADING_PATTERN = re.compile(r"^[ \t]*\*\*(.+?)\*\*[ \t]*$", re.MULTILINE)
BOLD_STYLE_PATTERN = re.compile(r"font-weight\s*:\s*(?:bold|700)", re.IGNORECASE)
BOLD_HEADING_MAX_CHARS = 100
BOLD_HEADING_LEVEL = 2

HEADING_TAGS = ("h1", "h2", "h3", "h4", "h5", "h6")
LIST_TAGS = ("ul", "ol")
MARKER_TAGS = (*HEADING_TAGS, "p", "li", *LIST_TAGS)


def _inside(node: PageElement, names: tuple[str, ...], root: Tag | None = None) -> bool:
    """Return ``True`` when an ancestor of ``node`` below ``root`` is in ``names``."""
    for parent in node.parents:
        if parent is root:
            return False
        if parent.name in names:
            return True
    return False


def _collapse(text: str) -> str:
    return " ".join(text.split())


def _own_text(tag: Tag) -> str:
    """Return the text of ``tag`` excluding any nested list."""
    strings = [
        str(node)
        for node in tag.find_all(string=True)
        if not _inside(node, LIST_TAGS, root=tag)
    ]
    return _collapse(" ".join(strings))


def _is_bold(tag: Tag) -> bool:
    """Return ``True`` when ``tag`` or a descendant carries a bold inline style."""
    styled = [tag, *tag.find_all(style=True)]
    return any(
        BOLD_STYLE_PATTERN.search(str(node.get("style") or "")) for node in styled
    )


def _marker_for(tag: Tag) -> StructuralMarker | None:
    name = tag.name
    if name in HEADING_TAGS:
        text = _collapse(tag.get_text(" "))
        return StructuralMarker(MarkerType.HEADING, text, int(name[1])) if text else None
    if name in LIST_TAGS:
        return StructuralMarker(MarkerType.LIST_CONTAINER, "")
    if name == "li":
        text = _own_text(tag)
        return StructuralMarker(MarkerType.LIST_ITEM, text) if text else None
    if _inside(tag, ("li",)):
        return None
    text = _collapse(tag.get_text(" "))
    if not text:
        return None
    if len(text) < BOLD_HEADING_MAX_CHARS and _is_bold(tag):
        return StructuralMarker(MarkerType.HEADING, text, BOLD_HEADING_LEVEL)
    return StructuralMarker(MarkerType.PARAGRAPH, text)


def parse_html_markers(html: str) -> list[StructuralMarker]:
    """Extract structural markers from an HTML document in document order.

    Parameters
    ----------
    html : str
        HTML markup, for example a Google Docs export.

    Returns
    -------
    list[StructuralMarker]
        Headings for ``h1``-``h6`` and short bold paragraphs, paragraphs for
        other ``p`` tags, list items for ``li`` tags, and a container marker
        for each ``ul``/``ol``. Paragraphs nested inside list items are
        folded into their item and empty elements are skipped.
    """
    soup = BeautifulSoup(html, "html.parser")
    markers: list[StructuralMarker] = []
    for tag in soup.find_all(list(MARKER_TAGS)):
        marker = _marker_for(tag)
        if marker is not None:
            markers.append(marker)
    return markers


def _promote_bold_headings(text: str) -> str:
    """Convert bold-only lines into level-two headings before rendering."""

    def _replace(match: re.Match[str]) -> str:
        title = match.group(1).strip()
        return f"{'#' * BOLD_HEADING_LEVEL} {title}" if title else match.group(0)

    return BOLD_HEADING_PATTERN.sub(_replace, text)


def parse_markdown_markers(text: str) -> list[StructuralMarker]:
    """Render Markdown and extract its structural markers.

    Bold-only lines such as ``**Why us**`` are promoted to level-two headings
    first, matching how copywriters mark section titles in plain documents.
    """
    if not text.strip():
        return []
    renderer = Markdown(extensions=["sane_lists"])
    return parse_html_markers(renderer.convert(_promote_bold_headings(text)))


__all__ = ["parse_html_markers", "parse_markdown_markers"]
