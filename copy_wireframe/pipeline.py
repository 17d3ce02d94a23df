"""Run the full content-to-wireframe pipeline.

Raw text flows through the normalizer, tokenizer and classifier; supplied
structural markers go through the adapter instead. Both streams are then
grouped, repaired, typed, and given templates. The pipeline is pure: each call
builds fresh state and identical input yields identical output.

Examples
--------
>>> from copy_wireframe.pipeline import build_wireframe
>>> result = build_wireframe("Welcome to Acme. We help you grow.")
>>> [(section.type.value, section.synthesized) for section in result.sections]
[('hero', False), ('cta', True)]
"""

from __future__ import annotations

import collections
import collections.abc as cabc
import logging
import typing as typ

import msgspec

from . import _constants
from .adapter import adapt_markers
from .catalog import TemplateCatalog, default_catalog, load_template_catalog
from .classifier import classify_lines, to_element
from .config.models import PipelineConfig
from .grouper import group_elements
from .merger import merge_tiny_sections
from .models import (
    Complexity,
    ElementType,
    InvalidInputError,
    PipelineStats,
    SemanticElement,
    StructuralMarker,
    WireframeResult,
    WireframeSection,
)
from .normalizer import normalize_content
from .resolver import assign_provisional_types, resolve_sections
from .templates import analyze_content_shape, select_template
from .tokenizer import tokenize

logger = logging.getLogger(__name__)

MarkerInput = StructuralMarker | cabc.Mapping[str, typ.Any]

SOURCE_TEXT = "text"
SOURCE_MARKERS = "markers"


def _is_marker_sequence(value: object) -> bool:
    return isinstance(value, cabc.Sequence) and not isinstance(value, str | bytes)


def _split_input(
    content: object, markers: object
) -> tuple[str, typ.Sequence[MarkerInput]]:
    """Return the raw text and marker sequence for the two entry points."""
    if markers is not None and not _is_marker_sequence(markers):
        msg = f"Markers must be a sequence, got {type(markers).__name__}."
        raise InvalidInputError(msg)
    supplied = typ.cast("typ.Sequence[MarkerInput]", markers or ())
    match content:
        case str():
            return content, supplied
        case _ if _is_marker_sequence(content) and markers is None:
            return "", typ.cast("typ.Sequence[MarkerInput]", content)
        case _:
            msg = (
                "Content must be a string or a sequence of structural markers, "
                f"got {type(content).__name__}."
            )
            raise InvalidInputError(msg)


def _text_elements(text: str) -> tuple[list[SemanticElement], dict[str, int], int]:
    normalized = normalize_content(text)
    if not normalized:
        logger.info("Empty content; emitting the default hero and cta skeleton")
    classified = classify_lines(tokenize(normalized))
    families = collections.Counter(line.framework_match.value for line in classified)
    return [to_element(line) for line in classified], dict(families), len(normalized)


def _resolve_catalog(
    catalog: TemplateCatalog | None, config: PipelineConfig
) -> TemplateCatalog:
    if catalog is not None:
        return catalog
    if config.catalog_path is not None:
        return load_template_catalog(config.catalog_path)
    return default_catalog()


def _stats(
    elements: typ.Sequence[SemanticElement],
    families: dict[str, int],
    section_count: int,
) -> PipelineStats:
    counts = collections.Counter(element.type for element in elements)
    return PipelineStats(
        total_lines=len(elements),
        bullet_lines=counts[ElementType.BULLET],
        heading_lines=counts[ElementType.HEADING],
        paragraph_lines=counts[ElementType.PARAGRAPH],
        section_count=section_count,
        framework_matches=families,
    )


def build_wireframe(
    content: str | typ.Sequence[MarkerInput],
    markers: typ.Sequence[MarkerInput] | None = None,
    *,
    config: PipelineConfig | None = None,
    catalog: TemplateCatalog | None = None,
    complexity: Complexity | None = None,
) -> WireframeResult:
    """Partition copy into typed sections and select a template for each.

    Parameters
    ----------
    content : str or Sequence
        Raw marketing copy, or a sequence of structural markers given as
        :class:`StructuralMarker` instances or ``{type, content, level}``
        mappings.
    markers : Sequence or None, optional
        Markers extracted from ``content`` by a markup parser. When present
        and non-empty they replace the text path; when empty the raw text is
        used instead.
    config : PipelineConfig or None, optional
        Grouping thresholds and catalog location; defaults when omitted.
    catalog : TemplateCatalog or None, optional
        Template catalog overriding ``config.catalog_path``.
    complexity : Complexity or None, optional
        Template variant hint applied to every section.

    Returns
    -------
    WireframeResult
        Sections whose first entry is a hero and which include a cta, plus
        the run statistics.

    Raises
    ------
    InvalidInputError
        If ``content`` is neither text nor a marker sequence, or a marker is
        malformed.
    """
    settings = config or PipelineConfig()
    text, supplied = _split_input(content, markers)
    elements = adapt_markers(supplied) if supplied else []
    if elements:
        source = SOURCE_MARKERS
        families = dict(collections.Counter(e.framework_match.value for e in elements))
        total_chars = sum(len(element.content) for element in elements)
    else:
        if supplied:
            logger.info("Supplied markers carried no content; using the text path")
        source = SOURCE_TEXT
        elements, families, total_chars = _text_elements(text)

    grouped = group_elements(
        elements,
        from_markers=source == SOURCE_MARKERS,
        total_chars=total_chars,
        config=settings,
    )
    merged = merge_tiny_sections(assign_provisional_types(grouped))
    resolved = resolve_sections(merged)

    templates = _resolve_catalog(catalog, settings)
    sections: list[WireframeSection] = []
    for index, section in enumerate(resolved):
        signals = analyze_content_shape(section)
        sections.append(
            WireframeSection(
                id=_constants.SECTION_ID_TEMPLATE.format(
                    index=index, type=section.type.value
                ),
                index=index,
                type=section.type,
                elements=section.elements,
                template=select_template(
                    section, signals, catalog=templates, complexity=complexity
                ),
                content_shape_signals=signals,
                dominant_framework=section.dominant_framework,
                synthesized=section.synthesized,
            )
        )
    logger.debug(
        "Built %d section(s) from %s input: %s",
        len(sections),
        source,
        ", ".join(section.type.value for section in sections),
    )
    return WireframeResult(
        sections=tuple(sections),
        source=source,
        stats=_stats(elements, families, len(sections)),
    )


def encode_result(result: WireframeResult, indent: int = 2) -> bytes:
    """Serialise ``result`` to JSON bytes.

    Examples
    --------
    >>> import json
    >>> payload = json.loads(encode_result(build_wireframe("")))
    >>> [section["type"] for section in payload["sections"]]
    ['hero', 'cta']
    """
    encoded = msgspec.json.encode(result)
    if indent <= 0:
        return encoded
    return msgspec.json.format(encoded, indent=indent)


__all__ = ["build_wireframe", "encode_result"]
