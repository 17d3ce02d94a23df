"""Typed dataclasses and closed enumerations shared by the wireframe pipeline.

Every entity is created fresh per pipeline call. Line-level records are frozen
so that feature scores computed by the tokenizer cannot drift once the
classifier and grouper start reading them.
"""

from __future__ import annotations

import dataclasses as dc
import enum
import typing as typ


class InvalidInputError(TypeError):
    """Raised when pipeline input is neither text nor a marker sequence."""


class SectionType(enum.StrEnum):
    """Semantic label assigned to every wireframe section."""

    HERO = "hero"
    PROBLEM = "problem"
    SOLUTION = "solution"
    ABOUT = "about"
    FEATURES = "features"
    TESTIMONIAL = "testimonial"
    CTA = "cta"
    CONTENT = "content"


class ElementType(enum.StrEnum):
    """Discrete type of a classified content unit."""

    HEADING = "heading"
    PARAGRAPH = "paragraph"
    BULLET = "bullet"


class MarkerType(enum.StrEnum):
    """Structural marker labels accepted from markup-parsing collaborators."""

    HEADING = "heading"
    PARAGRAPH = "paragraph"
    LIST_ITEM = "list_item"
    LIST_CONTAINER = "list_container"


class FrameworkFamily(enum.StrEnum):
    """Copywriting framework families, in tie-break priority order."""

    AIDA = "aida"
    PAS = "pas"
    LANDING_PAGE = "landing_page"
    GENERIC = "generic"


class Complexity(enum.StrEnum):
    """Template variant discriminator."""

    SIMPLE = "simple"
    MODERATE = "moderate"
    COMPLEX = "complex"


@dc.dataclass(frozen=True, slots=True)
class FrameworkScores:
    """Per-line rhetorical signal strengths, each in ``[0, 1]``."""

    attention: float = 0.0
    interest: float = 0.0
    desire: float = 0.0
    action: float = 0.0
    problem: float = 0.0
    agitation: float = 0.0
    solution: float = 0.0
    hero_signal: float = 0.0
    feature_signal: float = 0.0
    social_proof_signal: float = 0.0
    cta_signal: float = 0.0

    def get(self, signal: str) -> float:
        """Return the score recorded for ``signal``."""
        return typ.cast("float", getattr(self, signal))


@dc.dataclass(frozen=True, slots=True)
class AtomicLine:
    """One candidate line and the feature bundle computed for it.

    Attributes
    ----------
    index : int
        Zero-based position of the line in the tokenized document.
    text : str
        Trimmed line text.
    length : int
        Character length of ``text``.
    word_count : int
        Number of content words (tokens carrying at least one letter).
    bullet_score : float
        Strength of list-item glyph and shape signals.
    heading_score : float
        Strength of heading length, position, and phrasing signals.
    framework_scores : FrameworkScores
        Rhetorical signal strengths for the eleven framework detectors.
    """

    index: int
    text: str
    length: int
    word_count: int
    bullet_score: float
    heading_score: float
    framework_scores: FrameworkScores


@dc.dataclass(frozen=True, slots=True)
class ClassifiedLine:
    """An atomic line with its classifier verdict and break score."""

    line: AtomicLine
    type: ElementType
    confidence: float
    subtype: str
    level: int | None
    framework_match: FrameworkFamily
    section_break_score: float

    @property
    def text(self) -> str:
        """Return the underlying line text."""
        return self.line.text


@dc.dataclass(frozen=True, slots=True)
class StructuralMarker:
    """Structural element produced outside the core, e.g. by an HTML parser."""

    type: MarkerType
    content: str
    level: int | None = None


@dc.dataclass(frozen=True, slots=True)
class SemanticElement:
    """The unit consumed by the section grouper.

    Attributes
    ----------
    type : ElementType
        Heading, paragraph, or bullet.
    content : str
        Element text with list glyphs and heading markup removed.
    level : int or None
        Heading level between 1 and 3; ``None`` for other element types.
    confidence : float
        Classifier confidence; trusted markers carry ``1.0``.
    framework_match : FrameworkFamily
        Dominant framework family detected for the element.
    section_break_score : float
        Break score computed on the text path; ``0.0`` for markers.
    """

    type: ElementType
    content: str
    level: int | None = None
    confidence: float = 1.0
    framework_match: FrameworkFamily = FrameworkFamily.GENERIC
    section_break_score: float = 0.0


@dc.dataclass(frozen=True, slots=True)
class Section:
    """A contiguous run of elements produced by grouping.

    ``type`` is provisional until the resolver assigns the final label.
    """

    elements: tuple[SemanticElement, ...]
    type: SectionType = SectionType.CONTENT
    bullet_count: int = 0
    heading_count: int = 0
    total_words: int = 0
    dominant_framework: FrameworkFamily = FrameworkFamily.GENERIC
    synthesized: bool = False

    @property
    def text(self) -> str:
        """Return the element contents joined by newlines."""
        return "\n".join(element.content for element in self.elements)


@dc.dataclass(frozen=True, slots=True)
class ContentShapeSignals:
    """Counts and flags that drive template selection for one section."""

    element_count: int
    list_item_count: int
    has_lists: bool
    has_headings: bool
    is_long: bool
    has_numbers: bool
    has_quotes: bool
    sentence_count: int
    should_use_bullet_list: bool
    should_use_icon_grid: bool


@dc.dataclass(frozen=True, slots=True)
class Template:
    """Named layout descriptor looked up from the template catalog."""

    key: str
    name: str
    layout_key: str
    has_image: bool = False
    image_position: str | None = None
    structural_hints: dict[str, typ.Any] = dc.field(default_factory=dict)
    description: str = ""
    best_for: tuple[str, ...] = ()


@dc.dataclass(frozen=True, slots=True)
class WireframeSection:
    """Final output unit handed to rendering collaborators."""

    id: str
    index: int
    type: SectionType
    elements: tuple[SemanticElement, ...]
    template: Template
    content_shape_signals: ContentShapeSignals
    dominant_framework: FrameworkFamily = FrameworkFamily.GENERIC
    synthesized: bool = False

    @property
    def full_content(self) -> str:
        """Return all element contents joined by newlines."""
        return "\n".join(element.content for element in self.elements)


@dc.dataclass(frozen=True, slots=True)
class PipelineStats:
    """Summary counts describing one pipeline run."""

    total_lines: int
    bullet_lines: int
    heading_lines: int
    paragraph_lines: int
    section_count: int
    framework_matches: dict[str, int] = dc.field(default_factory=dict)


@dc.dataclass(frozen=True, slots=True)
class WireframeResult:
    """Ordered wireframe sections together with run statistics."""

    sections: tuple[WireframeSection, ...]
    source: str
    stats: PipelineStats


__all__ = [
    "AtomicLine",
    "ClassifiedLine",
    "Complexity",
    "ContentShapeSignals",
    "ElementType",
    "FrameworkFamily",
    "FrameworkScores",
    "InvalidInputError",
    "MarkerType",
    "PipelineStats",
    "Section",
    "SectionType",
    "SemanticElement",
    "StructuralMarker",
    "Template",
    "WireframeResult",
    "WireframeSection",
]
