"""Typed dataclasses describing wireframe pipeline configuration."""

from __future__ import annotations

import dataclasses as dc
from pathlib import Path  # noqa: TC003 - used for runtime type metadata


class WireframeConfigError(ValueError):
    """Raised when a pipeline configuration or template catalog is invalid."""


@dc.dataclass(slots=True)
class TextGroupingConfig:
    """Break thresholds and ceilings for grouping classified raw-text lines."""

    break_threshold: float = 0.5
    max_words: int = 500
    max_elements: int = 8
    family_change_min_elements: int = 3
    family_change_confidence: float = 0.7


@dc.dataclass(slots=True)
class MarkerGroupingConfig:
    """Ceilings for grouping supplied structural markers.

    Supplied structure is trusted more than raw-text heuristics, so these
    ceilings are higher than their text counterparts.
    """

    max_elements: int = 15
    max_words: int = 800
    major_heading_level: int = 2


@dc.dataclass(slots=True)
class PipelineConfig:
    """Aggregate configuration consumed by :func:`copy_wireframe.build_wireframe`."""

    text: TextGroupingConfig = dc.field(default_factory=TextGroupingConfig)
    markers: MarkerGroupingConfig = dc.field(default_factory=MarkerGroupingConfig)
    trivial_input_chars: int = 200
    catalog_path: Path | None = None


__all__ = [
    "MarkerGroupingConfig",
    "PipelineConfig",
    "TextGroupingConfig",
    "WireframeConfigError",
]
