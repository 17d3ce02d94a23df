"""Load and validate wireframe pipeline configuration.

This subpackage parses an optional ``wireframe.yaml`` file, overlays its
``grouping`` and ``templates`` mappings on the built-in defaults, and produces
typed dataclasses (:class:`PipelineConfig` and its grouping sections) that the
pipeline consumes. The core never reads environment variables; only the CLI
maps ``WIREFRAME_*`` variables onto its options.

Examples
--------
>>> from copy_wireframe.config import PipelineConfig
>>> PipelineConfig().markers.max_elements
15
"""

from .loader import load_pipeline_config
from .models import (
    MarkerGroupingConfig,
    PipelineConfig,
    TextGroupingConfig,
    WireframeConfigError,
)

__all__ = [
    "MarkerGroupingConfig",
    "PipelineConfig",
    "TextGroupingConfig",
    "WireframeConfigError",
    "load_pipeline_config",
]
