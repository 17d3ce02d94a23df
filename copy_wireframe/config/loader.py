"""Load pipeline configuration YAML into typed dataclasses."""

from __future__ import annotations

import typing as typ
from pathlib import Path

from .helpers import (
    _fraction,
    _load_yaml_mapping,
    _non_negative_int,
    _optional_str,
    _positive_int,
    _section,
)
from .models import MarkerGroupingConfig, PipelineConfig, TextGroupingConfig


def load_pipeline_config(path: Path) -> PipelineConfig:
    """Load the YAML file tuning grouping thresholds and the template catalog.

    Parameters
    ----------
    path : Path
        Filesystem path to the YAML configuration (for example,
        ``wireframe.yaml``).

    Returns
    -------
    PipelineConfig
        Defaults overlaid with the values present in the file. A relative
        ``templates.catalog`` path is resolved against the config file's
        directory.

    Raises
    ------
    FileNotFoundError
        If the configuration file does not exist at ``path``.
    TypeError
        If the top-level YAML structure is not a mapping.
    WireframeConfigError
        If a value is non-numeric or out of range, for example a break
        threshold outside ``[0, 1]`` or a non-positive ceiling.
    YAMLError
        If the YAML content cannot be parsed by the underlying loader.

    Examples
    --------
    A file that only raises the text element ceiling:

    .. code-block:: yaml

        grouping:
          text:
            max_elements: 10

    >>> from pathlib import Path
    >>> from copy_wireframe.config import load_pipeline_config
    >>> config = load_pipeline_config(Path("wireframe.yaml"))  # doctest: +SKIP
    >>> config.text.max_elements  # doctest: +SKIP
    10
    """
    raw = _load_yaml_mapping(path)
    grouping = _section(raw, "grouping")
    templates = _section(raw, "templates")

    defaults = PipelineConfig()
    trivial_input_chars = _non_negative_int(
        grouping.get("trivial_input_chars", defaults.trivial_input_chars),
        "grouping.trivial_input_chars",
    )
    catalog = _optional_str(templates.get("catalog"))
    catalog_path = None
    if catalog:
        catalog_path = Path(catalog)
        if not catalog_path.is_absolute():
            catalog_path = path.parent / catalog_path

    return PipelineConfig(
        text=_build_text_config(_section(grouping, "text")),
        markers=_build_marker_config(_section(grouping, "markers")),
        trivial_input_chars=trivial_input_chars,
        catalog_path=catalog_path,
    )


def _build_text_config(payload: typ.Mapping[str, typ.Any]) -> TextGroupingConfig:
    """Build a TextGroupingConfig from the ``grouping.text`` mapping."""
    base = TextGroupingConfig()
    prefix = "grouping.text"
    return TextGroupingConfig(
        break_threshold=_fraction(
            payload.get("break_threshold", base.break_threshold),
            f"{prefix}.break_threshold",
        ),
        max_words=_positive_int(
            payload.get("max_words", base.max_words), f"{prefix}.max_words"
        ),
        max_elements=_positive_int(
            payload.get("max_elements", base.max_elements), f"{prefix}.max_elements"
        ),
        family_change_min_elements=_non_negative_int(
            payload.get("family_change_min_elements", base.family_change_min_elements),
            f"{prefix}.family_change_min_elements",
        ),
        family_change_confidence=_fraction(
            payload.get("family_change_confidence", base.family_change_confidence),
            f"{prefix}.family_change_confidence",
        ),
    )


def _build_marker_config(payload: typ.Mapping[str, typ.Any]) -> MarkerGroupingConfig:
    """Build a MarkerGroupingConfig from the ``grouping.markers`` mapping."""
    base = MarkerGroupingConfig()
    prefix = "grouping.markers"
    return MarkerGroupingConfig(
        max_elements=_positive_int(
            payload.get("max_elements", base.max_elements), f"{prefix}.max_elements"
        ),
        max_words=_positive_int(
            payload.get("max_words", base.max_words), f"{prefix}.max_words"
        ),
        major_heading_level=_positive_int(
            payload.get("major_heading_level", base.major_heading_level),
            f"{prefix}.major_heading_level",
        ),
    )


__all__ = ["load_pipeline_config"]
