"""Read-only registry of wireframe templates.

The default catalog ships with the package as ``catalog.yaml``. Projects can
overlay their own YAML file, adding new keys or replacing existing ones, but
nothing in the pipeline mutates a catalog once it is built.

Examples
--------
>>> from copy_wireframe.catalog import default_catalog
>>> catalog = default_catalog()
>>> catalog.get("features_grid").layout_key
'icon_grid'
>>> catalog.get("no_such_template").key
'text_block'
"""

from __future__ import annotations

import functools
import logging
import types
import typing as typ
from importlib import resources

from . import _constants
from .config.helpers import _load_yaml_mapping, _yaml_loader
from .config.models import WireframeConfigError
from .models import SectionType, Template

if typ.TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_CATALOG_RESOURCE = "catalog.yaml"


class TemplateCatalog:
    """Immutable mapping of template keys to :class:`Template` records."""

    def __init__(self, templates: typ.Mapping[str, Template]) -> None:
        if _constants.DEFAULT_TEMPLATE_KEY not in templates:
            msg = f"Template catalog must define '{_constants.DEFAULT_TEMPLATE_KEY}'."
            raise WireframeConfigError(msg)
        self._templates = types.MappingProxyType(dict(templates))

    def get(self, key: str) -> Template:
        """Return the template for ``key``, falling back to the text block."""
        template = self._templates.get(key)
        if template is None:
            logger.info("Unknown template key '%s'; using text block", key)
            return self._templates[_constants.DEFAULT_TEMPLATE_KEY]
        return template

    def for_section(self, section_type: SectionType | str) -> list[Template]:
        """Return templates whose ``best_for`` list names ``section_type``."""
        name = str(section_type)
        return [template for template in self._templates.values() if name in template.best_for]

    def keys(self) -> list[str]:
        """Return the template keys in catalog order."""
        return list(self._templates)

    def overlay(self, templates: typ.Mapping[str, Template]) -> TemplateCatalog:
        """Return a new catalog with ``templates`` added or replacing entries."""
        return TemplateCatalog({**self._templates, **templates})

    def __contains__(self, key: object) -> bool:
        return key in self._templates

    def __len__(self) -> int:
        return len(self._templates)

    def __iter__(self) -> typ.Iterator[Template]:
        return iter(self._templates.values())


def _build_template(key: str, payload: object) -> Template:
    """Build a :class:`Template` from one catalog entry."""
    if not isinstance(payload, dict):
        msg = f"Template '{key}' must be a mapping."
        raise WireframeConfigError(msg)
    layout = payload.get("layout")
    if not isinstance(layout, str) or not layout.strip():
        msg = f"Template '{key}' is missing a 'layout'."
        raise WireframeConfigError(msg)
    structure = payload.get("structure") or {}
    best_for = payload.get("best_for") or []
    if not isinstance(structure, dict) or not isinstance(best_for, list):
        msg = f"Template '{key}' has an invalid 'structure' or 'best_for'."
        raise WireframeConfigError(msg)
    image_position = payload.get("image_position")
    return Template(
        key=key,
        name=str(payload.get("name") or key.replace("_", " ").title()),
        layout_key=layout.strip(),
        has_image=bool(payload.get("has_image", False)),
        image_position=str(image_position) if image_position else None,
        structural_hints=dict(structure),
        description=str(payload.get("description", "")),
        best_for=tuple(str(item) for item in best_for),
    )


def build_templates(payload: typ.Mapping[str, typ.Any]) -> dict[str, Template]:
    """Build templates from a mapping of key to template fields."""
    return {str(key): _build_template(str(key), entry) for key, entry in payload.items()}


@functools.cache
def default_catalog() -> TemplateCatalog:
    """Return the catalog bundled with the package."""
    source = resources.files("copy_wireframe").joinpath(DEFAULT_CATALOG_RESOURCE)
    with source.open("r", encoding="utf-8") as handle:
        payload = _yaml_loader().load(handle) or {}
    return TemplateCatalog(build_templates(payload))


def load_template_catalog(path: Path) -> TemplateCatalog:
    """Overlay the templates defined in ``path`` on the default catalog.

    Raises
    ------
    FileNotFoundError
        If the catalog file does not exist.
    TypeError
        If the top-level YAML structure is not a mapping.
    WireframeConfigError
        If any entry is not a mapping or lacks a layout.
    """
    overrides = build_templates(_load_yaml_mapping(path))
    logger.debug("Loaded %d template(s) from %s", len(overrides), path)
    return default_catalog().overlay(overrides)


__all__ = [
    "TemplateCatalog",
    "build_templates",
    "default_catalog",
    "load_template_catalog",
]
