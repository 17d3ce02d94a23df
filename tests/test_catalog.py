"""Unit tests for the read-only template catalog."""

from __future__ import annotations

import typing as typ
from textwrap import dedent

import pytest

from copy_wireframe.catalog import TemplateCatalog, default_catalog, load_template_catalog
from copy_wireframe.config import WireframeConfigError
from copy_wireframe.models import SectionType, Template

if typ.TYPE_CHECKING:
    from pathlib import Path


def test_default_catalog_contains_registry_and_bullet_list() -> None:
    """The bundled catalog carries every layout plus the bullet list."""
    catalog = default_catalog()
    for key in (
        "hero_image_left",
        "hero_centered",
        "text_block",
        "text_with_sidebar",
        "solution_steps",
        "features_grid",
        "about_image_right",
        "testimonial_cards",
        "cta_banner",
        "contact_form",
        "pricing_cards",
        "bullet_list",
    ):
        assert key in catalog, f"expected '{key}' in the default catalog"
    assert len(catalog) == 27, f"expected 27 templates, got {len(catalog)}"


def test_template_fields_are_parsed() -> None:
    """Layout, image placement, and structural hints come from the catalog file."""
    template = default_catalog().get("hero_image_left")
    assert template.name == "Hero - Image Left"
    assert template.layout_key == "image_text_split"
    assert template.has_image is True
    assert template.image_position == "left"
    assert template.structural_hints["image"] == {"width": "40%", "height": "200px"}
    assert template.best_for == ("hero", "main_intro")
    assert default_catalog().get("hero_centered").image_position is None


def test_unknown_key_falls_back_to_text_block() -> None:
    """Lookups never fail; unknown keys resolve to the text block."""
    assert default_catalog().get("mystery_layout").key == "text_block"


def test_for_section_lists_matching_templates() -> None:
    """Templates are filtered by their ``best_for`` names."""
    keys = [template.key for template in default_catalog().for_section(SectionType.HERO)]
    assert keys == ["hero_image_left", "hero_image_right", "hero_centered", "hero_full_width"]


def test_catalog_requires_text_block() -> None:
    """A catalog without the fallback template is rejected."""
    with pytest.raises(WireframeConfigError):
        TemplateCatalog({"solo": Template(key="solo", name="Solo", layout_key="solo")})


def test_load_template_catalog_overlays_defaults(tmp_path: Path) -> None:
    """Custom files add new keys and replace existing ones."""
    path = tmp_path / "catalog.yaml"
    path.write_text(
        dedent(
            """
            hero_centered:
              name: Hero - Minimal
              layout: minimal_hero
              best_for: [hero]
            logo_wall:
              name: Logo Wall
              layout: logo_wall
              has_image: true
              best_for: [testimonial]
              structure:
                columns: 6
            """
        ),
        encoding="utf-8",
    )
    catalog = load_template_catalog(path)
    assert catalog.get("hero_centered").layout_key == "minimal_hero"
    assert catalog.get("logo_wall").structural_hints == {"columns": 6}
    assert len(catalog) == len(default_catalog()) + 1
    assert default_catalog().get("hero_centered").layout_key == "centered_hero", (
        "overlaying must not mutate the default catalog"
    )


@pytest.mark.parametrize(
    "body",
    [
        "broken: 3\n",
        "broken:\n  name: Broken\n",
        "broken:\n  layout: split\n  best_for: hero\n",
    ],
)
def test_invalid_catalog_entries_raise(tmp_path: Path, body: str) -> None:
    """Entries must be mappings with a layout and list-valued ``best_for``."""
    path = tmp_path / "catalog.yaml"
    path.write_text(body, encoding="utf-8")
    with pytest.raises(WireframeConfigError):
        load_template_catalog(path)


def test_missing_or_malformed_catalog_file(tmp_path: Path) -> None:
    """Missing files and non-mapping documents raise the loader errors."""
    with pytest.raises(FileNotFoundError):
        load_template_catalog(tmp_path / "absent.yaml")
    path = tmp_path / "list.yaml"
    path.write_text("- text_block\n", encoding="utf-8")
    with pytest.raises(TypeError):
        load_template_catalog(path)
