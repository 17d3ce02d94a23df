"""Unit tests for content-shape signals and the template decision table."""

from __future__ import annotations

import pytest

from copy_wireframe.catalog import TemplateCatalog, default_catalog
from copy_wireframe.grouper import build_section
from copy_wireframe.models import (
    Complexity,
    ElementType,
    Section,
    SectionType,
    SemanticElement,
    Template,
)
from copy_wireframe.templates import analyze_content_shape, infer_complexity, select_template


def _section(section_type: SectionType, *elements: SemanticElement) -> Section:
    return build_section(list(elements), section_type)


def _bullets(count: int) -> list[SemanticElement]:
    return [SemanticElement(ElementType.BULLET, f"Benefit number {n}") for n in range(count)]


def _paragraph(content: str) -> SemanticElement:
    return SemanticElement(ElementType.PARAGRAPH, content)


def test_features_with_four_bullets_use_bullet_list() -> None:
    """Four list items force the bullet-list layout."""
    template = select_template(_section(SectionType.FEATURES, *_bullets(4)))
    assert template.layout_key == "bullet_list", f"got {template.layout_key!r}"


def test_features_with_three_bullets_use_icon_grid() -> None:
    """Three list items in a features section take the icon grid."""
    template = select_template(_section(SectionType.FEATURES, *_bullets(3)))
    assert template.layout_key == "icon_grid", f"got {template.layout_key!r}"


def test_features_with_two_bullets_and_heading_use_icon_grid() -> None:
    """Two list items are enough for the icon grid."""
    section = _section(
        SectionType.FEATURES,
        SemanticElement(ElementType.HEADING, "Why teams pick us", 2),
        *_bullets(2),
    )
    assert select_template(section).key == "features_grid"


def test_bullet_list_override_applies_to_any_type() -> None:
    """Bullet-heavy content of any type gets the bullet list."""
    template = select_template(_section(SectionType.PROBLEM, *_bullets(5)))
    assert template.key == "bullet_list", f"got {template.key!r}"


@pytest.mark.parametrize(
    ("section_type", "elements", "expected"),
    [
        (SectionType.HERO, [_paragraph("Welcome to Acme. We help you grow.")], "hero_centered"),
        (
            SectionType.HERO,
            [_paragraph("Welcome. We build brands. You grow faster. Everyone wins.")],
            "hero_image_left",
        ),
        (SectionType.PROBLEM, [_paragraph("Launches keep slipping.")], "problem_centered"),
        (SectionType.SOLUTION, [_paragraph("We fix it in 2 weeks.")], "solution_steps"),
        (SectionType.SOLUTION, [_paragraph("We fix it fast.")], "solution_callout"),
        (
            SectionType.TESTIMONIAL,
            [_paragraph("“They changed everything.” Dana, founder")],
            "testimonial_quote",
        ),
        (
            SectionType.TESTIMONIAL,
            [_paragraph("Dana saw results in a month.")],
            "testimonial_cards",
        ),
        (SectionType.CTA, [_paragraph("Book a call.")], "cta_centered"),
        (SectionType.CONTENT, [_paragraph("Some words.")], "text_block"),
    ],
)
def test_base_table_and_refinements(
    section_type: SectionType, elements: list[SemanticElement], expected: str
) -> None:
    """The decision table picks variants by shape with content refinements."""
    template = select_template(_section(section_type, *elements))
    assert template.key == expected, f"expected {expected!r}, got {template.key!r}"


def test_blacklisted_sidebar_layouts_are_replaced() -> None:
    """Complex content and about sections avoid the sidebar layout."""
    long_copy = _paragraph("We write long, considered copy for every page. " * 12)
    content = select_template(_section(SectionType.CONTENT, long_copy))
    about = select_template(_section(SectionType.ABOUT, long_copy))
    assert content.key == "text_block", f"got {content.key!r}"
    assert about.key == "about_image_right", f"got {about.key!r}"
    assert "text_sidebar" not in {content.layout_key, about.layout_key}


def test_explicit_complexity_hint_wins() -> None:
    """A caller-supplied complexity overrides the inferred variant."""
    section = _section(SectionType.CTA, _paragraph("Book a call."))
    template = select_template(section, complexity=Complexity.COMPLEX)
    assert template.key == "cta_banner", f"got {template.key!r}"


def test_unknown_template_key_falls_back_to_text_block() -> None:
    """Catalogs missing a selected key resolve to the text block."""
    minimal = TemplateCatalog(
        {"text_block": Template(key="text_block", name="Text Block", layout_key="text_block")}
    )
    section = _section(SectionType.HERO, _paragraph("Welcome to Acme."))
    assert select_template(section, catalog=minimal).key == "text_block"


def test_content_shape_signals() -> None:
    """Counts and flags describe the section's content."""
    section = _section(
        SectionType.TESTIMONIAL,
        SemanticElement(ElementType.HEADING, "Results", 2),
        _paragraph('Sales rose 40% in a quarter. Happy client. "Would hire again."'),
        SemanticElement(ElementType.BULLET, "Faster launches"),
    )
    signals = analyze_content_shape(section)
    assert signals.element_count == 3
    assert signals.list_item_count == 1
    assert signals.has_lists and signals.has_headings
    assert signals.has_numbers and signals.has_quotes
    assert not signals.is_long
    assert signals.sentence_count == 5, f"got {signals.sentence_count}"
    assert not signals.should_use_bullet_list and not signals.should_use_icon_grid


@pytest.mark.parametrize(
    ("elements", "expected"),
    [
        ([_paragraph("One. Two.")], Complexity.SIMPLE),
        ([_paragraph("One. Two. Three.")], Complexity.MODERATE),
        ([_paragraph("A. B. C. D. E. F. G.")], Complexity.COMPLEX),
        ([_paragraph("Line.") for _ in range(7)], Complexity.COMPLEX),
        ([_paragraph("x" * 501)], Complexity.COMPLEX),
    ],
)
def test_infer_complexity(elements: list[SemanticElement], expected: Complexity) -> None:
    """Length, sentence count, and element count pick the variant."""
    signals = analyze_content_shape(_section(SectionType.CONTENT, *elements))
    assert infer_complexity(signals) is expected


def test_default_catalog_is_used_when_none_given() -> None:
    """Selection without a catalog reads the bundled one."""
    section = _section(SectionType.CTA, _paragraph("Book a call."))
    assert select_template(section) is default_catalog().get("cta_centered")
