"""Unit tests for line classification, framework detection, and break scores."""

from __future__ import annotations

import pytest

from copy_wireframe.classifier import (
    classify_line,
    classify_lines,
    detect_framework,
    section_break_score,
    strip_heading_markup,
    to_element,
)
from copy_wireframe.models import ElementType, FrameworkFamily, FrameworkScores
from copy_wireframe.tokenizer import build_atomic_line, tokenize


def test_bullets_win_over_headings() -> None:
    """Glyph-led lines classify as bullets with their subtype."""
    lines = classify_lines(tokenize("What we offer\n- Brand strategy\n2. Web design sprints"))
    kinds = [(line.type, line.subtype) for line in lines]
    assert kinds[1] == (ElementType.BULLET, "bulleted"), f"unexpected {kinds[1]!r}"
    assert kinds[2] == (ElementType.BULLET, "numbered"), f"unexpected {kinds[2]!r}"


def test_lettered_items_are_explicit_bullets() -> None:
    """Lettered list labels match the explicit list-item pattern."""
    (line,) = classify_lines([build_atomic_line(6, "a) choose a plan that suits your team")])
    assert line.type is ElementType.BULLET, f"expected bullet, got {line.type}"
    assert line.confidence == pytest.approx(0.75), "explicit matches floor confidence"


def test_heading_levels_follow_position_and_shape() -> None:
    """The first heading is level one; colon-terminated headings are level three."""
    lines = classify_lines(
        [
            build_atomic_line(0, "Acme Studio"),
            build_atomic_line(6, "Everything included in the studio plan:"),
            build_atomic_line(
                7,
                "Our process is collaborative and transparent, and we keep every "
                "client informed as we go.",
            ),
        ]
    )
    assert lines[0].type is ElementType.HEADING, "first short line should be a heading"
    assert lines[0].level == 1, f"expected level 1, got {lines[0].level}"
    assert lines[1].type is ElementType.HEADING, "colon line should be a heading"
    assert lines[1].level == 3, f"expected level 3, got {lines[1].level}"
    assert lines[2].type is ElementType.PARAGRAPH, "long prose should be a paragraph"
    assert lines[2].confidence == pytest.approx(0.8), "paragraph confidence is fixed"


def test_markdown_headings_keep_their_level_and_lose_markup() -> None:
    """Hash-prefixed lines take their level from the hashes."""
    lines = classify_lines(
        tokenize(
            "Intro line for the page\n"
            "We explain the offer in a couple of sentences here. Nothing more.\n"
            "## Pricing plans for teams"
        )
    )
    heading = lines[2]
    assert heading.type is ElementType.HEADING, f"expected heading, got {heading.type}"
    assert heading.level == 2, f"expected level 2, got {heading.level}"
    assert to_element(heading).content == "Pricing plans for teams", (
        "heading markup should be stripped from element content"
    )


def test_bullet_glyph_is_removed_from_element_content() -> None:
    """Bullet elements carry their text without the list glyph."""
    (line,) = classify_lines(tokenize("- Priority support"))
    element = to_element(line)
    assert element.type is ElementType.BULLET, "expected a bullet element"
    assert element.content == "Priority support", f"unexpected {element.content!r}"


@pytest.mark.parametrize(
    ("scores", "expected"),
    [
        (FrameworkScores(), FrameworkFamily.GENERIC),
        (FrameworkScores(attention=0.8), FrameworkFamily.AIDA),
        (FrameworkScores(problem=0.8, agitation=0.7), FrameworkFamily.PAS),
        (FrameworkScores(hero_signal=0.8, cta_signal=0.9), FrameworkFamily.LANDING_PAGE),
        (FrameworkScores(interest=0.8, solution=0.8), FrameworkFamily.AIDA),
        (FrameworkScores(solution=0.8, feature_signal=0.8), FrameworkFamily.PAS),
    ],
)
def test_detect_framework_uses_declaration_order_for_ties(
    scores: FrameworkScores, expected: FrameworkFamily
) -> None:
    """The strictly highest family wins; ties go to the family declared first."""
    assert detect_framework(scores) is expected, f"expected {expected} for {scores}"


def test_break_score_rewards_openers_and_headings() -> None:
    """Section openers and strong headings push the break score to the top."""
    line = build_atomic_line(3, "You're not alone in this.")
    score = section_break_score(line, ElementType.HEADING, average_length=40.0)
    assert score == 1.0, f"expected a saturated break score, got {score}"


def test_break_score_length_outlier_bonus() -> None:
    """Lines more than twice the running average earn a small bonus."""
    line = build_atomic_line(
        4, "Our small team handles every detail so that you can focus on your clients."
    )
    with_outlier = section_break_score(line, ElementType.PARAGRAPH, average_length=20.0)
    without = section_break_score(line, ElementType.PARAGRAPH, average_length=60.0)
    assert with_outlier == pytest.approx(0.2), f"unexpected score {with_outlier}"
    assert without == 0.0, f"unexpected score {without}"


def test_classification_confidence_stays_in_range() -> None:
    """Every classifier confidence lies within [0, 1]."""
    lines = classify_lines(
        tokenize("WELCOME TO ACME\n- one thing we do well\n**Bold title**\nPlain words here.")
    )
    assert all(0.0 <= line.confidence <= 1.0 for line in lines), (
        "confidence must be bounded"
    )
    assert all(0.0 <= line.section_break_score <= 1.0 for line in lines), (
        "break scores must be bounded"
    )


def test_break_scores_use_mean_length_of_preceding_lines() -> None:
    """Each line is compared with the average length of the lines before it."""
    lines = tokenize(
        "Acme Studio\n"
        "We build brands.\n"
        "Our team works with founders across the world on strategy, naming and design."
    )
    classified = classify_lines(lines)
    for position, (line, item) in enumerate(zip(lines, classified, strict=True)):
        previous = [earlier.length for earlier in lines[:position]]
        average = sum(previous) / len(previous) if previous else None
        expected = section_break_score(line, item.type, average)
        assert item.section_break_score == pytest.approx(expected), (
            f"line {position} scored against the wrong running average"
        )
    assert classify_line(lines[0]).section_break_score == pytest.approx(
        classified[0].section_break_score
    ), "the first line has no running average"


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("## Pricing", "Pricing"),
        ("**Why us**", "Why us"),
        ("**Why us**:", "Why us:"),
        ("### **Our process**", "Our process"),
        ("**Note** the **best** part of the day", "**Note** the **best** part of the day"),
        ("**Bold** start only", "**Bold** start only"),
    ],
)
def test_strip_heading_markup_keeps_inline_bold(text: str, expected: str) -> None:
    """Only hashes and bold markers wrapping the whole line are removed."""
    assert strip_heading_markup(text) == expected
