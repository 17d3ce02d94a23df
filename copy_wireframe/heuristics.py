"""Declarative heuristic tables used to score, classify, and label copy.

Every detector is expressed as data: ``FeatureRule`` triples of
``(pattern, feature, weight)`` for line features, ordered phrase tables for
section openers, and ordered keyword tables for section types. The tables are
compiled once at import time so that the tokenizer, classifier, grouper, and
resolver stay free of inline pattern literals and can be tested against the
tables directly.
"""

from __future__ import annotations

import dataclasses as dc
import re
import typing as typ

from .models import FrameworkFamily, SectionType

_FLAGS = re.IGNORECASE


@dc.dataclass(frozen=True, slots=True)
class FeatureRule:
    """Weighted regex detector contributing to one named feature."""

    pattern: re.Pattern[str]
    feature: str
    weight: float

    def matches(self, text: str) -> bool:
        """Return ``True`` when the rule's pattern occurs in ``text``."""
        return self.pattern.search(text) is not None


def _rules(
    entries: typ.Iterable[tuple[str, str, float]], *, flags: int = 0
) -> tuple[FeatureRule, ...]:
    """Compile ``(pattern, feature, weight)`` triples into ``FeatureRule``s."""
    return tuple(
        FeatureRule(re.compile(pattern, flags), feature, weight)
        for pattern, feature, weight in entries
    )


def _phrases(patterns: typ.Iterable[str]) -> tuple[re.Pattern[str], ...]:
    return tuple(re.compile(pattern, _FLAGS) for pattern in patterns)


BULLET_GLYPH = r"(?:[•\-\*]|\d+[.)]|[a-z][.)]|[→➤►✓✔])"
# Lettered items keep their label: "a)" carries a letter and counts as a word.
BULLET_PREFIX_PATTERN = re.compile(r"^(?:[•\-\*]|\d+[.)]|[→➤►✓✔])\s+")
NUMBERED_PATTERN = re.compile(r"^\d+[.)]\s")
LIST_ITEM_PATTERN = re.compile(rf"^{BULLET_GLYPH}\s+\S")

BULLET_RULES = _rules(
    [
        (r"^[•\-\*]\s", "bullet_glyph", 0.9),
        (r"^\d+[.)]\s", "numbered", 0.9),
        (r"^[→➤►✓✔]\s", "arrow_or_check", 0.8),
        (r"^.{21,199}$", "list_item_length", 0.1),
        (r"^(?:[^.]*|.*\.)$", "no_internal_period", 0.1),
    ]
)

HEADING_RULES = _rules(
    [
        (r"^.{1,29}$", "very_short", 0.4),
        (r"^.{30,49}$", "short", 0.3),
        (r"^.{50,79}$", "compact", 0.2),
        (r":$", "trailing_colon", 0.3),
        (r"^[^.!?]*[.!?]?$", "no_internal_punctuation", 0.2),
        (
            r"^(?:about|services|products|features|benefits|how|why|what|get|start)\b",
            "section_starter",
            0.2,
        ),
        (r"^(?:problem|solution|challenge|issue|trouble|struggle)", "pas_starter", 0.2),
        (r"^(?:attention|interest|desire|action|discover|learn|find)", "aida_starter", 0.2),
        (r"^(?:hero|welcome|introduction|overview|summary)", "landing_starter", 0.2),
        (
            r"^(?:testimonials|reviews|results|success|proven|trusted)",
            "proof_starter",
            0.2,
        ),
        (r"^(?:contact|subscribe|download|buy|join|sign)", "cta_starter", 0.2),
    ],
    flags=_FLAGS,
)

# Position weights for line indexes 0, 1-2, and 3-4.
HEADING_POSITION_WEIGHTS: tuple[tuple[int, float], ...] = ((1, 0.4), (3, 0.2), (5, 0.1))

EXPLICIT_HEADING_PATTERNS = _phrases(
    [
        r"^#{1,6}\s+\S",
        r"^\*\*[^*]+\*\*:?$",
    ]
)
ALL_CAPS_HEADING_PATTERN = re.compile(r"^[A-Z0-9][A-Z0-9 &'/,\-]{2,60}[A-Z0-9:]$")
MARKDOWN_HEADING_PATTERN = re.compile(r"^(#{1,6})\s+")
# Only a fully bold line loses its markers; inline bold runs are content.
BOLD_HEADING_LINE_PATTERN = re.compile(r"^\*\*([^*]+)\*\*(:?)$")

FRAMEWORK_RULES = _rules(
    [
        # Attention, interest, desire, action.
        (r"\b(?:discover|imagine|what if|did you know|stop|wait|look|attention|alert)\b", "attention", 0.8),
        (r"\b(?:breakthrough|revolutionary|amazing|incredible|shocking|surprising)\b", "attention", 0.8),
        (r"\b(?:secret|hidden|revealed|exposed|truth|fact)\b", "attention", 0.8),
        (r"\b(?:learn|understand|find out|see how|explore|dive into)\b", "interest", 0.7),
        (r"\b(?:benefits|advantages|features|reasons|ways|methods)\b", "interest", 0.7),
        (r"\b(?:research|study|data|proof|evidence|results)\b", "interest", 0.7),
        (r"\b(?:you need|you want|you deserve|you can|you will|you should)\b", "desire", 0.6),
        (r"\b(?:picture|visualize|dream|achieve|reach)\b", "desire", 0.6),
        (r"\b(?:transform|upgrade|enhance)\b", "desire", 0.6),
        (r"\b(?:click|download|subscribe|buy|purchase|order|get started)\b", "action", 0.9),
        (r"\b(?:contact|call|email|visit|try|begin)\b", "action", 0.9),
        (r"\b(?:now|today|immediately|instant)\b", "action", 0.9),
        # Problem, agitation, solution.
        (r"\b(?:problem|issue|challenge|struggle|difficulty|trouble)s?\b", "problem", 0.8),
        (r"\b(?:frustrated|annoyed|tired|sick|hate|dislike)\b", "problem", 0.8),
        (r"\b(?:missing|lacking|without)\b", "problem", 0.8),
        (r"\b(?:worse|terrible|awful|horrible|nightmare|disaster)\b", "agitation", 0.7),
        (r"\b(?:expensive|lose money|drain|burden|waste)\b", "agitation", 0.7),
        (r"\b(?:fail|failure|wrong|mistake|regret|suffer)\b", "agitation", 0.7),
        (r"\b(?:solution|answer|fix|solve|resolve|address)\b", "solution", 0.8),
        (r"\b(?:introducing|presenting|better|improved|perfect)\b", "solution", 0.8),
        (r"\b(?:easy|simple|efficient|effective)\b", "solution", 0.8),
        # Landing page signals.
        (r"\b(?:welcome|hello|meet|this is)\b", "hero_signal", 0.8),
        (r"(?:\bleading\b|#1\b|\bbest\b|\bpremium\b|\bprofessional\b)", "hero_signal", 0.8),
        (r"\b(?:revolutionize|boost)\b", "hero_signal", 0.8),
        (r"\b(?:capabilities|includes|offers|provides)\b", "feature_signal", 0.7),
        (r"\b(?:powerful|advanced|sophisticated|comprehensive)\b", "feature_signal", 0.7),
        (r"\b(?:built|designed|engineered)\b", "feature_signal", 0.7),
        (r"\b(?:testimonial|review|customer|client)s?\b", "social_proof_signal", 0.9),
        (r"\b(?:trusted|proven|verified|certified)\b", "social_proof_signal", 0.9),
        (r"\b\d+k?\+? (?:customers|users|clients|companies)\b", "social_proof_signal", 0.9),
        (r"\b(?:sign up|learn more|free trial|demo|consultation|quote)\b", "cta_signal", 0.9),
        (r"\b(?:don't wait|act now|limited time|hurry|today only)\b", "cta_signal", 0.9),
    ],
    flags=_FLAGS,
)

# Family membership, in tie-break priority order.
FRAMEWORK_FAMILIES: tuple[tuple[FrameworkFamily, tuple[str, ...]], ...] = (
    (FrameworkFamily.AIDA, ("attention", "interest", "desire", "action")),
    (FrameworkFamily.PAS, ("problem", "agitation", "solution")),
    (
        FrameworkFamily.LANDING_PAGE,
        ("hero_signal", "feature_signal", "social_proof_signal", "cta_signal"),
    ),
)

# Signals strong enough to suggest a new section on their own.
STRONG_BREAK_SIGNALS: tuple[str, ...] = ("attention", "problem", "hero_signal")

# Phrases that open a new section of marketing copy.
SECTION_OPENER_PHRASES: tuple[str, ...] = (
    r"you're not",
    r"you don't need",
    r"you've tried",
    r"you've outgrown",
    r"hi[.,] i'm",
    r"meet \w+",
    r"after (?:\w+|\d+) (?:years|decades?)",
    r"proven results",
    r"drawing from experience",
    r"what (?:our )?clients say",
    r"here's how",
    r"introducing",
    r"it's time to",
    r"ready to",
)
SECTION_OPENER_PATTERN = re.compile(
    r"^(?:" + "|".join(SECTION_OPENER_PHRASES) + r")\b", _FLAGS
)
# Opener phrases that begin a sentence somewhere inside a line.
EMBEDDED_OPENER_PATTERN = re.compile(
    r"(?:^|(?<=[.!?] ))(?:" + "|".join(SECTION_OPENER_PHRASES) + r")\b", _FLAGS
)
# Zero-width split points in front of sentence-initial openers.
OPENER_SPLIT_PATTERN = re.compile(
    r"(?<=[.!?] )(?=(?:" + "|".join(SECTION_OPENER_PHRASES) + r")\b)", _FLAGS
)
PARAGRAPH_BREAK_PATTERN = re.compile(r"(?<=[.!?])\s{2,}|\n\s*\n")


@dc.dataclass(frozen=True, slots=True)
class KeywordTable:
    """Phrases whose presence labels a section with ``section_type``."""

    section_type: SectionType
    patterns: tuple[re.Pattern[str], ...]

    def matches(self, text: str) -> bool:
        """Return ``True`` when any phrase occurs in ``text``."""
        return any(pattern.search(text) for pattern in self.patterns)


# Priority order: problem > solution > about > testimonial > cta.
SECTION_KEYWORD_TABLES: tuple[KeywordTable, ...] = (
    KeywordTable(
        SectionType.PROBLEM,
        _phrases(
            [
                r"\byou're not\b",
                r"\byou've tried\b",
                r"\bcomplex maze\b",
                r"\blimited budgets?\b",
                r"\bsame tensions\b",
                r"\btired of\b",
                r"\bstruggling (?:with|to)\b",
                r"\bthe problem\b",
                r"\bpain points?\b",
            ]
        ),
    ),
    KeywordTable(
        SectionType.SOLUTION,
        _phrases(
            [
                r"\byou don't need\b",
                r"\bsurface-level fix",
                r"\bthe solution\b",
                r"\bintroducing\b",
                r"\bhere's how\b",
                r"\bthat's where\b",
                r"\bwe solve\b",
            ]
        ),
    ),
    KeywordTable(
        SectionType.ABOUT,
        _phrases(
            [
                r"\bhi[.,] i'm\b",
                r"\bmy name is\b",
                r"\babout (?:me|us)\b",
                r"\bour story\b",
                r"\bnever set out\b",
                r"\bafter (?:\w+|\d+) (?:years|decades?)\b",
            ]
        ),
    ),
    KeywordTable(
        SectionType.TESTIMONIAL,
        _phrases(
            [
                r"\bproven results\b",
                r"\btestimonials?\b",
                r"\bwhat (?:our )?clients say\b",
                r"\bcase stud(?:y|ies)\b",
                r"\btrusted by\b",
                r"\bdrawing from experience\b",
                r"\b\d[\d,]*\+? (?:clients|customers|companies|users)\b",
            ]
        ),
    ),
    KeywordTable(
        SectionType.CTA,
        _phrases(
            [
                r"\byou've outgrown\b",
                r"\btime to transform\b",
                r"\bready to\b",
                r"\bget started\b",
                r"\bbook a (?:call|consultation)\b",
                r"\bschedule a\b",
                r"\bsign up\b",
                r"\bcontact us\b",
                r"\bdon't wait\b",
                r"\bact now\b",
                r"\blimited time\b",
            ]
        ),
    ),
)

# Strongest framework signal of the dominant family mapped to a section type.
FRAMEWORK_SIGNAL_TYPES: dict[str, SectionType] = {
    "attention": SectionType.HERO,
    "interest": SectionType.FEATURES,
    "desire": SectionType.FEATURES,
    "action": SectionType.CTA,
    "problem": SectionType.PROBLEM,
    "agitation": SectionType.PROBLEM,
    "solution": SectionType.SOLUTION,
    "hero_signal": SectionType.HERO,
    "feature_signal": SectionType.FEATURES,
    "social_proof_signal": SectionType.TESTIMONIAL,
    "cta_signal": SectionType.CTA,
}


def score_rules(rules: typ.Iterable[FeatureRule], text: str) -> float:
    """Return the clamped sum of weights for every rule matching ``text``."""
    total = sum(rule.weight for rule in rules if rule.matches(text))
    return max(0.0, min(1.0, total))


def matched_features(rules: typ.Iterable[FeatureRule], text: str) -> list[str]:
    """Return the feature names of every rule matching ``text``."""
    return [rule.feature for rule in rules if rule.matches(text)]


__all__ = [
    "ALL_CAPS_HEADING_PATTERN",
    "BOLD_HEADING_LINE_PATTERN",
    "BULLET_PREFIX_PATTERN",
    "BULLET_RULES",
    "EMBEDDED_OPENER_PATTERN",
    "EXPLICIT_HEADING_PATTERNS",
    "FRAMEWORK_FAMILIES",
    "FRAMEWORK_RULES",
    "FRAMEWORK_SIGNAL_TYPES",
    "HEADING_POSITION_WEIGHTS",
    "HEADING_RULES",
    "LIST_ITEM_PATTERN",
    "MARKDOWN_HEADING_PATTERN",
    "NUMBERED_PATTERN",
    "OPENER_SPLIT_PATTERN",
    "PARAGRAPH_BREAK_PATTERN",
    "SECTION_KEYWORD_TABLES",
    "SECTION_OPENER_PATTERN",
    "STRONG_BREAK_SIGNALS",
    "FeatureRule",
    "KeywordTable",
    "matched_features",
    "score_rules",
]
