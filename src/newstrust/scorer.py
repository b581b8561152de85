"""
Credibility scoring for submitted articles.

The final 0-100 score is a weighted sum of four bounded factors:

- AI confidence: 40 points
- Source reputation: 25 points
- Content quality: 20 points
- Corroboration by trusted sources: 15 points

Red flags then subtract up to 30 points and supporting factors add up to 15.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Sequence
from types import MappingProxyType

from .models import AIAssessment, AnalysisVerdict, ScoreInterpretation, SourceRecord
from .numeric import clamp, round_half_up
from .reputation import get_domain_reputation, is_trusted_source

logger = logging.getLogger(__name__)

AI_CONFIDENCE_POINTS = 40
REPUTATION_POINTS = 25
CONTENT_QUALITY_POINTS = 20
CORROBORATION_POINTS = 15
DEFAULT_AI_CONFIDENCE = 70

MAX_RED_FLAG_PENALTY = 30
DEFAULT_RED_FLAG_PENALTY = 5
MAX_SUPPORTING_BONUS = 15
DEFAULT_SUPPORTING_BONUS = 2

LIKELY_REAL_THRESHOLD = 70
LIKELY_FAKE_THRESHOLD = 40

RED_FLAG_SEVERITY = MappingProxyType(
    {
        "no_source_attribution": 15,
        "extreme_bias": 12,
        "sensationalism": 10,
        "clickbait_headline": 8,
        "emotional_manipulation": 10,
        "lack_of_evidence": 12,
        "conspiracy_theory": 15,
        "misleading_statistics": 12,
        "out_of_context": 10,
        "anonymous_source_only": 8,
        "contradicts_known_facts": 20,
        "satire_misrepresented": 15,
    }
)

SUPPORTING_FACTOR_VALUE = MappingProxyType(
    {
        "multiple_sources_cited": 5,
        "expert_quotes": 4,
        "verified_data": 5,
        "transparent_methodology": 3,
        "recent_publication": 2,
        "author_credentials": 3,
        "fact_check_available": 5,
        "primary_sources": 4,
        "balanced_perspective": 3,
        "context_provided": 3,
    }
)

_WHITESPACE = re.compile(r"\s+")
_URL_PATTERN = re.compile(r"https?://[^\s]+")
_QUOTE_PATTERN = re.compile(r"[“”\"].*?[“”\"]|[\"'].*?[\"']")
_CAPS_WORD_PATTERN = re.compile(r"\b[A-Z]{3,}\b")
_REPEATED_PUNCT_PATTERN = re.compile(r"[!?]{2,}")


def calculate_credibility_score(
    ai_response: AIAssessment,
    related_sources: Sequence[SourceRecord],
    content: str,
    source_url: str,
) -> int:
    components = score_breakdown(ai_response, related_sources, content, source_url)
    score = (
        components["ai_confidence"]
        + components["reputation"]
        + components["content_quality"]
        + components["corroboration"]
    )
    # Penalty floors at 0 before the bonus is applied; the bonus caps at 100.
    score = max(0.0, score - components["red_flag_penalty"])
    score = min(100.0, score + components["supporting_bonus"])
    final = round_half_up(score)
    logger.debug("Credibility score %s from components %s", final, components)
    return final


def score_breakdown(
    ai_response: AIAssessment,
    related_sources: Sequence[SourceRecord],
    content: str,
    source_url: str,
) -> dict[str, float]:
    """Weighted contribution of every factor, before penalty/bonus are applied."""
    # a missing or zero confidence counts as the default
    confidence = ai_response.confidence or DEFAULT_AI_CONFIDENCE
    reputation = get_domain_reputation(source_url)
    return {
        "ai_confidence": (confidence / 100) * AI_CONFIDENCE_POINTS,
        "reputation": (reputation.score / 100) * REPUTATION_POINTS,
        "content_quality": analyze_content_quality(content) * CONTENT_QUALITY_POINTS,
        "corroboration": analyze_corroboration(related_sources) * CORROBORATION_POINTS,
        "red_flag_penalty": calculate_red_flag_penalty(ai_response.red_flags),
        "supporting_bonus": calculate_supporting_bonus(ai_response.supporting_factors),
    }


def analyze_content_quality(content: str) -> float:
    """Heuristic writing-quality signal in [0, 1], starting from a neutral 0.5."""
    score = 0.5

    word_count = len(_WHITESPACE.split(content))
    if 200 <= word_count <= 2000:
        score += 0.1
    elif word_count < 50 or word_count > 5000:
        score -= 0.1

    paragraphs = [part for part in content.split("\n\n") if part.strip()]
    if len(paragraphs) >= 3:
        score += 0.1

    url_count = len(_URL_PATTERN.findall(content))
    if 0 < url_count <= 10:
        score += 0.15

    if _QUOTE_PATTERN.search(content):
        score += 0.1

    if len(_CAPS_WORD_PATTERN.findall(content)) > 5:
        score -= 0.15

    if len(_REPEATED_PUNCT_PATTERN.findall(content)) > 3:
        score -= 0.1

    return clamp(score, 0.0, 1.0)


def analyze_corroboration(related_sources: Sequence[SourceRecord]) -> float:
    source_count = len(related_sources)
    if source_count == 0:
        # Missing corroboration is not evidence of falsity.
        return 0.3

    if source_count >= 5:
        score = 0.5
    elif source_count >= 3:
        score = 0.4
    else:
        score = 0.3

    trusted_count = sum(1 for source in related_sources if is_trusted_source(source.url))
    score += (trusted_count / source_count) * 0.5
    return min(1.0, score)


def _normalize_tag(tag: str) -> str:
    return _WHITESPACE.sub("_", tag.lower())


def calculate_red_flag_penalty(red_flags: Iterable[str]) -> float:
    penalty = sum(
        RED_FLAG_SEVERITY.get(_normalize_tag(flag), DEFAULT_RED_FLAG_PENALTY)
        for flag in red_flags
    )
    return min(MAX_RED_FLAG_PENALTY, penalty)


def calculate_supporting_bonus(supporting_factors: Iterable[str]) -> float:
    bonus = sum(
        SUPPORTING_FACTOR_VALUE.get(_normalize_tag(factor), DEFAULT_SUPPORTING_BONUS)
        for factor in supporting_factors
    )
    return min(MAX_SUPPORTING_BONUS, bonus)


def determine_verdict(score: int) -> AnalysisVerdict:
    if score >= LIKELY_REAL_THRESHOLD:
        return AnalysisVerdict.LIKELY_REAL
    if score <= LIKELY_FAKE_THRESHOLD:
        return AnalysisVerdict.LIKELY_FAKE
    return AnalysisVerdict.UNCERTAIN


def interpret_score(score: int) -> ScoreInterpretation:
    """Human-readable label for a credibility score."""
    if score >= 85:
        return ScoreInterpretation(
            label="Highly Credible",
            description="Strong evidence supports the credibility of this content",
            color="green",
        )
    if score >= 70:
        return ScoreInterpretation(
            label="Likely Credible",
            description="Good indicators of credibility with minor concerns",
            color="lightgreen",
        )
    if score >= 55:
        return ScoreInterpretation(
            label="Uncertain",
            description="Mixed signals - verify independently before sharing",
            color="yellow",
        )
    if score >= 40:
        return ScoreInterpretation(
            label="Questionable",
            description="Multiple red flags present - treat with skepticism",
            color="orange",
        )
    return ScoreInterpretation(
        label="Not Credible",
        description="Strong indicators of misinformation or unreliable content",
        color="red",
    )


def calculate_confidence_level(
    ai_confidence: int | None,
    source_count: int,
    has_source_url: bool,
) -> int:
    """How much to trust the assessment itself, as opposed to the article."""
    confidence = ai_confidence or 50
    if source_count >= 5:
        confidence += 15
    elif source_count >= 3:
        confidence += 10
    elif source_count >= 1:
        confidence += 5
    confidence += 10 if has_source_url else -15
    return round_half_up(clamp(confidence, 0, 100))
