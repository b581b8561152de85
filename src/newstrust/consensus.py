"""
Blending of AI credibility scores with community votes.

Two blends coexist and must stay separate:

- ``calculate_consensus`` produces the settled verdict (fixed 40/60 weights,
  65/35 thresholds, finalization gate).
- ``calculate_dynamic_score`` feeds live displays before finalization; the AI
  weight decays gradually with vote volume so early scores do not jump.
"""

from __future__ import annotations

from .models import (
    ConfidenceLevel,
    ConsensusResult,
    DynamicScoreResult,
    Verdict,
    VoteCounts,
)
from .numeric import round_half_up

AI_WEIGHT = 0.4
COMMUNITY_WEIGHT = 0.6
REAL_THRESHOLD = 65
FAKE_THRESHOLD = 35
MIN_VOTES_FOR_FINALIZATION = 5

VOTE_SATURATION = 20
VOTE_CONFIDENCE_POINTS = 40
CLARITY_CONFIDENCE_POINTS = 30
AGREEMENT_CONFIDENCE_POINTS = 30
PARTIAL_AGREEMENT_POINTS = 15
AGREEMENT_TOLERANCE = 20

AI_WEIGHT_FLOOR = 0.2
VOTES_FOR_FLOOR = 50
HIGH_CONFIDENCE_VOTES = 10
MEDIUM_CONFIDENCE_VOTES = 3

_CONFIDENCE_LABELS = {
    ConfidenceLevel.HIGH: "High Confidence",
    ConfidenceLevel.MEDIUM: "Medium Confidence",
    ConfidenceLevel.LOW: "Low Confidence",
}


def community_score(vote_counts: VoteCounts) -> float:
    """Real votes count 100, uncertain 50, fake 0; 0 when nobody has voted."""
    if vote_counts.total == 0:
        return 0.0
    return (vote_counts.real * 100 + vote_counts.uncertain * 50) / vote_counts.total


def calculate_consensus(ai_score: int, vote_counts: VoteCounts) -> ConsensusResult:
    total = vote_counts.total
    if ai_score == 0 and total == 0:
        return ConsensusResult(
            verdict=Verdict.PENDING,
            final_score=0,
            confidence=0,
            is_finalized=False,
        )

    community = community_score(vote_counts)
    final_score = round_half_up(ai_score * AI_WEIGHT + community * COMMUNITY_WEIGHT)

    if final_score >= REAL_THRESHOLD:
        verdict = Verdict.REAL
    elif final_score <= FAKE_THRESHOLD:
        verdict = Verdict.FAKE
    else:
        verdict = Verdict.UNCERTAIN

    confidence = (min(total, VOTE_SATURATION) / VOTE_SATURATION) * VOTE_CONFIDENCE_POINTS
    confidence += abs(final_score - 50) * CLARITY_CONFIDENCE_POINTS / 50
    if ai_score > 0 and total > 0:
        if abs(ai_score - community) <= AGREEMENT_TOLERANCE:
            confidence += AGREEMENT_CONFIDENCE_POINTS
    elif ai_score > 0 or total > 0:
        confidence += PARTIAL_AGREEMENT_POINTS

    return ConsensusResult(
        verdict=verdict,
        final_score=final_score,
        confidence=round_half_up(min(confidence, 100)),
        is_finalized=total >= MIN_VOTES_FOR_FINALIZATION and ai_score > 0,
    )


def calculate_dynamic_score(ai_score: int, vote_counts: VoteCounts) -> DynamicScoreResult:
    total = vote_counts.total
    if total == 0:
        return DynamicScoreResult(
            ai_score=ai_score,
            dynamic_score=ai_score,
            community_score=0,
            confidence=ConfidenceLevel.LOW,
            vote_weight=0.0,
            ai_weight=1.0,
        )

    community = community_score(vote_counts)
    ai_weight = max(AI_WEIGHT_FLOOR, 1 - min(total / VOTES_FOR_FLOOR, 1 - AI_WEIGHT_FLOOR))
    vote_weight = 1 - ai_weight

    if total >= HIGH_CONFIDENCE_VOTES:
        confidence = ConfidenceLevel.HIGH
    elif total >= MEDIUM_CONFIDENCE_VOTES:
        confidence = ConfidenceLevel.MEDIUM
    else:
        confidence = ConfidenceLevel.LOW

    return DynamicScoreResult(
        ai_score=ai_score,
        dynamic_score=round_half_up(ai_score * ai_weight + community * vote_weight),
        community_score=round_half_up(community),
        confidence=confidence,
        vote_weight=vote_weight,
        ai_weight=ai_weight,
    )


def confidence_label(level: ConfidenceLevel) -> str:
    return _CONFIDENCE_LABELS.get(ConfidenceLevel(level), "Unknown")
