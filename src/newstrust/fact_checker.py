from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable

import httpx
from pydantic import ValidationError

from .consensus import calculate_consensus, calculate_dynamic_score
from .ledger import VoteLedgerReader
from .llm_adapter import AssessmentProvider, LLMFallbackError, extract_json
from .models import (
    AnalysisResult,
    AnalysisVerdict,
    ClaimAssessment,
    ConsensusResult,
    DynamicScoreResult,
    PatternReport,
)
from .numeric import clamp
from .prompts import (
    build_claim_extraction_prompt,
    build_pattern_detection_prompt,
    build_quick_check_prompt,
)
from .scorer import DEFAULT_AI_CONFIDENCE, calculate_credibility_score, determine_verdict
from .sources import RelatedSourcesProvider

logger = logging.getLogger(__name__)

ANALYSIS_ERROR_FLAG = "analysis_error"
NEUTRAL_SCORE = 50
QUERY_PREFIX_LENGTH = 100

_INTEGER = re.compile(r"\d+")
_RECOVERABLE_ERRORS = (LLMFallbackError, httpx.HTTPError, ValidationError)


@runtime_checkable
class TextGenerator(Protocol):
    async def generate(self, prompt: str) -> str: ...


def neutral_fallback() -> AnalysisResult:
    """Result substituted when the assessment cannot be obtained."""
    return AnalysisResult(
        score=NEUTRAL_SCORE,
        verdict=AnalysisVerdict.UNCERTAIN,
        explanation="Unable to complete analysis due to an error. Please try again.",
        reasoning=["Analysis service temporarily unavailable"],
        sources=[],
        confidence=0,
        flags=[ANALYSIS_ERROR_FLAG],
    )


@dataclass
class FactChecker:
    assessment_provider: AssessmentProvider
    sources_provider: RelatedSourcesProvider
    text_generator: TextGenerator | None = field(default=None)

    def __post_init__(self) -> None:
        if self.text_generator is None and isinstance(self.assessment_provider, TextGenerator):
            self.text_generator = self.assessment_provider

    async def analyze_news(
        self,
        content: str,
        source_url: str,
        title: str | None = None,
    ) -> AnalysisResult:
        logger.info(
            "Starting AI analysis (content_length=%d, source_url=%s, title=%r)",
            len(content),
            source_url,
            title,
        )
        try:
            related_sources = await self.sources_provider.fetch(
                title or content[:QUERY_PREFIX_LENGTH]
            )
            assessment = await self.assessment_provider.assess(
                content,
                source_url,
                title,
                related_sources,
            )
            score = calculate_credibility_score(assessment, related_sources, content, source_url)
            confidence = assessment.confidence or DEFAULT_AI_CONFIDENCE
            result = AnalysisResult(
                score=score,
                verdict=determine_verdict(score),
                explanation=assessment.explanation or "Analysis completed.",
                reasoning=list(assessment.reasoning),
                sources=list(related_sources),
                confidence=confidence,
                flags=list(assessment.red_flags),
            )
        except Exception as exc:
            logger.error("AI analysis failed: %s", exc, exc_info=True)
            return neutral_fallback()

        logger.info(
            "AI analysis completed (score=%d, verdict=%s, confidence=%d)",
            result.score,
            result.verdict.value,
            result.confidence,
        )
        return result

    async def quick_check(self, content: str) -> int:
        """Single-number credibility estimate; 50 when the model is unavailable."""
        try:
            reply = await self._generate(build_quick_check_prompt(content))
        except _RECOVERABLE_ERRORS as exc:
            logger.error("Quick check failed: %s", exc)
            return NEUTRAL_SCORE
        match = _INTEGER.search(reply)
        score = int(match.group(0)) if match else NEUTRAL_SCORE
        return int(clamp(score, 0, 100))

    async def analyze_claims(self, content: str) -> list[ClaimAssessment]:
        try:
            payload = extract_json(await self._generate(build_claim_extraction_prompt(content)))
            claims = payload.get("claims") if isinstance(payload, dict) else None
            if not isinstance(claims, list):
                raise LLMFallbackError("claims reply has no claim list")
            return [ClaimAssessment.model_validate(claim) for claim in claims]
        except _RECOVERABLE_ERRORS as exc:
            logger.error("Error analyzing claims: %s", exc)
            return []

    async def detect_patterns(self, content: str) -> PatternReport:
        try:
            payload = extract_json(await self._generate(build_pattern_detection_prompt(content)))
            if not isinstance(payload, dict):
                raise LLMFallbackError("pattern reply is not a JSON object")
            return PatternReport.model_validate(payload)
        except _RECOVERABLE_ERRORS as exc:
            logger.error("Pattern detection failed: %s", exc)
            return PatternReport()

    @staticmethod
    def evaluate_item(
        ai_score: int,
        item_id: str,
        ledger: VoteLedgerReader,
    ) -> tuple[ConsensusResult, DynamicScoreResult]:
        """Both blends over freshly read vote counts."""
        vote_counts = ledger.get_vote_counts(item_id)
        return (
            calculate_consensus(ai_score, vote_counts),
            calculate_dynamic_score(ai_score, vote_counts),
        )

    async def _generate(self, prompt: str) -> str:
        if self.text_generator is None:
            raise LLMFallbackError("no text generator configured")
        return await self.text_generator.generate(prompt)
