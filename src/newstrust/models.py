from datetime import datetime, timezone
from enum import Enum, IntEnum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from .numeric import clamp, round_half_up


class AIAssessment(BaseModel):
    """Raw credibility assessment returned by the language model."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    confidence: int | None = None
    red_flags: list[str] = Field(default_factory=list)
    supporting_factors: list[str] = Field(default_factory=list)
    explanation: str | None = None
    reasoning: list[str] = Field(default_factory=list)
    concerning_factors: list[str] = Field(default_factory=list)
    source_reliability: str | None = None
    fact_check_notes: str | None = None

    @field_validator("confidence", mode="before")
    @classmethod
    def _clamp_confidence(cls, value: Any) -> int | None:
        if value is None:
            return None
        try:
            numeric = float(value)
        except (TypeError, ValueError) as exc:
            raise ValueError(f"confidence must be numeric, got {value!r}") from exc
        return round_half_up(clamp(numeric, 0.0, 100.0))

    @field_validator(
        "red_flags",
        "supporting_factors",
        "reasoning",
        "concerning_factors",
        mode="before",
    )
    @classmethod
    def _none_as_empty(cls, value: Any) -> Any:
        if value is None:
            return []
        if isinstance(value, str):
            return [value]
        return value


class SourceRecord(BaseModel):
    name: str
    url: str
    snippet: str | None = None
    published_at: str | None = None
    relevant: bool = True


class ReputationTier(str, Enum):
    HIGHLY_TRUSTED = "highly_trusted"
    TRUSTED = "trusted"
    UNKNOWN = "unknown"
    QUESTIONABLE = "questionable"


class DomainReputation(BaseModel):
    model_config = ConfigDict(frozen=True)

    score: int = Field(..., ge=0, le=100)
    tier: ReputationTier
    notes: str


class VoteCounts(BaseModel):
    model_config = ConfigDict(frozen=True)

    real: int = Field(0, ge=0)
    fake: int = Field(0, ge=0)
    uncertain: int = Field(0, ge=0)
    total: int = Field(0, ge=0)

    @model_validator(mode="after")
    def _check_total(self) -> "VoteCounts":
        expected = self.real + self.fake + self.uncertain
        if self.total != expected:
            raise ValueError(
                f"total ({self.total}) must equal real + fake + uncertain ({expected})"
            )
        return self

    @classmethod
    def from_tally(cls, real: int = 0, fake: int = 0, uncertain: int = 0) -> "VoteCounts":
        return cls(real=real, fake=fake, uncertain=uncertain, total=real + fake + uncertain)


class Verdict(IntEnum):
    """Consensus verdict; values match the on-chain enum."""

    PENDING = 0
    REAL = 1
    FAKE = 2
    UNCERTAIN = 3


class ConsensusResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    verdict: Verdict
    final_score: int = Field(..., ge=0, le=100)
    confidence: int = Field(..., ge=0, le=100)
    is_finalized: bool


class ConfidenceLevel(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class DynamicScoreResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    ai_score: int
    dynamic_score: int
    community_score: int
    confidence: ConfidenceLevel
    vote_weight: float
    ai_weight: float


class AnalysisVerdict(str, Enum):
    LIKELY_REAL = "likely_real"
    LIKELY_FAKE = "likely_fake"
    UNCERTAIN = "uncertain"


class AnalysisResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    score: int = Field(..., ge=0, le=100)
    verdict: AnalysisVerdict
    explanation: str
    reasoning: list[str] = Field(default_factory=list)
    sources: list[SourceRecord] = Field(default_factory=list)
    confidence: int = Field(..., ge=0, le=100)
    flags: list[str] = Field(default_factory=list)
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class ScoreInterpretation(BaseModel):
    model_config = ConfigDict(frozen=True)

    label: str
    description: str
    color: str


class ClaimAssessment(BaseModel):
    claim: str
    verdict: Literal["true", "false", "unverifiable"] = "unverifiable"
    explanation: str = ""
    importance: Literal["high", "medium", "low"] = "medium"


class PatternReport(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    sensationalism: bool = False
    emotional_language: bool = False
    lack_of_sources: bool = False
    clickbait: bool = False
    biased_language: bool = False
