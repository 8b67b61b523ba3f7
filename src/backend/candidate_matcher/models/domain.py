"""In-process value objects passed between services. Nothing here is persisted."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal


@dataclass(frozen=True)
class Resume:
    name: str
    content: str
    filename: str


@dataclass(frozen=True)
class ResumeLoadFailure:
    filename: str
    reason: str


@dataclass
class ResumeLoadReport:
    resumes: list[Resume] = field(default_factory=list)
    failures: list[ResumeLoadFailure] = field(default_factory=list)


@dataclass(frozen=True)
class LLMResponse:
    content: str
    input_tokens: int = 0
    output_tokens: int = 0


@dataclass(frozen=True)
class PricingInfo:
    input_tokens_per_million: Decimal
    output_tokens_per_million: Decimal
    currency: str


@dataclass(frozen=True)
class LatestAiCall:
    timestamp: datetime
    input_tokens: int
    output_tokens: int
    total_cost: Decimal
    input_cost: Decimal
    output_cost: Decimal


@dataclass(frozen=True)
class SkippedCandidate:
    filename: str
    reason: str
