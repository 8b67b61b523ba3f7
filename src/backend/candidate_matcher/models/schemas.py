"""Pydantic schemas for API request/response validation."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

VACANCY_MIN_LENGTH = 10
VACANCY_MAX_LENGTH = 10000


class CamelModel(BaseModel):
    """Snake_case in Python, camelCase on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# --- Enums ---

class PromptType(str, Enum):
    SUMMARY = "SUMMARY"
    RATING = "RATING"


class PromptRole(str, Enum):
    system = "system"
    user = "user"


# --- Matching schemas ---

class MatchRequest(CamelModel):
    vacancy_description: str = Field(
        min_length=VACANCY_MIN_LENGTH,
        max_length=VACANCY_MAX_LENGTH,
        examples=["Senior Python engineer with FastAPI, PostgreSQL and Docker experience."],
    )

    @field_validator("vacancy_description")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Vacancy description cannot be blank")
        return value


class CandidateSummary(CamelModel):
    name: str
    filename: str
    summary: str
    rating: int
    min_rating: int | None = None
    max_rating: int | None = None


class RatingConfigResponse(CamelModel):
    min_rating: int
    max_rating: int
    range_description: str


# --- Cost schemas ---

class PricingInfoResponse(CamelModel):
    input_tokens_per_million: float
    output_tokens_per_million: float
    currency: str


class LatestAiCallResponse(CamelModel):
    timestamp: datetime
    input_tokens: int
    output_tokens: int
    total_cost: float
    input_cost: float
    output_cost: float


class CostMetricsResponse(CamelModel):
    total_cost: float
    total_input_tokens: int
    total_output_tokens: int
    pricing: PricingInfoResponse
    latest_ai_call: LatestAiCallResponse | None = None


# --- Prompt management schemas ---

class PromptDto(CamelModel):
    type: PromptType
    role: PromptRole
    content: str
    file_path: str
    cached: bool = True
    edited: bool = False


class PromptUpdateRequest(CamelModel):
    type: PromptType
    role: PromptRole
    content: str

    @field_validator("type", mode="before")
    @classmethod
    def _upper_type(cls, value):
        return value.upper() if isinstance(value, str) else value

    @field_validator("role", mode="before")
    @classmethod
    def _lower_role(cls, value):
        return value.lower() if isinstance(value, str) else value


# --- Errors ---

class ErrorResponse(BaseModel):
    status: int
    error: str
    message: str
