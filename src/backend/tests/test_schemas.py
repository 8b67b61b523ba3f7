"""Tests for Pydantic schema validation and settings."""

import pytest
from pydantic import ValidationError

from candidate_matcher.core.config import RatingConfig, Settings
from candidate_matcher.models.schemas import (
    CandidateSummary,
    MatchRequest,
    PromptRole,
    PromptType,
    PromptUpdateRequest,
)


class TestMatchRequest:
    def test_accepts_camel_case(self):
        req = MatchRequest.model_validate({"vacancyDescription": "Senior Python engineer needed"})
        assert req.vacancy_description == "Senior Python engineer needed"

    def test_short_description_rejected(self):
        with pytest.raises(ValidationError):
            MatchRequest(vacancy_description="Short")

    def test_long_description_rejected(self):
        with pytest.raises(ValidationError):
            MatchRequest(vacancy_description="x" * 10001)

    def test_blank_description_rejected(self):
        with pytest.raises(ValidationError):
            MatchRequest(vacancy_description=" " * 50)


class TestCandidateSummary:
    def test_serializes_camel_case(self):
        summary = CandidateSummary(
            name="Jane", filename="Jane.txt", summary="Fits", rating=7, min_rating=1, max_rating=10
        )
        assert summary.model_dump(by_alias=True) == {
            "name": "Jane",
            "filename": "Jane.txt",
            "summary": "Fits",
            "rating": 7,
            "minRating": 1,
            "maxRating": 10,
        }


class TestPromptUpdateRequest:
    def test_normalizes_case(self):
        req = PromptUpdateRequest.model_validate({"type": "summary", "role": "SYSTEM", "content": "x"})
        assert req.type is PromptType.SUMMARY
        assert req.role is PromptRole.system

    def test_content_required(self):
        with pytest.raises(ValidationError):
            PromptUpdateRequest.model_validate({"type": "SUMMARY", "role": "user"})


class TestSettings:
    def test_rating_config(self):
        rating = Settings(rating_min=0, rating_max=5).rating
        assert rating == RatingConfig(min=0, max=5)
        assert rating.range_description == "0 to 5"

    def test_inverted_rating_bounds_rejected(self):
        with pytest.raises(ValidationError):
            Settings(rating_min=8, rating_max=3)

    def test_clamp(self):
        rating = RatingConfig(min=1, max=10)
        assert [rating.clamp(v) for v in (-3, 1, 7, 10, 11)] == [1, 1, 7, 10, 10]
