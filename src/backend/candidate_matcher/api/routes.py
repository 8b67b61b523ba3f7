"""Public API: candidate matching, rating configuration and cost telemetry."""

import logging

from fastapi import APIRouter, Depends

from candidate_matcher.api.deps import get_cost_tracker, get_matching_service, get_settings
from candidate_matcher.core.config import Settings
from candidate_matcher.models.schemas import (
    CandidateSummary,
    CostMetricsResponse,
    LatestAiCallResponse,
    MatchRequest,
    PricingInfoResponse,
    RatingConfigResponse,
)
from candidate_matcher.services.cost_service import CostTracker
from candidate_matcher.services.matching_service import MatchingService

logger = logging.getLogger(__name__)

router = APIRouter()


# --- Matching endpoints ---


@router.post(
    "/candidate-matcher/match",
    response_model=list[CandidateSummary],
    tags=["Matching"],
)
async def match_candidates(
    body: MatchRequest,
    matching: MatchingService = Depends(get_matching_service),
):
    """Rank stored CVs against the vacancy and return an LLM summary and rating for the top candidates."""
    report = await matching.match(body.vacancy_description)
    return report.candidates


# --- Rating endpoints ---


@router.get("/rating/config", response_model=RatingConfigResponse, tags=["Rating"])
async def get_rating_config(settings: Settings = Depends(get_settings)):
    """Rating range applied to every candidate."""
    rating = settings.rating
    logger.debug("Providing rating configuration: min=%d, max=%d", rating.min, rating.max)
    return RatingConfigResponse(
        min_rating=rating.min,
        max_rating=rating.max,
        range_description=rating.range_description,
    )


# --- Cost endpoints ---


def _pricing(tracker: CostTracker) -> PricingInfoResponse:
    pricing = tracker.pricing
    return PricingInfoResponse(
        input_tokens_per_million=float(pricing.input_tokens_per_million),
        output_tokens_per_million=float(pricing.output_tokens_per_million),
        currency=pricing.currency,
    )


@router.get("/cost/metrics", response_model=CostMetricsResponse, tags=["Cost"])
async def get_cost_metrics(tracker: CostTracker = Depends(get_cost_tracker)):
    """Accumulated token usage and cost since startup, plus the latest LLM call."""
    latest = tracker.latest_call
    return CostMetricsResponse(
        total_cost=float(tracker.total_cost),
        total_input_tokens=tracker.total_input_tokens,
        total_output_tokens=tracker.total_output_tokens,
        pricing=_pricing(tracker),
        latest_ai_call=None if latest is None else LatestAiCallResponse(
            timestamp=latest.timestamp,
            input_tokens=latest.input_tokens,
            output_tokens=latest.output_tokens,
            total_cost=float(latest.total_cost),
            input_cost=float(latest.input_cost),
            output_cost=float(latest.output_cost),
        ),
    )


@router.get("/cost/pricing", response_model=PricingInfoResponse, tags=["Cost"])
async def get_pricing(tracker: CostTracker = Depends(get_cost_tracker)):
    """Configured per-million-token rates."""
    return _pricing(tracker)
