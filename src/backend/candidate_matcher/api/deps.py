"""FastAPI dependencies handing out the services wired up in create_app()."""

from fastapi import Request

from candidate_matcher.core.config import Settings
from candidate_matcher.services.cost_service import CostTracker
from candidate_matcher.services.matching_service import MatchingService
from candidate_matcher.services.prompt_store import PromptStore


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_matching_service(request: Request) -> MatchingService:
    return request.app.state.matching_service


def get_prompt_store(request: Request) -> PromptStore:
    return request.app.state.prompt_store


def get_cost_tracker(request: Request) -> CostTracker:
    return request.app.state.cost_tracker
