"""FastAPI application entry point."""

import logging
from http import HTTPStatus

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from langchain_core.language_models import BaseChatModel

from candidate_matcher.api import admin_routes, routes
from candidate_matcher.core.config import Settings, settings as default_settings
from candidate_matcher.core.errors import (
    InvalidVacancyError,
    LLMErrorCategory,
    LLMServiceError,
    PromptManagementError,
    ResumeParsingError,
)
from candidate_matcher.models.schemas import ErrorResponse
from candidate_matcher.services.cost_service import CostTracker
from candidate_matcher.services.llm_service import LLMGateway
from candidate_matcher.services.matching_service import MatchingService
from candidate_matcher.services.prompt_store import PromptStore
from candidate_matcher.services.ranker import CandidateRanker
from candidate_matcher.services.resume_loader import ResumeLoader

logger = logging.getLogger(__name__)

DESCRIPTION = """
Matches candidate CVs to a job vacancy. CVs are ranked by keyword overlap with
the vacancy, then an LLM writes a short fit summary and a rating for each of
the top candidates.

## How It Works
1. **Drop CVs** (.txt or .pdf) into the configured CV directory
2. **Post a vacancy description** -- the best keyword matches are picked
3. **Get AI summaries and ratings** for each of them

## Admin
Prompt templates sent to the LLM can be viewed, edited and reset under
`/api/admin/prompts`. Requests without a token are treated as the demo admin
unless `MATCHER_ADMIN_AUTH_REQUIRED` is set.
"""

LLM_ERROR_STATUS = {
    LLMErrorCategory.rate_limit: (429, "AI service rate limit exceeded. Please try again later."),
    LLMErrorCategory.authentication: (401, "Invalid API key. Please check your configuration."),
    LLMErrorCategory.permission: (403, "Access denied. Please check your API permissions."),
    LLMErrorCategory.not_found: (404, "AI service endpoint not found."),
    LLMErrorCategory.server_error: (502, "AI service is temporarily unavailable. Please try again later."),
    LLMErrorCategory.unavailable: (502, "AI service is temporarily unavailable. Please try again later."),
}


def error_response(status: int, message: str) -> JSONResponse:
    body = ErrorResponse(status=status, error=HTTPStatus(status).phrase, message=message)
    return JSONResponse(status_code=status, content=body.model_dump())


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(LLMServiceError)
    async def handle_llm_error(request: Request, exc: LLMServiceError):
        logger.error("AI service error [%s]: %s", exc.category.value, exc.message)
        status, message = LLM_ERROR_STATUS.get(exc.category, (502, exc.message))
        return error_response(status, message)

    @app.exception_handler(ResumeParsingError)
    async def handle_resume_error(request: Request, exc: ResumeParsingError):
        logger.error("CV parsing error: %s", exc)
        return error_response(400, f"Failed to process CV file: {exc}")

    @app.exception_handler(PromptManagementError)
    async def handle_prompt_error(request: Request, exc: PromptManagementError):
        logger.error("Prompt management error: %s", exc)
        return error_response(400, f"Prompt management error: {exc}")

    @app.exception_handler(InvalidVacancyError)
    async def handle_invalid_vacancy(request: Request, exc: InvalidVacancyError):
        logger.error("Validation error: %s", exc)
        return error_response(400, f"Validation failed: {exc}")

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(request: Request, exc: RequestValidationError):
        messages = [err.get("msg", "invalid value") for err in exc.errors()]
        logger.error("Validation error: %s", "; ".join(messages))
        return error_response(400, "Validation failed: " + "; ".join(messages))

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception):
        logger.error("Unexpected error: %s", exc, exc_info=exc)
        return error_response(500, "An unexpected error occurred. Please try again later.")


def create_app(settings: Settings | None = None, llm: BaseChatModel | None = None) -> FastAPI:
    """Build the application and wire its services onto app.state.

    `llm` replaces ChatOpenAI, which is how tests run without network access.
    """
    settings = settings or default_settings

    app = FastAPI(
        title="Candidate Matcher",
        description=DESCRIPTION,
        version="1.0.0",
        openapi_tags=[
            {"name": "Matching", "description": "Match CVs to a vacancy description"},
            {"name": "Rating", "description": "Rating scale configuration"},
            {"name": "Cost", "description": "LLM token usage and cost"},
            {"name": "Admin", "description": "Prompt template management"},
        ],
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    prompt_store = PromptStore(settings.prompts_default_dir, settings.prompts_dir, settings.rating)
    cost_tracker = CostTracker(
        settings.pricing_input_per_million,
        settings.pricing_output_per_million,
        settings.pricing_currency,
    )
    gateway = LLMGateway(settings, prompt_store, cost_tracker, llm=llm)
    ranker = CandidateRanker(ResumeLoader(settings.resumes_dir, strict=settings.strict_resume_loading))

    app.state.settings = settings
    app.state.prompt_store = prompt_store
    app.state.cost_tracker = cost_tracker
    app.state.matching_service = MatchingService(
        ranker, gateway, settings.rating, top_k=settings.top_candidates
    )

    register_exception_handlers(app)
    app.include_router(routes.router, prefix="/api")
    app.include_router(admin_routes.router, prefix="/api")

    @app.get("/health", tags=["System"])
    async def health():
        """Health check endpoint used by Docker."""
        return {"status": "ok"}

    return app


logging.basicConfig(
    level=default_settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = create_app()
