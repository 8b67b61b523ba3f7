"""LLM integration via LangChain + OpenAI with cost tracking."""

import logging
import re

import openai
from langchain_core.language_models import BaseChatModel
from langchain_core.messages import HumanMessage, SystemMessage
from langchain_openai import ChatOpenAI

from candidate_matcher.core.config import RatingConfig, Settings
from candidate_matcher.core.errors import LLMErrorCategory, LLMServiceError
from candidate_matcher.models.domain import LLMResponse
from candidate_matcher.models.schemas import PromptType
from candidate_matcher.prompts.templates import build_user_prompt
from candidate_matcher.services.cost_service import CostTracker
from candidate_matcher.services.prompt_store import PromptStore

logger = logging.getLogger(__name__)

LOG_TRUNCATE = 500

_DIGITS = re.compile(r"\d+")


def classify_error(exc: Exception) -> LLMErrorCategory:
    """Map an exception from the OpenAI client to an error category."""
    if isinstance(exc, openai.RateLimitError):
        return LLMErrorCategory.rate_limit
    if isinstance(exc, openai.AuthenticationError):
        return LLMErrorCategory.authentication
    if isinstance(exc, openai.PermissionDeniedError):
        return LLMErrorCategory.permission
    if isinstance(exc, openai.NotFoundError):
        return LLMErrorCategory.not_found
    if isinstance(exc, openai.BadRequestError):
        return LLMErrorCategory.bad_request
    if isinstance(exc, openai.APIStatusError) and exc.status_code >= 500:
        return LLMErrorCategory.server_error
    if isinstance(exc, openai.APIConnectionError):  # includes timeouts
        return LLMErrorCategory.unavailable
    return LLMErrorCategory.unknown


def extract_rating(content: str | None, rating: RatingConfig) -> int:
    """Pull the first integer out of the model's reply and clamp it.

    "8/10" reads as 8. A reply without digits falls back to the minimum.
    """
    if not content:
        return rating.min
    found = _DIGITS.search(content)
    if found is None:
        return rating.min
    return rating.clamp(int(found.group()))


def _truncate(text: str) -> str:
    if len(text) > LOG_TRUNCATE:
        return text[:LOG_TRUNCATE] + "...[truncated]..."
    return text


def _token_usage(response) -> tuple[int, int]:
    usage = getattr(response, "usage_metadata", None)
    if usage:
        return usage.get("input_tokens", 0) or 0, usage.get("output_tokens", 0) or 0
    token_usage = (getattr(response, "response_metadata", None) or {}).get("token_usage") or {}
    return token_usage.get("prompt_tokens", 0) or 0, token_usage.get("completion_tokens", 0) or 0


class LLMGateway:
    def __init__(
        self,
        settings: Settings,
        prompts: PromptStore,
        cost_tracker: CostTracker,
        llm: BaseChatModel | None = None,
    ):
        self.settings = settings
        self.prompts = prompts
        self.cost_tracker = cost_tracker
        self.rating = settings.rating
        self._llm = llm

    def get_llm(self) -> BaseChatModel:
        """Return the chat model, building the ChatOpenAI client on first use.

        The client holds an HTTP connection pool, so one instance serves every call.
        """
        if self._llm is None:
            self._llm = ChatOpenAI(
                model=self.settings.openai_model,
                api_key=self.settings.openai_api_key,
                temperature=self.settings.openai_temperature,
                max_tokens=self.settings.openai_max_tokens,
                timeout=self.settings.openai_timeout,
            )
        return self._llm

    async def generate(
        self,
        system_text: str,
        user_template: str,
        vacancy_description: str,
        cv_content: str,
    ) -> LLMResponse:
        """Send one system + user prompt pair and return the reply with its token usage.

        Raises LLMServiceError for any failure of the underlying call.
        """
        user_prompt = build_user_prompt(user_template, vacancy_description, cv_content)
        messages = [
            SystemMessage(content=system_text),
            HumanMessage(content=user_prompt),
        ]
        logger.debug("Request to LLM [user message]: %s", _truncate(user_prompt))

        try:
            response = await self.get_llm().ainvoke(messages)
        except Exception as exc:
            category = classify_error(exc)
            logger.error("AI service error (%s): %s", category.value, exc, exc_info=True)
            raise LLMServiceError(category, f"AI service error: {exc}") from exc

        content = response.content if isinstance(response.content, str) else str(response.content)
        logger.info("LLM raw response: %s", _truncate(content))

        input_tokens, output_tokens = _token_usage(response)
        cost = self.cost_tracker.record_usage(input_tokens, output_tokens)
        logger.debug(
            "LLM usage: %d input / %d output tokens, cost %s %s",
            input_tokens, output_tokens, cost, self.cost_tracker.pricing.currency,
        )

        return LLMResponse(content=content, input_tokens=input_tokens, output_tokens=output_tokens)

    async def generate_summary(self, vacancy_description: str, cv_content: str) -> str:
        response = await self.generate(
            self.prompts.render_system(PromptType.SUMMARY),
            self.prompts.render_user(PromptType.SUMMARY),
            vacancy_description,
            cv_content,
        )
        return response.content

    async def generate_rating(self, vacancy_description: str, cv_content: str) -> int:
        response = await self.generate(
            self.prompts.render_system(PromptType.RATING),
            self.prompts.render_user(PromptType.RATING),
            vacancy_description,
            cv_content,
        )
        return extract_rating(response.content, self.rating)
