"""Shared fixtures: isolated settings per test and a fake chat model instead of OpenAI."""

from decimal import Decimal
from pathlib import Path

import pytest
from langchain_core.messages import AIMessage

from candidate_matcher.core.config import Settings
from candidate_matcher.services.cost_service import CostTracker
from candidate_matcher.services.llm_service import LLMGateway
from candidate_matcher.services.prompt_store import PromptStore

RATING_MARKER = "Return ONLY the number"


class FakeChatModel:
    """Stands in for ChatOpenAI. Answers rating prompts with `rating_reply`, anything else with `summary_reply`."""

    def __init__(
        self,
        summary_reply: str = "Strong match for the vacancy.",
        rating_reply: str = "8",
        usage: dict | None = None,
        error: Exception | None = None,
    ):
        self.summary_reply = summary_reply
        self.rating_reply = rating_reply
        self.usage = usage if usage is not None else {"input_tokens": 100, "output_tokens": 20, "total_tokens": 120}
        self.error = error
        self.calls: list[list] = []

    async def ainvoke(self, messages):
        self.calls.append(messages)
        if self.error is not None:
            raise self.error
        is_rating = RATING_MARKER in messages[-1].content
        reply = self.rating_reply if is_rating else self.summary_reply
        return AIMessage(content=reply, usage_metadata=self.usage or None)


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(
        openai_api_key="test-key",
        resumes_dir=tmp_path / "cvs",
        prompts_dir=tmp_path / "prompts",
        rating_min=1,
        rating_max=10,
    )


@pytest.fixture
def cv_dir(settings: Settings) -> Path:
    settings.resumes_dir.mkdir(parents=True)
    return settings.resumes_dir


@pytest.fixture
def prompt_store(settings: Settings) -> PromptStore:
    return PromptStore(settings.prompts_default_dir, settings.prompts_dir, settings.rating)


@pytest.fixture
def cost_tracker() -> CostTracker:
    return CostTracker(Decimal("2.50"), Decimal("10.00"), "USD")


@pytest.fixture
def fake_llm() -> FakeChatModel:
    return FakeChatModel()


@pytest.fixture
def gateway(settings, prompt_store, cost_tracker, fake_llm) -> LLMGateway:
    return LLMGateway(settings, prompt_store, cost_tracker, llm=fake_llm)
