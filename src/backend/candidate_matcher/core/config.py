from decimal import Decimal
from pathlib import Path

from pydantic import BaseModel, model_validator
from pydantic_settings import BaseSettings

PACKAGE_DIR = Path(__file__).resolve().parent.parent
DEFAULT_PROMPTS_DIR = PACKAGE_DIR / "prompts" / "defaults"


class RatingConfig(BaseModel):
    """Inclusive rating bounds shown to the LLM and used to clamp its output."""

    min: int = 1
    max: int = 10

    @property
    def range_description(self) -> str:
        return f"{self.min} to {self.max}"

    def clamp(self, value: int) -> int:
        return max(self.min, min(value, self.max))


class Settings(BaseSettings):
    openai_api_key: str = ""
    openai_model: str = "gpt-4o"
    openai_temperature: float = 0
    openai_max_tokens: int = 1500
    openai_timeout: float = 60

    rating_min: int = 1
    rating_max: int = 10

    # USD per million tokens, gpt-4o list price
    pricing_input_per_million: Decimal = Decimal("2.50")
    pricing_output_per_million: Decimal = Decimal("10.00")
    pricing_currency: str = "USD"

    resumes_dir: Path = Path("data/cvs")
    strict_resume_loading: bool = True
    prompts_default_dir: Path = DEFAULT_PROMPTS_DIR  # read-only
    prompts_dir: Path = Path("data/prompts")  # admin edits land here
    top_candidates: int = 5

    jwt_secret: str = "change-me-in-production"
    jwt_algorithm: str = "HS256"
    admin_auth_required: bool = False

    log_level: str = "INFO"

    model_config = {"env_prefix": "MATCHER_", "env_file": ".env", "extra": "ignore"}

    @model_validator(mode="after")
    def _check_rating_bounds(self) -> "Settings":
        if self.rating_min > self.rating_max:
            raise ValueError(
                f"rating_min ({self.rating_min}) must not exceed rating_max ({self.rating_max})"
            )
        return self

    @property
    def rating(self) -> RatingConfig:
        return RatingConfig(min=self.rating_min, max=self.rating_max)


settings = Settings()
