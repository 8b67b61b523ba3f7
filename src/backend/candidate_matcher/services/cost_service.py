"""Token usage and cost accounting for LLM calls.

Totals live for the lifetime of the process; only the most recent call is
kept in detail.
"""

import threading
from datetime import datetime, timezone
from decimal import ROUND_HALF_UP, Decimal

from candidate_matcher.models.domain import LatestAiCall, PricingInfo

ONE_MILLION = Decimal(1_000_000)
FOUR_PLACES = Decimal("0.0001")


def token_cost(tokens: int, price_per_million: Decimal) -> Decimal:
    if tokens <= 0:
        return Decimal("0.0000")
    return (Decimal(tokens) / ONE_MILLION * price_per_million).quantize(
        FOUR_PLACES, rounding=ROUND_HALF_UP
    )


class CostTracker:
    def __init__(
        self,
        input_per_million: Decimal,
        output_per_million: Decimal,
        currency: str = "USD",
    ):
        self.pricing = PricingInfo(
            input_tokens_per_million=Decimal(input_per_million),
            output_tokens_per_million=Decimal(output_per_million),
            currency=currency,
        )
        self._lock = threading.Lock()
        self._total_cost = Decimal("0")
        self._total_input_tokens = 0
        self._total_output_tokens = 0
        self.latest_call: LatestAiCall | None = None

    def record_usage(self, input_tokens: int, output_tokens: int) -> Decimal:
        """Add one call's usage to the totals and return its cost."""
        input_cost = token_cost(input_tokens, self.pricing.input_tokens_per_million)
        output_cost = token_cost(output_tokens, self.pricing.output_tokens_per_million)
        total = input_cost + output_cost

        with self._lock:
            self._total_cost += total
            self._total_input_tokens += max(input_tokens, 0)
            self._total_output_tokens += max(output_tokens, 0)

        self.latest_call = LatestAiCall(
            timestamp=datetime.now(timezone.utc),
            input_tokens=input_tokens,
            output_tokens=output_tokens,
            total_cost=total,
            input_cost=input_cost,
            output_cost=output_cost,
        )
        return total

    @property
    def total_cost(self) -> Decimal:
        return self._total_cost.quantize(FOUR_PLACES, rounding=ROUND_HALF_UP)

    @property
    def total_input_tokens(self) -> int:
        return self._total_input_tokens

    @property
    def total_output_tokens(self) -> int:
        return self._total_output_tokens
