"""Trial records, token estimates, and cost calculation for benchmark trials."""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Optional

from gh_copmit.pricing.rates import MultiplierRate, ProviderRate, RateRecord

CHARS_PER_TOKEN = 4
_THOUSAND = Decimal(1000)


def estimate_tokens(char_count: int) -> int:
    """Rough token count: ~4 characters per token, rounded up.

    This is a heuristic for cost projections, not a tokenizer.
    """
    return (char_count + CHARS_PER_TOKEN - 1) // CHARS_PER_TOKEN


class TrialStatus(str, Enum):
    OK = "OK"
    FAIL = "FAIL"


@dataclass(frozen=True)
class Trial:
    """Measurements of one timed model invocation."""
    model: str
    run_index: int       # 1-based
    elapsed_ms: int
    status: TrialStatus
    in_chars: int        # prompt + context
    out_chars: int

    @property
    def est_in_tokens(self) -> int:
        return estimate_tokens(self.in_chars)

    @property
    def est_out_tokens(self) -> int:
        return estimate_tokens(self.out_chars)


def token_units(in_tokens: int, out_tokens: int, rate: MultiplierRate) -> Decimal:
    """Weighted token count used by unified (multiplier) billing."""
    return in_tokens * rate.input_multiplier + out_tokens * rate.output_multiplier


def compute_cost(
    in_tokens: int,
    out_tokens: int,
    rate: Optional[RateRecord],
    unit_price: Decimal,
) -> Optional[Decimal]:
    """Estimated USD cost of one invocation, or None when it can't be priced.

    Provider rates are per 1000 tokens. Multiplier rates are priced through
    token units, and only when at least one multiplier is non-zero.
    """
    if rate is None:
        return None
    if isinstance(rate, ProviderRate):
        return (in_tokens / _THOUSAND) * rate.in_per_1k + (out_tokens / _THOUSAND) * rate.out_per_1k
    if rate.input_multiplier + rate.output_multiplier > 0:
        return token_units(in_tokens, out_tokens, rate) * unit_price
    return None


def format_fixed(value: Optional[Decimal]) -> str:
    """Six-decimal fixed-point text; blank for None."""
    if value is None:
        return ""
    return format(value, ".6f")


def format_plain(value: Optional[Decimal]) -> str:
    """Plain decimal text as supplied (no exponent); blank for None."""
    if value is None:
        return ""
    return format(value, "f")
