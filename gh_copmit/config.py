"""Model lists, defaults, and the benchmark configuration record for gh-copmit."""

from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Optional

# Paths
PROMPTS_DIR = Path(__file__).parent / "prompts" / "bank"

# Models benchmarked by default, in report order
BENCH_MODELS: list[str] = [
    "openai/gpt-5-nano",
    "openai/gpt-5-mini",
    "openai/gpt-4.1-nano",
    "openai/gpt-4o-mini",
    "microsoft/phi-4-mini-instruct",
    "mistral-ai/mistral-small-2503",
]

# Fast and low-cost according to the benchmark
DEFAULT_COMMIT_MODEL = "openai/gpt-4.1-nano"
DEFAULT_LANG = "en"
LANGUAGES = ["en", "es"]

# Benchmark defaults
DEFAULT_RUNS = 1
DEFAULT_TIMEOUT_S = 45.0
TRIAL_PAUSE_S = 0.5
DEFAULT_UNIT_PRICE = "0.00001"   # USD per token unit (unified billing)
GH_HOST = "github.com"

# Commit defaults
DEFAULT_MAX_DIFF_LINES = 3000
DEFAULT_BASE_BRANCH = "main"
MAX_SUBJECT_LENGTH = 72
GH_MODELS_EXTENSION = "github/gh-models"


class ConfigError(ValueError):
    """Raised when benchmark settings cannot be used."""


@dataclass(frozen=True)
class BenchConfig:
    models: list[str] = field(default_factory=lambda: list(BENCH_MODELS))
    runs: int = DEFAULT_RUNS
    prices_file: Optional[Path] = None
    multipliers_file: Optional[Path] = None
    unit_price: Decimal = Decimal(DEFAULT_UNIT_PRICE)
    timeout_s: Optional[float] = DEFAULT_TIMEOUT_S   # None = wait forever
    pause_s: float = TRIAL_PAUSE_S

    @property
    def total_trials(self) -> int:
        return len(self.models) * self.runs


def build_bench_config(
    models: Optional[list[str]] = None,
    runs: Optional[int] = None,
    prices_file: Optional[str] = None,
    multipliers_file: Optional[str] = None,
    unit_price: Optional[str] = None,
    timeout: Optional[float] = None,
    pause: float = TRIAL_PAUSE_S,
) -> BenchConfig:
    """Validate raw option values once and freeze them into a BenchConfig.

    Empty strings count as "not set", matching how the values arrive from
    environment variables.
    """
    runs = DEFAULT_RUNS if runs is None else runs
    if runs < 1:
        raise ConfigError(f"RUNS must be at least 1, got {runs}")

    price_text = unit_price if unit_price not in (None, "") else DEFAULT_UNIT_PRICE
    try:
        price = Decimal(price_text.strip())
    except InvalidOperation:
        raise ConfigError(f"UNIT_PRICE is not a number: {price_text!r}") from None
    if not price.is_finite() or price < 0:
        raise ConfigError(f"UNIT_PRICE must be a non-negative number, got {price_text!r}")

    timeout = DEFAULT_TIMEOUT_S if timeout is None else timeout
    if timeout < 0:
        raise ConfigError(f"Timeout must be >= 0 seconds, got {timeout}")

    return BenchConfig(
        models=list(models) if models else list(BENCH_MODELS),
        runs=runs,
        prices_file=Path(prices_file) if prices_file else None,
        multipliers_file=Path(multipliers_file) if multipliers_file else None,
        unit_price=price,
        timeout_s=timeout or None,
        pause_s=pause,
    )
