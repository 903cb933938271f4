"""Rate tables for cost estimates: provider list prices or unified-billing multipliers.

Two optional JSON files can price a benchmark run:

* a provider table, ``{model: {"in_per_1k": n, "out_per_1k": n, "source": s}}``
* a multiplier table, ``{model: {"input_multiplier": n, "output_multiplier": n, "source": s}}``

At most one of them is used. The provider table wins when both exist.
"""

import json
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from enum import Enum
from pathlib import Path
from typing import Optional, Union

from rich.console import Console
from rich.markup import escape

from gh_copmit.config import BenchConfig

console = Console(stderr=True)

# Values that mean "no multiplier published" in a multiplier table
_NO_VALUE = (None, "", "N/A")


class RateTableError(ValueError):
    """Raised when a rate table file can't be decoded."""


class PricingMode(str, Enum):
    NONE = "none"
    PROVIDER = "provider"
    MULTIPLIER = "multiplier"


@dataclass(frozen=True)
class ProviderRate:
    in_per_1k: Decimal    # USD per 1000 input tokens
    out_per_1k: Decimal   # USD per 1000 output tokens
    source: str = ""


@dataclass(frozen=True)
class MultiplierRate:
    input_multiplier: Decimal
    output_multiplier: Decimal
    source: str = ""


RateRecord = Union[ProviderRate, MultiplierRate]

ZERO_MULTIPLIERS = MultiplierRate(Decimal(0), Decimal(0))


def _to_decimal(value, model: str, field_name: str, path: Path) -> Decimal:
    if isinstance(value, bool):
        raise RateTableError(f"{path}: {model}.{field_name} must be a number, got {value!r}")
    try:
        number = Decimal(value) if isinstance(value, (int, Decimal)) else Decimal(str(value).strip())
    except InvalidOperation:
        raise RateTableError(f"{path}: {model}.{field_name} must be a number, got {value!r}") from None
    if not number.is_finite():
        raise RateTableError(f"{path}: {model}.{field_name} must be finite, got {value!r}")
    return number


def _read_table(path: Path) -> dict:
    try:
        data = json.loads(path.read_text(), parse_float=Decimal)
    except json.JSONDecodeError as e:
        raise RateTableError(f"{path}: invalid JSON ({e})") from e
    except OSError as e:
        raise RateTableError(f"{path}: cannot read rate table ({e})") from e
    if not isinstance(data, dict):
        raise RateTableError(f"{path}: expected a JSON object keyed by model id")
    for model, entry in data.items():
        if not isinstance(entry, dict):
            raise RateTableError(f"{path}: entry for {model!r} must be an object")
    return data


def load_provider_table(path: Path) -> dict[str, ProviderRate]:
    """Load provider prices. Models missing either rate are left out entirely,
    so they never get a partial cost."""
    table: dict[str, ProviderRate] = {}
    for model, entry in _read_table(path).items():
        rate_in = entry.get("in_per_1k")
        rate_out = entry.get("out_per_1k")
        if rate_in in _NO_VALUE or rate_out in _NO_VALUE:
            continue
        table[model] = ProviderRate(
            in_per_1k=_to_decimal(rate_in, model, "in_per_1k", path),
            out_per_1k=_to_decimal(rate_out, model, "out_per_1k", path),
            source=str(entry.get("source") or ""),
        )
    return table


def load_multiplier_table(path: Path) -> dict[str, MultiplierRate]:
    """Load unified-billing multipliers. Missing, null, or "N/A" multipliers become 0."""
    table: dict[str, MultiplierRate] = {}
    for model, entry in _read_table(path).items():
        values = {}
        for name in ("input_multiplier", "output_multiplier"):
            raw = entry.get(name)
            if isinstance(raw, str):
                raw = raw.strip()
            values[name] = Decimal(0) if raw in _NO_VALUE else _to_decimal(raw, model, name, path)
        table[model] = MultiplierRate(source=str(entry.get("source") or ""), **values)
    return table


def _usable(path: Optional[Path], label: str) -> bool:
    if path is None:
        return False
    if not path.is_file():
        console.print(f"[yellow]{label} not found, ignoring: {escape(str(path))}[/]")
        return False
    return True


class PricingResolver:
    """Looks up the rate record for a model under the run's pricing mode."""

    def __init__(self, mode: PricingMode, table: Optional[dict] = None):
        self.mode = mode
        self.table = table or {}

    @classmethod
    def from_config(cls, config: BenchConfig) -> "PricingResolver":
        """Pick the pricing mode once and decode its table.

        Raises RateTableError if the selected table is malformed.
        """
        if _usable(config.prices_file, "Prices file"):
            return cls(PricingMode.PROVIDER, load_provider_table(config.prices_file))
        if _usable(config.multipliers_file, "Multipliers file"):
            return cls(PricingMode.MULTIPLIER, load_multiplier_table(config.multipliers_file))
        return cls(PricingMode.NONE)

    def resolve(self, model: str) -> Optional[RateRecord]:
        if self.mode is PricingMode.PROVIDER:
            return self.table.get(model)
        if self.mode is PricingMode.MULTIPLIER:
            # unknown models price like "no multiplier published"
            return self.table.get(model, ZERO_MULTIPLIERS)
        return None
