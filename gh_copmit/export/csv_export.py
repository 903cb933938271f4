"""CSV benchmark report: one header line, then one row per trial."""

import sys
from decimal import Decimal
from typing import Optional, TextIO

from gh_copmit.pricing.rates import ZERO_MULTIPLIERS, PricingMode, RateRecord
from gh_copmit.runner.metrics import Trial, compute_cost, format_fixed, format_plain, token_units

BASE_COLUMNS = ["Model", "Run", "Millis", "Status", "InChars", "OutChars", "EstInTokens", "EstOutTokens"]
PROVIDER_COLUMNS = ["PriceInPer1k", "PriceOutPer1k", "EstCostUSD"]
MULTIPLIER_COLUMNS = ["InputMult", "OutputMult", "UnitPrice", "TokenUnits", "EstCostUSD"]


def header_columns(mode: PricingMode) -> list[str]:
    if mode is PricingMode.PROVIDER:
        return BASE_COLUMNS + PROVIDER_COLUMNS
    if mode is PricingMode.MULTIPLIER:
        return BASE_COLUMNS + MULTIPLIER_COLUMNS
    return list(BASE_COLUMNS)


class CsvReport:
    """Writes the benchmark CSV. Columns are fixed by the pricing mode at construction.

    Fields are joined with plain commas; model ids and statuses never contain one.
    """

    def __init__(self, mode: PricingMode, unit_price: Decimal, stream: Optional[TextIO] = None):
        self.mode = mode
        self.unit_price = unit_price
        self.stream = stream if stream is not None else sys.stdout
        self.columns = header_columns(mode)
        self.rows_written = 0
        self._header_written = False

    def write_header(self) -> None:
        if self._header_written:
            return
        self._emit(self.columns)
        self._header_written = True

    def format_row(self, trial: Trial, rate: Optional[RateRecord]) -> list[str]:
        in_tok, out_tok = trial.est_in_tokens, trial.est_out_tokens
        fields = [
            trial.model,
            str(trial.run_index),
            str(trial.elapsed_ms),
            trial.status.value,
            str(trial.in_chars),
            str(trial.out_chars),
            str(in_tok),
            str(out_tok),
        ]
        if self.mode is PricingMode.PROVIDER:
            if rate is None:
                fields += ["", "", ""]
            else:
                cost = compute_cost(in_tok, out_tok, rate, self.unit_price)
                fields += [format_plain(rate.in_per_1k), format_plain(rate.out_per_1k), format_fixed(cost)]
        elif self.mode is PricingMode.MULTIPLIER:
            rate = rate or ZERO_MULTIPLIERS
            cost = compute_cost(in_tok, out_tok, rate, self.unit_price)
            fields += [
                format_plain(rate.input_multiplier),
                format_plain(rate.output_multiplier),
                format_plain(self.unit_price),
                format_fixed(token_units(in_tok, out_tok, rate)),
                format_fixed(cost),
            ]
        return fields

    def write_row(self, trial: Trial, rate: Optional[RateRecord]) -> None:
        self.write_header()
        self._emit(self.format_row(trial, rate))
        self.rows_written += 1

    def _emit(self, fields: list[str]) -> None:
        self.stream.write(",".join(fields) + "\n")
        self.stream.flush()
