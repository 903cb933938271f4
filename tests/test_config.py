"""BenchConfig construction and validation."""

from decimal import Decimal
from pathlib import Path

import pytest

from gh_copmit.config import BENCH_MODELS, DEFAULT_TIMEOUT_S, ConfigError, build_bench_config


def test_defaults():
    config = build_bench_config()
    assert config.models == BENCH_MODELS
    assert config.runs == 1
    assert config.unit_price == Decimal("0.00001")
    assert config.timeout_s == DEFAULT_TIMEOUT_S
    assert config.prices_file is None
    assert config.multipliers_file is None
    assert config.total_trials == len(BENCH_MODELS)


def test_empty_strings_count_as_unset():
    config = build_bench_config(prices_file="", multipliers_file="", unit_price="")
    assert config.prices_file is None
    assert config.multipliers_file is None
    assert config.unit_price == Decimal("0.00001")


def test_overrides():
    config = build_bench_config(
        models=["a/b"], runs=3, prices_file="p.json", unit_price="0.00002", timeout=10,
    )
    assert config.models == ["a/b"]
    assert config.total_trials == 3
    assert config.prices_file == Path("p.json")
    assert config.unit_price == Decimal("0.00002")
    assert config.timeout_s == 10


def test_zero_timeout_means_unbounded():
    assert build_bench_config(timeout=0).timeout_s is None


@pytest.mark.parametrize("kwargs", [
    {"runs": 0},
    {"unit_price": "abc"},
    {"unit_price": "-1"},
    {"unit_price": "NaN"},
    {"timeout": -5},
])
def test_invalid_values_raise(kwargs):
    with pytest.raises(ConfigError):
        build_bench_config(**kwargs)
