"""Main benchmark loop: model x run -> one CSV row."""

import time
from typing import Callable, Optional

from rich.console import Console

from gh_copmit.config import GH_HOST, BenchConfig
from gh_copmit.export.csv_export import CsvReport
from gh_copmit.models.base import ModelAdapter
from gh_copmit.models.gh_models import GhModelsAdapter
from gh_copmit.pricing.rates import PricingResolver
from gh_copmit.runner.metrics import Trial, TrialStatus

console = Console(stderr=True)

AdapterFactory = Callable[[str], ModelAdapter]


def gh_adapter_factory(config: BenchConfig) -> AdapterFactory:
    """Adapters that call `gh models run` against github.com with the run's timeout."""
    def create(model_id: str) -> ModelAdapter:
        return GhModelsAdapter(model_id, timeout_s=config.timeout_s, gh_host=GH_HOST)
    return create


def run_trial(adapter: ModelAdapter, model: str, run_index: int, prompt: str, context: str) -> Trial:
    """Run a single timed invocation. Failures are recorded, never raised."""
    response = adapter.generate(prompt, context)
    return Trial(
        model=model,
        run_index=run_index,
        elapsed_ms=max(0, int(response.total_time_ms)),
        status=TrialStatus.OK if response.ok else TrialStatus.FAIL,
        in_chars=len(context) + len(prompt),
        out_chars=len(response.output),
    )


def run_benchmark(
    config: BenchConfig,
    prompt: str,
    context: str,
    report: CsvReport,
    resolver: PricingResolver,
    adapter_factory: Optional[AdapterFactory] = None,
    sleep: Optional[Callable[[float], None]] = None,
) -> list[Trial]:
    """Run every (model, run) trial in order and write one CSV row per trial.

    Trials run strictly one after another with a short pause between them.
    Returns the trials in the order they were reported.
    """
    create_adapter = adapter_factory or gh_adapter_factory(config)
    sleep = sleep or time.sleep
    trials: list[Trial] = []

    report.write_header()
    for model in config.models:
        adapter = create_adapter(model)
        rate = resolver.resolve(model)
        for run_index in range(1, config.runs + 1):
            if trials and config.pause_s > 0:
                sleep(config.pause_s)
            trial = run_trial(adapter, model, run_index, prompt, context)
            report.write_row(trial, rate)
            trials.append(trial)

            if trial.status is TrialStatus.FAIL:
                console.print(f"  [red]✗[/] {model} run {run_index} failed ({trial.elapsed_ms} ms)")

    ok = sum(1 for t in trials if t.status is TrialStatus.OK)
    console.print(f"[green]Benchmark complete:[/] {ok} ok, {len(trials) - ok} failed, "
                  f"{report.rows_written} rows written")
    return trials
