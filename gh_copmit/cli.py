"""Typer CLI for gh-copmit."""

from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from gh_copmit.config import (
    BENCH_MODELS, DEFAULT_BASE_BRANCH, DEFAULT_COMMIT_MODEL, DEFAULT_LANG, DEFAULT_MAX_DIFF_LINES,
    LANGUAGES, BenchConfig, ConfigError, build_bench_config,
)
from gh_copmit.pricing.rates import PricingMode, PricingResolver, RateTableError

app = typer.Typer(name="copmit", help="Commit messages from GitHub Models, plus a model latency/cost benchmark")
gh_app = typer.Typer(name="gh-copmit", add_completion=False)
console = Console(stderr=True)


def _bench_setup(
    models: Optional[list[str]],
    runs: Optional[int],
    prices_file: Optional[str],
    multipliers_file: Optional[str],
    unit_price: Optional[str],
    timeout: Optional[float],
) -> tuple[BenchConfig, PricingResolver]:
    try:
        config = build_bench_config(
            models=models,
            runs=runs,
            prices_file=prices_file,
            multipliers_file=multipliers_file,
            unit_price=unit_price,
            timeout=timeout,
        )
        resolver = PricingResolver.from_config(config)
    except (ConfigError, RateTableError) as e:
        console.print(f"[red]{escape(str(e))}[/]")
        raise typer.Exit(2)
    return config, resolver


@app.command()
def bench(
    runs: Optional[int] = typer.Argument(None, envvar="BENCH_RUNS", help="Runs per model (default 1)"),
    model: Optional[list[str]] = typer.Option(None, "--model", "-m", help="Model id(s) to benchmark"),
    prices_file: Optional[str] = typer.Option(None, "--prices-file", envvar="PRICES_FILE",
                                              help="JSON provider prices per 1k tokens"),
    multipliers_file: Optional[str] = typer.Option(None, "--multipliers-file", envvar="MULTIPLIERS_FILE",
                                                   help="JSON unified-billing multipliers"),
    unit_price: Optional[str] = typer.Option(None, "--unit-price", envvar="UNIT_PRICE",
                                             help="USD per token unit in multiplier mode (default 0.00001)"),
    timeout: Optional[float] = typer.Option(None, "--timeout", envvar="BENCH_TIMEOUT",
                                            help="Seconds per model call, 0 for no limit (default 45)"),
):
    """Benchmark models on a fixed commit prompt and print CSV to stdout."""
    from gh_copmit.export.csv_export import CsvReport
    from gh_copmit.prompts.loader import load_bench_fixture
    from gh_copmit.runner.executor import run_benchmark

    config, resolver = _bench_setup(model, runs, prices_file, multipliers_file, unit_price, timeout)
    fixture = load_bench_fixture()
    console.print(f"[cyan]Benchmarking {len(config.models)} models x {config.runs} runs "
                  f"= {config.total_trials} trials (pricing: {resolver.mode.value})[/]")
    report = CsvReport(resolver.mode, config.unit_price)
    run_benchmark(config, fixture.prompt, fixture.context, report, resolver)


@app.command(name="cost-estimate")
def cost_estimate(
    out_chars: int = typer.Option(400, "--out-chars", min=0, help="Assumed reply length in characters"),
    model: Optional[list[str]] = typer.Option(None, "--model", "-m", help="Model id(s) to price"),
    prices_file: Optional[str] = typer.Option(None, "--prices-file", envvar="PRICES_FILE"),
    multipliers_file: Optional[str] = typer.Option(None, "--multipliers-file", envvar="MULTIPLIERS_FILE"),
    unit_price: Optional[str] = typer.Option(None, "--unit-price", envvar="UNIT_PRICE"),
):
    """Estimate the cost of one benchmark call per model, without calling any model."""
    from gh_copmit.prompts.loader import load_bench_fixture
    from gh_copmit.runner.metrics import compute_cost, estimate_tokens, format_fixed

    config, resolver = _bench_setup(model, None, prices_file, multipliers_file, unit_price, None)
    if resolver.mode is PricingMode.NONE:
        console.print("[yellow]No rate table configured. Set PRICES_FILE or MULTIPLIERS_FILE.[/]")
        return

    fixture = load_bench_fixture()
    in_tokens = estimate_tokens(len(fixture.prompt) + len(fixture.context))
    out_tokens = estimate_tokens(out_chars)

    table = Table(title=f"Estimated Cost per Call ({resolver.mode.value} pricing)")
    table.add_column("Model", style="cyan")
    table.add_column("In tokens", justify="right")
    table.add_column("Out tokens", justify="right")
    table.add_column("Cost (USD)", justify="right", style="green")
    table.add_column("Source")

    for model_id in config.models:
        rate = resolver.resolve(model_id)
        cost = compute_cost(in_tokens, out_tokens, rate, config.unit_price)
        table.add_row(
            model_id,
            str(in_tokens),
            str(out_tokens),
            format_fixed(cost) or "-",
            rate.source if rate is not None else "",
        )

    Console().print(table)


@app.command()
def models():
    """List the models benchmarked by default."""
    table = Table(title="Benchmark Models")
    table.add_column("#", justify="right")
    table.add_column("Model", style="cyan")
    for i, model_id in enumerate(BENCH_MODELS, 1):
        default = " [green](commit default)[/]" if model_id == DEFAULT_COMMIT_MODEL else ""
        table.add_row(str(i), f"{model_id}{default}")
    Console().print(table)


@app.command()
@gh_app.command()
def commit(
    model: str = typer.Option(DEFAULT_COMMIT_MODEL, "--model", "-m", envvar="GH_COMMIT_MODEL", help="Model ID to use"),
    stage_all: bool = typer.Option(False, "--all", "-a", help="Stage all changes (git add -A) before generating"),
    push: bool = typer.Option(False, "--push", help="Push after committing"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Show proposed commit without creating it"),
    lang: str = typer.Option(DEFAULT_LANG, "--lang", envvar="GH_COMMIT_LANG", help="Language: en or es"),
    no_conventional: bool = typer.Option(False, "--no-conventional", help="Do not enforce Conventional Commits format"),
    yes: bool = typer.Option(False, "--yes", help="Auto-install gh models extension if missing"),
    max_diff_lines: int = typer.Option(DEFAULT_MAX_DIFF_LINES, "--max-diff-lines", envvar="MAX_DIFF_LINES", min=1,
                                       hidden=True),
    base_branch: str = typer.Option(DEFAULT_BASE_BRANCH, "--base-branch", envvar="BASE_BRANCH", hidden=True),
):
    """Generate a Conventional Commit message from STAGED changes and commit it."""
    from gh_copmit.commit.flow import CommitFlowError, CommitOptions, error, run_commit
    from gh_copmit.git.repo import GitError
    from gh_copmit.models.gh_models import GhModelsError

    if lang not in LANGUAGES:
        error(f"Unsupported language: {escape(lang)} (choose from {', '.join(LANGUAGES)})")
        raise typer.Exit(1)

    options = CommitOptions(
        model=model,
        lang=lang,
        stage_all=stage_all,
        push=push,
        dry_run=dry_run,
        conventional=not no_conventional,
        auto_install=yes,
        max_diff_lines=max_diff_lines,
        base_branch=base_branch,
    )
    try:
        run_commit(options)
    except CommitFlowError as e:
        error(escape(str(e)))
        raise typer.Exit(e.exit_code)
    except (GitError, GhModelsError) as e:
        error(escape(str(e)))
        raise typer.Exit(1)


def main():
    from dotenv import find_dotenv, load_dotenv
    load_dotenv(find_dotenv(usecwd=True))
    app()


def gh_main():
    from dotenv import find_dotenv, load_dotenv
    load_dotenv(find_dotenv(usecwd=True))
    gh_app()
