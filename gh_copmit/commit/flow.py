"""Generate a commit message from staged changes with GitHub Models and commit it."""

import shutil
from functools import partial
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional

from rich.console import Console
from rich.markup import escape

from gh_copmit.commit.message import CommitMessage, parse_model_output
from gh_copmit.config import DEFAULT_BASE_BRANCH, DEFAULT_COMMIT_MODEL, DEFAULT_LANG, DEFAULT_MAX_DIFF_LINES
from gh_copmit.git import repo
from gh_copmit.models.base import ModelAdapter
from gh_copmit.models.gh_models import GhModelsAdapter, gh_models_available, install_gh_models
from gh_copmit.prompts.loader import load_commit_prompt

console = Console()
err_console = Console(stderr=True)


class CommitFlowError(RuntimeError):
    """Stops the commit flow; ``exit_code`` is what the CLI exits with."""

    def __init__(self, message: str, exit_code: int = 1):
        super().__init__(message)
        self.exit_code = exit_code


@dataclass
class CommitOptions:
    model: str = DEFAULT_COMMIT_MODEL
    lang: str = DEFAULT_LANG
    stage_all: bool = False
    push: bool = False
    dry_run: bool = False
    conventional: bool = True
    auto_install: bool = False
    max_diff_lines: int = DEFAULT_MAX_DIFF_LINES
    base_branch: str = DEFAULT_BASE_BRANCH


def info(msg: str) -> None:
    console.print(f"[blue]ℹ[/] {msg}")


def warn(msg: str) -> None:
    console.print(f"[yellow]⚠[/] {msg}")


def ok(msg: str) -> None:
    console.print(f"[green]✓[/] {msg}")


def error(msg: str) -> None:
    err_console.print(f"[red]✖[/] {msg}")


def need_cmd(name: str) -> None:
    if shutil.which(name) is None:
        raise CommitFlowError(f"Missing required command: {name}")


def ensure_gh_models(auto_install: bool) -> None:
    if gh_models_available():
        return
    if not auto_install:
        raise CommitFlowError("gh models extension not found. Install it first: gh extension install github/gh-models")
    info("Installing gh models extension...")
    install_gh_models()


def generate_message(adapter: ModelAdapter, prompt: str, context: str) -> CommitMessage:
    """Ask the model for a message; raise CommitFlowError if nothing usable comes back."""
    response = adapter.generate(prompt, context)
    if not response.ok:
        raise CommitFlowError(
            f"Model request failed ({response.error}). Ensure gh is authenticated for GitHub Models.",
            exit_code=response.exit_code or 1,
        )

    message = parse_model_output(response.output)
    if not message.from_json:
        warn("Model did not return expected JSON. Falling back to heuristic parsing.")
    if not message.subject:
        err_console.print(f"\n--- Raw output ---\n{escape(response.output)}")
        raise CommitFlowError("Could not extract subject from model output")
    return message


def run_commit(
    options: CommitOptions,
    cwd: Optional[Path] = None,
    adapter_factory: Optional[Callable[[str], ModelAdapter]] = None,
) -> CommitMessage:
    """Run the whole flow. Returns the message that was (or would be) committed."""
    if adapter_factory is None:
        need_cmd("git")
        need_cmd("gh")
        ensure_gh_models(options.auto_install)
        adapter_factory = partial(GhModelsAdapter, show_stderr=True)

    if not repo.in_git_repo(cwd):
        raise CommitFlowError("Not inside a git repository")

    if options.stage_all:
        info("Staging all changes (git add -A)")
        repo.stage_all(cwd)

    if not repo.has_staged_changes(cwd):
        raise CommitFlowError("No staged changes found. Stage files or pass --all")

    info("Collecting context from staged changes...")
    context = repo.collect_context(cwd, max_diff_lines=options.max_diff_lines, base_branch=options.base_branch)
    prompt = load_commit_prompt(options.lang).render(conventional=options.conventional)

    info(f"Asking model ({escape(options.model)}) to generate commit message...")
    message = generate_message(adapter_factory(options.model), prompt, context)

    if options.dry_run:
        ok("Dry-run. Proposed commit:")
        console.print(f"Subject: {escape(message.subject)}", highlight=False)
        console.print(f"Body:\n{escape(message.body)}", highlight=False)
        return message

    info("Creating commit...")
    repo.commit(message.subject, message.body, cwd=cwd)
    ok("Commit created")

    if options.push:
        info("Pushing...")
        repo.push(cwd)
        ok("Pushed")
    return message
