"""Git plumbing for the commit flow: staged-change checks, context, commit, push."""

import subprocess
from pathlib import Path
from typing import Optional

from gh_copmit.config import DEFAULT_BASE_BRANCH, DEFAULT_MAX_DIFF_LINES


class GitError(RuntimeError):
    """Raised when a git command fails."""


def run_git(*args: str, cwd: Optional[Path] = None, check: bool = True) -> subprocess.CompletedProcess:
    try:
        result = subprocess.run(
            ["git", *args],
            cwd=cwd, capture_output=True, encoding="utf-8", errors="replace",
        )
    except FileNotFoundError:
        raise GitError("git is not installed") from None
    if check and result.returncode != 0:
        message = result.stderr.strip() or f"git {args[0]} failed (exit {result.returncode})"
        raise GitError(message)
    return result


def _lines(output: str) -> list[str]:
    """Split git output on newlines only, like `head -n` counts them."""
    lines = output.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return lines


def in_git_repo(cwd: Optional[Path] = None) -> bool:
    return run_git("rev-parse", "--show-toplevel", cwd=cwd, check=False).returncode == 0


def has_staged_changes(cwd: Optional[Path] = None) -> bool:
    return bool(run_git("diff", "--staged", "--name-only", cwd=cwd).stdout.strip())


def stage_all(cwd: Optional[Path] = None) -> None:
    run_git("add", "-A", cwd=cwd)


def current_branch(cwd: Optional[Path] = None) -> str:
    """Current branch name, or "" when detached."""
    result = run_git("branch", "--show-current", cwd=cwd, check=False)
    return result.stdout.strip() if result.returncode == 0 else ""


def collect_context(
    cwd: Optional[Path] = None,
    max_diff_lines: int = DEFAULT_MAX_DIFF_LINES,
    base_branch: str = DEFAULT_BASE_BRANCH,
) -> str:
    """Describe the staged changes for the model.

    Sections: repo/branch header, name-status, numstat, and the unified=1
    diff cut to ``max_diff_lines`` lines. Tabs become four spaces.
    """
    toplevel = run_git("rev-parse", "--show-toplevel", cwd=cwd).stdout.strip()
    branch = current_branch(cwd)
    name_status = run_git("diff", "--staged", "--name-status", cwd=cwd).stdout
    numstat = run_git("diff", "--staged", "--numstat", cwd=cwd).stdout
    diff = run_git("diff", "--staged", "--unified=1", "--no-color", cwd=cwd).stdout
    diff_lines = _lines(diff)[:max_diff_lines]

    lines = [
        f"REPO: {Path(toplevel).name}",
        f"BRANCH: {branch or 'N/A'}",
        f"BASE_BRANCH: {base_branch}",
        "",
        "STAGED FILES (name-status):",
        *_lines(name_status),
        "",
        "SUMMARY (numstat):",
        *_lines(numstat),
        "",
        f"DIFF (unified=1, truncated to {max_diff_lines} lines):",
        *diff_lines,
    ]
    return "\n".join(lines).replace("\t", "    ")


def commit(subject: str, body: str = "", cwd: Optional[Path] = None) -> None:
    args = ["commit", "-m", subject]
    if body:
        args += ["-m", body]
    run_git(*args, cwd=cwd)


def push(cwd: Optional[Path] = None) -> None:
    run_git("push", cwd=cwd)
