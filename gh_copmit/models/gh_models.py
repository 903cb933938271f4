"""GitHub Models adapter: runs `gh models run` as a subprocess and times it."""

import os
import subprocess
import time
from typing import Optional

from gh_copmit.config import GH_MODELS_EXTENSION
from gh_copmit.models.base import ModelAdapter, ModelResponse


class GhModelsError(RuntimeError):
    """Raised when the gh models extension is missing or can't be installed."""


def _as_text(data) -> str:
    # TimeoutExpired carries raw bytes even in text mode
    if data is None:
        return ""
    if isinstance(data, bytes):
        return data.decode("utf-8", errors="replace")
    return data


class GhModelsAdapter(ModelAdapter):
    def __init__(
        self,
        model_id: str,
        timeout_s: Optional[float] = None,
        gh_host: Optional[str] = None,
        show_stderr: bool = False,
    ):
        self.model_id = model_id
        self.timeout_s = timeout_s
        self.gh_host = gh_host
        self.show_stderr = show_stderr

    def _env(self) -> Optional[dict]:
        if not self.gh_host:
            return None
        env = dict(os.environ)
        env["GH_HOST"] = self.gh_host
        return env

    def generate(self, prompt: str, context: str) -> ModelResponse:
        cmd = ["gh", "models", "run", self.model_id, prompt]
        start_time = time.perf_counter()

        try:
            result = subprocess.run(
                cmd,
                input=context + "\n",
                stdout=subprocess.PIPE,
                stderr=None if self.show_stderr else subprocess.DEVNULL,
                encoding="utf-8",
                errors="replace",
                timeout=self.timeout_s,
                env=self._env(),
            )
        except subprocess.TimeoutExpired as e:
            return ModelResponse(
                model_name=self.model_id,
                output=_as_text(e.stdout).rstrip("\n"),
                total_time_ms=round((time.perf_counter() - start_time) * 1000, 2),
                error=f"timed out after {self.timeout_s:g}s",
            )
        except OSError as e:
            return ModelResponse(
                model_name=self.model_id,
                output="",
                total_time_ms=round((time.perf_counter() - start_time) * 1000, 2),
                error=str(e),
            )

        total_time_ms = (time.perf_counter() - start_time) * 1000
        return ModelResponse(
            model_name=self.model_id,
            output=result.stdout.rstrip("\n"),
            total_time_ms=round(total_time_ms, 2),
            exit_code=result.returncode,
            error=None if result.returncode == 0 else f"exit status {result.returncode}",
        )


def gh_models_available() -> bool:
    """True when `gh models list` works (extension installed and authenticated)."""
    try:
        result = subprocess.run(
            ["gh", "models", "list"],
            stdout=subprocess.DEVNULL, stderr=subprocess.DEVNULL,
        )
    except OSError:
        return False
    return result.returncode == 0


def install_gh_models() -> None:
    result = subprocess.run(
        ["gh", "extension", "install", GH_MODELS_EXTENSION],
        stdout=subprocess.DEVNULL,
    )
    if result.returncode != 0:
        raise GhModelsError(f"Could not install {GH_MODELS_EXTENSION} (exit {result.returncode})")
