"""Abstract ModelAdapter and ModelResponse dataclass."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional


@dataclass
class ModelResponse:
    """Captures what a single model invocation produced."""
    model_name: str
    output: str                     # stdout, trailing newlines stripped
    total_time_ms: float            # end-to-end wall time
    exit_code: Optional[int] = None  # None when the command never finished
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class ModelAdapter(ABC):
    """Interface every model backend must implement."""

    @abstractmethod
    def generate(self, prompt: str, context: str) -> ModelResponse:
        """Run the model with ``prompt`` as instructions and ``context`` on stdin."""
        ...
