"""Shared fixtures: a deterministic stand-in for `gh models run` and rate table files."""

import json

import pytest

from gh_copmit.models.base import ModelAdapter, ModelResponse


class FakeAdapter(ModelAdapter):
    """Returns canned output; fails for models listed in ``failing``."""

    def __init__(self, model_id, output="x" * 40, failing=(), elapsed_ms=12.5):
        self.model_id = model_id
        self.output = output
        self.failing = set(failing)
        self.elapsed_ms = elapsed_ms
        self.calls = []

    def generate(self, prompt, context):
        self.calls.append((prompt, context))
        if self.model_id in self.failing:
            return ModelResponse(
                model_name=self.model_id,
                output="partial",
                total_time_ms=self.elapsed_ms,
                exit_code=1,
                error="exit status 1",
            )
        return ModelResponse(
            model_name=self.model_id,
            output=self.output,
            total_time_ms=self.elapsed_ms,
            exit_code=0,
        )


@pytest.fixture
def fake_factory():
    """Factory of FakeAdapters; keyword arguments are passed to every adapter."""
    created = []

    def make(**kwargs):
        def create(model_id):
            adapter = FakeAdapter(model_id, **kwargs)
            created.append(adapter)
            return adapter
        create.created = created
        return create

    return make


@pytest.fixture
def write_json(tmp_path):
    def write(name, data):
        path = tmp_path / name
        path.write_text(data if isinstance(data, str) else json.dumps(data))
        return path
    return write
