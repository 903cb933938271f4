"""Load YAML prompt bank files into prompt objects."""

from dataclasses import dataclass
from pathlib import Path
import yaml

from gh_copmit.config import LANGUAGES, PROMPTS_DIR


@dataclass
class BenchFixture:
    prompt: str
    context: str


@dataclass
class CommitPrompt:
    lang: str
    intro: str
    requirements_title: str
    conventional: str
    requirements: list[str]
    output: str

    def render(self, conventional: bool = True) -> str:
        """Assemble the prompt text passed to `gh models run`."""
        lines = [self.requirements_title]
        if conventional:
            lines.append(self.conventional)
        lines.extend(self.requirements)
        return "\n".join([
            self.intro.rstrip("\n"),
            "",
            *lines,
            "",
            self.output.rstrip("\n"),
        ])


def _load_yaml(filepath: Path) -> dict:
    with open(filepath, encoding="utf-8") as f:
        return yaml.safe_load(f)


def load_bench_fixture(prompts_dir: Path = PROMPTS_DIR) -> BenchFixture:
    """Load the fixed benchmark prompt and context, whitespace untouched."""
    data = _load_yaml(prompts_dir / "bench.yaml")
    return BenchFixture(prompt=data["prompt"], context=data["context"])


def load_commit_prompt(lang: str, prompts_dir: Path = PROMPTS_DIR) -> CommitPrompt:
    if lang not in LANGUAGES:
        raise ValueError(f"Unsupported language: {lang}. Available: {LANGUAGES}")
    data = _load_yaml(prompts_dir / "commit.yaml")["languages"][lang]
    return CommitPrompt(
        lang=lang,
        intro=data["intro"],
        requirements_title=data["requirements_title"],
        conventional=data["conventional"],
        requirements=list(data["requirements"]),
        output=data["output"],
    )
