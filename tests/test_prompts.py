"""Prompt bank loading."""

import pytest

from gh_copmit.prompts.loader import load_bench_fixture, load_commit_prompt


def test_bench_fixture_keeps_whitespace():
    fixture = load_bench_fixture()
    assert fixture.prompt.startswith("You are an assistant that writes clear, helpful commit messages.\n")
    assert fixture.prompt.endswith('{"subject": "...", "body": "..."}\n')
    assert fixture.context.startswith("REPO: sample-repo\nBRANCH: feature/xyz\n")
    assert "M\tREADME.md" in fixture.context
    assert fixture.context.endswith("+    print(add(2, 3))")


def test_commit_prompt_en():
    text = load_commit_prompt("en").render()
    assert text.splitlines()[0] == "You are an assistant that writes clear, helpful commit messages."
    assert "- Prefer Conventional Commits (type(scope)!: subject) when possible" in text
    assert "Return ONLY valid JSON in this exact shape:" in text
    assert not text.endswith("\n")


def test_commit_prompt_es():
    text = load_commit_prompt("es").render()
    assert "Requisitos:" in text
    assert "Conventional Commits" in text
    assert "Devuelve SOLO JSON válido" in text


def test_no_conventional_drops_requirement():
    prompt = load_commit_prompt("en")
    text = prompt.render(conventional=False)
    assert "Conventional Commits" not in text
    assert "- Subject must be <= 72 chars and MUST NOT end with a period" in text


def test_bench_prompt_matches_english_commit_prompt():
    fixture = load_bench_fixture()
    assert fixture.prompt.rstrip("\n") == load_commit_prompt("en").render()


def test_unknown_language():
    with pytest.raises(ValueError, match="Unsupported language"):
        load_commit_prompt("fr")
