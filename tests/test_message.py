"""Parsing model replies into commit subject and body."""

import json

import pytest

from gh_copmit.commit.message import parse_model_output


def test_plain_json():
    raw = json.dumps({"subject": "feat(cli): add --push flag", "body": "- push after commit"})
    message = parse_model_output(raw)
    assert message.subject == "feat(cli): add --push flag"
    assert message.body == "- push after commit"
    assert message.from_json


def test_json_in_code_fence():
    raw = '```json\n{"subject": "fix: handle empty diff", "body": "- guard"}\n```'
    message = parse_model_output(raw)
    assert message.subject == "fix: handle empty diff"
    assert message.from_json


def test_json_with_surrounding_chatter():
    raw = 'Here you go:\n{"subject": "docs: update README", "body": ""}\nHope it helps'
    message = parse_model_output(raw)
    assert message.subject == "docs: update README"
    assert message.body == ""


def test_json_body_newlines_are_kept():
    raw = json.dumps({"subject": "refactor: split runner", "body": "- one\n- two"})
    assert parse_model_output(raw).body == "- one\n- two"


def test_missing_body_is_empty():
    assert parse_model_output('{"subject": "chore: bump deps"}').body == ""


@pytest.mark.parametrize("raw", [
    "feat: add thing\n\n- detail one\n- detail two",
    "\n\n  feat: add thing  \n\n- detail one\n- detail two\n",
])
def test_heuristic_fallback(raw):
    message = parse_model_output(raw)
    assert not message.from_json
    assert message.subject == "feat: add thing"
    assert message.body == "- detail one\n- detail two"


def test_json_without_subject_falls_back():
    message = parse_model_output('{"title": "nope"}')
    assert not message.from_json
    assert message.subject == '{"title": "nope"}'


def test_empty_output_has_no_subject():
    message = parse_model_output("   \n\n")
    assert message.subject == ""
    assert message.body == ""


def test_subject_truncated_to_72_chars():
    raw = json.dumps({"subject": "feat: " + "x" * 100, "body": "b"})
    message = parse_model_output(raw)
    assert len(message.subject) == 72
    assert message.subject.startswith("feat: xxx")
