"""Turn raw model output into a commit subject and body."""

import json
import re
from dataclasses import dataclass

from gh_copmit.config import MAX_SUBJECT_LENGTH


@dataclass
class CommitMessage:
    subject: str
    body: str = ""
    from_json: bool = True   # False when the heuristic fallback was used


def _parse_json_message(text: str):
    """Return (subject, body) from a JSON reply, or None if it isn't one."""
    text = text.strip()
    # Strip markdown code fences if present
    match = re.search(r'```(?:json)?\s*(\{.*?\})\s*```', text, re.DOTALL)
    if match:
        text = match.group(1)
    else:
        match = re.search(r'\{.*\}', text, re.DOTALL)
        if match:
            text = match.group(0)
    try:
        data = json.loads(text)
    except json.JSONDecodeError:
        return None
    if not isinstance(data, dict):
        return None
    subject = data.get("subject")
    if not isinstance(subject, str) or not subject.strip():
        return None
    body = data.get("body")
    return subject.strip(), body.strip() if isinstance(body, str) else ""


def _parse_plain_message(text: str):
    """First non-empty line is the subject, everything after it the body."""
    lines = text.splitlines()
    for i, line in enumerate(lines):
        if line.strip():
            return line.strip(), "\n".join(lines[i + 1:]).strip()
    return "", ""


def parse_model_output(raw: str) -> CommitMessage:
    """Parse a model reply; subject may be empty when nothing usable came back."""
    parsed = _parse_json_message(raw)
    from_json = parsed is not None
    subject, body = parsed if from_json else _parse_plain_message(raw)
    return CommitMessage(subject=subject[:MAX_SUBJECT_LENGTH], body=body, from_json=from_json)
