"""Utility to parse JSON from LLM responses."""

from __future__ import annotations

import json


def parse_json_object(text: str) -> dict:
    """Parse an LLM response that must consist of exactly one JSON object.

    A single markdown code fence around the object is removed; nothing else
    is repaired. Truncated output, trailing prose and non-object JSON all
    raise ValueError.
    """
    if text is None or not text.strip():
        raise ValueError("Empty response: no JSON to parse")

    stripped = _strip_code_fences(text.strip())
    try:
        data = json.loads(stripped)
    except json.JSONDecodeError as exc:
        raise ValueError(f"Malformed JSON in response: {exc.msg} (line {exc.lineno})") from exc

    if not isinstance(data, dict):
        raise ValueError(f"Expected a JSON object, got {type(data).__name__}")
    return data


def _strip_code_fences(text: str) -> str:
    """Remove one enclosing markdown code fence (```json ... ```)."""
    lines = text.split("\n")
    if len(lines) < 2 or not lines[0].strip().startswith("```"):
        return text
    if lines[-1].strip() != "```":
        return text
    return "\n".join(lines[1:-1]).strip()
