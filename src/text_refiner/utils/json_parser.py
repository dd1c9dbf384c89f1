"""Utility to pull a single JSON object out of a model reply."""

from __future__ import annotations

import json
import re

_FENCE_RE = re.compile(r"```(?:json|JSON)?\s*\n(.*?)\n?```", re.DOTALL)


def extract_json_object(text: str) -> dict:
    """Extract one JSON object from an LLM response.

    Tries in order:
    1. Direct json.loads on the full text
    2. The body of the first fenced code block
    3. First '{' to last '}'

    Truncated replies are not repaired: a cut-off object would silently lose
    part of the refined text.

    Raises:
        ValueError: no JSON object could be found.
    """
    if not isinstance(text, str):
        raise ValueError(f"Expected text, got {type(text).__name__}")
    text = text.strip()
    if not text:
        raise ValueError("Could not extract JSON from empty text")

    candidates = [text]
    fence = _FENCE_RE.search(text)
    if fence:
        candidates.append(fence.group(1).strip())
    start = text.find("{")
    end = text.rfind("}")
    if start != -1 and end > start:
        candidates.append(text[start : end + 1])

    found_non_object = None
    for candidate in candidates:
        try:
            value = json.loads(candidate)
        except json.JSONDecodeError:
            continue
        except RecursionError as exc:
            raise ValueError("JSON nesting is too deep to parse") from exc
        if isinstance(value, dict):
            return value
        found_non_object = value

    if found_non_object is not None:
        raise ValueError(
            f"Expected a JSON object, got {type(found_non_object).__name__}"
        )
    raise ValueError(f"Could not extract JSON from text: {text[:200]}...")
