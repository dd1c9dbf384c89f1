"""Small text statistics shown alongside input and output."""

from __future__ import annotations


def word_count(text: str) -> int:
    stripped = text.strip() if text else ""
    return len(stripped.split()) if stripped else 0
