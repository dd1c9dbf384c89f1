"""Strip lightweight markdown to plain prose before export."""

from __future__ import annotations

import re

# Order matters: fenced blocks before inline code, rules before emphasis,
# images before links.
_RULES: list[tuple[re.Pattern, str]] = [
    (re.compile(r"```[\s\S]*?```"), ""),
    (re.compile(r"^#+\s+(.*)", re.MULTILINE), r"\1"),
    (re.compile(r"^(\*|-|_){3,}\s*$", re.MULTILINE), ""),
    (re.compile(r"\*\*(.+?)\*\*"), r"\1"),
    (re.compile(r"(?<!\w)__(.+?)__(?!\w)"), r"\1"),
    (re.compile(r"\*(.+?)\*"), r"\1"),
    (re.compile(r"(?<!\w)_(.+?)_(?!\w)"), r"\1"),
    (re.compile(r"~~(.*?)~~"), r"\1"),
    (re.compile(r"!\[.*?\]\(.*?\)"), ""),
    (re.compile(r"\[([^\]]+)\]\([^)]+\)"), r"\1"),
    (re.compile(r"^>\s?", re.MULTILINE), ""),
    (re.compile(r"`([^`]+)`"), r"\1"),
]


def strip_markdown(text: str) -> str:
    """Remove headings, emphasis, links, code, quotes and rules; keep the words."""
    if not text:
        return ""
    for pattern, repl in _RULES:
        text = pattern.sub(repl, text)
    return text.strip()
