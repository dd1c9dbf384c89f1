"""Tests for text statistics helpers."""

import pytest

from text_refiner.utils.text_stats import word_count


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("", 0),
        ("   \n\t", 0),
        ("one", 1),
        ("  two words  ", 2),
        ("line one\nline two\n\nline three", 6),
    ],
)
def test_word_count(text, expected):
    assert word_count(text) == expected
