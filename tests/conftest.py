"""Shared test fixtures."""

from __future__ import annotations

import json
from unittest.mock import AsyncMock

import pytest

from text_refiner.clients.llm_client import LLMClient
from text_refiner.models.options import RefineOptions


@pytest.fixture
def sample_text() -> str:
    return """The eiffel tower was build in 1899 for the worlds fair in paris.
It recieved about 2 million visitors in it's first year, and and it was the tallest
structure in the world untill 1930.

Visitors by year: 1889 - 1.9 million, 1900 - 1.0 million, 1910 - 0.2 million.
"""


@pytest.fixture
def all_off_options() -> RefineOptions:
    return RefineOptions(
        academic_style=False,
        maintain_tone=False,
        expand=False,
        verify_accuracy=False,
        add_charts=False,
    )


@pytest.fixture
def sample_chart() -> dict:
    return {
        "title": "Visitors per year",
        "kind": "bar",
        "valueField": "visitors",
        "labelField": "year",
        "points": [
            {"year": "1889", "visitors": 1.9},
            {"year": "1900", "visitors": 1.0},
            {"year": "1910", "visitors": 0.2},
        ],
    }


@pytest.fixture
def sample_payload(sample_chart) -> dict:
    return {
        "refinedText": "The Eiffel Tower was built in 1889 for the World's Fair in Paris.",
        "revisions": ["Corrected spelling errors", "Fixed the construction date"],
        "accuracyNote": "The tower was completed in 1889, not 1899.",
        "charts": [sample_chart],
    }


@pytest.fixture
def sample_raw(sample_payload) -> str:
    return json.dumps(sample_payload)


@pytest.fixture
def mock_generator(sample_raw) -> LLMClient:
    """Create a mock generation capability returning a valid reply."""
    client = AsyncMock(spec=LLMClient)
    client.generate = AsyncMock(return_value=sample_raw)
    return client
