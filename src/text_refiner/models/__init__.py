"""Data models for the text refiner."""

from text_refiner.models.document import (
    MAX_CHARTS,
    MAX_REVISIONS,
    ChartKind,
    ChartSuggestion,
    RefinedDocument,
)
from text_refiner.models.options import ChartPreference, RefineOptions, StyleBranch

__all__ = [
    "MAX_CHARTS",
    "MAX_REVISIONS",
    "ChartKind",
    "ChartPreference",
    "ChartSuggestion",
    "RefineOptions",
    "RefinedDocument",
    "StyleBranch",
]
