"""Pydantic models for the validated refine result."""

from __future__ import annotations

import math
from enum import Enum
from typing import Any

from pydantic import AliasChoices, BaseModel, Field, field_validator, model_validator

MAX_REVISIONS = 5
MAX_CHARTS = 2


class ChartKind(str, Enum):
    BAR = "bar"
    LINE = "line"
    PIE = "pie"


class ChartSuggestion(BaseModel):
    """Chart-ready data extracted from numeric content in the text.

    ``points`` are free-form mappings; ``label_field`` and ``value_field`` name
    the keys holding the category label and the numeric value.
    """

    title: str
    kind: ChartKind = Field(
        validation_alias=AliasChoices("kind", "type"),
        serialization_alias="kind",
    )
    value_field: str = Field(
        validation_alias=AliasChoices("value_field", "valueField", "dataKey"),
        serialization_alias="valueField",
    )
    label_field: str = Field(
        validation_alias=AliasChoices("label_field", "labelField", "nameKey"),
        serialization_alias="labelField",
    )
    points: list[dict[str, Any]] = Field(
        min_length=1,
        validation_alias=AliasChoices("points", "data"),
    )

    model_config = {"populate_by_name": True}

    @model_validator(mode="after")
    def _fields_present_in_points(self) -> ChartSuggestion:
        for i, point in enumerate(self.points):
            if self.label_field not in point:
                raise ValueError(f"point {i} has no label field '{self.label_field}'")
            if self.value_field not in point:
                raise ValueError(f"point {i} has no value field '{self.value_field}'")
            value = point[self.value_field]
            # bool is an int subclass
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ValueError(f"point {i} value {value!r} is not a number")
            if isinstance(value, float) and not math.isfinite(value):
                raise ValueError(f"point {i} value {value!r} is not finite")
        return self

    def series(self) -> list[tuple[str, float]]:
        """Ordered (label, value) pairs."""
        return [
            (str(p[self.label_field]), float(p[self.value_field]))
            for p in self.points
        ]


class RefinedDocument(BaseModel):
    """Corrected text plus its edit summary, accuracy note and charts."""

    refined_text: str = Field(serialization_alias="refinedText")
    revisions: list[str] = Field(default_factory=list, max_length=MAX_REVISIONS)
    accuracy_note: str = Field(default="", serialization_alias="accuracyNote")
    charts: list[ChartSuggestion] = Field(default_factory=list, max_length=MAX_CHARTS)

    @field_validator("refined_text")
    @classmethod
    def _not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("refined_text must not be blank")
        return v

    @property
    def has_charts(self) -> bool:
        return bool(self.charts)
