"""Pydantic models for refine preferences."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel


class ChartPreference(str, Enum):
    AUTOMATIC = "automatic"
    BAR = "bar"
    LINE = "line"
    PIE = "pie"


class StyleBranch(str, Enum):
    ACADEMIC = "academic"
    TONE = "tone"
    NEUTRAL = "neutral"


_EXCLUSIVE_STYLES = {
    "academic_style": "maintain_tone",
    "maintain_tone": "academic_style",
}


class RefineOptions(BaseModel):
    """User preferences for one refine request.

    ``academic_style`` and ``maintain_tone`` may both be set on the model;
    ``effective_style`` resolves the conflict (academic wins).
    """

    academic_style: bool = False
    maintain_tone: bool = True
    expand: bool = True
    verify_accuracy: bool = False
    add_charts: bool = False
    chart_preference: ChartPreference = ChartPreference.AUTOMATIC

    model_config = {"frozen": True}

    @property
    def effective_style(self) -> StyleBranch:
        if self.academic_style:
            return StyleBranch.ACADEMIC
        if self.maintain_tone:
            return StyleBranch.TONE
        return StyleBranch.NEUTRAL

    @property
    def has_additional_tasks(self) -> bool:
        return self.expand or self.verify_accuracy or self.add_charts

    def with_toggle(self, name: str, value: bool) -> RefineOptions:
        """Return a copy with one flag changed, as an options panel would.

        Switching on one of the two style flags switches the other off.
        """
        if name not in type(self).model_fields or name == "chart_preference":
            raise ValueError(f"Unknown option flag: {name}")
        update = {name: value}
        other = _EXCLUSIVE_STYLES.get(name)
        if other and value:
            update[other] = False
        return self.model_copy(update=update)
