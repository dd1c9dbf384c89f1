"""Tests for Pydantic models."""

import pytest
from pydantic import ValidationError

from text_refiner.models import (
    ChartKind,
    ChartPreference,
    ChartSuggestion,
    RefinedDocument,
    RefineOptions,
    StyleBranch,
)


class TestRefineOptions:
    def test_defaults(self):
        options = RefineOptions()
        assert options.maintain_tone is True
        assert options.expand is True
        assert options.academic_style is False
        assert options.chart_preference is ChartPreference.AUTOMATIC

    def test_effective_style_academic_wins(self):
        options = RefineOptions(academic_style=True, maintain_tone=True)
        assert options.effective_style is StyleBranch.ACADEMIC

    def test_effective_style_neutral(self):
        options = RefineOptions(academic_style=False, maintain_tone=False)
        assert options.effective_style is StyleBranch.NEUTRAL

    def test_toggle_academic_clears_tone(self):
        options = RefineOptions(maintain_tone=True).with_toggle("academic_style", True)
        assert options.academic_style is True
        assert options.maintain_tone is False

    def test_toggle_tone_clears_academic(self):
        options = RefineOptions(academic_style=True, maintain_tone=False)
        options = options.with_toggle("maintain_tone", True)
        assert options.maintain_tone is True
        assert options.academic_style is False

    def test_toggle_off_leaves_other_flag(self):
        options = RefineOptions(academic_style=True, maintain_tone=False)
        options = options.with_toggle("academic_style", False)
        assert options.academic_style is False
        assert options.maintain_tone is False

    def test_toggle_unknown_flag(self):
        with pytest.raises(ValueError, match="Unknown option"):
            RefineOptions().with_toggle("bogus", True)

    def test_frozen(self):
        with pytest.raises(ValidationError):
            RefineOptions().expand = False

    def test_has_additional_tasks(self):
        assert RefineOptions(expand=False).has_additional_tasks is False
        assert RefineOptions(expand=False, add_charts=True).has_additional_tasks is True

    def test_chart_preference_from_string(self):
        assert RefineOptions(chart_preference="pie").chart_preference is ChartPreference.PIE


class TestChartSuggestion:
    def test_wire_names(self, sample_chart):
        chart = ChartSuggestion.model_validate(sample_chart)
        assert chart.kind is ChartKind.BAR
        assert chart.label_field == "year"
        assert chart.series() == [("1889", 1.9), ("1900", 1.0), ("1910", 0.2)]

    def test_numeric_labels_stringified(self):
        chart = ChartSuggestion(
            title="t",
            kind="line",
            value_field="value",
            label_field="label",
            points=[{"label": 2020, "value": 3}],
        )
        assert chart.series() == [("2020", 3.0)]

    def test_missing_label_key_rejected(self, sample_chart):
        sample_chart["points"][1] = {"visitors": 1.0}
        with pytest.raises(ValidationError, match="label field"):
            ChartSuggestion.model_validate(sample_chart)

    def test_non_finite_value_rejected(self, sample_chart):
        sample_chart["points"][0]["visitors"] = float("-inf")
        with pytest.raises(ValidationError, match="not finite"):
            ChartSuggestion.model_validate(sample_chart)

    def test_unknown_kind_rejected(self, sample_chart):
        sample_chart["kind"] = "donut"
        with pytest.raises(ValidationError):
            ChartSuggestion.model_validate(sample_chart)

    def test_dump_uses_wire_names(self, sample_chart):
        dumped = ChartSuggestion.model_validate(sample_chart).model_dump(by_alias=True, mode="json")
        assert dumped["valueField"] == "visitors"
        assert dumped["kind"] == "bar"


class TestRefinedDocument:
    def test_minimal(self):
        doc = RefinedDocument(refined_text="Hello.")
        assert doc.revisions == []
        assert doc.accuracy_note == ""
        assert doc.has_charts is False

    def test_blank_text_rejected(self):
        with pytest.raises(ValidationError):
            RefinedDocument(refined_text="  \n")

    def test_too_many_revisions_rejected(self):
        with pytest.raises(ValidationError):
            RefinedDocument(refined_text="x", revisions=["r"] * 6)
