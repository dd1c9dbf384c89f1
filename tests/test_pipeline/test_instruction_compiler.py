"""Tests for the instruction compiler."""

from __future__ import annotations

import pytest

from text_refiner.errors import EmptyInputError
from text_refiner.models.options import ChartPreference, RefineOptions
from text_refiner.pipeline.instruction_compiler import (
    CHART_TASK_AUTOMATIC,
    CORE_TASK,
    OUTPUT_CONTRACT,
    InstructionCompiler,
    additional_tasks,
    compile_instructions,
)

ACADEMIC = "Style Tone: Academic"
TONE = "Style Tone: Maintain Original"
NEUTRAL = "Style Tone: Neutral"


class TestCoreSections:
    def test_embeds_verbatim_source(self, sample_text, all_off_options):
        directive = compile_instructions(sample_text, all_off_options)
        assert sample_text in directive

    def test_core_task_and_footer_always_present(self, sample_text, all_off_options):
        directive = compile_instructions(sample_text, all_off_options)
        assert CORE_TASK in directive
        assert directive.endswith(OUTPUT_CONTRACT)

    def test_core_task_requires_same_language(self, sample_text, all_off_options):
        directive = compile_instructions(sample_text, all_off_options)
        assert "must match the original text's language" in directive

    def test_source_with_braces_kept_verbatim(self, all_off_options):
        text = "Use {name} and {{double}} braces as-is."
        directive = compile_instructions(text, all_off_options)
        assert text in directive

    def test_deterministic(self, sample_text):
        options = RefineOptions(verify_accuracy=True, add_charts=True)
        assert compile_instructions(sample_text, options) == compile_instructions(sample_text, options)

    def test_class_wrapper_matches_function(self, sample_text):
        options = RefineOptions()
        assert InstructionCompiler().compile(sample_text, options) == compile_instructions(
            sample_text, options
        )


class TestEmptyInput:
    @pytest.mark.parametrize("text", ["", "   ", "\n\t  \n"])
    def test_blank_text_raises(self, text):
        with pytest.raises(EmptyInputError):
            compile_instructions(text, RefineOptions())


class TestStyleResolution:
    def test_academic_only(self, sample_text):
        options = RefineOptions(academic_style=True, maintain_tone=False)
        directive = compile_instructions(sample_text, options)
        assert ACADEMIC in directive
        assert TONE not in directive
        assert NEUTRAL not in directive

    def test_both_set_yields_academic(self, sample_text):
        """Academic takes priority over tone preservation."""
        options = RefineOptions(academic_style=True, maintain_tone=True)
        directive = compile_instructions(sample_text, options)
        assert ACADEMIC in directive
        assert TONE not in directive
        assert NEUTRAL not in directive

    def test_tone_only(self, sample_text):
        options = RefineOptions(academic_style=False, maintain_tone=True)
        directive = compile_instructions(sample_text, options)
        assert TONE in directive
        assert ACADEMIC not in directive

    def test_neither_yields_neutral(self, sample_text, all_off_options):
        directive = compile_instructions(sample_text, all_off_options)
        assert NEUTRAL in directive
        assert ACADEMIC not in directive
        assert TONE not in directive


class TestAdditionalTasks:
    def test_section_omitted_when_nothing_requested(self, sample_text, all_off_options):
        directive = compile_instructions(sample_text, all_off_options)
        assert "Additional Tasks" not in directive
        assert additional_tasks(all_off_options) == []

    def test_fixed_order(self, sample_text):
        # Keyword order deliberately differs from the bullet order
        options = RefineOptions(add_charts=True, verify_accuracy=True, expand=True)
        directive = compile_instructions(sample_text, options)
        expand_at = directive.index("**Expansion:**")
        verify_at = directive.index("**Accuracy Check:**")
        charts_at = directive.index("**Chart Generation:**")
        assert expand_at < verify_at < charts_at

    def test_order_independent_of_toggle_sequence(self, sample_text, all_off_options):
        a = (
            all_off_options.with_toggle("add_charts", True)
            .with_toggle("expand", True)
            .with_toggle("verify_accuracy", True)
        )
        b = (
            all_off_options.with_toggle("verify_accuracy", True)
            .with_toggle("add_charts", True)
            .with_toggle("expand", True)
        )
        assert compile_instructions(sample_text, a) == compile_instructions(sample_text, b)

    def test_one_bullet_per_task(self, sample_text, all_off_options):
        options = all_off_options.with_toggle("verify_accuracy", True)
        tasks = additional_tasks(options)
        assert len(tasks) == 1
        directive = compile_instructions(sample_text, options)
        assert "Additional Tasks" in directive
        assert f"- {tasks[0]}" in directive

    def test_expand_prohibits_filler(self, sample_text, all_off_options):
        directive = compile_instructions(sample_text, all_off_options.with_toggle("expand", True))
        assert "approximately 20%" in directive
        assert "not just add filler content" in directive


class TestChartDirective:
    def test_automatic_lets_model_choose(self, sample_text):
        options = RefineOptions(add_charts=True, chart_preference=ChartPreference.AUTOMATIC)
        directive = compile_instructions(sample_text, options)
        assert CHART_TASK_AUTOMATIC in directive
        assert "maximum of 2 charts" in directive

    def test_forced_bar(self, sample_text):
        options = RefineOptions(add_charts=True, chart_preference=ChartPreference.BAR)
        directive = compile_instructions(sample_text, options)
        assert "You MUST generate a 'bar' chart" in directive
        assert "do not generate a chart for that data" in directive
        assert "most appropriate chart type" not in directive
        assert "automatic" not in directive.lower()

    @pytest.mark.parametrize("pref", [ChartPreference.LINE, ChartPreference.PIE])
    def test_forced_other_kinds(self, sample_text, pref):
        options = RefineOptions(add_charts=True, chart_preference=pref)
        directive = compile_instructions(sample_text, options)
        assert f"You MUST generate a '{pref.value}' chart" in directive

    @pytest.mark.parametrize("pref", list(ChartPreference))
    def test_field_keys_always_required(self, sample_text, pref):
        options = RefineOptions(add_charts=True, chart_preference=pref)
        directive = compile_instructions(sample_text, options)
        assert "'valueField' and 'labelField'" in directive

    def test_preference_ignored_without_add_charts(self, sample_text, all_off_options):
        options = all_off_options.model_copy(update={"chart_preference": ChartPreference.PIE})
        directive = compile_instructions(sample_text, options)
        assert "Chart Generation" not in directive
