"""Instruction compiler: turns refine options into a single model directive."""

from __future__ import annotations

import logging

from text_refiner.errors import EmptyInputError
from text_refiner.models.document import MAX_CHARTS
from text_refiner.models.options import ChartPreference, RefineOptions, StyleBranch

logger = logging.getLogger(__name__)

PREAMBLE = """\
You are an expert editor and fact-checker named TextRefiner AI. Your primary goal is to return a refined version of the user's text according to their specified options.

User Text:
---
{source_text}
---

Follow these instructions EXACTLY:
"""

CORE_TASK = """
1.  **Core Task: Correction and Refinement.**
    - First, perform a complete correction of spelling, grammar, syntax, and punctuation.
    - Improve the overall flow and clarity. Eliminate repetitions and convoluted sentences to make the text more readable.
    - The language of your output must match the original text's language.
"""

STYLE_SECTIONS: dict[StyleBranch, str] = {
    StyleBranch.ACADEMIC: """
2.  **Style Tone: Academic.**
    - Rewrite the text in a formal, academic style. Use precise terminology, maintain an objective tone, and ensure a rigorous logical structure.
""",
    StyleBranch.TONE: """
2.  **Style Tone: Maintain Original.**
    - Maintain the original narrative tone and style as much as possible. Your corrections should be seamless and not flatten the author's voice.
""",
    StyleBranch.NEUTRAL: """
2.  **Style Tone: Neutral.**
    - Apply corrections using a neutral, clear, and standard writing style.
""",
}

ADDITIONAL_TASKS_HEADER = """
3.  **Additional Tasks:**
"""

EXPAND_TASK = (
    "**Expansion:** After all other corrections and style adjustments are complete, "
    "expand the resulting text by approximately 20%. The final output MUST be longer "
    "than the original text provided by the user. Achieve this by adding relevant "
    "details, clarifying examples, further insights, and logical connections. The "
    "expansion must feel natural and enrich the text, not just add filler content."
)

VERIFY_TASK = (
    "**Accuracy Check:** Carefully check all data, names, dates, and historical or "
    "scientific references against reliable sources. Correct any inaccuracies found "
    "and briefly summarize the corrections in 'accuracyNote'."
)

CHART_TASK_INTRO = (
    "**Chart Generation:** Identify sections of the text that contain quantifiable "
    "data suitable for visualization. If you find opportunities, generate data for "
    "a maximum of {max_charts} charts. "
)

CHART_TASK_AUTOMATIC = (
    "Based on the nature of the data, choose the most appropriate chart type from "
    "the following options: 'bar' (for comparing categories), 'line' (for showing "
    "trends over time), or 'pie' (for showing parts of a whole). "
)

CHART_TASK_FORCED = (
    "You MUST generate a '{kind}' chart. If the data is not suitable for a '{kind}' "
    "chart, do not generate a chart for that data; skip it entirely rather than "
    "forcing an unsuitable shape. "
)

CHART_TASK_KEYS = (
    "Ensure 'valueField' and 'labelField' exactly match keys present in every "
    "object of your generated 'points'."
)

OUTPUT_CONTRACT = """

**Final Output Instructions:**
- Respond EXCLUSIVELY with a JSON object that follows the provided schema.
- Do not include any text, notes, or apologies before or after the JSON object.
- The 'refinedText' field should contain the complete, final version of the text after all requested operations."""


def _chart_task(preference: ChartPreference) -> str:
    task = CHART_TASK_INTRO.format(max_charts=MAX_CHARTS)
    if preference is ChartPreference.AUTOMATIC:
        task += CHART_TASK_AUTOMATIC
    else:
        task += CHART_TASK_FORCED.format(kind=preference.value)
    return task + CHART_TASK_KEYS


def additional_tasks(options: RefineOptions) -> list[str]:
    """Active additional-task bullets, always in expand → verify → charts order."""
    tasks = []
    if options.expand:
        tasks.append(EXPAND_TASK)
    if options.verify_accuracy:
        tasks.append(VERIFY_TASK)
    if options.add_charts:
        tasks.append(_chart_task(options.chart_preference))
    return tasks


def compile_instructions(source_text: str, options: RefineOptions) -> str:
    """Build the full directive for one refine request.

    Raises:
        EmptyInputError: source_text is empty or whitespace only.
    """
    if not source_text or not source_text.strip():
        raise EmptyInputError()

    style = options.effective_style
    if options.academic_style and options.maintain_tone:
        logger.debug("Both academic_style and maintain_tone set; using academic style")

    parts = [
        PREAMBLE.format(source_text=source_text),
        CORE_TASK,
        STYLE_SECTIONS[style],
    ]

    tasks = additional_tasks(options)
    if options.has_additional_tasks:
        parts.append(ADDITIONAL_TASKS_HEADER)
        parts.append("\n".join(f"- {task}" for task in tasks))

    parts.append(OUTPUT_CONTRACT)

    logger.debug(
        "Compiled directive: style=%s, tasks=%d, chars=%d",
        style.value, len(tasks), sum(len(p) for p in parts),
    )
    return "".join(parts)


class InstructionCompiler:
    """Stateless wrapper so the compiler can be injected like other pipeline stages."""

    def compile(self, source_text: str, options: RefineOptions) -> str:
        return compile_instructions(source_text, options)
