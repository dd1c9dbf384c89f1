"""Output-shape contract handed to the generation capability."""

from __future__ import annotations

RESPONSE_SCHEMA: dict = {
    "type": "object",
    "properties": {
        "refinedText": {
            "type": "string",
            "description": "The final, corrected, improved, and (if requested) expanded text.",
        },
        "revisions": {
            "type": "array",
            "description": (
                "Up to 5 of the most important revisions applied "
                "(e.g. 'Corrected grammatical errors', 'Added examples')."
            ),
            "items": {"type": "string"},
        },
        "accuracyNote": {
            "type": "string",
            "description": (
                "A brief report on the accuracy corrections made. Empty string if "
                "verification was not requested or no errors were found."
            ),
        },
        "charts": {
            "type": "array",
            "description": "Suggested charts (max 2). Empty array if not requested or not applicable.",
            "items": {
                "type": "object",
                "properties": {
                    "title": {"type": "string"},
                    "kind": {"type": "string", "enum": ["bar", "line", "pie"]},
                    "valueField": {
                        "type": "string",
                        "description": "Key in each data point holding the numeric value.",
                    },
                    "labelField": {
                        "type": "string",
                        "description": "Key in each data point holding the label or category.",
                    },
                    "points": {
                        "type": "array",
                        "items": {
                            "type": "object",
                            "properties": {
                                "label": {"type": "string"},
                                "value": {"type": "number"},
                            },
                        },
                    },
                },
                "required": ["title", "kind", "points", "valueField", "labelField"],
            },
        },
    },
    "required": ["refinedText", "revisions", "accuracyNote"],
}
