"""Response decoder: validates the model reply into a RefinedDocument."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from pydantic import ValidationError

from text_refiner.errors import (
    InvalidChartError,
    MalformedPayloadError,
    SchemaViolationError,
)
from text_refiner.models.document import (
    MAX_CHARTS,
    MAX_REVISIONS,
    ChartSuggestion,
    RefinedDocument,
)
from text_refiner.utils.json_parser import extract_json_object

logger = logging.getLogger(__name__)

# Wire names first, then the names used by earlier response schemas.
FIELD_NAMES: dict[str, tuple[str, ...]] = {
    "refinedText": ("refinedText",),
    "revisions": ("revisions", "revisionSummary"),
    "accuracyNote": ("accuracyNote", "accuracyReport"),
    "charts": ("charts", "chartSuggestions"),
}

_MISSING = object()


@dataclass
class DecodeOutcome:
    """A valid document plus what was dropped on the way."""

    document: RefinedDocument
    dropped_charts: int = 0
    chart_errors: list[InvalidChartError] = field(default_factory=list)


def _lookup(payload: dict, name: str):
    for key in FIELD_NAMES[name]:
        if key in payload:
            return payload[key]
    return _MISSING


def _require_str(payload: dict, name: str) -> str:
    value = _lookup(payload, name)
    if value is _MISSING:
        raise SchemaViolationError(name, "missing required field")
    if not isinstance(value, str):
        raise SchemaViolationError(name, f"expected string, got {type(value).__name__}")
    return value


def _require_revisions(payload: dict) -> list[str]:
    value = _lookup(payload, "revisions")
    if value is _MISSING:
        raise SchemaViolationError("revisions", "missing required field")
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise SchemaViolationError("revisions", "expected a list of strings")
    if len(value) > MAX_REVISIONS:
        logger.warning("Truncating %d revisions to %d", len(value), MAX_REVISIONS)
        value = value[:MAX_REVISIONS]
    return value


def _raw_charts(payload: dict) -> list:
    value = _lookup(payload, "charts")
    if value is _MISSING or value is None:
        return []
    if not isinstance(value, list):
        raise SchemaViolationError("charts", f"expected a list, got {type(value).__name__}")
    return value


def _validate_chart(index: int, entry) -> ChartSuggestion:
    if not isinstance(entry, dict):
        raise InvalidChartError(index, f"expected an object, got {type(entry).__name__}")
    try:
        return ChartSuggestion.model_validate(entry)
    except ValidationError as exc:
        first = exc.errors()[0]
        loc = ".".join(str(p) for p in first["loc"])
        reason = f"{loc}: {first['msg']}" if loc else first["msg"]
        raise InvalidChartError(index, reason) from exc


def filter_charts(entries: list) -> tuple[list[ChartSuggestion], list[InvalidChartError]]:
    """Split raw chart entries into valid suggestions and per-entry errors.

    Entries are checked independently; at most MAX_CHARTS valid ones are kept.
    """
    valid: list[ChartSuggestion] = []
    errors: list[InvalidChartError] = []
    for index, entry in enumerate(entries):
        try:
            valid.append(_validate_chart(index, entry))
        except InvalidChartError as err:
            errors.append(err)
    if len(valid) > MAX_CHARTS:
        logger.warning("Truncating %d charts to %d", len(valid), MAX_CHARTS)
        valid = valid[:MAX_CHARTS]
    return valid, errors


def decode_response(raw: str) -> DecodeOutcome:
    """Parse and validate the raw model reply.

    Raises:
        MalformedPayloadError: raw is not a JSON object.
        SchemaViolationError: a required field is missing or mis-shaped.
    """
    try:
        payload = extract_json_object(raw)
    except ValueError as exc:
        raise MalformedPayloadError(str(exc)) from exc

    refined_text = _require_str(payload, "refinedText")
    if not refined_text.strip():
        raise SchemaViolationError("refinedText", "must not be blank")
    revisions = _require_revisions(payload)
    accuracy_note = _require_str(payload, "accuracyNote")
    raw_charts = _raw_charts(payload)

    charts, chart_errors = filter_charts(raw_charts)
    for err in chart_errors:
        logger.warning("Dropping invalid chart: %s", err)

    try:
        document = RefinedDocument(
            refined_text=refined_text,
            revisions=revisions,
            accuracy_note=accuracy_note,
            charts=charts,
        )
    except ValidationError as exc:
        raise SchemaViolationError("document", str(exc)) from exc

    return DecodeOutcome(
        document=document,
        dropped_charts=len(chart_errors),
        chart_errors=chart_errors,
    )


class ResponseDecoder:
    """Stateless wrapper so the decoder can be injected like other pipeline stages."""

    def decode(self, raw: str) -> DecodeOutcome:
        return decode_response(raw)
