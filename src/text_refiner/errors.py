"""Typed failures raised by the refine pipeline.

Callers branch on the class, never on the message text.
"""

from __future__ import annotations

INVALID_RESPONSE_MESSAGE = "Received an invalid response from the AI model."


class RefinerError(Exception):
    """Base class for every error raised by text_refiner."""


class EmptyInputError(RefinerError):
    """Source text is blank; the request is rejected before compiling."""

    def __init__(self, message: str = "Please enter some text to refine."):
        super().__init__(message)


class DecodeError(RefinerError):
    """The model reply could not be turned into a RefinedDocument."""


class MalformedPayloadError(DecodeError):
    """Raw model output is not a parseable JSON object."""


class SchemaViolationError(DecodeError):
    """Payload parsed but a required field is missing or has the wrong shape."""

    def __init__(self, field: str, reason: str):
        self.field = field
        self.reason = reason
        super().__init__(f"{field}: {reason}")


class InvalidChartError(DecodeError):
    """A single chart entry failed validation.

    Recorded on the DecodeOutcome and dropped; never propagated out of decode.
    """

    def __init__(self, index: int, reason: str):
        self.index = index
        self.reason = reason
        super().__init__(f"chart[{index}]: {reason}")


class RefineInProgressError(RefinerError):
    """A refine request was submitted while another one is still running."""

    def __init__(self, message: str = "A refine request is already in progress."):
        super().__init__(message)


class GenerationError(RefinerError):
    """The generation capability failed (transport, auth, quota).

    The message is the underlying error's text, surfaced verbatim.
    """
