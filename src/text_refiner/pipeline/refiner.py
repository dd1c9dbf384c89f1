"""Refine orchestration: one model call per request."""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Protocol

from text_refiner.errors import DecodeError, GenerationError, RefineInProgressError
from text_refiner.models.document import RefinedDocument
from text_refiner.models.options import RefineOptions
from text_refiner.pipeline.instruction_compiler import InstructionCompiler
from text_refiner.pipeline.response_decoder import ResponseDecoder
from text_refiner.pipeline.schema import RESPONSE_SCHEMA

logger = logging.getLogger(__name__)


class GenerationCapability(Protocol):
    """Anything that can turn a directive plus output schema into raw JSON text."""

    async def generate(self, instructions: str, schema: dict) -> str: ...


@dataclass
class RefineResult:
    """Complete result of one refine request."""

    document: RefinedDocument
    directive: str
    dropped_charts: int = 0
    elapsed_seconds: float = 0.0


class TextRefiner:
    """Runs one compile → generate → decode cycle per call.

    Holds no per-request state, so one instance can serve concurrent requests.
    """

    def __init__(
        self,
        generator: GenerationCapability,
        *,
        compiler: InstructionCompiler | None = None,
        decoder: ResponseDecoder | None = None,
    ):
        self.generator = generator
        self.compiler = compiler or InstructionCompiler()
        self.decoder = decoder or ResponseDecoder()

    async def refine(self, source_text: str, options: RefineOptions) -> RefineResult:
        """Refine source_text according to options.

        Raises:
            EmptyInputError: source_text is blank (no model call is made).
            GenerationError: the generation capability failed.
            MalformedPayloadError, SchemaViolationError: the reply was unusable.
        """
        start = time.monotonic()
        directive = self.compiler.compile(source_text, options)

        logger.info("Refining %d chars (style=%s)", len(source_text), options.effective_style.value)
        try:
            raw = await self.generator.generate(directive, RESPONSE_SCHEMA)
        except asyncio.CancelledError:
            logger.info("Refine cancelled")
            raise
        except Exception as exc:
            logger.error("Generation failed: %s", exc)
            raise GenerationError(str(exc)) from exc

        try:
            outcome = self.decoder.decode(raw)
        except DecodeError:
            logger.error("Failed to decode model response: %.200s", raw)
            raise

        document, unrequested = _apply_options(outcome.document, options)
        dropped = outcome.dropped_charts + unrequested

        elapsed = time.monotonic() - start
        logger.info(
            "Refine complete in %.1fs (%d revisions, %d charts, %d dropped)",
            elapsed,
            len(document.revisions),
            len(document.charts),
            dropped,
        )
        return RefineResult(
            document=document,
            directive=directive,
            dropped_charts=dropped,
            elapsed_seconds=round(elapsed, 1),
        )


def _apply_options(
    document: RefinedDocument, options: RefineOptions
) -> tuple[RefinedDocument, int]:
    """Remove charts and accuracy notes the request did not ask for.

    Returns the document and the number of charts removed.
    """
    update: dict = {}
    removed = 0
    if not options.add_charts and document.has_charts:
        removed = len(document.charts)
        logger.warning("Dropping %d chart(s) that were not requested", removed)
        update["charts"] = []
    if not options.verify_accuracy and document.accuracy_note:
        logger.warning("Discarding accuracy note; verification was not requested")
        update["accuracy_note"] = ""
    if update:
        document = document.model_copy(update=update)
    return document, removed


class RefineSession:
    """One user's refine state: at most one request in flight.

    A new submission clears the previous result and error. On failure or
    cancellation the session returns to idle with no partial result.
    """

    def __init__(self, refiner: TextRefiner):
        self.refiner = refiner
        self.last_result: RefineResult | None = None
        self.last_error: Exception | None = None
        self._busy = False

    @property
    def busy(self) -> bool:
        return self._busy

    async def submit(self, source_text: str, options: RefineOptions) -> RefineResult:
        if self._busy:
            raise RefineInProgressError()
        self._busy = True
        self.last_result = None
        self.last_error = None
        try:
            result = await self.refiner.refine(source_text, options)
        except asyncio.CancelledError:
            raise
        except Exception as exc:
            self.last_error = exc
            raise
        finally:
            self._busy = False
        self.last_result = result
        return result
