"""Serialize refined text to txt / docx / pdf after stripping markdown."""

from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path

from text_refiner.export.docx_export import text_to_docx
from text_refiner.export.markdown import strip_markdown
from text_refiner.export.pdf_export import text_to_pdf

logger = logging.getLogger(__name__)


class ExportFormat(str, Enum):
    TXT = "txt"
    DOCX = "docx"
    PDF = "pdf"


def render_export(text: str, fmt: ExportFormat | str, font_size: int = 12) -> bytes:
    """Return the byte stream for text in the requested format."""
    fmt = ExportFormat(fmt)
    plain = strip_markdown(text)
    if fmt is ExportFormat.TXT:
        return plain.encode("utf-8")
    if fmt is ExportFormat.DOCX:
        return text_to_docx(plain, font_size=font_size)
    return text_to_pdf(plain, font_size=font_size)


def export_document(
    text: str,
    fmt: ExportFormat | str,
    output_dir: str | Path = ".",
    basename: str = "refined-text",
    font_size: int = 12,
) -> Path:
    """Write text to ``<output_dir>/<basename>.<fmt>`` and return the path."""
    fmt = ExportFormat(fmt)
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    path = output_dir / f"{basename}.{fmt.value}"
    path.write_bytes(render_export(text, fmt, font_size=font_size))
    logger.info("Exported %s", path)
    return path
