"""Word-processor export via python-docx."""

from __future__ import annotations

from io import BytesIO

from docx import Document
from docx.shared import Pt


def text_to_docx(plain_text: str, font_size: int = 12) -> bytes:
    """Build a .docx with one paragraph per line of plain_text."""
    doc = Document()

    style = doc.styles["Normal"]
    style.font.size = Pt(font_size)

    for line in plain_text.split("\n"):
        doc.add_paragraph(line)

    buf = BytesIO()
    doc.save(buf)
    return buf.getvalue()
