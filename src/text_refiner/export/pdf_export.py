"""Plain-text PDF export using fpdf2 (pure Python, no system deps)."""

from __future__ import annotations

import logging
from pathlib import Path

from fpdf import FPDF

logger = logging.getLogger(__name__)

MARGIN_MM = 15
LINE_HEIGHT_MM = 7

# Unicode-capable font search paths (macOS, Linux, Windows)
_UNICODE_FONT_PATHS = [
    # macOS
    "/System/Library/Fonts/Supplemental/Arial Unicode.ttf",
    # Linux (apt install fonts-dejavu-core)
    "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
    # Linux (apt install fonts-noto-core)
    "/usr/share/fonts/truetype/noto/NotoSans-Regular.ttf",
    # Windows
    "C:/Windows/Fonts/arial.ttf",
]


def _find_unicode_font() -> str | None:
    """Search for a Unicode-capable TTF font on the system."""
    for path in _UNICODE_FONT_PATHS:
        if Path(path).exists():
            return path
    return None


def _safe_text(text: str, pdf: FPDF) -> str:
    """Ensure text is encodable by the current font. Replace if needed."""
    if pdf.is_ttf_font:
        return text
    # Built-in fonts (Helvetica etc.) only cover latin-1
    try:
        text.encode("latin-1")
        return text
    except UnicodeEncodeError:
        return text.encode("latin-1", errors="replace").decode("latin-1")


def text_to_pdf(plain_text: str, font_size: int = 12) -> bytes:
    """Render plain text onto A4 pages, one paragraph per input line."""
    pdf = FPDF(format="A4", unit="mm")
    pdf.set_margins(MARGIN_MM, MARGIN_MM, MARGIN_MM)
    pdf.set_auto_page_break(auto=True, margin=MARGIN_MM)
    pdf.add_page()

    font_name = "Helvetica"
    unicode_font = _find_unicode_font()
    if unicode_font:
        try:
            pdf.add_font("BodyFont", "", unicode_font)
            font_name = "BodyFont"
        except Exception:
            logger.debug("Failed to load font %s", unicode_font)

    pdf.set_font(font_name, size=font_size)

    for line in plain_text.split("\n"):
        if not line.strip():
            pdf.ln(LINE_HEIGHT_MM)
            continue
        pdf.multi_cell(0, LINE_HEIGHT_MM, _safe_text(line, pdf), new_x="LMARGIN", new_y="NEXT")

    return bytes(pdf.output())
