"""
Text to PDF authoring with reportlab.

Lines are wrapped to the usable page width and flowed top to bottom; all
layout values are in millimetres measured from the top-left corner and are
converted to reportlab's bottom-left point space only when drawing.
"""

from datetime import datetime, timezone
from io import BytesIO
from typing import List, Optional

from reportlab.lib.pagesizes import A4
from reportlab.lib.units import mm
from reportlab.lib.utils import simpleSplit
from reportlab.pdfgen import canvas

PAGE_WIDTH_MM = 210
PAGE_HEIGHT_MM = 297
MARGIN_MM = 20
TOP_MM = 30
BOTTOM_MARGIN_MM = 20
LINE_HEIGHT_MM = 7

FONT_NAME = "Helvetica"
FONT_SIZE = 12
HEADING_FONT_NAME = "Helvetica-Bold"
HEADING_FONT_SIZE = 18


def wrap_text(
    text: str,
    width_mm: float = PAGE_WIDTH_MM - 2 * MARGIN_MM,
    font_name: str = FONT_NAME,
    font_size: float = FONT_SIZE,
) -> List[str]:
    """Wrap text to the given width, keeping blank lines."""
    lines: List[str] = []
    for paragraph in text.replace("\r\n", "\n").split("\n"):
        wrapped = simpleSplit(paragraph, font_name, font_size, width_mm * mm)
        lines.extend(wrapped or [""])
    return lines


def paginate(
    lines: List[str],
    page_height_mm: float = PAGE_HEIGHT_MM,
    top_mm: float = TOP_MM,
    line_height_mm: float = LINE_HEIGHT_MM,
) -> List[List[str]]:
    """Group wrapped lines into pages.

    A line is moved to a new page when its baseline would sit lower than
    ``page_height_mm - BOTTOM_MARGIN_MM`` from the top.
    """
    pages: List[List[str]] = [[]]
    y = top_mm
    limit = page_height_mm - BOTTOM_MARGIN_MM

    for line in lines:
        if y > limit:
            pages.append([])
            y = top_mm
        pages[-1].append(line)
        y += line_height_mm

    return pages


def _draw_pages(pdf: canvas.Canvas, pages: List[List[str]]) -> None:
    page_height = A4[1]
    for page in pages:
        pdf.setFont(FONT_NAME, FONT_SIZE)
        y = TOP_MM
        for line in page:
            pdf.drawString(MARGIN_MM * mm, page_height - y * mm, line)
            y += LINE_HEIGHT_MM
        pdf.showPage()


def render_text_pdf(
    text: str, title: Optional[str] = None, heading: Optional[str] = None
) -> bytes:
    """Render plain text into an A4 PDF and return its bytes."""
    buffer = BytesIO()
    pdf = canvas.Canvas(buffer, pagesize=A4)
    if title:
        pdf.setTitle(title)
    pdf.setAuthor("pdf-server")

    lines = wrap_text(text)
    if heading:
        pdf.setFont(HEADING_FONT_NAME, HEADING_FONT_SIZE)
        pdf.drawString(MARGIN_MM * mm, A4[1] - TOP_MM * mm, heading)
        # body starts two lines below the heading
        lines = [""] * 2 + lines
    _draw_pages(pdf, paginate(lines))

    pdf.save()
    return buffer.getvalue()


def count_pages(text: str) -> int:
    return len(paginate(wrap_text(text)))


def render_notice_pdf(url: str, reason: str, now: Optional[datetime] = None) -> bytes:
    """Informational PDF used when no strategy could capture the page."""
    now = now or datetime.now(timezone.utc)
    body = "\n".join(
        [
            "The page could not be captured as a PDF.",
            "",
            f"Requested URL: {url}",
            f"Reason: {reason}",
            f"Generated: {now.strftime('%Y-%m-%d %H:%M:%S %Z')}",
            "",
            "What you can try:",
            "- Open the page in your browser and use Print > Save as PDF",
            "- Check that the URL is publicly accessible",
            "- Choose a different PDF service and try again",
        ]
    )
    return render_text_pdf(body, title=url, heading="Unable to capture webpage")
