from __future__ import annotations

import io
from dataclasses import dataclass

from reportlab.lib.pagesizes import letter
from reportlab.pdfbase.pdfmetrics import stringWidth
from reportlab.pdfgen import canvas

from ...core.constants import (
    PDF_COLUMN_X,
    PDF_CONTINUATION_TOP,
    PDF_PAGE_BREAK_Y,
    PDF_ROW_HEIGHT,
    PDF_TABLE_TOP,
)
from ..model import BuiltReport, ReportRow
from .base import ReportExporter

PDF_COLUMN_TITLES = ("Admission No", "Name", "Class", "Present", "Absent", "Percentage")
HEADER_GAP = 20
BODY_FONT = "Helvetica"
BODY_SIZE = 10


@dataclass(frozen=True)
class PageLayout:
    """Header and row positions for one page, as offsets from the top edge."""

    header_y: int
    rows: list[tuple[int, ReportRow]]


def layout_pages(rows: list[ReportRow]) -> list[PageLayout]:
    """Place rows top-down and start a new page once the cursor passes the break line."""
    pages: list[PageLayout] = []
    header_y = PDF_TABLE_TOP
    current: list[tuple[int, ReportRow]] = []
    y = header_y + HEADER_GAP

    for row in rows:
        if y > PDF_PAGE_BREAK_Y:
            pages.append(PageLayout(header_y=header_y, rows=current))
            header_y = PDF_CONTINUATION_TOP
            current = []
            y = header_y + HEADER_GAP
        current.append((y, row))
        y += PDF_ROW_HEIGHT

    pages.append(PageLayout(header_y=header_y, rows=current))
    return pages


def _fit(text: str, width: float) -> str:
    """Trim text so it does not run into the next column."""
    if stringWidth(text, BODY_FONT, BODY_SIZE) <= width:
        return text
    while text and stringWidth(text + "...", BODY_FONT, BODY_SIZE) > width:
        text = text[:-1]
    return text + "..."


def _cells(row: ReportRow) -> tuple[str, ...]:
    return (
        row.admission_no,
        row.name,
        row.class_label,
        str(row.present_days),
        str(row.absent_days),
        f"{row.percentage}%",
    )


class PdfExporter(ReportExporter):
    """Paginated document with fixed column offsets."""

    mimetype = "application/pdf"
    extension = "pdf"

    def __init__(self, *, pagesize=letter):
        self._pagesize = pagesize

    def render(self, report: BuiltReport) -> bytes:
        buf = io.BytesIO()
        _, page_height = self._pagesize
        c = canvas.Canvas(buf, pagesize=self._pagesize)
        c.setTitle("Attendance Report")

        def draw(x: float, y_top: float, text: str) -> None:
            c.drawString(x, page_height - y_top, text)

        req = report.request
        c.setFont("Helvetica-Bold", 20)
        draw(100, 100, "Attendance Report")
        c.setFont(BODY_FONT, 12)
        draw(100, 130, f"Generated on: {report.generated_at:%Y-%m-%d}")
        draw(100, 150, f"Date Range: {req.date_from:%Y-%m-%d} to {req.date_to:%Y-%m-%d}")
        draw(100, 170, f"Type: {req.kind.value}   Class: {req.class_name or 'All'}")

        widths = [b - a - 5 for a, b in zip(PDF_COLUMN_X, PDF_COLUMN_X[1:])] + [150]
        for index, page in enumerate(layout_pages(report.rows)):
            if index:
                c.showPage()
            c.setFont("Helvetica-Bold", BODY_SIZE)
            for x, title in zip(PDF_COLUMN_X, PDF_COLUMN_TITLES):
                draw(x, page.header_y, title)
            c.setFont(BODY_FONT, BODY_SIZE)
            for y, row in page.rows:
                for x, width, text in zip(PDF_COLUMN_X, widths, _cells(row)):
                    draw(x, y, _fit(text, width))

        c.showPage()
        c.save()
        return buf.getvalue()
