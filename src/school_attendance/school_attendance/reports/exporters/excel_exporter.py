from __future__ import annotations

import io

import pandas as pd

from ...core.constants import REPORT_HEADERS, REPORT_SHEET_NAME
from ..model import BuiltReport
from .base import ReportExporter


class ExcelExporter(ReportExporter):
    """Single-sheet .xlsx workbook."""

    mimetype = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
    extension = "xlsx"

    def render(self, report: BuiltReport) -> bytes:
        df = pd.DataFrame([row.as_cells() for row in report.rows], columns=list(REPORT_HEADERS))

        output = io.BytesIO()
        with pd.ExcelWriter(output, engine="openpyxl") as writer:
            df.to_excel(writer, index=False, sheet_name=REPORT_SHEET_NAME)
        return output.getvalue()
