from __future__ import annotations

import csv
import io

from ...core.constants import REPORT_HEADERS
from ..model import BuiltReport
from .base import ReportExporter


class CsvExporter(ReportExporter):
    """Comma-separated rows with a header; fields quoted only when needed."""

    mimetype = "text/csv"
    extension = "csv"

    def render(self, report: BuiltReport) -> bytes:
        out = io.StringIO()
        writer = csv.writer(out, quoting=csv.QUOTE_MINIMAL, lineterminator="\r\n")
        writer.writerow(REPORT_HEADERS)
        for row in report.rows:
            writer.writerow(row.as_cells())

        # BOM so Excel opens UTF-8 names correctly.
        return out.getvalue().encode("utf-8-sig")
