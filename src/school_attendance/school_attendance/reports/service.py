from __future__ import annotations

import logging
from typing import Mapping, Optional, Sequence

from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import format_iso_date, now_local, parse_iso_date
from ..common.validators import optional_text, require_enum
from ..core.enums import ExportFormat, ReportKind
from ..core.exceptions import ReportBuildError, ValidationError
from ..stats.service import count_history, round_half_up
from ..students.repository import StudentRepository
from .exporters.base import ReportExporter
from .exporters.csv_exporter import CsvExporter
from .exporters.excel_exporter import ExcelExporter
from .exporters.pdf_exporter import PdfExporter
from .model import BuiltReport, ExportedFile, ReportRequest, ReportRow, SavedReport
from .repository import ReportRepository

logger = logging.getLogger(__name__)


def request_from_payload(data: Mapping) -> ReportRequest:
    """Validate report parameters; every problem is a ReportBuildError."""
    if not isinstance(data, Mapping):
        raise ReportBuildError("Invalid report request")
    try:
        kind = require_enum(data.get("type"), ReportKind, "type")
        date_range = data.get("dateRange")
        if not isinstance(date_range, Mapping):
            raise ValidationError("dateRange with from/to is required")
        date_from = parse_iso_date(date_range.get("from"))
        date_to = parse_iso_date(date_range.get("to"))
        fmt = data.get("format")
        export_format = require_enum(fmt, ExportFormat, "format") if fmt else None
    except ValidationError as e:
        raise ReportBuildError(str(e)) from e

    if date_from > date_to:
        raise ReportBuildError("dateRange.from must not be after dateRange.to")

    return ReportRequest(
        kind=kind,
        date_from=date_from,
        date_to=date_to,
        class_name=optional_text(data.get("className")),
        export_format=export_format,
    )


class ReportService:
    """Builds per-student attendance reports and renders them for download."""

    def __init__(
        self,
        students: StudentRepository,
        attendance: AttendanceRepository,
        reports: ReportRepository,
        *,
        exporters: Optional[dict[ExportFormat, ReportExporter]] = None,
    ):
        self._students = students
        self._attendance = attendance
        self._reports = reports
        self._exporters = exporters or {
            ExportFormat.EXCEL: ExcelExporter(),
            ExportFormat.CSV: CsvExporter(),
            ExportFormat.PDF: PdfExporter(),
        }

    def build(self, request: ReportRequest) -> BuiltReport:
        rows: list[ReportRow] = []
        # The report kind only labels the request; rows depend on the range alone.
        for student in self._students.list_students(class_name=request.class_name):
            history = self._attendance.get_history(
                student.student_id,
                date_from=request.date_from,
                date_to=request.date_to,
            )
            counts = count_history(history)
            rows.append(
                ReportRow(
                    admission_no=student.admission_no,
                    name=student.name,
                    class_label=student.class_label,
                    total_days=counts.total_days,
                    present_days=counts.present_days,
                    absent_days=counts.absent_days,
                    percentage=round_half_up(counts.percentage),
                )
            )

        logger.info(
            "Built %s report %s..%s class=%s rows=%d",
            request.kind.value,
            request.date_from,
            request.date_to,
            request.class_name or "*",
            len(rows),
        )
        return BuiltReport(request=request, rows=rows, generated_at=now_local())

    def export(self, report: BuiltReport, export_format: ExportFormat) -> ExportedFile:
        exporter = self._exporters.get(export_format)
        if exporter is None:
            raise ReportBuildError(f"Unsupported format: {export_format.value}")

        req = report.request
        filename = (
            f"attendance-report-{req.kind.value}-"
            f"{req.date_from:%Y%m%d}-{req.date_to:%Y%m%d}.{exporter.extension}"
        )
        return ExportedFile(content=exporter.render(report), mimetype=exporter.mimetype, filename=filename)

    def generate(self, data: Mapping, *, created_by: Optional[str] = None) -> tuple[BuiltReport, Optional[ExportedFile]]:
        """Build, record in history and, when a format is requested, render."""
        request = request_from_payload(data)
        report = self.build(request)

        self._reports.save(
            name=f"{request.kind.value.title()} report {format_iso_date(request.date_from)} to {format_iso_date(request.date_to)}",
            kind=request.kind,
            filters=request.filters(),
            rows=[r.to_dict() for r in report.rows],
            created_by=created_by,
        )

        if request.export_format is None:
            return report, None
        return report, self.export(report, request.export_format)

    def list_saved(self, *, created_by: Optional[str] = None) -> Sequence[SavedReport]:
        return self._reports.list_reports(created_by=created_by)
