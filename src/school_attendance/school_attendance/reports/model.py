from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import ExportFormat, ReportKind


@dataclass(frozen=True)
class ReportRequest:
    kind: ReportKind
    date_from: date
    date_to: date
    class_name: Optional[str] = None
    export_format: Optional[ExportFormat] = None

    def filters(self) -> dict:
        return {
            "dateRange": {"from": self.date_from.strftime("%Y-%m-%d"), "to": self.date_to.strftime("%Y-%m-%d")},
            "className": self.class_name,
        }


@dataclass(frozen=True)
class ReportRow:
    """One student's line in an attendance report."""

    admission_no: str
    name: str
    class_label: str
    total_days: int
    present_days: int
    absent_days: int
    percentage: int

    def as_cells(self) -> tuple:
        """Values in REPORT_HEADERS order."""
        return (
            self.admission_no,
            self.name,
            self.class_label,
            self.total_days,
            self.present_days,
            self.absent_days,
            self.percentage,
        )

    def to_dict(self) -> dict:
        return {
            "admissionNo": self.admission_no,
            "name": self.name,
            "class": self.class_label,
            "totalDays": self.total_days,
            "presentDays": self.present_days,
            "absentDays": self.absent_days,
            "percentage": self.percentage,
        }


@dataclass(frozen=True)
class BuiltReport:
    request: ReportRequest
    rows: list[ReportRow]
    generated_at: datetime


@dataclass(frozen=True)
class ExportedFile:
    content: bytes
    mimetype: str
    filename: str


@dataclass(frozen=True)
class SavedReport:
    report_id: str
    name: str
    kind: ReportKind
    filters: dict
    rows: list[dict]
    created_by: Optional[str]
    created_at: datetime

    def to_dict(self) -> dict:
        return {
            "id": self.report_id,
            "name": self.name,
            "type": self.kind.value,
            "filters": self.filters,
            "data": self.rows,
            "createdBy": self.created_by,
            "createdAt": self.created_at.isoformat(),
        }
