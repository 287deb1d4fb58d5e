from __future__ import annotations

from dataclasses import dataclass, fields
from datetime import date, datetime
from typing import Optional

from ..core.enums import AttendanceStatus, MarkingMethod


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one student's attendance for one calendar day."""

    attendance_id: str
    student_id: str
    date: date
    status: AttendanceStatus
    method: Optional[MarkingMethod]
    timestamp: datetime
    marked_by: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "id": self.attendance_id,
            "studentId": self.student_id,
            "date": self.date.strftime("%Y-%m-%d"),
            "status": self.status.value,
            "method": self.method.value if self.method else None,
            "timestamp": self.timestamp.isoformat(),
            "markedBy": self.marked_by,
        }


@dataclass(frozen=True)
class AttendancePatch:
    """Partial update for a record. Student and date are fixed once marked."""

    status: Optional[AttendanceStatus] = None
    method: Optional[MarkingMethod] = None
    marked_by: Optional[str] = None

    def changes(self) -> dict:
        return {f.name: getattr(self, f.name) for f in fields(self) if getattr(self, f.name) is not None}


@dataclass(frozen=True)
class StudentAttendance:
    """Read-model for the per-student history view."""

    student_id: str
    history: list
    percentage: float
