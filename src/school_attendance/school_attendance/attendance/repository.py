from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus, MarkingMethod
from .model import AttendancePatch, AttendanceRecord


class AttendanceRepository(Protocol):
    def get_by_id(self, attendance_id: str) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def get_for_student_and_date(self, student_id: str, on_date: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def list_by_date(self, on_date: date, *, class_name: Optional[str] = None) -> Sequence[AttendanceRecord]:
        """Records for a day; with a class filter only students currently in that class."""

        raise NotImplementedError

    def get_history(
        self,
        student_id: str,
        *,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
    ) -> Sequence[AttendanceRecord]:
        """Inclusive on both ends, most recent first."""

        raise NotImplementedError

    def create(
        self,
        *,
        student_id: str,
        on_date: date,
        status: AttendanceStatus,
        method: Optional[MarkingMethod],
        timestamp: datetime,
        marked_by: Optional[str] = None,
    ) -> AttendanceRecord:
        raise NotImplementedError

    def update(self, attendance_id: str, patch: AttendancePatch) -> Optional[AttendanceRecord]:
        raise NotImplementedError
