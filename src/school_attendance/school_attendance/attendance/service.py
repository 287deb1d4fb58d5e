from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from datetime import date, datetime
from typing import ContextManager, Mapping, Optional, Sequence

from ..common.datetime_utils import now_local, parse_iso_date
from ..common.validators import optional_text, require_enum
from ..core.enums import AttendanceStatus, MarkingMethod
from ..core.exceptions import DomainError, DuplicateError, NotFoundError, ValidationError
from ..students.model import Student
from ..students.repository import StudentRepository
from .factory import MarkingStrategyFactory
from .model import AttendancePatch, AttendanceRecord
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MarkingResult:
    record: AttendanceRecord
    student: Student
    confidence: Optional[float] = None

    def to_dict(self) -> dict:
        out = {"student": self.student.summary(), "attendance": self.record.to_dict()}
        if self.confidence is not None:
            out["confidence"] = self.confidence
        return out


class AttendanceService:
    """Use case: record attendance, at most once per student per day."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        students: StudentRepository,
        *,
        strategy_factory: MarkingStrategyFactory | None = None,
        lock: ContextManager | None = None,
    ):
        self._attendance = attendance
        self._students = students
        self._factory = strategy_factory or MarkingStrategyFactory()
        self._lock = lock if lock is not None else threading.RLock()

    def mark_attendance(
        self,
        student_id: str,
        on_date: date,
        status: AttendanceStatus,
        method: Optional[MarkingMethod],
        *,
        marked_by: Optional[str] = None,
        now: datetime | None = None,
    ) -> AttendanceRecord:
        # Check-then-insert must not interleave with another marking.
        with self._lock:
            if not self._students.get_by_id(student_id):
                raise NotFoundError("Student not found")

            if self._attendance.get_for_student_and_date(student_id, on_date):
                raise DuplicateError(f"Attendance already marked for {on_date:%Y-%m-%d}")

            record = self._attendance.create(
                student_id=student_id,
                on_date=on_date,
                status=status,
                method=method,
                timestamp=now or now_local(),
                marked_by=marked_by,
            )

        logger.info(
            "Marked %s for student %s on %s via %s",
            status.value,
            student_id,
            on_date,
            method.value if method else "-",
        )
        return record

    def mark(
        self,
        method: MarkingMethod,
        payload: Mapping,
        *,
        marked_by: Optional[str] = None,
        now: datetime | None = None,
    ) -> MarkingResult:
        """Resolve a channel submission and mark it."""
        if not isinstance(payload, Mapping):
            raise ValidationError("Invalid attendance data")

        now = now or now_local()
        strategy = self._factory.for_method(method)
        try:
            decision = strategy.decide(payload, today=now.date())
            record = self.mark_attendance(
                decision.student_id,
                decision.on_date,
                decision.status,
                decision.method,
                marked_by=marked_by,
                now=now,
            )
        except DomainError as e:
            logger.warning("Rejected %s marking: %s", method.value, e)
            raise

        student = self._students.get_by_id(record.student_id)
        return MarkingResult(record=record, student=student, confidence=decision.confidence)

    def update_attendance(self, attendance_id: str, data: Mapping) -> AttendanceRecord:
        if not isinstance(data, Mapping):
            raise ValidationError("Invalid update data")
        fixed = {"studentId", "date"} & set(data)
        if fixed:
            raise ValidationError(f"{', '.join(sorted(fixed))} cannot be changed")

        patch = AttendancePatch(
            status=require_enum(data["status"], AttendanceStatus, "status") if data.get("status") else None,
            method=require_enum(data["method"], MarkingMethod, "method") if data.get("method") else None,
            marked_by=optional_text(data.get("markedBy")),
        )
        record = self._attendance.update(attendance_id, patch)
        if not record:
            raise NotFoundError("Attendance record not found")
        return record

    def list_for_date(self, on_date: date | str, *, class_name: Optional[str] = None) -> Sequence[AttendanceRecord]:
        return self._attendance.list_by_date(parse_iso_date(on_date), class_name=class_name or None)

    def history(
        self,
        student_id: str,
        *,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
    ) -> Sequence[AttendanceRecord]:
        return self._attendance.get_history(student_id, date_from=date_from, date_to=date_to)
