from __future__ import annotations

import math
from datetime import date
from typing import Optional, Sequence

from ..attendance.model import AttendanceRecord, StudentAttendance
from ..attendance.repository import AttendanceRepository
from ..classes.repository import ClassRepository
from ..common.datetime_utils import month_bounds
from ..common.validators import require_non_empty
from ..core.enums import AttendanceStatus
from ..core.exceptions import NotFoundError
from ..students.repository import StudentRepository
from .model import AttendanceCounts, ClassStats, DailyStats


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def count_history(records: Sequence[AttendanceRecord]) -> AttendanceCounts:
    late = sum(1 for r in records if r.status == AttendanceStatus.LATE)
    present = sum(1 for r in records if r.status == AttendanceStatus.PRESENT)
    absent = sum(1 for r in records if r.status == AttendanceStatus.ABSENT)
    return AttendanceCounts(
        total_days=len(records),
        present_days=present + late,
        absent_days=absent,
        late_days=late,
    )


class StatsService:
    """Read-only aggregation over students and attendance records."""

    def __init__(self, students: StudentRepository, attendance: AttendanceRepository, classes: ClassRepository):
        self._students = students
        self._attendance = attendance
        self._classes = classes

    def daily_stats(self, on_date: date, *, class_name: Optional[str] = None, section: Optional[str] = None) -> DailyStats:
        students = self._students.list_students(class_name=class_name or None, section=section or None)
        in_scope = {s.student_id for s in students}
        records = [r for r in self._attendance.list_by_date(on_date, class_name=class_name or None) if r.student_id in in_scope]

        total = len(students)
        present = sum(1 for r in records if r.status == AttendanceStatus.PRESENT)
        late = sum(1 for r in records if r.status == AttendanceStatus.LATE)
        recorded_absent = sum(1 for r in records if r.status == AttendanceStatus.ABSENT)

        # Students with no record for the day count as absent.
        unmarked = total - len(records)

        return DailyStats(
            total_students=total,
            present=present,
            absent=recorded_absent + unmarked,
            late=late,
            attendance_rate=(present / total * 100) if total > 0 else 0,
        )

    def student_counts(
        self,
        student_id: str,
        *,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
    ) -> AttendanceCounts:
        return count_history(self._attendance.get_history(student_id, date_from=date_from, date_to=date_to))

    def student_percentage(
        self,
        student_id: str,
        *,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
    ) -> float:
        return self.student_counts(student_id, date_from=date_from, date_to=date_to).percentage

    def student_attendance(
        self,
        student_id: str,
        *,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
    ) -> StudentAttendance:
        history = list(self._attendance.get_history(student_id, date_from=date_from, date_to=date_to))
        return StudentAttendance(
            student_id=student_id,
            history=history,
            percentage=count_history(history).percentage,
        )

    def class_breakdown(self, on_date: date) -> list[ClassStats]:
        """Daily stats per known class, in creation order.

        Each class is scoped by name and section, so 12-A and 12-B report only
        their own students rather than the whole of class 12.
        """
        return [
            ClassStats(label=c.label, stats=self.daily_stats(on_date, class_name=c.name, section=c.section))
            for c in self._classes.list_all()
        ]

    def dashboard(self, on_date: date) -> dict:
        return {
            "overall": self.daily_stats(on_date).to_dict(),
            "byClass": [c.to_dict() for c in self.class_breakdown(on_date)],
        }

    def parent_summary(self, admission_no: str, *, today: date) -> dict:
        """Current-month attendance for the parent portal."""
        admission_no = require_non_empty(admission_no, "admissionNo")
        student = self._students.get_by_admission_no(admission_no)
        if not student:
            raise NotFoundError("Student not found")

        start, end = month_bounds(today)
        counts = self.student_counts(student.student_id, date_from=start, date_to=end)
        return {
            "student": student.summary(),
            "attendance": {
                "percentage": round_half_up(counts.percentage),
                "presentDays": counts.present_days,
                "absentDays": counts.absent_days,
                "totalDays": counts.total_days,
            },
        }
