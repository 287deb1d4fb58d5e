from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class DailyStats:
    total_students: int
    present: int
    absent: int
    late: int
    attendance_rate: float

    def to_dict(self) -> dict:
        return {
            "totalStudents": self.total_students,
            "present": self.present,
            "absent": self.absent,
            "late": self.late,
            "attendanceRate": self.attendance_rate,
        }


@dataclass(frozen=True)
class ClassStats:
    label: str
    stats: DailyStats

    def to_dict(self) -> dict:
        return {"class": self.label, **self.stats.to_dict()}


@dataclass(frozen=True)
class AttendanceCounts:
    """Raw counts over a student's history. Late is counted as present."""

    total_days: int
    present_days: int
    absent_days: int
    late_days: int

    @property
    def percentage(self) -> float:
        if self.total_days == 0:
            return 0
        return self.present_days / self.total_days * 100
