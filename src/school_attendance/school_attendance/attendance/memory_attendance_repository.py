from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime
from typing import Optional, Sequence

from ..core.enums import AttendanceStatus, MarkingMethod
from ..database.memory_store import MemoryStore
from .model import AttendancePatch, AttendanceRecord
from .repository import AttendanceRepository


class MemoryAttendanceRepository(AttendanceRepository):
    def __init__(self, store: MemoryStore):
        self._store = store

    def get_by_id(self, attendance_id: str) -> Optional[AttendanceRecord]:
        return self._store.attendance.get(attendance_id)

    def get_for_student_and_date(self, student_id: str, on_date: date) -> Optional[AttendanceRecord]:
        for r in self._store.attendance.values():
            if r.student_id == student_id and r.date == on_date:
                return r
        return None

    def list_by_date(self, on_date: date, *, class_name: Optional[str] = None) -> Sequence[AttendanceRecord]:
        records = [r for r in self._store.attendance.values() if r.date == on_date]
        if class_name:
            in_class = {s.student_id for s in self._store.students.values() if s.class_name == class_name}
            records = [r for r in records if r.student_id in in_class]
        return records

    def get_history(
        self,
        student_id: str,
        *,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
    ) -> Sequence[AttendanceRecord]:
        records = [r for r in self._store.attendance.values() if r.student_id == student_id]
        if date_from is not None:
            records = [r for r in records if r.date >= date_from]
        if date_to is not None:
            records = [r for r in records if r.date <= date_to]
        records.sort(key=lambda r: r.date, reverse=True)
        return records

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
        record = AttendanceRecord(
            attendance_id=self._store.new_id(),
            student_id=student_id,
            date=on_date,
            status=status,
            method=method,
            timestamp=timestamp,
            marked_by=marked_by,
        )
        with self._store.transaction() as store:
            store.attendance[record.attendance_id] = record
        return record

    def update(self, attendance_id: str, patch: AttendancePatch) -> Optional[AttendanceRecord]:
        with self._store.transaction() as store:
            current = store.attendance.get(attendance_id)
            if current is None:
                return None
            updated = replace(current, **patch.changes())
            store.attendance[attendance_id] = updated
            return updated
