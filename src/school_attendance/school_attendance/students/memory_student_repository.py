from __future__ import annotations

from dataclasses import replace
from datetime import datetime
from typing import Optional, Sequence

from ..core.constants import QR_CODE_PREFIX
from ..database.memory_store import MemoryStore
from .model import Student, StudentDraft, StudentPatch
from .repository import StudentRepository


class MemoryStudentRepository(StudentRepository):
    def __init__(self, store: MemoryStore):
        self._store = store

    def get_by_id(self, student_id: str) -> Optional[Student]:
        return self._store.students.get(student_id)

    def get_by_admission_no(self, admission_no: str) -> Optional[Student]:
        for student in self._store.students.values():
            if student.admission_no == admission_no:
                return student
        return None

    def list_students(self, *, class_name: Optional[str] = None, section: Optional[str] = None) -> Sequence[Student]:
        students = list(self._store.students.values())
        if class_name:
            students = [s for s in students if s.class_name == class_name]
        if section:
            students = [s for s in students if s.section == section]
        # sorted() is stable, so equal names keep insertion order.
        return sorted(students, key=lambda s: s.name)

    def create(self, draft: StudentDraft) -> Student:
        student = Student(
            student_id=self._store.new_id(),
            admission_no=draft.admission_no,
            name=draft.name,
            class_name=draft.class_name,
            section=draft.section,
            roll_no=draft.roll_no,
            email=draft.email or None,
            contact_no=draft.contact_no or None,
            parent_contact=draft.parent_contact or None,
            photo_url=draft.photo_url or None,
            face_descriptor=tuple(draft.face_descriptor) if draft.face_descriptor is not None else None,
            qr_code=f"{QR_CODE_PREFIX}{draft.admission_no}",
            created_at=datetime.now(),
        )
        with self._store.transaction() as store:
            store.students[student.student_id] = student
        return student

    def bulk_create(self, drafts: Sequence[StudentDraft]) -> Sequence[Student]:
        return [self.create(d) for d in drafts]

    def update(self, student_id: str, patch: StudentPatch) -> Optional[Student]:
        with self._store.transaction() as store:
            current = store.students.get(student_id)
            if current is None:
                return None
            changes = patch.changes()
            if "face_descriptor" in changes:
                changes["face_descriptor"] = tuple(changes["face_descriptor"])
            updated = replace(current, **changes)
            store.students[student_id] = updated
            return updated

    def delete(self, student_id: str) -> bool:
        with self._store.transaction() as store:
            return store.students.pop(student_id, None) is not None
