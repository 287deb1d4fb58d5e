from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Student, StudentDraft, StudentPatch


class StudentRepository(Protocol):
    """Repository interface for students.

    Services depend on this interface, not on a concrete storage.
    """

    def get_by_id(self, student_id: str) -> Optional[Student]:
        raise NotImplementedError

    def get_by_admission_no(self, admission_no: str) -> Optional[Student]:
        raise NotImplementedError

    def list_students(self, *, class_name: Optional[str] = None, section: Optional[str] = None) -> Sequence[Student]:
        """Students matching the non-empty filters, sorted by name."""

        raise NotImplementedError

    def create(self, draft: StudentDraft) -> Student:
        raise NotImplementedError

    def bulk_create(self, drafts: Sequence[StudentDraft]) -> Sequence[Student]:
        raise NotImplementedError

    def update(self, student_id: str, patch: StudentPatch) -> Optional[Student]:
        raise NotImplementedError

    def delete(self, student_id: str) -> bool:
        raise NotImplementedError
