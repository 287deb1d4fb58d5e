from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import SchoolClass


class ClassRepository(Protocol):
    def list_all(self) -> Sequence[SchoolClass]:
        raise NotImplementedError

    def list_by_teacher(self, teacher_id: str) -> Sequence[SchoolClass]:
        raise NotImplementedError

    def create(self, *, name: str, section: str, teacher_id: Optional[str] = None) -> SchoolClass:
        raise NotImplementedError
