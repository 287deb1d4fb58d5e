from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from ..database.memory_store import MemoryStore
from .model import SchoolClass
from .repository import ClassRepository


class MemoryClassRepository(ClassRepository):
    def __init__(self, store: MemoryStore):
        self._store = store

    def list_all(self) -> Sequence[SchoolClass]:
        return list(self._store.classes.values())

    def list_by_teacher(self, teacher_id: str) -> Sequence[SchoolClass]:
        return [c for c in self._store.classes.values() if c.teacher_id == teacher_id]

    def create(self, *, name: str, section: str, teacher_id: Optional[str] = None) -> SchoolClass:
        school_class = SchoolClass(
            class_id=self._store.new_id(),
            name=name,
            section=section,
            teacher_id=teacher_id,
            created_at=datetime.now(),
        )
        with self._store.transaction() as store:
            store.classes[school_class.class_id] = school_class
        return school_class
