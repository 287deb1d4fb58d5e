from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class SchoolClass:
    """Class/section pair used for grouping. Enrollment lives on the student."""

    class_id: str
    name: str
    section: str
    teacher_id: Optional[str]
    created_at: datetime

    @property
    def label(self) -> str:
        return f"{self.name}-{self.section}"

    def to_dict(self) -> dict:
        return {
            "id": self.class_id,
            "name": self.name,
            "section": self.section,
            "teacherId": self.teacher_id,
            "createdAt": self.created_at.isoformat(),
        }
