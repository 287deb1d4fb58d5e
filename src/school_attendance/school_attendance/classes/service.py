from __future__ import annotations

from typing import Mapping, Sequence

from ..common.validators import optional_text, require_non_empty
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..users.repository import UserRepository
from .model import SchoolClass
from .repository import ClassRepository


class ClassService:
    def __init__(self, classes: ClassRepository, users: UserRepository):
        self._classes = classes
        self._users = users

    def list_classes(self) -> Sequence[SchoolClass]:
        return self._classes.list_all()

    def list_for_teacher(self, teacher_id: str) -> Sequence[SchoolClass]:
        return self._classes.list_by_teacher(teacher_id)

    def create_class(self, *, current_role: Role, data: Mapping) -> SchoolClass:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Only administrators can create classes")
        if not isinstance(data, Mapping):
            raise ValidationError("Invalid class data")

        name = require_non_empty(data.get("name"), "name")
        section = require_non_empty(data.get("section"), "section")
        teacher_id = optional_text(data.get("teacherId"))
        if teacher_id:
            teacher = self._users.get_by_id(teacher_id)
            if not teacher:
                raise NotFoundError("Teacher not found")
            if teacher.role != Role.TEACHER:
                raise ValidationError("teacherId must reference a teacher account")

        for existing in self._classes.list_all():
            if existing.name == name and existing.section == section:
                raise ValidationError(f"Class {name}-{section} already exists")

        return self._classes.create(name=name, section=section, teacher_id=teacher_id)
