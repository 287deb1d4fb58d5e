from __future__ import annotations

import io
import json
import logging
import threading
from typing import BinaryIO, ContextManager, Mapping, Optional, Sequence

import qrcode

from ..common.validators import optional_email, optional_text, require_non_empty
from ..core.exceptions import NotFoundError, ValidationError
from .importer import read_student_rows
from .model import Student, StudentDraft, StudentPatch
from .repository import StudentRepository

logger = logging.getLogger(__name__)

_PATCHABLE = {
    "name": "name",
    "className": "class_name",
    "section": "section",
    "rollNo": "roll_no",
    "email": "email",
    "contactNo": "contact_no",
    "parentContact": "parent_contact",
    "photoUrl": "photo_url",
    "faceDescriptor": "face_descriptor",
}


def _face_descriptor(value) -> Optional[tuple]:
    if value is None:
        return None
    if not isinstance(value, (list, tuple)):
        raise ValidationError("faceDescriptor must be a list of numbers")
    try:
        return tuple(float(v) for v in value)
    except (TypeError, ValueError):
        raise ValidationError("faceDescriptor must be a list of numbers") from None


def draft_from_payload(data: Mapping) -> StudentDraft:
    """Validate a camelCase student payload into a draft."""
    if not isinstance(data, Mapping):
        raise ValidationError("Invalid student data")

    return StudentDraft(
        admission_no=require_non_empty(data.get("admissionNo"), "admissionNo"),
        name=require_non_empty(data.get("name"), "name"),
        class_name=require_non_empty(data.get("className"), "className"),
        section=require_non_empty(data.get("section"), "section"),
        roll_no=require_non_empty(data.get("rollNo"), "rollNo"),
        email=optional_email(data.get("email"), "email"),
        contact_no=optional_text(data.get("contactNo")),
        parent_contact=optional_text(data.get("parentContact")),
        photo_url=optional_text(data.get("photoUrl")),
        face_descriptor=_face_descriptor(data.get("faceDescriptor")),
    )


def patch_from_payload(data: Mapping) -> StudentPatch:
    if not isinstance(data, Mapping):
        raise ValidationError("Invalid update data")
    if "admissionNo" in data:
        raise ValidationError("admissionNo cannot be changed")
    unknown = set(data) - set(_PATCHABLE)
    if unknown:
        raise ValidationError(f"Unknown fields: {', '.join(sorted(unknown))}")

    values: dict = {}
    for key in ("name", "className", "section", "rollNo"):
        if key in data:
            values[_PATCHABLE[key]] = require_non_empty(data[key], key)
    if "email" in data:
        values["email"] = optional_email(data["email"], "email")
    for key in ("contactNo", "parentContact", "photoUrl"):
        if key in data:
            values[_PATCHABLE[key]] = optional_text(data[key])
    if "faceDescriptor" in data:
        values["face_descriptor"] = _face_descriptor(data["faceDescriptor"])
    return StudentPatch(**values)


class StudentService:
    """Use cases: manage students, bulk import and QR codes."""

    def __init__(self, students: StudentRepository, *, lock: ContextManager | None = None):
        self._students = students
        self._lock = lock if lock is not None else threading.RLock()

    def get_student(self, student_id: str) -> Student:
        student = self._students.get_by_id(student_id)
        if not student:
            raise NotFoundError("Student not found")
        return student

    def get_by_admission_no(self, admission_no: str) -> Student:
        admission_no = require_non_empty(admission_no, "admissionNo")
        student = self._students.get_by_admission_no(admission_no)
        if not student:
            raise NotFoundError("Student not found")
        return student

    def list_students(self, *, class_name: Optional[str] = None, section: Optional[str] = None) -> Sequence[Student]:
        return self._students.list_students(class_name=class_name or None, section=section or None)

    def create_student(self, data: Mapping) -> Student:
        draft = draft_from_payload(data)
        # Uniqueness check and insert must not interleave with another create.
        with self._lock:
            if self._students.get_by_admission_no(draft.admission_no):
                raise ValidationError(f"Admission number {draft.admission_no} already exists")
            student = self._students.create(draft)
        logger.info("Created student %s (%s)", student.student_id, student.admission_no)
        return student

    def update_student(self, student_id: str, data: Mapping) -> Student:
        patch = patch_from_payload(data)
        student = self._students.update(student_id, patch)
        if not student:
            raise NotFoundError("Student not found")
        return student

    def delete_student(self, student_id: str) -> None:
        if not self._students.delete(student_id):
            raise NotFoundError("Student not found")
        logger.info("Deleted student %s", student_id)

    def bulk_create(self, rows: Sequence[Mapping]) -> Sequence[Student]:
        """Validate every row first, then insert the batch in input order."""
        drafts: list[StudentDraft] = []
        for index, row in enumerate(rows, start=1):
            try:
                drafts.append(draft_from_payload(row))
            except ValidationError as e:
                raise ValidationError(f"Row {index}: {e}") from e

        with self._lock:
            seen: set[str] = set()
            for index, draft in enumerate(drafts, start=1):
                if draft.admission_no in seen or self._students.get_by_admission_no(draft.admission_no):
                    raise ValidationError(f"Row {index}: admission number {draft.admission_no} already exists")
                seen.add(draft.admission_no)
            created = self._students.bulk_create(drafts)
        logger.info("Imported %d students", len(created))
        return created

    def import_spreadsheet(self, stream: BinaryIO, filename: str) -> Sequence[Student]:
        rows = read_student_rows(stream, filename)
        if not rows:
            raise ValidationError("No student rows found in file")
        return self.bulk_create(rows)

    @staticmethod
    def qr_payload(student: Student) -> str:
        """JSON envelope encoded into the student's QR code."""
        return json.dumps(
            {
                "studentId": student.student_id,
                "admissionNo": student.admission_no,
                "name": student.name,
                "className": student.class_name,
                "section": student.section,
            }
        )

    def qr_png(self, student_id: str) -> bytes:
        student = self.get_student(student_id)

        qr = qrcode.QRCode(
            version=1,
            error_correction=qrcode.constants.ERROR_CORRECT_L,
            box_size=10,
            border=2,
        )
        qr.add_data(self.qr_payload(student))
        qr.make(fit=True)

        img = qr.make_image(fill_color="black", back_color="white")

        buf = io.BytesIO()
        img.save(buf, format="PNG")
        return buf.getvalue()
