from __future__ import annotations

from dataclasses import dataclass, fields
from datetime import datetime
from typing import Optional, Sequence


@dataclass(frozen=True)
class Student:
    """Domain entity: an enrolled student."""

    student_id: str
    admission_no: str
    name: str
    class_name: str
    section: str
    roll_no: str
    email: Optional[str]
    contact_no: Optional[str]
    parent_contact: Optional[str]
    photo_url: Optional[str]
    face_descriptor: Optional[Sequence[float]]
    qr_code: str
    created_at: datetime

    @property
    def class_label(self) -> str:
        return f"{self.class_name}-{self.section}"

    def summary(self) -> dict:
        """Denormalized view attached to marking results and parent lookups."""
        return {
            "name": self.name,
            "admissionNo": self.admission_no,
            "className": self.class_name,
            "section": self.section,
        }

    def to_dict(self) -> dict:
        return {
            "id": self.student_id,
            "admissionNo": self.admission_no,
            "name": self.name,
            "className": self.class_name,
            "section": self.section,
            "rollNo": self.roll_no,
            "email": self.email,
            "contactNo": self.contact_no,
            "parentContact": self.parent_contact,
            "photoUrl": self.photo_url,
            "qrCode": self.qr_code,
            "faceDescriptor": list(self.face_descriptor) if self.face_descriptor is not None else None,
            "createdAt": self.created_at.isoformat(),
        }


@dataclass(frozen=True)
class StudentDraft:
    """Validated field-set used to create a student."""

    admission_no: str
    name: str
    class_name: str
    section: str
    roll_no: str
    email: Optional[str] = None
    contact_no: Optional[str] = None
    parent_contact: Optional[str] = None
    photo_url: Optional[str] = None
    face_descriptor: Optional[Sequence[float]] = None


@dataclass(frozen=True)
class StudentPatch:
    """Partial update. ``None`` leaves the stored value untouched."""

    name: Optional[str] = None
    class_name: Optional[str] = None
    section: Optional[str] = None
    roll_no: Optional[str] = None
    email: Optional[str] = None
    contact_no: Optional[str] = None
    parent_contact: Optional[str] = None
    photo_url: Optional[str] = None
    face_descriptor: Optional[Sequence[float]] = None

    def changes(self) -> dict:
        return {f.name: getattr(self, f.name) for f in fields(self) if getattr(self, f.name) is not None}
