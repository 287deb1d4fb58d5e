from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User roles used for access checks."""

    ADMIN = "admin"
    TEACHER = "teacher"


class AttendanceStatus(str, Enum):
    """Attendance status stored for a student and a day."""

    PRESENT = "present"
    ABSENT = "absent"
    LATE = "late"


class MarkingMethod(str, Enum):
    """Channel an attendance event was captured through."""

    QR = "qr"
    FACE = "face"
    MANUAL = "manual"


class ReportKind(str, Enum):
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    CUSTOM = "custom"


class ExportFormat(str, Enum):
    EXCEL = "excel"
    CSV = "csv"
    PDF = "pdf"
