"""Demo data for a fresh in-memory store.

Mirrors the accounts and sample roster the app starts with in development:
an admin, a teacher, class 12-A, three students and today's first two
students already marked present.
"""
from __future__ import annotations

from datetime import date, datetime

from ..core.enums import AttendanceStatus, MarkingMethod, Role
from ..attendance.memory_attendance_repository import MemoryAttendanceRepository
from ..classes.memory_class_repository import MemoryClassRepository
from ..students.memory_student_repository import MemoryStudentRepository
from ..students.model import StudentDraft
from ..users.memory_user_repository import MemoryUserRepository
from .memory_store import MemoryStore

DEMO_STUDENTS = (
    StudentDraft(
        admission_no="APS001",
        name="Aarav Sharma",
        class_name="12",
        section="A",
        roll_no="01",
        email="aarav.sharma@student.aps.edu",
        contact_no="9876543210",
        parent_contact="9876543211",
    ),
    StudentDraft(
        admission_no="APS002",
        name="Priya Patel",
        class_name="12",
        section="A",
        roll_no="02",
        email="priya.patel@student.aps.edu",
        contact_no="9876543212",
        parent_contact="9876543213",
    ),
    StudentDraft(
        admission_no="APS003",
        name="Rahul Kumar",
        class_name="12",
        section="B",
        roll_no="01",
        email="rahul.kumar@student.aps.edu",
        contact_no="9876543214",
        parent_contact="9876543215",
    ),
)


def seed_demo_data(store: MemoryStore, *, today: date | None = None) -> None:
    """Idempotent: does nothing when the admin account already exists."""
    today = today or date.today()
    users = MemoryUserRepository(store)
    if users.get_by_username("admin"):
        return

    users.create_user(
        username="admin",
        password="admin123",
        role=Role.ADMIN,
        name="System Administrator",
        email="admin@aps.edu",
    )
    teacher = users.create_user(
        username="teacher",
        password="teacher123",
        role=Role.TEACHER,
        name="John Teacher",
        email="teacher@aps.edu",
    )

    MemoryClassRepository(store).create(name="12", section="A", teacher_id=teacher.user_id)

    students = MemoryStudentRepository(store).bulk_create(DEMO_STUDENTS)

    attendance = MemoryAttendanceRepository(store)
    for student in students[:2]:
        attendance.create(
            student_id=student.student_id,
            on_date=today,
            status=AttendanceStatus.PRESENT,
            method=MarkingMethod.MANUAL,
            timestamp=datetime.now(),
            marked_by=teacher.user_id,
        )
