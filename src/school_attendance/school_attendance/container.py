from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.factory import MarkingStrategyFactory
from .attendance.memory_attendance_repository import MemoryAttendanceRepository
from .attendance.service import AttendanceService
from .classes.memory_class_repository import MemoryClassRepository
from .classes.service import ClassService
from .core.constants import DEFAULT_FACE_CONFIDENCE_THRESHOLD
from .database.memory_store import MemoryStore
from .reports.memory_report_repository import MemoryReportRepository
from .reports.service import ReportService
from .stats.service import StatsService
from .students.memory_student_repository import MemoryStudentRepository
from .students.service import StudentService
from .users.memory_user_repository import MemoryUserRepository
from .users.service import AuthService, UserService


@dataclass(frozen=True)
class Container:
    store: MemoryStore

    users_repo: MemoryUserRepository
    students_repo: MemoryStudentRepository
    attendance_repo: MemoryAttendanceRepository
    classes_repo: MemoryClassRepository
    reports_repo: MemoryReportRepository

    auth_service: AuthService
    user_service: UserService
    student_service: StudentService
    attendance_service: AttendanceService
    class_service: ClassService
    stats_service: StatsService
    report_service: ReportService


def build_container(
    *,
    store: Optional[MemoryStore] = None,
    face_threshold: float = DEFAULT_FACE_CONFIDENCE_THRESHOLD,
) -> Container:
    store = store or MemoryStore()

    users_repo = MemoryUserRepository(store)
    students_repo = MemoryStudentRepository(store)
    attendance_repo = MemoryAttendanceRepository(store)
    classes_repo = MemoryClassRepository(store)
    reports_repo = MemoryReportRepository(store)

    auth_service = AuthService(users_repo)
    user_service = UserService(users_repo)
    student_service = StudentService(students_repo, lock=store.lock)
    attendance_service = AttendanceService(
        attendance_repo,
        students_repo,
        strategy_factory=MarkingStrategyFactory(face_threshold=face_threshold),
        lock=store.lock,
    )
    class_service = ClassService(classes_repo, users_repo)
    stats_service = StatsService(students_repo, attendance_repo, classes_repo)
    report_service = ReportService(students_repo, attendance_repo, reports_repo)

    return Container(
        store=store,
        users_repo=users_repo,
        students_repo=students_repo,
        attendance_repo=attendance_repo,
        classes_repo=classes_repo,
        reports_repo=reports_repo,
        auth_service=auth_service,
        user_service=user_service,
        student_service=student_service,
        attendance_service=attendance_service,
        class_service=class_service,
        stats_service=stats_service,
        report_service=report_service,
    )
