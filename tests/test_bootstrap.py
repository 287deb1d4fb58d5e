from datetime import date

from src.school_attendance.school_attendance.container import build_container
from src.school_attendance.school_attendance.core.enums import Role
from src.school_attendance.school_attendance.database.bootstrap import seed_demo_data
from src.school_attendance.school_attendance.database.memory_store import MemoryStore


def test_seed_demo_data_is_idempotent():
    store = MemoryStore()
    today = date(2026, 2, 2)

    seed_demo_data(store, today=today)
    seed_demo_data(store, today=today)

    assert len(store.users) == 2
    assert len(store.students) == 3
    assert len(store.attendance) == 2


def test_seeded_accounts_can_log_in_and_dashboard_adds_up():
    store = MemoryStore()
    today = date(2026, 2, 2)
    seed_demo_data(store, today=today)
    container = build_container(store=store)

    admin = container.auth_service.authenticate("admin", "admin123", "admin")
    assert admin.role == Role.ADMIN

    dashboard = container.stats_service.dashboard(today)
    assert dashboard["overall"]["totalStudents"] == 3
    assert dashboard["overall"]["present"] == 2
    assert dashboard["byClass"][0]["class"] == "12-A"
    assert dashboard["byClass"][0]["attendanceRate"] == 100
