from __future__ import annotations

from datetime import date, datetime

import pytest

from src.school_attendance.school_attendance.container import build_container
from src.school_attendance.school_attendance.core.enums import Role
from src.school_attendance.school_attendance.database.memory_store import MemoryStore
from src.school_attendance.school_attendance.main import create_app


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2026, 2, 2, 8, 0, 0)


@pytest.fixture
def fixed_today(fixed_now) -> date:
    return fixed_now.date()


@pytest.fixture
def store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def container(store):
    return build_container(store=store)


@pytest.fixture
def make_student(container):
    counter = {"n": 0}

    def _make(name: str = "Student", class_name: str = "10", section: str = "A", **extra):
        counter["n"] += 1
        data = {
            "admissionNo": f"ADM{counter['n']:03d}",
            "name": name,
            "className": class_name,
            "section": section,
            "rollNo": f"{counter['n']:02d}",
        }
        data.update(extra)
        return container.student_service.create_student(data)

    return _make


@pytest.fixture
def app(container):
    container.users_repo.create_user(username="admin", password="admin123", role=Role.ADMIN, name="Admin")
    container.users_repo.create_user(username="teacher", password="teacher123", role=Role.TEACHER, name="Teacher")
    return create_app("config.testing", container=container)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def teacher_client(client):
    resp = client.post("/api/auth/login", json={"username": "teacher", "password": "teacher123", "role": "teacher"})
    assert resp.status_code == 200
    return client


@pytest.fixture
def admin_client(client):
    resp = client.post("/api/auth/login", json={"username": "admin", "password": "admin123", "role": "admin"})
    assert resp.status_code == 200
    return client
