from __future__ import annotations

import threading
import uuid
from contextlib import contextmanager
from typing import Any, Dict, Iterator


class MemoryStore:
    """Process-local holder of every entity collection.

    One instance is created per application and handed to each repository, so
    tests can build isolated stores. All collections share one re-entrant lock;
    repositories take it around mutations and multi-step checks.
    """

    def __init__(self) -> None:
        self.users: Dict[str, Any] = {}
        self.students: Dict[str, Any] = {}
        self.attendance: Dict[str, Any] = {}
        self.classes: Dict[str, Any] = {}
        self.reports: Dict[str, Any] = {}
        self.lock = threading.RLock()

    @contextmanager
    def transaction(self) -> Iterator["MemoryStore"]:
        with self.lock:
            yield self

    @staticmethod
    def new_id() -> str:
        return str(uuid.uuid4())
