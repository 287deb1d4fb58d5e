from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from ..core.enums import Role
from ..database.memory_store import MemoryStore
from .model import User
from .repository import UserRepository


class MemoryUserRepository(UserRepository):
    def __init__(self, store: MemoryStore):
        self._store = store

    def get_by_id(self, user_id: str) -> Optional[User]:
        return self._store.users.get(user_id)

    def get_by_username(self, username: str) -> Optional[User]:
        for user in self._store.users.values():
            if user.username == username:
                return user
        return None

    def create_user(
        self,
        *,
        username: str,
        password: str,
        role: Role,
        name: str,
        email: Optional[str] = None,
    ) -> User:
        user = User(
            user_id=self._store.new_id(),
            username=username,
            password=password,
            role=role,
            name=name,
            email=email,
            created_at=datetime.now(),
        )
        with self._store.transaction() as store:
            store.users[user.user_id] = user
        return user

    def list_all(self) -> Sequence[User]:
        return sorted(self._store.users.values(), key=lambda u: u.username)
