from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import Role
from .model import User


class UserRepository(Protocol):
    """Repository interface for users."""

    def get_by_id(self, user_id: str) -> Optional[User]:
        raise NotImplementedError

    def get_by_username(self, username: str) -> Optional[User]:
        raise NotImplementedError

    def create_user(
        self,
        *,
        username: str,
        password: str,
        role: Role,
        name: str,
        email: Optional[str] = None,
    ) -> User:
        raise NotImplementedError

    def list_all(self) -> Sequence[User]:
        raise NotImplementedError
