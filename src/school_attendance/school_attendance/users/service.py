from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Optional, Sequence

from ..common.validators import optional_email, require_enum, require_min_length, require_non_empty
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, AuthorizationError, ValidationError
from .model import User
from .repository import UserRepository


@dataclass(frozen=True)
class SessionUser:
    """What we store into Flask session after login."""

    user_id: str
    username: str
    name: str
    role: Role
    email: Optional[str]

    def to_dict(self) -> dict:
        return {
            "id": self.user_id,
            "username": self.username,
            "role": self.role.value,
            "name": self.name,
            "email": self.email,
        }


class AuthService:
    """Use case: authenticate user (login)."""

    def __init__(self, users: UserRepository):
        self._users = users

    def authenticate(self, username: str, password: str, role: str) -> SessionUser:
        username = require_non_empty(username, "Username")
        require_non_empty(password, "Password")
        wanted_role = require_enum(role, Role, "role")

        user = self._users.get_by_username(username)
        if not user or user.password != password or user.role != wanted_role:
            raise AuthenticationError("Invalid credentials")

        return SessionUser(
            user_id=user.user_id,
            username=user.username,
            name=user.name,
            role=user.role,
            email=user.email,
        )


class UserService:
    """Use case: manage users (admin)."""

    def __init__(self, users: UserRepository):
        self._users = users

    def list_users(self) -> Sequence[User]:
        return self._users.list_all()

    def create_account(self, *, current_role: Role, data: Mapping) -> User:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Only administrators can create accounts")
        if not isinstance(data, Mapping):
            raise ValidationError("Invalid user data")

        username = require_non_empty(data.get("username"), "username")
        password = require_min_length(data.get("password"), "password", 6)
        name = require_non_empty(data.get("name"), "name")
        role = require_enum(data.get("role"), Role, "role")
        email = optional_email(data.get("email"), "email")

        if self._users.get_by_username(username):
            raise ValidationError("Username already exists")

        return self._users.create_user(username=username, password=password, role=role, name=name, email=email)
