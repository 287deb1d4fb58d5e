from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Domain entity: a staff account.

    Note: the password is an opaque credential that is only compared, never
    hashed or returned.
    """

    user_id: str
    username: str
    password: str
    role: Role
    name: str
    email: Optional[str]
    created_at: datetime

    def to_dict(self) -> dict:
        return {
            "id": self.user_id,
            "username": self.username,
            "role": self.role.value,
            "name": self.name,
            "email": self.email,
        }
