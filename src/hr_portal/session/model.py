from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Union

from ..core.enums import Role


@dataclass(frozen=True)
class SessionUser:
    """What we persist as `userInfo` after login."""

    id: Union[int, str]
    name: str
    role: Role
    email: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SessionUser":
        if not isinstance(data, Mapping):
            raise TypeError("user info must be an object")

        user_id = data.get("staff_id", data.get("id"))
        name = data.get("name")
        if user_id is None or user_id == "":
            raise ValueError("user info has no id")
        if not isinstance(name, str) or not name.strip():
            raise ValueError("user info has no name")

        return cls(
            id=user_id,
            name=name,
            role=Role(data.get("role")),
            email=data.get("email") or None,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "staff_id": self.id,
            "name": self.name,
            "role": self.role.value,
            "email": self.email,
        }


@dataclass(frozen=True)
class Session:
    token: str
    user: SessionUser
