from __future__ import annotations

from typing import Protocol

from ..session.model import Session


class AuthRepository(Protocol):
    def login(self, *, staff_id: str, password: str) -> Session:
        """Exchange credentials for a session; token issuance is the backend's job."""

        raise NotImplementedError
