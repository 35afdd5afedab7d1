from __future__ import annotations

from ..backend.connection import BackendConnection
from ..backend.http_base import call_backend
from ..core.exceptions import AuthenticationError, AuthorizationError, BackendError
from ..session.model import Session, SessionUser
from .repository import AuthRepository


class HttpAuthRepository(AuthRepository):
    def __init__(self, conn: BackendConnection):
        self._conn = conn

    def login(self, *, staff_id: str, password: str) -> Session:
        resp = call_backend(
            self._conn,
            "POST",
            "/auth/login",
            json={"staff_id": staff_id, "password": password},
        )

        if resp.status_code == 401:
            raise AuthenticationError("Invalid staff ID or password")
        if resp.status_code == 403:
            raise AuthorizationError(resp.message or "Insufficient permissions")
        if resp.status_code >= 500:
            raise BackendError("Server error. Please try again later.", status_code=resp.status_code)
        if not resp.succeeded:
            raise AuthenticationError(resp.message or "Login failed. Please check your credentials.")

        data = resp.payload.get("data") or {}
        try:
            user = SessionUser.from_dict(data.get("user") or {})
        except (TypeError, ValueError) as exc:
            raise BackendError("Login response is missing user details") from exc

        token = data.get("token")
        if not token:
            raise BackendError("Login response is missing a token")

        return Session(token=str(token), user=user)
