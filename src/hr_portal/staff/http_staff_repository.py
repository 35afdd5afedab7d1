from __future__ import annotations

from typing import Optional, Sequence

from ..backend.connection import BackendConnection
from ..backend.http_base import TokenProvider, call_backend, expect_success
from .model import StaffMember
from .repository import StaffRepository


class HttpStaffRepository(StaffRepository):
    def __init__(self, conn: BackendConnection, token_provider: Optional[TokenProvider] = None):
        self._conn = conn
        self._token_provider = token_provider

    def list_staff(self) -> Sequence[StaffMember]:
        token = self._token_provider() if self._token_provider else None
        resp = call_backend(self._conn, "GET", "/staff", token=token)
        payload = expect_success(resp, "Failed to load staff")
        return [StaffMember.from_payload(row) for row in payload.get("data") or []]
