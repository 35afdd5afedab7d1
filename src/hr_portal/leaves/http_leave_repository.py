from __future__ import annotations

from typing import Mapping, Optional, Sequence
from urllib.parse import quote

from ..backend.connection import BackendConnection
from ..backend.http_base import TokenProvider, call_backend, clean_params, expect_success
from ..core.exceptions import NotFoundError
from .model import LeaveRecord
from .repository import LeaveId, LeaveListResult, LeaveRepository


def _leave_path(leave_id: LeaveId, suffix: str = "") -> str:
    return f"/leaves/{quote(str(leave_id), safe='')}{suffix}"


class HttpLeaveRepository(LeaveRepository):
    def __init__(self, conn: BackendConnection, token_provider: Optional[TokenProvider] = None):
        self._conn = conn
        self._token_provider = token_provider

    def _call(self, method: str, path: str, **kwargs):
        token = self._token_provider() if self._token_provider else None
        return call_backend(self._conn, method, path, token=token, **kwargs)

    def list_leaves(self, *, status: Optional[str] = None, leave_type: Optional[str] = None) -> LeaveListResult:
        resp = self._call("GET", "/leaves", params=clean_params(status=status, leave_type=leave_type))
        payload = expect_success(resp, "Failed to load leave data")
        items = [LeaveRecord.from_payload(row) for row in payload.get("data") or []]
        count = payload.get("count")
        return LeaveListResult(items=items, count=int(count) if count is not None else len(items))

    def get_leave(self, *, leave_id: LeaveId) -> Sequence[LeaveRecord]:
        resp = self._call("GET", _leave_path(leave_id))
        if resp.status_code == 404:
            raise NotFoundError(resp.message or f'Leave "{leave_id}" not found', status_code=404)
        payload = expect_success(resp, "Error occurred during search")

        data = payload.get("data")
        if not data:
            return []
        rows = data if isinstance(data, list) else [data]
        return [LeaveRecord.from_payload(row) for row in rows]

    def create_leave(self, *, fields: Mapping[str, str]) -> LeaveRecord:
        resp = self._call("POST", "/leaves", json=dict(fields))
        payload = expect_success(resp, "Failed to submit leave application")
        return LeaveRecord.from_payload(payload.get("data") or fields)

    def update_leave(self, *, leave_id: LeaveId, fields: Mapping[str, str]) -> None:
        resp = self._call("PUT", _leave_path(leave_id), json=dict(fields))
        expect_success(resp, "Failed to update leave record")

    def approve_leave(self, *, leave_id: LeaveId, approved_by: str, comments: str) -> None:
        resp = self._call(
            "PUT",
            _leave_path(leave_id, "/approve"),
            json={"approved_by": approved_by, "comments": comments},
        )
        expect_success(resp, "Failed to approve leave application")

    def reject_leave(self, *, leave_id: LeaveId, approved_by: str, comments: str) -> None:
        resp = self._call(
            "PUT",
            _leave_path(leave_id, "/reject"),
            json={"approved_by": approved_by, "comments": comments},
        )
        expect_success(resp, "Failed to reject leave application")

    def delete_leave(self, *, leave_id: LeaveId) -> None:
        resp = self._call("DELETE", _leave_path(leave_id))
        expect_success(resp, "Failed to delete leave application")
