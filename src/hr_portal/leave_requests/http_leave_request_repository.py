from __future__ import annotations

from typing import Optional
from urllib.parse import quote

from ..backend.connection import BackendConnection
from ..backend.http_base import TokenProvider, call_backend, clean_params, expect_success
from .model import LeaveRequest
from .repository import LeaveRequestListResult, LeaveRequestRepository, RequestId


class HttpLeaveRequestRepository(LeaveRequestRepository):
    def __init__(self, conn: BackendConnection, token_provider: Optional[TokenProvider] = None):
        self._conn = conn
        self._token_provider = token_provider

    def _call(self, method: str, path: str, **kwargs):
        token = self._token_provider() if self._token_provider else None
        return call_backend(self._conn, method, path, token=token, **kwargs)

    def list_requests(self, *, status: Optional[str] = None, urgency: Optional[str] = None) -> LeaveRequestListResult:
        resp = self._call("GET", "/leave-requests", params=clean_params(status=status, urgency=urgency))
        payload = expect_success(resp, "Failed to load leave requests")
        items = [LeaveRequest.from_payload(row) for row in payload.get("data") or []]
        count = payload.get("count")
        return LeaveRequestListResult(items=items, count=int(count) if count is not None else len(items))

    def approve_request(self, *, request_id: RequestId, approved_by: str, comments: str) -> None:
        resp = self._call(
            "PUT",
            f"/leave-requests/{quote(str(request_id), safe='')}/approve",
            json={"approved_by": approved_by, "comments": comments},
        )
        expect_success(resp, "Failed to approve leave request")

    def reject_request(self, *, request_id: RequestId, approved_by: str, rejection_reason: str) -> None:
        resp = self._call(
            "PUT",
            f"/leave-requests/{quote(str(request_id), safe='')}/reject",
            json={"approved_by": approved_by, "rejection_reason": rejection_reason},
        )
        expect_success(resp, "Failed to reject leave request")
