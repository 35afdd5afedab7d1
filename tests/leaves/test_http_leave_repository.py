from __future__ import annotations

import pytest
import requests

from hr_portal.backend.connection import BackendConfig, BackendConnection
from hr_portal.core.enums import LeaveStatus
from hr_portal.core.exceptions import BackendError, NotFoundError, TransportError
from hr_portal.leaves.http_leave_repository import HttpLeaveRepository


class FakeResponse:
    def __init__(self, status_code, body=None, *, text=False):
        self.status_code = status_code
        self._body = body
        self._text = text

    def json(self):
        if self._text:
            raise ValueError("not json")
        return self._body


class FakeHttp:
    def __init__(self, *responses):
        self.responses = list(responses)
        self.sent = []

    def request(self, method, url, *, params=None, json=None, headers=None, timeout=None):
        self.sent.append({"method": method, "url": url, "params": params, "json": json, "headers": headers})
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


def _repo(*responses, token="tok-1"):
    http = FakeHttp(*responses)
    conn = BackendConnection(BackendConfig(base_url="http://backend.test/"), http=http)
    return HttpLeaveRepository(conn, token_provider=lambda: token), http


ROW = {
    "leave_id": 12,
    "staff_id": 7,
    "staff_name": "Mai Tran",
    "leave_type": "Annual",
    "start_date": "2024-03-10T00:00:00.000Z",
    "end_date": "2024-03-12T00:00:00.000Z",
    "reason": "Family trip",
    "status": "pending",
}


def test_list_omits_blank_filters_and_sends_token():
    repo, http = _repo(FakeResponse(200, {"success": True, "data": [ROW], "count": 1}))

    result = repo.list_leaves(status="pending", leave_type="")

    sent = http.sent[0]
    assert sent["url"] == "http://backend.test/api/leaves"
    assert sent["params"] == {"status": "pending"}
    assert sent["headers"]["Authorization"] == "Bearer tok-1"
    assert result.count == 1
    record = result.items[0]
    assert record.start_date == "2024-03-10"
    assert record.days == 3
    assert record.status == LeaveStatus.PENDING


def test_list_without_filters_sends_no_params():
    repo, http = _repo(FakeResponse(200, {"success": True, "data": []}))

    result = repo.list_leaves()

    assert http.sent[0]["params"] is None
    assert result.count == 0


def test_get_leave_accepts_single_object():
    repo, http = _repo(FakeResponse(200, {"success": True, "data": ROW}))

    records = repo.get_leave(leave_id="12")

    assert http.sent[0]["url"] == "http://backend.test/api/leaves/12"
    assert [r.leave_id for r in records] == [12]


def test_get_leave_404_raises_not_found():
    repo, _ = _repo(FakeResponse(404, text=True))

    with pytest.raises(NotFoundError):
        repo.get_leave(leave_id="99")


def test_unsuccessful_envelope_uses_backend_message():
    repo, _ = _repo(FakeResponse(400, {"success": False, "message": "Leave ID already exists"}))

    with pytest.raises(BackendError, match="Leave ID already exists"):
        repo.create_leave(fields={"leave_id": "12"})


def test_unsuccessful_envelope_without_message_uses_fallback():
    repo, _ = _repo(FakeResponse(200, {"success": False}))

    with pytest.raises(BackendError, match="Failed to delete leave application"):
        repo.delete_leave(leave_id=12)


def test_connection_failure_becomes_transport_error():
    repo, _ = _repo(requests.ConnectionError("refused"))

    with pytest.raises(TransportError, match="Unable to connect to server"):
        repo.list_leaves()


def test_non_json_error_body_becomes_transport_error():
    repo, _ = _repo(FakeResponse(502, text=True))

    with pytest.raises(TransportError):
        repo.list_leaves()


def test_approve_and_reject_send_decision_payloads():
    repo, http = _repo(FakeResponse(200, {"success": True}), FakeResponse(200, {"success": True}))

    repo.approve_leave(leave_id=12, approved_by="Hoa", comments="Approved via web interface")
    repo.reject_leave(leave_id=13, approved_by="Hoa", comments="Busy period")

    assert [(s["method"], s["url"]) for s in http.sent] == [
        ("PUT", "http://backend.test/api/leaves/12/approve"),
        ("PUT", "http://backend.test/api/leaves/13/reject"),
    ]
    assert http.sent[1]["json"] == {"approved_by": "Hoa", "comments": "Busy period"}


def test_no_token_means_no_authorization_header():
    repo, http = _repo(FakeResponse(200, {"success": True, "data": []}), token=None)

    repo.list_leaves()

    assert "Authorization" not in http.sent[0]["headers"]
