from __future__ import annotations

from dataclasses import replace

import pytest

from hr_portal.core.enums import RequestStatus, StatusAction
from hr_portal.core.exceptions import BackendError
from hr_portal.leave_requests.model import LeaveRequest
from hr_portal.leave_requests.repository import LeaveRequestListResult
from hr_portal.leave_requests.service import LeaveRequestService


def _request(request_id, staff_name="Mai Tran", status=RequestStatus.PENDING, urgency="high"):
    return LeaveRequest(
        request_id=request_id,
        staff_id=7,
        staff_name=staff_name,
        leave_type="Sick",
        start_date="2024-03-10",
        end_date="2024-03-10",
        days=1,
        reason="Fever",
        status=status,
        urgency=urgency,
    )


class FakeRequestsRepo:
    def __init__(self, rows=None):
        self.rows = list(rows or [])
        self.calls = []
        self.fail_with = None

    def list_requests(self, *, status=None, urgency=None):
        self.calls.append(("list", status, urgency))
        items = [
            r
            for r in self.rows
            if (not status or r.status.value.lower() == status.lower()) and (not urgency or r.urgency == urgency)
        ]
        return LeaveRequestListResult(items=items, count=len(items))

    def _decide(self, request_id, status, **extra):
        if self.fail_with is not None:
            raise self.fail_with
        self.rows = [
            replace(r, status=status) if str(r.request_id) == str(request_id) else r
            for r in self.rows
        ]

    def approve_request(self, *, request_id, approved_by, comments):
        self.calls.append(("approve", request_id, approved_by, comments))
        self._decide(request_id, RequestStatus.APPROVED)

    def reject_request(self, *, request_id, approved_by, rejection_reason):
        self.calls.append(("reject", request_id, approved_by, rejection_reason))
        self._decide(request_id, RequestStatus.REJECTED)


def test_load_keeps_filters_and_caption():
    repo = FakeRequestsRepo([_request(1), _request(2, urgency="low")])
    svc = LeaveRequestService(repo, approver="Hoa")

    svc.load(status="pending", urgency="high")

    assert repo.calls == [("list", "pending", "high")]
    assert [r.request_id for r in svc.items] == [1]
    assert svc.caption == "Leave Requests - Pending - High (Total: 1 requests)"


def test_load_without_filters_sends_none():
    repo = FakeRequestsRepo([_request(1)])
    svc = LeaveRequestService(repo)

    svc.load(status="", urgency=None)

    assert repo.calls == [("list", None, None)]
    assert svc.caption == "Leave Requests (Total: 1 requests)"


def test_search_matches_loaded_rows_only():
    repo = FakeRequestsRepo([_request(1, staff_name="An Le"), _request(2, staff_name="Binh Do")])
    svc = LeaveRequestService(repo)
    svc.load()
    repo.calls.clear()

    svc.search("binh")

    assert repo.calls == []
    assert [r.request_id for r in svc.items] == [2]


def test_blank_search_reloads_with_current_filters():
    repo = FakeRequestsRepo([_request(1)])
    svc = LeaveRequestService(repo)
    svc.load(status="pending")
    repo.calls.clear()

    svc.search("  ")

    assert repo.calls == [("list", "pending", None)]


def test_approve_needs_confirmation():
    repo = FakeRequestsRepo([_request(1)])
    svc = LeaveRequestService(repo, approver="Hoa")

    assert not svc.set_status(1, "approve")

    assert svc.confirmation.prompt == "Are you sure you want to approve this leave request?"
    assert [c for c in repo.calls if c[0] != "list"] == []


def test_confirmed_approve_refreshes_queue():
    repo = FakeRequestsRepo([_request(1), _request(2)])
    svc = LeaveRequestService(repo, approver="Hoa")
    svc.load(status="pending")
    svc.set_status(1, StatusAction.APPROVE)

    assert svc.confirm()

    assert ("approve", "1", "Hoa", "Approved via web interface") in repo.calls
    assert [r.request_id for r in svc.items] == [2]
    assert svc.success == "Leave request approved successfully"


def test_approve_with_comment_does_not_set_rejection_reason():
    repo = FakeRequestsRepo([_request(1)])
    svc = LeaveRequestService(repo, approver="Hoa")
    svc.load()
    real_list = repo.list_requests

    def list_then_fail(**filters):
        if any(c[0] == "approve" for c in repo.calls):
            raise BackendError("Failed to load leave requests", status_code=500)
        return real_list(**filters)

    repo.list_requests = list_then_fail

    assert svc.set_status(1, "approve", confirmed=True, comment="Enjoy the break")

    assert ("approve", 1, "Hoa", "Enjoy the break") in repo.calls
    approved = svc.items[0]
    assert approved.status == RequestStatus.APPROVED
    assert approved.approved_by == "Hoa"
    assert approved.rejection_reason is None


def test_reject_without_reason_shows_error_and_makes_no_call():
    repo = FakeRequestsRepo([_request(1)])
    svc = LeaveRequestService(repo)

    assert not svc.set_status(1, "reject", confirmed=True, comment="  ")

    assert svc.error == "Please provide a reason for rejection"
    assert [c for c in repo.calls if c[0] == "reject"] == []


def test_reject_with_reason_sends_it():
    repo = FakeRequestsRepo([_request(1)])
    svc = LeaveRequestService(repo, approver="Hoa")
    svc.load()

    assert svc.set_status(1, "reject", confirmed=True, comment="Short staffed")

    assert ("reject", 1, "Hoa", "Short staffed") in repo.calls
    assert svc.items[0].status == RequestStatus.REJECTED


def test_failed_decision_shows_error():
    repo = FakeRequestsRepo([_request(1)])
    repo.fail_with = BackendError("Failed to approve leave request", status_code=500)
    svc = LeaveRequestService(repo)
    svc.load()

    assert not svc.set_status(1, "approve", confirmed=True)

    assert svc.error == "Failed to approve leave request"
    assert svc.items[0].status == RequestStatus.PENDING


def test_delete_is_not_a_request_action():
    svc = LeaveRequestService(FakeRequestsRepo())
    with pytest.raises(ValueError):
        svc.set_status(1, StatusAction.DELETE)


def test_payload_parsing_normalizes_status_and_days():
    row = LeaveRequest.from_payload(
        {
            "request_id": 5,
            "staff_id": 7,
            "staff_name": "Mai Tran",
            "leave_type": "Annual",
            "start_date": "2024-01-01T00:00:00Z",
            "end_date": "2024-01-05",
            "reason": "Trip",
            "status": "pending",
        }
    )

    assert row.status == RequestStatus.PENDING
    assert row.start_date == "2024-01-01"
    assert row.days == 5
