from __future__ import annotations

import logging
from operator import attrgetter
from typing import Optional

from ..common import datetime_utils
from ..core.constants import DEFAULT_APPROVER, DEFAULT_SUCCESS_BANNER_SECONDS
from ..core.enums import RequestStatus, StatusAction
from ..core.exceptions import DomainError
from ..resources.list_state import PendingConfirmation, ResourceListState
from .model import LeaveRequest
from .repository import LeaveRequestRepository, RequestId

logger = logging.getLogger(__name__)

_by_request_id = attrgetter("request_id")


class LeaveRequestService(ResourceListState[LeaveRequest]):
    """Use case: the leave request approval queue."""

    def __init__(
        self,
        requests: LeaveRequestRepository,
        *,
        approver: Optional[str] = None,
        success_banner_seconds: int = DEFAULT_SUCCESS_BANNER_SECONDS,
    ):
        super().__init__(success_banner_seconds=success_banner_seconds)
        self._requests = requests
        self._approver = approver or DEFAULT_APPROVER
        self.status_filter: Optional[str] = None
        self.urgency_filter: Optional[str] = None

    def load(self, *, status: Optional[str] = None, urgency: Optional[str] = None) -> bool:
        self.status_filter = (status or "").strip() or None
        self.urgency_filter = (urgency or "").strip() or None
        return self.refresh()

    def refresh(self) -> bool:
        ticket = self._begin_list_call()
        try:
            result = self._requests.list_requests(status=self.status_filter, urgency=self.urgency_filter)
            title = "Leave Requests"
            if self.status_filter:
                title += f" - {self.status_filter.capitalize()}"
            if self.urgency_filter:
                title += f" - {self.urgency_filter.capitalize()}"
            return self._apply_list(ticket, result.items, f"{title} (Total: {result.count} requests)")
        except DomainError as e:
            self._fail_list(ticket, str(e))
        finally:
            self._finish_list_call(ticket)
        return False

    def search(self, term: str) -> bool:
        term = (term or "").strip()
        if not term:
            return self.refresh()

        ticket = self._begin_list_call()
        matches = [r for r in self.items if r.matches(term)]
        applied = self._apply_list(ticket, matches, f'Search Results for "{term}" (Total: {len(matches)} requests)')
        self._finish_list_call(ticket)
        return applied

    def ask(self, action, request_id: RequestId) -> PendingConfirmation:
        action = StatusAction(action)
        if action == StatusAction.APPROVE:
            prompt = "Are you sure you want to approve this leave request?"
        elif action == StatusAction.REJECT:
            prompt = "Are you sure you want to reject this leave request?"
        else:
            raise ValueError(f"Unsupported status action: {action.value}")
        return self._open_confirmation(
            PendingConfirmation(action, str(request_id), prompt, needs_reason=action == StatusAction.REJECT)
        )

    def set_status(self, request_id: RequestId, action, *, confirmed: bool = False, comment: str = "") -> bool:
        action = StatusAction(action)
        if action not in (StatusAction.APPROVE, StatusAction.REJECT):
            raise ValueError(f"Unsupported status action: {action.value}")
        if action == StatusAction.REJECT and not (comment or "").strip():
            self.show_error("Please provide a reason for rejection")
            return False

        if not confirmed:
            self.ask(action, request_id)
            return False
        if action == StatusAction.APPROVE:
            return self._approve(request_id, comment)
        return self._reject(request_id, comment)

    def _execute(self, pending: PendingConfirmation, reason: str) -> bool:
        return self.set_status(pending.target_id, pending.action, confirmed=True, comment=reason)

    def _approve(self, request_id: RequestId, comment: str) -> bool:
        comment = (comment or "").strip()
        self.clear_error()
        self.loading = True
        try:
            self._requests.approve_request(
                request_id=request_id,
                approved_by=self._approver,
                comments=comment or "Approved via web interface",
            )
        except DomainError as e:
            self.show_error(str(e))
            return False
        finally:
            self.loading = False

        self._patch_local(
            _by_request_id,
            request_id,
            status=RequestStatus.APPROVED,
            approved_by=self._approver,
            approved_on=datetime_utils.now_local().isoformat(timespec="seconds"),
        )
        self.show_success("Leave request approved successfully")
        self.refresh()
        return True

    def _reject(self, request_id: RequestId, reason: str) -> bool:
        reason = reason.strip()
        self.clear_error()
        self.loading = True
        try:
            self._requests.reject_request(request_id=request_id, approved_by=self._approver, rejection_reason=reason)
        except DomainError as e:
            self.show_error(str(e))
            return False
        finally:
            self.loading = False

        self._patch_local(
            _by_request_id,
            request_id,
            status=RequestStatus.REJECTED,
            approved_by=self._approver,
            approved_on=datetime_utils.now_local().isoformat(timespec="seconds"),
            rejection_reason=reason,
        )
        self.show_success("Leave request rejected")
        self.refresh()
        return True
