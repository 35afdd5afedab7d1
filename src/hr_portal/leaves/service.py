from __future__ import annotations

import logging
import re
from operator import attrgetter
from typing import List, Mapping, Optional

from ..common import datetime_utils
from ..core.constants import DEFAULT_APPROVER, DEFAULT_SUCCESS_BANNER_SECONDS
from ..core.enums import LeaveStatus, StatusAction
from ..core.exceptions import DomainError, NotFoundError
from ..resources.list_state import PendingConfirmation, ResourceListState
from ..staff.model import StaffMember
from ..staff.repository import StaffRepository
from .forms import validate_create_form, validate_update_form
from .model import CREATE_FIELDS, EDITABLE_FIELDS, LeaveRecord, leave_days
from .repository import LeaveId, LeaveRepository

logger = logging.getLogger(__name__)

_by_leave_id = attrgetter("leave_id")
_NUMERIC = re.compile(r"[0-9]+")

APPROVE_PROMPT = "Are you sure you want to approve this leave application?"
REJECT_PROMPT = "Please provide a reason for rejection:"


def _form_fields(form: Mapping[str, object], names) -> dict:
    return {name: str(form.get(name) or "").strip() for name in names}


class LeaveRecordService(ResourceListState[LeaveRecord]):
    """Use case: the leave record screen.

    Reads replace the local list, mutations patch it in place. Numeric search
    asks the backend for one record while text search only filters what is
    already loaded.
    """

    def __init__(
        self,
        leaves: LeaveRepository,
        staff: Optional[StaffRepository] = None,
        *,
        approver: Optional[str] = None,
        success_banner_seconds: int = DEFAULT_SUCCESS_BANNER_SECONDS,
    ):
        super().__init__(success_banner_seconds=success_banner_seconds)
        self._leaves = leaves
        self._staff = staff
        self._approver = approver or DEFAULT_APPROVER
        self.staff: List[StaffMember] = []

    # -------- Reads --------
    def load_all(self) -> bool:
        ticket = self._begin_list_call()
        try:
            result = self._leaves.list_leaves()
            return self._apply_list(ticket, result.items, f"All Leave Records (Total: {result.count} records)")
        except DomainError as e:
            self._fail_list(ticket, str(e))
        finally:
            self._finish_list_call(ticket)
        return False

    def search(self, term: str) -> bool:
        term = (term or "").strip()
        if not term:
            self.show_error("Please enter search keywords")
            return False

        ticket = self._begin_list_call()
        try:
            if _NUMERIC.fullmatch(term):
                records = self._leaves.get_leave(leave_id=term)
            else:
                needle = term.lower()
                records = [r for r in self.items if needle in r.staff_name.lower() or needle in r.reason.lower()]
            return self._apply_list(ticket, records, f'Search Results for "{term}" (Total: {len(records)} records)')
        except NotFoundError:
            self._fail_list(ticket, f'Leave "{term}" not found')
        except DomainError as e:
            self._fail_list(ticket, str(e))
        finally:
            self._finish_list_call(ticket)
        return False

    def filter(self, *, status: Optional[str] = None, leave_type: Optional[str] = None) -> bool:
        ticket = self._begin_list_call()
        try:
            result = self._leaves.list_leaves(status=status, leave_type=leave_type)
            parts = []
            if status:
                parts.append(f"Status: {status}")
            if leave_type:
                parts.append(f"Type: {leave_type}")
            label = " ".join(["Filtered Results", *parts])
            return self._apply_list(ticket, result.items, f"{label} (Total: {result.count} records)")
        except DomainError as e:
            self._fail_list(ticket, str(e))
        finally:
            self._finish_list_call(ticket)
        return False

    def load_staff(self) -> None:
        if self._staff is None:
            return
        try:
            self.staff = list(self._staff.list_staff())
        except DomainError as e:
            logger.error("Failed to load staff: %s", e)

    def find(self, leave_id: LeaveId) -> Optional[LeaveRecord]:
        """Local record first, then the backend."""
        record = self._find_local(_by_leave_id, leave_id)
        if record is not None:
            return record
        try:
            records = self._leaves.get_leave(leave_id=leave_id)
        except DomainError as e:
            logger.info("Leave %s lookup failed: %s", leave_id, e)
            return None
        return records[0] if records else None

    # -------- Mutations --------
    def create(self, form: Mapping[str, object]) -> bool:
        self.clear_error()
        fields = _form_fields(form, CREATE_FIELDS)
        self.field_errors = validate_create_form(fields, datetime_utils.today_local())
        if self.field_errors:
            return False

        try:
            record = self._leaves.create_leave(fields=fields)
        except DomainError as e:
            self.show_error(str(e))
            return False

        self.items = [*self.items, record]
        self.show_success("New leave application submitted successfully")
        # The refetch is authoritative and replaces the provisional entry
        self.load_all()
        return True

    def update(self, leave_id: LeaveId, form: Mapping[str, object]) -> bool:
        self.clear_error()
        fields = _form_fields(form, EDITABLE_FIELDS)
        self.field_errors = validate_update_form(fields)
        if self.field_errors:
            return False

        try:
            self._leaves.update_leave(leave_id=leave_id, fields=fields)
        except DomainError as e:
            self.show_error(str(e))
            return False

        self._patch_local(
            _by_leave_id,
            leave_id,
            **fields,
            days=leave_days(fields["start_date"], fields["end_date"]),
        )
        self.show_success("Leave record updated successfully")
        return True

    def set_status(self, leave_id: LeaveId, action, *, confirmed: bool = False, reason: str = "") -> bool:
        action = StatusAction(action)
        if action not in (StatusAction.APPROVE, StatusAction.REJECT):
            raise ValueError(f"Unsupported status action: {action.value}")

        if not confirmed:
            self.ask(action, leave_id)
            return False
        if action == StatusAction.APPROVE:
            return self._approve(leave_id)
        return self._reject(leave_id, reason)

    def remove(self, leave_id: LeaveId, *, confirmed: bool = False) -> bool:
        if not confirmed:
            self.ask(StatusAction.DELETE, leave_id)
            return False
        return self._remove(leave_id)

    def ask(self, action, leave_id: LeaveId) -> PendingConfirmation:
        action = StatusAction(action)
        if action == StatusAction.APPROVE:
            return self._open_confirmation(PendingConfirmation(action, str(leave_id), APPROVE_PROMPT))
        if action == StatusAction.REJECT:
            return self._open_confirmation(PendingConfirmation(action, str(leave_id), REJECT_PROMPT, needs_reason=True))

        record = self.find(leave_id)
        leave_type = record.leave_type if record else "selected"
        staff_name = record.staff_name if record else f"leave {leave_id}"
        prompt = (
            f"Are you sure you want to delete this {leave_type} leave application for {staff_name}? "
            "This action cannot be undone."
        )
        return self._open_confirmation(PendingConfirmation(action, str(leave_id), prompt))

    def _execute(self, pending: PendingConfirmation, reason: str) -> bool:
        if pending.action == StatusAction.APPROVE:
            return self._approve(pending.target_id)
        if pending.action == StatusAction.REJECT:
            return self._reject(pending.target_id, reason)
        return self._remove(pending.target_id)

    def _approve(self, leave_id: LeaveId) -> bool:
        self.clear_error()
        self.loading = True
        try:
            self._leaves.approve_leave(
                leave_id=leave_id,
                approved_by=self._approver,
                comments="Approved via web interface",
            )
        except DomainError as e:
            self.show_error(str(e))
            return False
        finally:
            self.loading = False

        self._patch_local(
            _by_leave_id,
            leave_id,
            status=LeaveStatus.APPROVED,
            approved_by=self._approver,
            approved_date=datetime_utils.today_local().isoformat(),
        )
        self.show_success("Leave application approved successfully")
        return True

    def _reject(self, leave_id: LeaveId, reason: str) -> bool:
        reason = (reason or "").strip()
        if not reason:
            logger.debug("Reject of leave %s aborted: no reason given", leave_id)
            return False

        self.clear_error()
        self.loading = True
        try:
            self._leaves.reject_leave(leave_id=leave_id, approved_by=self._approver, comments=reason)
        except DomainError as e:
            self.show_error(str(e))
            return False
        finally:
            self.loading = False

        self._patch_local(
            _by_leave_id,
            leave_id,
            status=LeaveStatus.REJECTED,
            approved_by=self._approver,
            approved_date=datetime_utils.today_local().isoformat(),
            comments=reason,
        )
        self.show_success("Leave application rejected")
        return True

    def _remove(self, leave_id: LeaveId) -> bool:
        self.clear_error()
        self.loading = True
        try:
            self._leaves.delete_leave(leave_id=leave_id)
        except DomainError as e:
            self.show_error(str(e))
            return False
        finally:
            self.loading = False

        self._drop_local(_by_leave_id, leave_id)
        self.show_success("Leave application deleted successfully")
        return True
