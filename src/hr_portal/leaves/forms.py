"""Field-level checks for the leave record forms.

Both validators are pure: they map field names to messages and an empty
result means the form may be sent. Only the create form rejects start dates
in the past.
"""

from __future__ import annotations

from datetime import date
from typing import Dict, Mapping

from ..common.datetime_utils import is_iso_date
from ..common.validators import check_required, field_value
from ..core.enums import LeaveType

LEAVE_TYPE_VALUES = frozenset(t.value for t in LeaveType)


def _check_leave_type(form: Mapping[str, object], errors: Dict[str, str]) -> None:
    value = field_value(form, "leave_type")
    if value and value not in LEAVE_TYPE_VALUES:
        errors["leave_type"] = "Unknown leave type"


def _check_dates(form: Mapping[str, object], errors: Dict[str, str]) -> None:
    start = field_value(form, "start_date")
    end = field_value(form, "end_date")

    if start and not is_iso_date(start):
        errors["start_date"] = "Start date must be in YYYY-MM-DD format"
    if end and not is_iso_date(end):
        errors["end_date"] = "End date must be in YYYY-MM-DD format"
    if "start_date" in errors or "end_date" in errors or not start or not end:
        return

    # ISO dates sort lexically in calendar order
    if start > end:
        errors["end_date"] = "End date cannot be earlier than start date"


def validate_update_form(form: Mapping[str, object]) -> Dict[str, str]:
    errors: Dict[str, str] = {}
    check_required(form, errors, "leave_type", "Leave type is required")
    check_required(form, errors, "start_date", "Start date is required")
    check_required(form, errors, "end_date", "End date is required")
    check_required(form, errors, "reason", "Reason is required")
    _check_leave_type(form, errors)
    _check_dates(form, errors)
    return errors


def validate_create_form(form: Mapping[str, object], today: date) -> Dict[str, str]:
    errors: Dict[str, str] = {}
    check_required(form, errors, "leave_id", "Leave ID is required")
    check_required(form, errors, "staff_id", "Staff member is required")
    errors.update(validate_update_form(form))

    start = field_value(form, "start_date")
    if start and "start_date" not in errors and start < today.isoformat():
        errors["start_date"] = "Start date cannot be in the past"
    return errors
