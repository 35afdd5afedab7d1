from __future__ import annotations

from datetime import date

from hr_portal.leaves.forms import validate_create_form, validate_update_form
from hr_portal.leaves.model import leave_days

TODAY = date(2024, 3, 1)


def _form(**overrides):
    form = {
        "leave_id": "101",
        "staff_id": "7",
        "leave_type": "Annual",
        "start_date": "2024-03-10",
        "end_date": "2024-03-12",
        "reason": "Family trip",
        "comments": "",
    }
    form.update(overrides)
    return form


def test_valid_create_form_has_no_errors():
    assert validate_create_form(_form(), TODAY) == {}


def test_missing_reason_is_reported_on_reason():
    errors = validate_create_form(_form(reason="   "), TODAY)
    assert errors == {"reason": "Reason is required"}


def test_create_requires_leave_id_and_staff():
    errors = validate_create_form(_form(leave_id="", staff_id=""), TODAY)
    assert errors["leave_id"] == "Leave ID is required"
    assert errors["staff_id"] == "Staff member is required"


def test_end_before_start_is_reported_on_end_date():
    errors = validate_update_form(_form(start_date="2024-03-10", end_date="2024-03-05"))
    assert errors == {"end_date": "End date cannot be earlier than start date"}


def test_past_start_date_only_blocks_create():
    form = _form(start_date="2024-02-01", end_date="2024-02-02")

    assert validate_create_form(form, TODAY) == {"start_date": "Start date cannot be in the past"}
    assert validate_update_form(form) == {}


def test_start_today_is_allowed_on_create():
    assert validate_create_form(_form(start_date="2024-03-01", end_date="2024-03-01"), TODAY) == {}


def test_badly_formatted_dates_are_reported():
    errors = validate_update_form(_form(start_date="10/03/2024", end_date="2024-3-12"))
    assert errors["start_date"] == "Start date must be in YYYY-MM-DD format"
    assert errors["end_date"] == "End date must be in YYYY-MM-DD format"


def test_unknown_leave_type_is_reported():
    assert validate_update_form(_form(leave_type="Holiday")) == {"leave_type": "Unknown leave type"}


def test_all_required_fields_reported_at_once():
    errors = validate_update_form({})
    assert set(errors) == {"leave_type", "start_date", "end_date", "reason"}


def test_leave_days_is_inclusive():
    assert leave_days("2024-01-01", "2024-01-01") == 1
    assert leave_days("2024-01-01", "2024-01-05") == 5


def test_leave_days_is_zero_for_unparseable_dates():
    assert leave_days("", "2024-01-05") == 0


def test_unpadded_dates_get_format_error_not_order_check():
    errors = validate_update_form(_form(start_date="2024-10-01", end_date="2024-3-5"))
    assert errors == {"end_date": "End date must be in YYYY-MM-DD format"}


def test_unpadded_start_date_skips_past_check_on_create():
    errors = validate_create_form(_form(start_date="2024-3-5", end_date="2024-03-12"), TODAY)
    assert errors == {"start_date": "Start date must be in YYYY-MM-DD format"}
