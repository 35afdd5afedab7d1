from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Union

from ..common.datetime_utils import inclusive_days, is_iso_date, normalize_iso_date
from ..core.enums import LeaveStatus

EDITABLE_FIELDS = ("leave_type", "start_date", "end_date", "reason", "comments")
CREATE_FIELDS = ("leave_id", "staff_id", "leave_type", "start_date", "end_date", "reason", "comments")


def leave_days(start_date: str, end_date: str) -> int:
    """Inclusive day count, 0 when either date is not ISO formatted."""
    if not (is_iso_date(start_date) and is_iso_date(end_date)):
        return 0
    return inclusive_days(start_date, end_date)


@dataclass(frozen=True)
class LeaveRecord:
    leave_id: Union[int, str]
    staff_id: Union[int, str]
    staff_name: str
    leave_type: str
    start_date: str
    end_date: str
    days: int
    reason: str
    status: LeaveStatus
    comments: str = ""
    applied_date: Optional[str] = None
    approved_by: Optional[str] = None
    approved_date: Optional[str] = None

    @classmethod
    def from_payload(cls, row: Mapping[str, Any]) -> "LeaveRecord":
        start = normalize_iso_date(row.get("start_date"))
        end = normalize_iso_date(row.get("end_date"))
        days = row.get("days")
        try:
            days = int(days) if days is not None else leave_days(start, end)
        except (TypeError, ValueError):
            days = leave_days(start, end)

        try:
            status = LeaveStatus(str(row.get("status") or LeaveStatus.PENDING.value).lower())
        except ValueError:
            status = LeaveStatus.PENDING

        return cls(
            leave_id=row.get("leave_id"),
            staff_id=row.get("staff_id"),
            staff_name=row.get("staff_name") or "",
            leave_type=row.get("leave_type") or "",
            start_date=start,
            end_date=end,
            days=days,
            reason=row.get("reason") or "",
            status=status,
            comments=row.get("comments") or "",
            applied_date=normalize_iso_date(row.get("applied_date")) or None,
            approved_by=row.get("approved_by") or None,
            approved_date=normalize_iso_date(row.get("approved_date")) or None,
        )

    def edit_form(self) -> Dict[str, str]:
        return {
            "leave_type": self.leave_type,
            "start_date": self.start_date,
            "end_date": self.end_date,
            "reason": self.reason,
            "comments": self.comments,
        }
