from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional, Union

from ..common.datetime_utils import normalize_iso_date
from ..core.enums import RequestStatus
from ..leaves.model import leave_days


@dataclass(frozen=True)
class LeaveRequest:
    request_id: Union[int, str]
    staff_id: Union[int, str]
    staff_name: str
    leave_type: str
    start_date: str
    end_date: str
    days: int
    reason: str
    status: RequestStatus
    urgency: Optional[str] = None
    submitted_on: Optional[str] = None
    approved_by: Optional[str] = None
    approved_on: Optional[str] = None
    rejection_reason: Optional[str] = None

    @classmethod
    def from_payload(cls, row: Mapping[str, Any]) -> "LeaveRequest":
        start = normalize_iso_date(row.get("start_date"))
        end = normalize_iso_date(row.get("end_date"))
        try:
            status = RequestStatus(str(row.get("status") or RequestStatus.PENDING.value).capitalize())
        except ValueError:
            status = RequestStatus.PENDING

        days = row.get("total_days", row.get("days"))
        try:
            days = int(days) if days is not None else leave_days(start, end)
        except (TypeError, ValueError):
            days = leave_days(start, end)

        return cls(
            request_id=row.get("request_id"),
            staff_id=row.get("staff_id"),
            staff_name=row.get("staff_name") or "",
            leave_type=row.get("leave_type") or "",
            start_date=start,
            end_date=end,
            days=days,
            reason=row.get("reason") or "",
            status=status,
            urgency=(row.get("urgency") or None),
            submitted_on=row.get("submitted_on") or row.get("created_at") or None,
            approved_by=row.get("approved_by") or None,
            approved_on=row.get("approved_on") or None,
            rejection_reason=row.get("rejection_reason") or None,
        )

    def matches(self, needle: str) -> bool:
        """Case-insensitive match on name, type, reason or id."""
        needle = needle.lower()
        return (
            needle in self.staff_name.lower()
            or needle in self.leave_type.lower()
            or needle in self.reason.lower()
            or needle in str(self.request_id)
        )
