from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Protocol, Sequence, Union

from .model import LeaveRequest

RequestId = Union[int, str]


@dataclass(frozen=True)
class LeaveRequestListResult:
    items: Sequence[LeaveRequest]
    count: int


class LeaveRequestRepository(Protocol):
    def list_requests(self, *, status: Optional[str] = None, urgency: Optional[str] = None) -> LeaveRequestListResult:
        raise NotImplementedError

    def approve_request(self, *, request_id: RequestId, approved_by: str, comments: str) -> None:
        raise NotImplementedError

    def reject_request(self, *, request_id: RequestId, approved_by: str, rejection_reason: str) -> None:
        raise NotImplementedError
