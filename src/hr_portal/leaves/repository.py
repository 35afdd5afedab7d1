from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Optional, Protocol, Sequence, Union

from .model import LeaveRecord

LeaveId = Union[int, str]


@dataclass(frozen=True)
class LeaveListResult:
    items: Sequence[LeaveRecord]
    count: int


class LeaveRepository(Protocol):
    def list_leaves(self, *, status: Optional[str] = None, leave_type: Optional[str] = None) -> LeaveListResult:
        """Blank filters are omitted from the query."""

        raise NotImplementedError

    def get_leave(self, *, leave_id: LeaveId) -> Sequence[LeaveRecord]:
        """Zero or one record; NotFoundError on 404."""

        raise NotImplementedError

    def create_leave(self, *, fields: Mapping[str, str]) -> LeaveRecord:
        raise NotImplementedError

    def update_leave(self, *, leave_id: LeaveId, fields: Mapping[str, str]) -> None:
        raise NotImplementedError

    def approve_leave(self, *, leave_id: LeaveId, approved_by: str, comments: str) -> None:
        raise NotImplementedError

    def reject_leave(self, *, leave_id: LeaveId, approved_by: str, comments: str) -> None:
        raise NotImplementedError

    def delete_leave(self, *, leave_id: LeaveId) -> None:
        raise NotImplementedError
