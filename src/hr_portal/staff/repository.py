from __future__ import annotations

from typing import Protocol, Sequence

from .model import StaffMember


class StaffRepository(Protocol):
    def list_staff(self) -> Sequence[StaffMember]:
        raise NotImplementedError
