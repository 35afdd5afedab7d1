from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional, Union


@dataclass(frozen=True)
class StaffMember:
    staff_id: Union[int, str]
    name: str
    department: Optional[str] = None
    position: Optional[str] = None

    @classmethod
    def from_payload(cls, row: Mapping[str, Any]) -> "StaffMember":
        return cls(
            staff_id=row.get("staff_id"),
            name=row.get("name") or "",
            department=row.get("department_name") or row.get("department") or None,
            position=row.get("position_name") or row.get("position") or None,
        )
