from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Roles used for route and action permissions."""

    ADMIN = "Admin"
    HR = "HR"
    MANAGER = "Manager"
    EMPLOYEE = "Employee"


class LeaveType(str, Enum):
    ANNUAL = "Annual"
    SICK = "Sick"
    PERSONAL = "Personal"
    MATERNITY = "Maternity"
    PATERNITY = "Paternity"
    BEREAVEMENT = "Bereavement"
    OTHER = "Other"


class LeaveStatus(str, Enum):
    """Status of a leave record as stored by the backend."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class RequestStatus(str, Enum):
    """Status of an item in the leave request approval queue."""

    PENDING = "Pending"
    APPROVED = "Approved"
    REJECTED = "Rejected"


class Urgency(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class StatusAction(str, Enum):
    APPROVE = "approve"
    REJECT = "reject"
    DELETE = "delete"
