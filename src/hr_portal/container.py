from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .auth.http_auth_repository import HttpAuthRepository
from .auth.repository import AuthRepository
from .auth.service import AuthService
from .backend.connection import BackendConfig, BackendConnection
from .core.constants import DEFAULT_SESSION_DAYS, DEFAULT_SUCCESS_BANNER_SECONDS
from .leave_requests.http_leave_request_repository import HttpLeaveRequestRepository
from .leave_requests.repository import LeaveRequestRepository
from .leave_requests.service import LeaveRequestService
from .leaves.http_leave_repository import HttpLeaveRepository
from .leaves.repository import LeaveRepository
from .leaves.service import LeaveRecordService
from .session.storage import flask_session_token
from .staff.http_staff_repository import HttpStaffRepository
from .staff.repository import StaffRepository


@dataclass(frozen=True)
class Container:
    auth_repo: AuthRepository
    leaves_repo: LeaveRepository
    leave_requests_repo: LeaveRequestRepository
    staff_repo: StaffRepository

    auth_service: AuthService

    success_banner_seconds: int = DEFAULT_SUCCESS_BANNER_SECONDS
    session_days: int = DEFAULT_SESSION_DAYS

    # List screens keep per-user state, so a fresh service is built per request
    def leave_record_service(self, *, approver: Optional[str] = None) -> LeaveRecordService:
        return LeaveRecordService(
            self.leaves_repo,
            self.staff_repo,
            approver=approver,
            success_banner_seconds=self.success_banner_seconds,
        )

    def leave_request_service(self, *, approver: Optional[str] = None) -> LeaveRequestService:
        return LeaveRequestService(
            self.leave_requests_repo,
            approver=approver,
            success_banner_seconds=self.success_banner_seconds,
        )


def build_container(
    *,
    backend_config: dict,
    success_banner_seconds: int = DEFAULT_SUCCESS_BANNER_SECONDS,
    session_days: int = DEFAULT_SESSION_DAYS,
) -> Container:
    config = BackendConfig(
        base_url=str(backend_config["base_url"]),
        timeout=backend_config.get("timeout"),
    )
    conn = BackendConnection.get_instance(config)

    auth_repo = HttpAuthRepository(conn)
    leaves_repo = HttpLeaveRepository(conn, token_provider=flask_session_token)
    leave_requests_repo = HttpLeaveRequestRepository(conn, token_provider=flask_session_token)
    staff_repo = HttpStaffRepository(conn, token_provider=flask_session_token)

    return Container(
        auth_repo=auth_repo,
        leaves_repo=leaves_repo,
        leave_requests_repo=leave_requests_repo,
        staff_repo=staff_repo,
        auth_service=AuthService(auth_repo),
        success_banner_seconds=int(success_banner_seconds),
        session_days=int(session_days),
    )
