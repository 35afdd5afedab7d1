"""Static route → role permission table."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, FrozenSet, Iterable, Optional

from ..core.constants import DASHBOARD_PATH, LOGIN_PATH, LOGOUT_PATH, UNAUTHORIZED_PATH
from ..core.enums import Role

ALL_ROLES: FrozenSet[Role] = frozenset(Role)

PUBLIC_PATHS: FrozenSet[str] = frozenset({LOGIN_PATH, LOGOUT_PATH, UNAUTHORIZED_PATH})
PUBLIC_PREFIXES = ("/static/",)


@dataclass(frozen=True)
class RoutePermission:
    path: str
    allowed_roles: FrozenSet[Role]


ROUTE_PERMISSIONS = (
    RoutePermission(DASHBOARD_PATH, ALL_ROLES),
    RoutePermission("/hr", frozenset({Role.ADMIN, Role.HR})),
    RoutePermission("/hr/leave-records", frozenset({Role.ADMIN, Role.HR, Role.MANAGER})),
    RoutePermission("/hr/leave-requests", frozenset({Role.ADMIN, Role.HR, Role.MANAGER})),
    RoutePermission("/staff", frozenset({Role.EMPLOYEE, Role.MANAGER})),
)

LANDING_PATHS: Dict[Role, str] = {
    Role.ADMIN: "/hr",
    Role.HR: "/hr",
    Role.MANAGER: "/hr/leave-requests",
    Role.EMPLOYEE: "/staff",
}


def _normalize(path: str) -> str:
    return "/" + (path or "").strip("/")


class AccessPolicy:
    def __init__(self, entries: Iterable[RoutePermission]):
        self._table: Dict[str, FrozenSet[Role]] = {_normalize(e.path): frozenset(e.allowed_roles) for e in entries}

    def _entry_for(self, path: str) -> Optional[str]:
        """Exact entry, else the nearest ancestor entry. '/' is never an ancestor."""
        current = _normalize(path)
        if current in self._table:
            return current
        while current.count("/") > 1:
            current = current.rsplit("/", 1)[0]
            if current in self._table:
                return current
        return None

    def permitted_roles(self, path: str) -> FrozenSet[Role]:
        key = self._entry_for(path)
        return self._table[key] if key else frozenset()

    def is_known(self, path: str) -> bool:
        return self._entry_for(path) is not None

    @staticmethod
    def is_public(path: str) -> bool:
        return _normalize(path) in PUBLIC_PATHS or any(path.startswith(p) for p in PUBLIC_PREFIXES)


ACCESS_POLICY = AccessPolicy(ROUTE_PERMISSIONS)


def permitted_roles(path: str) -> FrozenSet[Role]:
    return ACCESS_POLICY.permitted_roles(path)


def landing_path(role: Role) -> str:
    return LANDING_PATHS.get(role, DASHBOARD_PATH)
