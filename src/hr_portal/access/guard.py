from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ..core.constants import DASHBOARD_PATH, LOGIN_PATH, UNAUTHORIZED_PATH
from ..session.model import Session
from ..session.store import SessionStore, login_succeeded
from .policy import ACCESS_POLICY, AccessPolicy

logger = logging.getLogger(__name__)


class RouterState(str, Enum):
    LOADING = "loading"
    UNAUTHENTICATED = "unauthenticated"
    AUTHENTICATED = "authenticated"


class GuardOutcome(str, Enum):
    RENDER = "render"
    REDIRECT = "redirect"


@dataclass(frozen=True)
class GuardDecision:
    outcome: GuardOutcome
    location: Optional[str] = None

    @classmethod
    def render(cls) -> "GuardDecision":
        return cls(GuardOutcome.RENDER)

    @classmethod
    def redirect(cls, location: str) -> "GuardDecision":
        return cls(GuardOutcome.REDIRECT, location)

    @property
    def allowed(self) -> bool:
        return self.outcome == GuardOutcome.RENDER


class Router:
    """Navigation guard over an injected SessionStore.

    Starts in LOADING, moves to AUTHENTICATED or UNAUTHENTICATED when the
    store is first consulted, and again on every login broadcast from the
    same store.
    """

    def __init__(self, store: SessionStore, policy: AccessPolicy = ACCESS_POLICY):
        self._store = store
        self._policy = policy
        self._state = RouterState.LOADING
        self._session: Optional[Session] = None
        self._subscribed = False

    @property
    def state(self) -> RouterState:
        return self._state

    @property
    def session(self) -> Optional[Session]:
        return self._session

    def start(self) -> RouterState:
        if not self._subscribed:
            login_succeeded.connect(self._on_login, sender=self._store)
            self._subscribed = True
        return self._reload()

    def stop(self) -> None:
        if self._subscribed:
            login_succeeded.disconnect(self._on_login, sender=self._store)
            self._subscribed = False

    def _on_login(self, sender, **extra) -> None:
        logger.debug("Login broadcast received, reloading session")
        self._reload()

    def _reload(self) -> RouterState:
        self._session = self._store.load()
        self._state = RouterState.AUTHENTICATED if self._session else RouterState.UNAUTHENTICATED
        return self._state

    def logout(self) -> None:
        self._store.clear()
        self._session = None
        self._state = RouterState.UNAUTHENTICATED
        self._store.notify_logout()

    def default_route(self) -> str:
        return DASHBOARD_PATH if self._session else LOGIN_PATH

    def guard(self, path: str) -> GuardDecision:
        if self._state == RouterState.LOADING:
            self.start()

        if self._session is None:
            return GuardDecision.redirect(LOGIN_PATH)
        if self._session.user.role not in self._policy.permitted_roles(path):
            logger.info("Role %s denied for %s", self._session.user.role.value, path)
            return GuardDecision.redirect(UNAUTHORIZED_PATH)
        return GuardDecision.render()

    def resolve(self, path: str) -> GuardDecision:
        if self._state == RouterState.LOADING:
            self.start()

        if self._policy.is_public(path):
            if path.rstrip("/") == LOGIN_PATH and self._session is not None:
                return GuardDecision.redirect(self.default_route())
            return GuardDecision.render()

        if not self._policy.is_known(path):
            return GuardDecision.redirect(self.default_route())

        return self.guard(path)
