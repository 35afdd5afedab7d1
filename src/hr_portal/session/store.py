from __future__ import annotations

import json
import logging
from typing import Optional

from blinker import Namespace

from ..core.constants import REMEMBERED_STAFF_ID_KEY, TOKEN_KEY, USER_INFO_KEY
from .model import Session, SessionUser
from .storage import KeyValueStorage

logger = logging.getLogger(__name__)

portal_signals = Namespace()

# Sender is the SessionStore that changed
login_succeeded = portal_signals.signal("login-succeeded")
logged_out = portal_signals.signal("logged-out")


class SessionStore:
    """Authenticated identity kept in client-side storage.

    A session is either fully present (token and user) or absent; anything in
    between is purged on the next load.
    """

    def __init__(self, storage: KeyValueStorage):
        self._storage = storage

    def load(self) -> Optional[Session]:
        token = self._storage.get_item(TOKEN_KEY)
        raw_user = self._storage.get_item(USER_INFO_KEY)
        if not token and not raw_user:
            return None

        try:
            if not token or not raw_user:
                raise ValueError("incomplete session data")
            user = SessionUser.from_dict(json.loads(raw_user))
        except (TypeError, ValueError, KeyError) as exc:
            logger.warning("Discarding stored session: %s", exc)
            self._purge()
            return None

        return Session(token=token, user=user)

    def save(self, session: Session) -> None:
        if not session.token:
            raise ValueError("session token is required")
        self._storage.set_items(
            {
                TOKEN_KEY: session.token,
                USER_INFO_KEY: json.dumps(session.user.to_dict()),
            }
        )

    def clear(self) -> None:
        self._storage.remove_items(TOKEN_KEY, USER_INFO_KEY, REMEMBERED_STAFF_ID_KEY)

    def remembered_staff_id(self) -> Optional[str]:
        return self._storage.get_item(REMEMBERED_STAFF_ID_KEY)

    def remember_staff_id(self, staff_id: str) -> None:
        self._storage.set_items({REMEMBERED_STAFF_ID_KEY: str(staff_id)})

    def forget_staff_id(self) -> None:
        self._storage.remove_items(REMEMBERED_STAFF_ID_KEY)

    def notify_login(self) -> None:
        login_succeeded.send(self)

    def notify_logout(self) -> None:
        logged_out.send(self)

    def _purge(self) -> None:
        self._storage.remove_items(TOKEN_KEY, USER_INFO_KEY)
