from __future__ import annotations

import logging

from ..common.validators import is_blank
from ..core.exceptions import ValidationError
from ..session.model import Session
from ..session.store import SessionStore
from .repository import AuthRepository

logger = logging.getLogger(__name__)


class AuthService:
    """Use case: sign in against the backend and persist the session."""

    def __init__(self, auth: AuthRepository):
        self._auth = auth

    def login(self, store: SessionStore, *, staff_id: str, password: str, remember: bool = False) -> Session:
        if is_blank(staff_id) or is_blank(password):
            raise ValidationError("Please enter staff ID and password")

        staff_id = staff_id.strip()
        session = self._auth.login(staff_id=staff_id, password=password)

        store.save(session)
        if remember:
            store.remember_staff_id(staff_id)
        else:
            store.forget_staff_id()

        logger.info("Staff %s signed in as %s", staff_id, session.user.role.value)
        store.notify_login()
        return session
