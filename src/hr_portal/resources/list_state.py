from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from datetime import datetime, timedelta
from typing import Any, Callable, Dict, Generic, Iterable, List, Optional, TypeVar

from ..common import datetime_utils
from ..core.constants import DEFAULT_SUCCESS_BANNER_SECONDS
from ..core.enums import StatusAction

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class Banner:
    level: str
    message: str
    expires_at: Optional[datetime] = None

    def visible_at(self, now: datetime) -> bool:
        return self.expires_at is None or now < self.expires_at


@dataclass(frozen=True)
class PendingConfirmation:
    """An action waiting for the user's explicit go-ahead."""

    action: StatusAction
    target_id: str
    prompt: str
    needs_reason: bool = False


def same_id(left: Any, right: Any) -> bool:
    return str(left) == str(right)


class ResourceListState(Generic[T]):
    """Local list state shared by the list screens.

    Holds the rendered items, the caption, the loading flag, the two banners
    and the confirmation state. List-affecting calls take a ticket; only the
    latest ticket may replace the items.
    """

    def __init__(self, *, success_banner_seconds: int = DEFAULT_SUCCESS_BANNER_SECONDS):
        self.items: List[T] = []
        self.caption = ""
        self.loading = False
        self.field_errors: Dict[str, str] = {}
        self.confirmation: Optional[PendingConfirmation] = None
        self._error: Optional[Banner] = None
        self._success: Optional[Banner] = None
        self._success_seconds = success_banner_seconds
        self._ticket = 0

    # -------- Banners --------
    @property
    def error(self) -> Optional[str]:
        return self._error.message if self._error else None

    @property
    def success(self) -> Optional[str]:
        if self._success and self._success.visible_at(datetime_utils.now_local()):
            return self._success.message
        return None

    def clear_error(self) -> None:
        self._error = None

    def show_error(self, message: str) -> None:
        self._error = Banner("error", message)
        self._success = None
        self.loading = False

    def show_success(self, message: str) -> None:
        expires_at = datetime_utils.now_local() + timedelta(seconds=self._success_seconds)
        self._success = Banner("success", message, expires_at)
        self._error = None

    # -------- Request sequencing --------
    def _begin_list_call(self) -> int:
        self._ticket += 1
        self.loading = True
        self.clear_error()
        return self._ticket

    def _is_current(self, ticket: int) -> bool:
        return ticket == self._ticket

    def _apply_list(self, ticket: int, items: Iterable[T], caption: str) -> bool:
        if not self._is_current(ticket):
            logger.debug("Dropping stale list response (ticket=%s, latest=%s)", ticket, self._ticket)
            return False
        self.items = list(items)
        self.caption = caption
        return True

    def _fail_list(self, ticket: int, message: str) -> None:
        if self._is_current(ticket):
            self.show_error(message)

    def _finish_list_call(self, ticket: int) -> None:
        if self._is_current(ticket):
            self.loading = False

    # -------- Confirmation --------
    def _open_confirmation(self, pending: PendingConfirmation) -> PendingConfirmation:
        self.confirmation = pending
        return pending

    def cancel(self) -> None:
        self.confirmation = None

    def confirm(self, reason: str = "") -> bool:
        pending = self.confirmation
        self.confirmation = None
        if pending is None:
            return False
        return self._execute(pending, reason)

    def _execute(self, pending: PendingConfirmation, reason: str) -> bool:
        raise NotImplementedError

    # -------- Local patches --------
    def _find_local(self, key: Callable[[T], Any], target_id: Any) -> Optional[T]:
        for item in self.items:
            if same_id(key(item), target_id):
                return item
        return None

    def _patch_local(self, key: Callable[[T], Any], target_id: Any, **changes: Any) -> None:
        self.items = [replace(item, **changes) if same_id(key(item), target_id) else item for item in self.items]

    def _drop_local(self, key: Callable[[T], Any], target_id: Any) -> None:
        self.items = [item for item in self.items if not same_id(key(item), target_id)]
