from __future__ import annotations

from typing import Dict, Mapping, Optional, Protocol

from flask import has_request_context, session

from ..core.constants import TOKEN_KEY


class KeyValueStorage(Protocol):
    """String key/value storage persisted across page loads."""

    def get_item(self, key: str) -> Optional[str]:
        raise NotImplementedError

    def set_items(self, items: Mapping[str, str]) -> None:
        """Write all items in one step."""

        raise NotImplementedError

    def remove_items(self, *keys: str) -> None:
        raise NotImplementedError


class InMemoryStorage(KeyValueStorage):
    def __init__(self, initial: Optional[Mapping[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set_items(self, items: Mapping[str, str]) -> None:
        self._data = {**self._data, **items}

    def remove_items(self, *keys: str) -> None:
        for key in keys:
            self._data.pop(key, None)

    def snapshot(self) -> Dict[str, str]:
        return dict(self._data)


class FlaskSessionStorage(KeyValueStorage):
    """The signed Flask session cookie. Must be used inside a request."""

    def get_item(self, key: str) -> Optional[str]:
        value = session.get(key)
        return None if value is None else str(value)

    def set_items(self, items: Mapping[str, str]) -> None:
        session.update(items)
        session.modified = True

    def remove_items(self, *keys: str) -> None:
        for key in keys:
            session.pop(key, None)


def flask_session_token() -> Optional[str]:
    if not has_request_context():
        return None
    return FlaskSessionStorage().get_item(TOKEN_KEY)
