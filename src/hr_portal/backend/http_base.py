from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Mapping, Optional

import requests

from ..core.constants import CONNECTION_ERROR_MESSAGE
from ..core.exceptions import BackendError, TransportError
from .connection import BackendConnection

logger = logging.getLogger(__name__)

TokenProvider = Callable[[], Optional[str]]


@dataclass(frozen=True)
class BackendResponse:
    status_code: int
    payload: Dict[str, Any] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    @property
    def succeeded(self) -> bool:
        return self.ok and bool(self.payload.get("success"))

    @property
    def message(self) -> Optional[str]:
        message = self.payload.get("message")
        return str(message) if message else None


def call_backend(
    conn: BackendConnection,
    method: str,
    path: str,
    *,
    params: Optional[Mapping[str, str]] = None,
    json: Any = None,
    token: Optional[str] = None,
) -> BackendResponse:
    """Send one request and decode its JSON envelope.

    Network failures and undecodable bodies become TransportError. A 404 with
    a non-JSON body is returned with an empty payload so callers can map it.
    """

    try:
        resp = conn.send(method, path, params=params, json=json, token=token)
    except requests.RequestException as exc:
        logger.warning("%s %s failed: %s", method, path, exc)
        raise TransportError(CONNECTION_ERROR_MESSAGE) from exc

    try:
        payload = resp.json()
    except ValueError as exc:
        if resp.status_code == 404:
            payload = {}
        else:
            logger.warning("%s %s returned a non-JSON body (status=%s)", method, path, resp.status_code)
            raise TransportError(CONNECTION_ERROR_MESSAGE) from exc

    if not isinstance(payload, dict):
        logger.warning("%s %s returned an unexpected body type %s", method, path, type(payload).__name__)
        raise TransportError(CONNECTION_ERROR_MESSAGE)

    logger.debug("%s %s -> %s", method, path, resp.status_code)
    return BackendResponse(status_code=resp.status_code, payload=payload)


def expect_success(response: BackendResponse, fallback_message: str) -> Dict[str, Any]:
    if not response.succeeded:
        raise BackendError(response.message or fallback_message, status_code=response.status_code)
    return response.payload


def clean_params(**values: Optional[str]) -> Dict[str, str]:
    """Drop empty filter values instead of sending them as empty strings."""
    return {key: str(value).strip() for key, value in values.items() if value is not None and str(value).strip()}
