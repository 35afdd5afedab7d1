from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

import requests

from ..core.constants import API_PREFIX


@dataclass
class BackendConfig:
    base_url: str
    timeout: Optional[float] = None


class BackendConnection:
    """Singleton-like HTTP session for the REST backend.

    Note: One pooled requests.Session per process; calls carry their own token.
    """

    _instance: Optional["BackendConnection"] = None

    def __init__(self, config: BackendConfig, http: Optional[requests.Session] = None):
        self._config = config
        self._http = http or requests.Session()

    @classmethod
    def get_instance(cls, config: BackendConfig) -> "BackendConnection":
        if cls._instance is None:
            cls._instance = BackendConnection(config)
        return cls._instance

    def url(self, path: str) -> str:
        return f"{self._config.base_url.rstrip('/')}{API_PREFIX}{path}"

    def send(
        self,
        method: str,
        path: str,
        *,
        params: Optional[Mapping[str, str]] = None,
        json: Any = None,
        token: Optional[str] = None,
    ) -> requests.Response:
        headers = {"Accept": "application/json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return self._http.request(
            method,
            self.url(path),
            params=dict(params) if params else None,
            json=json,
            headers=headers,
            timeout=self._config.timeout,
        )
