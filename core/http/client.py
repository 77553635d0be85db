"""
HTTP Client

requests-based transport for the HTTP ledger backend. Connection
failures and timeouts become HttpError; non-2xx responses are returned
as-is so the ledger can map status codes to its own errors.
"""

from __future__ import annotations

import json as jsonlib
import logging
from dataclasses import dataclass
from typing import Any, Optional

import requests


logger = logging.getLogger(__name__)


@dataclass
class HttpResponse:
    """Status and body of an anchor service response."""
    status_code: int
    content: bytes

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    @property
    def text(self) -> str:
        return self.content.decode("utf-8", errors="replace")

    def json(self) -> Any:
        return jsonlib.loads(self.content)


class HttpError(Exception):
    """The anchor service could not be reached."""


class HttpClient:
    """
    Session-backed client with default headers and a request timeout.

    Usage:
        with HttpClient(timeout=10.0, default_headers={"Authorization": "Bearer ..."}) as http:
            response = http.get("https://ledger.example.com/anchors/0x..")
    """

    def __init__(
        self,
        *,
        timeout: float = 30.0,
        default_headers: Optional[dict[str, str]] = None,
    ) -> None:
        self.timeout = timeout
        self.default_headers = default_headers or {}
        self._session: Optional[requests.Session] = None

    def _get_session(self) -> requests.Session:
        if self._session is None:
            self._session = requests.Session()
            self._session.headers.update(self.default_headers)
        return self._session

    def request(self, method: str, url: str, *, json: Optional[Any] = None) -> HttpResponse:
        """
        Send one request with the client's timeout.

        Raises:
            HttpError: On connection errors and timeouts (not on non-2xx)
        """
        logger.debug(f"{method} {url}")
        try:
            response = self._get_session().request(
                method,
                url,
                json=json,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise HttpError(f"{method} {url} failed: {e}") from e

        return HttpResponse(status_code=response.status_code, content=response.content)

    def get(self, url: str) -> HttpResponse:
        return self.request("GET", url)

    def post(self, url: str, *, json: Optional[Any] = None) -> HttpResponse:
        return self.request("POST", url, json=json)

    def close(self) -> None:
        if self._session is not None:
            self._session.close()
            self._session = None

    def __enter__(self) -> "HttpClient":
        return self

    def __exit__(self, *args) -> None:
        self.close()
