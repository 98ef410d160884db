"""
HTTP transport — the one seam between the fetch layer and the network.

Anything with a ``get(url, params)`` method returning a TransportResponse
can stand in for the real thing (tests use a canned fake).
"""

from __future__ import annotations
import json
import logging
from dataclasses import dataclass
from typing import Optional, Protocol

import requests

from config import HTTP_TIMEOUT

log = logging.getLogger(__name__)

USER_AGENT = "weather-now/0.1 (+https://open-meteo.com)"


class TransportError(Exception):
    """A request failed: non-2xx status or the call never completed."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class MalformedResponseError(TransportError):
    """The upstream answered but the body could not be understood."""


@dataclass(frozen=True)
class TransportResponse:
    status_code: int
    body: str

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    def json(self):
        try:
            return json.loads(self.body)
        except ValueError as e:
            raise MalformedResponseError(f"Invalid JSON body: {e}", self.status_code) from e


class Transport(Protocol):
    def get(self, url: str, params: dict) -> TransportResponse:
        ...


class RequestsTransport:
    """Production transport backed by a requests.Session."""

    def __init__(self, session: Optional[requests.Session] = None, timeout: float = HTTP_TIMEOUT):
        self.session = session or requests.Session()
        self.session.headers["User-Agent"] = USER_AGENT
        self.timeout = timeout

    def get(self, url: str, params: dict) -> TransportResponse:
        try:
            resp = self.session.get(url, params=params, timeout=self.timeout)
        except requests.RequestException as e:
            log.warning(f"GET {url} failed: {e}")
            raise TransportError(f"Request to {url} failed: {e}") from e
        return TransportResponse(status_code=resp.status_code, body=resp.text)
