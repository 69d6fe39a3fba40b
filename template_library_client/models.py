from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Union

import requests


SUCCESSFUL_STATUS_CODES = frozenset({200, 201, 202})


@dataclass
class SessionState:
    """Connection state shared by every call a client makes.

    ``bearer_token`` is set by a successful login and is never cleared here.
    """

    endpoint: str
    bearer_token: str | None = None
    cookie: str | None = None

    def auth_headers(self) -> dict[str, str]:
        headers: dict[str, str] = {}
        if self.bearer_token:
            headers["Authorization"] = f"Bearer {self.bearer_token}"
        if self.cookie:
            headers["cookie"] = self.cookie
        return headers


@dataclass(frozen=True)
class Success:
    status_code: int
    body: Any
    headers: Mapping[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class ServerError:
    status_code: int
    body: Any
    headers: Mapping[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return False


@dataclass(frozen=True)
class TransportError:
    cause: BaseException
    request: requests.PreparedRequest | None = None

    @property
    def ok(self) -> bool:
        return False


@dataclass(frozen=True)
class RequestTimeout:
    cause: BaseException
    timeout_seconds: float | None = None

    @property
    def ok(self) -> bool:
        return False


ApiOutcome = Union[Success, ServerError, TransportError, RequestTimeout]
