from __future__ import annotations

import logging
from typing import Mapping

from template_library_client.models import (
    ApiOutcome,
    RequestTimeout,
    ServerError,
    Success,
    TransportError,
)


logger = logging.getLogger(__name__)

_SENSITIVE_HEADERS = {"authorization", "cookie"}


class RequestObserver:
    """Hook notified around every call. The base class does nothing."""

    def on_request(self, method: str, url: str, headers: Mapping[str, str]) -> None:
        return None

    def on_outcome(self, method: str, url: str, outcome: ApiOutcome) -> None:
        return None


class LoggingObserver(RequestObserver):
    def __init__(self, log: logging.Logger | None = None):
        self._log = log or logger

    def on_request(self, method: str, url: str, headers: Mapping[str, str]) -> None:
        self._log.info("Starting Request %s %s", method, url)
        self._log.debug("Request headers: %s", mask_headers(headers))

    def on_outcome(self, method: str, url: str, outcome: ApiOutcome) -> None:
        if isinstance(outcome, Success):
            self._log.info("Response: %s %s -> %s", method, url, outcome.status_code)
        elif isinstance(outcome, ServerError):
            self._log.warning("Response: %s %s -> %s", method, url, outcome.status_code)
        elif isinstance(outcome, RequestTimeout):
            self._log.warning(
                "Request timed out after %ss: %s %s", outcome.timeout_seconds, method, url
            )
        elif isinstance(outcome, TransportError):
            self._log.error("No response for %s %s: %s", method, url, outcome.cause)


def mask_headers(headers: Mapping[str, str]) -> dict[str, str]:
    return {
        name: _mask_secret(value) if name.lower() in _SENSITIVE_HEADERS else value
        for name, value in headers.items()
    }


def _mask_secret(value: str) -> str:
    value = str(value)
    if value.startswith("Bearer "):
        return "Bearer " + _mask_secret(value[len("Bearer "):])
    if len(value) > 10:
        return f"{value[:4]}...{value[-4:]}"
    return "****"
