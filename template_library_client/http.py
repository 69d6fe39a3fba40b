from __future__ import annotations

from contextlib import ExitStack
import os
from typing import Any, Iterable, Mapping

import requests

from template_library_client.models import (
    SUCCESSFUL_STATUS_CODES,
    ApiOutcome,
    RequestTimeout,
    ServerError,
    SessionState,
    Success,
    TransportError,
)
from template_library_client.observers import LoggingObserver, RequestObserver


class ApiHttpError(RuntimeError):
    def __init__(self, status_code: int, message: str):
        super().__init__(message)
        self.status_code = status_code


class HttpClient:
    """Performs exactly one request per call and reports it as an ``ApiOutcome``.

    Failures on the network path come back as values, never as exceptions.
    """

    def __init__(
        self,
        state: SessionState,
        observer: RequestObserver | None = None,
        session: requests.Session | None = None,
    ):
        self._state = state
        self._observer = observer or LoggingObserver()
        self._session = session or requests.Session()

    @property
    def state(self) -> SessionState:
        return self._state

    def url_for(self, path: str) -> str:
        return f"{self._state.endpoint}{path}"

    def build_headers(
        self,
        extra: Mapping[str, str] | None = None,
        authenticated: bool = True,
    ) -> dict[str, str]:
        headers: dict[str, str] = dict(extra or {})
        if authenticated:
            headers.update(self._state.auth_headers())
        return headers

    def get(
        self,
        path: str,
        timeout: float | None = None,
        binary: bool = False,
    ) -> ApiOutcome:
        return self.send(
            "GET",
            path,
            headers=self.build_headers(),
            timeout=timeout,
            binary=binary,
        )

    def post_json(
        self,
        path: str,
        payload: dict[str, Any],
        extra_headers: Mapping[str, str] | None = None,
        authenticated: bool = True,
    ) -> ApiOutcome:
        headers = {"Content-Type": "application/json"}
        headers.update(extra_headers or {})
        return self.send(
            "POST",
            path,
            headers=self.build_headers(headers, authenticated=authenticated),
            json=payload,
        )

    def post_multipart(
        self,
        path: str,
        fields: Mapping[str, str],
        files: Iterable[tuple[str, str]],
    ) -> ApiOutcome:
        # requests writes the multipart Content-Type with its boundary itself.
        with ExitStack() as stack:
            parts: list[tuple[str, tuple[str, Any]]] = []
            try:
                for field_name, file_path in files:
                    handle = stack.enter_context(open(file_path, "rb"))
                    parts.append((field_name, (os.path.basename(file_path), handle)))
            except OSError as exc:
                outcome = TransportError(cause=exc)
                self._observer.on_outcome("POST", self.url_for(path), outcome)
                return outcome

            return self.send(
                "POST",
                path,
                headers=self.build_headers(),
                data=dict(fields),
                files=parts,
            )

    def send(
        self,
        method: str,
        path: str,
        headers: dict[str, str],
        timeout: float | None = None,
        binary: bool = False,
        **kwargs: Any,
    ) -> ApiOutcome:
        url = self.url_for(path)
        self._observer.on_request(method, url, headers)

        try:
            response = self._session.request(
                method,
                url,
                headers=headers,
                timeout=timeout,
                **kwargs,
            )
        except requests.exceptions.Timeout as exc:
            outcome: ApiOutcome = RequestTimeout(cause=exc, timeout_seconds=timeout)
        except requests.exceptions.RequestException as exc:
            outcome = TransportError(cause=exc, request=exc.request)
        except Exception as exc:
            # e.g. UnicodeEncodeError from http.client for a non latin-1 header
            outcome = TransportError(cause=exc, request=getattr(exc, "request", None))
        else:
            outcome = self._to_outcome(response, binary)

        self._observer.on_outcome(method, url, outcome)
        return outcome

    @classmethod
    def _to_outcome(cls, response: requests.Response, binary: bool) -> ApiOutcome:
        headers = dict(response.headers)
        if response.status_code in SUCCESSFUL_STATUS_CODES:
            body = response.content if binary else cls._decode_body(response)
            return Success(status_code=response.status_code, body=body, headers=headers)
        return ServerError(
            status_code=response.status_code,
            body=cls._decode_body(response),
            headers=headers,
        )

    @staticmethod
    def _decode_body(response: requests.Response) -> Any:
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            return response.text


def raise_for_outcome(outcome: ApiOutcome) -> Success:
    if isinstance(outcome, Success):
        return outcome

    if isinstance(outcome, ServerError):
        detail = outcome.body if isinstance(outcome.body, str) else repr(outcome.body)
        raise ApiHttpError(
            status_code=outcome.status_code,
            message=f"HTTP {outcome.status_code}: {detail[:500]}",
        )

    if isinstance(outcome, RequestTimeout):
        raise ApiHttpError(
            status_code=0,
            message=f"Request timed out after {outcome.timeout_seconds}s",
        )

    raise ApiHttpError(status_code=0, message=f"Request failed: {outcome.cause}")
