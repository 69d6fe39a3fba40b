from __future__ import annotations

import json
from unittest.mock import MagicMock

import pytest
import requests

from template_library_client.config import ClientSettings
from template_library_client.observers import RequestObserver
from template_library_client.services import build_client


ENDPOINT = "https://library.test/api"


def make_response(
    status_code: int = 200,
    json_body: object = None,
    content: bytes | None = None,
    content_type: str | None = None,
) -> requests.Response:
    response = requests.Response()
    response.status_code = status_code
    if content is None:
        content = json.dumps(json_body).encode("utf-8") if json_body is not None else b""
        content_type = content_type or "application/json"
    response._content = content
    response.encoding = "utf-8"
    if content_type:
        response.headers["Content-Type"] = content_type
    return response


@pytest.fixture
def session():
    mock_session = MagicMock(spec=requests.Session)
    mock_session.request.return_value = make_response(200, [])
    return mock_session


@pytest.fixture
def settings():
    return ClientSettings(endpoint=ENDPOINT)


@pytest.fixture
def client(settings, session):
    return build_client(settings, observer=RequestObserver(), session=session)


def last_call(session):
    """Return (method, url, kwargs) of the most recent session.request call."""
    args, kwargs = session.request.call_args
    return args[0], args[1], kwargs
