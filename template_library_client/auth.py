from __future__ import annotations

import logging

from template_library_client.config import ClientSettings
from template_library_client.http import HttpClient
from template_library_client.models import ApiOutcome, Success


logger = logging.getLogger(__name__)


class AuthManager:
    def __init__(self, settings: ClientSettings, http_client: HttpClient):
        self._settings = settings
        self._http_client = http_client

    @property
    def is_signed_in(self) -> bool:
        return bool(self._http_client.state.bearer_token)

    def login(self, username: str, password: str) -> ApiOutcome:
        """POST /auth/login and keep the returned token for later calls.

        A failed login leaves whatever token was held before in place.
        """
        outcome = self._http_client.post_json(
            "/auth/login",
            {"username": username, "password": password},
            authenticated=False,
        )
        if isinstance(outcome, Success):
            token = outcome.body.get("token") if isinstance(outcome.body, dict) else None
            if token:
                self._http_client.state.bearer_token = str(token)
            else:
                logger.warning("Login succeeded but the response carried no token")
        return outcome

    def get_current_user(self) -> ApiOutcome:
        return self._http_client.get(
            "/users/current",
            timeout=self._settings.current_user_timeout_seconds,
        )

    def set_cookie(self, cookie: str | None) -> None:
        self._http_client.state.cookie = cookie or None
