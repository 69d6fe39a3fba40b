from __future__ import annotations

import os
from typing import Sequence

import requests

from template_library_client.apis import TemplatesApi, TemplateTypesApi, VersionsApi
from template_library_client.auth import AuthManager
from template_library_client.config import ClientSettings
from template_library_client.http import HttpClient
from template_library_client.models import ApiOutcome, SessionState, Success
from template_library_client.observers import RequestObserver


class TemplateLibraryClient:
    def __init__(
        self,
        settings: ClientSettings,
        http_client: HttpClient,
        auth_manager: AuthManager,
        templates_api: TemplatesApi,
        template_types_api: TemplateTypesApi,
        versions_api: VersionsApi,
    ):
        self._settings = settings
        self._http_client = http_client
        self._auth_manager = auth_manager
        self._templates_api = templates_api
        self._template_types_api = template_types_api
        self._versions_api = versions_api

    @property
    def session_state(self) -> SessionState:
        return self._http_client.state

    @property
    def is_signed_in(self) -> bool:
        return self._auth_manager.is_signed_in

    @property
    def endpoint(self) -> str:
        return self._http_client.state.endpoint

    def configure_api_endpoint(self, endpoint: str) -> None:
        self._http_client.state.endpoint = endpoint.strip().rstrip("/")

    def set_cookie(self, cookie: str | None) -> None:
        self._auth_manager.set_cookie(cookie)

    def login(self, username: str, password: str) -> ApiOutcome:
        return self._auth_manager.login(username, password)

    def get_current_user(self) -> ApiOutcome:
        return self._auth_manager.get_current_user()

    def get_templates(self) -> ApiOutcome:
        return self._templates_api.list()

    def get_template_types(self) -> ApiOutcome:
        return self._template_types_api.list()

    def get_template_versions(self, template_name: str) -> ApiOutcome:
        return self._versions_api.list(template_name)

    def get_template_version_files(
        self,
        template_name: str,
        version_name: str,
        destination: str | os.PathLike[str],
    ) -> ApiOutcome:
        return self._versions_api.download_files(template_name, version_name, destination)

    def post_template(
        self,
        name: str,
        description: str,
        template_type_name: str,
        public_access: bool,
    ) -> ApiOutcome:
        return self._templates_api.create(name, description, template_type_name, public_access)

    def post_version(
        self,
        template_name: str,
        version_name: str,
        template_file: str | os.PathLike[str],
        readme_file: str | os.PathLike[str] | None = None,
        implementation_files: Sequence[str | os.PathLike[str]] | None = None,
    ) -> ApiOutcome:
        return self._versions_api.upload(
            template_name,
            version_name,
            template_file,
            readme_file=readme_file,
            implementation_files=implementation_files,
        )

    def get_csars_from_name(self, keyword: str) -> ApiOutcome:
        return self._templates_api.filter_csars(keyword)

    def is_csar_uploaded(self, package_name: str) -> bool:
        outcome = self.get_csars_from_name(package_name)
        if not isinstance(outcome, Success) or not isinstance(outcome.body, list):
            return False

        for template in outcome.body:
            if isinstance(template, dict) and template.get("name") == package_name:
                return True
        return False


def build_client(
    settings: ClientSettings | None = None,
    observer: RequestObserver | None = None,
    session: requests.Session | None = None,
) -> TemplateLibraryClient:
    settings = settings or ClientSettings()
    state = SessionState(endpoint=settings.endpoint.rstrip("/"), cookie=settings.cookie)
    http_client = HttpClient(state, observer=observer, session=session)
    return TemplateLibraryClient(
        settings=settings,
        http_client=http_client,
        auth_manager=AuthManager(settings, http_client),
        templates_api=TemplatesApi(http_client),
        template_types_api=TemplateTypesApi(http_client),
        versions_api=VersionsApi(settings, http_client),
    )
