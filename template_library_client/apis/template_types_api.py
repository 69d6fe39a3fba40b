from __future__ import annotations

from template_library_client.http import HttpClient
from template_library_client.models import ApiOutcome


class TemplateTypesApi:
    def __init__(self, http_client: HttpClient):
        self._http_client = http_client

    def list(self) -> ApiOutcome:
        return self._http_client.get("/template_types")
