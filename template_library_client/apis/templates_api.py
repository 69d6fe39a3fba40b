from __future__ import annotations

from typing import Any

from template_library_client.http import HttpClient
from template_library_client.models import ApiOutcome


CSAR_TYPE_NAME = "csar"


class TemplatesApi:
    def __init__(self, http_client: HttpClient):
        self._http_client = http_client

    def list(self) -> ApiOutcome:
        return self._http_client.get("/templates")

    def create(
        self,
        name: str,
        description: str,
        template_type_name: str,
        public_access: bool,
    ) -> ApiOutcome:
        payload: dict[str, Any] = {
            "name": name,
            "description": description,
            "template_type_name": template_type_name,
            "public_access": public_access,
        }
        return self._http_client.post_json(
            "/templates",
            payload,
            extra_headers={"Accept": "text/plain"},
        )

    def filter_csars(self, keyword: str) -> ApiOutcome:
        # The keyword goes into the URL as given, without percent-encoding.
        path = (
            f"/templates/filter?template_keyword_filter={keyword}"
            f"&template_type_name_filter={CSAR_TYPE_NAME}"
        )
        return self._http_client.get(path)
