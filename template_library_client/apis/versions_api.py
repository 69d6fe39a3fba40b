from __future__ import annotations

import logging
import os
from typing import Sequence

from template_library_client.config import ClientSettings
from template_library_client.http import HttpClient
from template_library_client.models import ApiOutcome, Success


logger = logging.getLogger(__name__)


class VersionsApi:
    def __init__(self, settings: ClientSettings, http_client: HttpClient):
        self._settings = settings
        self._http_client = http_client

    def list(self, template_name: str) -> ApiOutcome:
        return self._http_client.get(f"/templates/{template_name}/versions")

    def download_files(
        self,
        template_name: str,
        version_name: str,
        destination: str | os.PathLike[str],
    ) -> ApiOutcome:
        """Fetch the version's file bundle and write it to ``destination``.

        Network failures are returned like every other call. A failure to
        write ``destination`` is not caught and reaches the caller as OSError.
        """
        outcome = self._http_client.get(
            f"/templates/{template_name}/versions/{version_name}/files",
            timeout=self._settings.download_timeout_seconds,
            binary=True,
        )
        if isinstance(outcome, Success):
            with open(destination, "wb") as output:
                output.write(outcome.body)
            logger.info("The file has been saved to %s", destination)
        return outcome

    def upload(
        self,
        template_name: str,
        version_name: str,
        template_file: str | os.PathLike[str],
        readme_file: str | os.PathLike[str] | None = None,
        implementation_files: Sequence[str | os.PathLike[str]] | None = None,
    ) -> ApiOutcome:
        files: list[tuple[str, str]] = []
        if readme_file:
            files.append(("readme_file", os.fspath(readme_file)))
        files.append(("template_file", os.fspath(template_file)))
        for implementation_file in implementation_files or ():
            files.append(("implementation_file", os.fspath(implementation_file)))

        return self._http_client.post_multipart(
            f"/templates/{template_name}/versions",
            fields={"version_name": version_name},
            files=files,
        )
