from __future__ import annotations

from unittest.mock import patch

import pytest
import requests

from template_library_client.models import RequestTimeout, ServerError, Success, TransportError

from tests.conftest import ENDPOINT, last_call, make_response


def test_get_template_versions(client, session):
    session.request.return_value = make_response(200, [{"version_name": "1.0.0"}])

    outcome = client.get_template_versions("web-app")

    method, url, _ = last_call(session)
    assert (method, url) == ("GET", f"{ENDPOINT}/templates/web-app/versions")
    assert outcome.body == [{"version_name": "1.0.0"}]


class TestDownload:
    def test_writes_exact_bytes(self, client, session, tmp_path):
        payload = bytes(range(256)) * 4
        session.request.return_value = make_response(200, content=payload, content_type="application/zip")
        destination = tmp_path / "bundle.zip"

        outcome = client.get_template_version_files("web-app", "1.0.0", destination)

        method, url, kwargs = last_call(session)
        assert (method, url) == ("GET", f"{ENDPOINT}/templates/web-app/versions/1.0.0/files")
        assert kwargs["timeout"] == 10.0
        assert isinstance(outcome, Success)
        assert outcome.body == payload
        assert destination.read_bytes() == payload

    def test_server_error_writes_nothing(self, client, session, tmp_path):
        session.request.return_value = make_response(404, {"message": "no such version"})
        destination = tmp_path / "bundle.zip"

        outcome = client.get_template_version_files("web-app", "9.9.9", destination)

        assert isinstance(outcome, ServerError)
        assert outcome.body == {"message": "no such version"}
        assert not destination.exists()

    def test_timeout_is_returned(self, client, session, tmp_path):
        session.request.side_effect = requests.exceptions.ConnectTimeout("slow")

        outcome = client.get_template_version_files("web-app", "1.0.0", tmp_path / "bundle.zip")

        assert isinstance(outcome, RequestTimeout)
        assert outcome.timeout_seconds == 10.0

    def test_write_failure_propagates(self, client, session, tmp_path):
        session.request.return_value = make_response(200, content=b"data", content_type="application/zip")
        destination = tmp_path / "missing-dir" / "bundle.zip"

        with pytest.raises(OSError):
            client.get_template_version_files("web-app", "1.0.0", destination)


class TestUpload:
    @pytest.fixture
    def files(self, tmp_path):
        template = tmp_path / "service.tosca"
        template.write_text("tosca_definitions_version: tosca_simple_yaml_1_3\n")
        readme = tmp_path / "README.md"
        readme.write_text("# Service\n")
        impl_a = tmp_path / "create.yml"
        impl_a.write_text("- hosts: all\n")
        impl_b = tmp_path / "delete.yml"
        impl_b.write_text("- hosts: all\n")
        return template, readme, impl_a, impl_b

    def test_multipart_parts_without_readme(self, client, session, files):
        template, _, impl_a, impl_b = files
        client.session_state.bearer_token = "abc"
        session.request.return_value = make_response(201, {"version_name": "1.0.0"})

        outcome = client.post_version("web-app", "1.0.0", template, implementation_files=[impl_a, impl_b])

        method, url, kwargs = last_call(session)
        assert (method, url) == ("POST", f"{ENDPOINT}/templates/web-app/versions")
        assert kwargs["data"] == {"version_name": "1.0.0"}
        names = [name for name, _ in kwargs["files"]]
        assert names.count("template_file") == 1
        assert names.count("implementation_file") == 2
        assert "readme_file" not in names
        assert [part[0] for _, part in kwargs["files"]] == ["service.tosca", "create.yml", "delete.yml"]
        assert kwargs["headers"] == {"Authorization": "Bearer abc"}
        assert isinstance(outcome, Success)

    def test_readme_part_when_given(self, client, session, files):
        template, readme, _, _ = files

        client.post_version("web-app", "1.0.0", template, readme_file=readme)

        _, _, kwargs = last_call(session)
        assert [name for name, _ in kwargs["files"]] == ["readme_file", "template_file"]

    def test_file_handles_closed_after_success(self, client, session, files):
        template, readme, impl_a, _ = files

        client.post_version("web-app", "1.0.0", template, readme, [impl_a])

        _, _, kwargs = last_call(session)
        assert all(part[1].closed for _, part in kwargs["files"])

    def test_file_handles_closed_after_failure(self, client, session, files):
        template, _, _, _ = files
        session.request.side_effect = requests.exceptions.ConnectionError("reset")

        client.post_version("web-app", "1.0.0", template)

        _, _, kwargs = last_call(session)
        assert all(part[1].closed for _, part in kwargs["files"])

    def test_missing_template_file_is_returned_without_request(self, client, session, tmp_path):
        outcome = client.post_version("web-app", "1.0.0", tmp_path / "missing.tosca")

        assert isinstance(outcome, TransportError)
        assert isinstance(outcome.cause, FileNotFoundError)
        assert not outcome.ok
        session.request.assert_not_called()

    def test_missing_implementation_file_closes_opened_handles(self, client, session, files, tmp_path):
        template, readme, _, _ = files
        opened = []
        real_open = open

        def tracking_open(path, mode="r", *args, **kwargs):
            handle = real_open(path, mode, *args, **kwargs)
            opened.append(handle)
            return handle

        with patch("template_library_client.http.open", side_effect=tracking_open, create=True):
            outcome = client.post_version(
                "web-app", "1.0.0", template, readme, [tmp_path / "missing.yml"]
            )

        assert isinstance(outcome, TransportError)
        assert len(opened) == 2
        assert all(handle.closed for handle in opened)
        session.request.assert_not_called()
