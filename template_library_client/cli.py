from __future__ import annotations

import argparse
import json
import sys
from dataclasses import replace
from typing import Callable

from template_library_client.config import ClientSettings, ConfigurationError
from template_library_client.http import ApiHttpError, raise_for_outcome
from template_library_client.logging_utils import configure_logging
from template_library_client.models import ApiOutcome
from template_library_client.services import TemplateLibraryClient, build_client


def _print_json(obj: object) -> None:
    print(json.dumps(obj, indent=2, sort_keys=True, default=str))


def _report(outcome: ApiOutcome) -> int:
    try:
        success = raise_for_outcome(outcome)
    except ApiHttpError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    if isinstance(success.body, bytes):
        _print_json({"status_code": success.status_code, "bytes": len(success.body)})
    else:
        _print_json(success.body)
    return 0


def _login_if_configured(client: TemplateLibraryClient, settings: ClientSettings) -> int:
    if not settings.username or not settings.password:
        return 0
    try:
        raise_for_outcome(client.login(settings.username, settings.password))
    except ApiHttpError as exc:
        print(f"error: login failed: {exc}", file=sys.stderr)
        return 2
    return 0


def cmd_login(client: TemplateLibraryClient, args: argparse.Namespace) -> int:
    if not client.is_signed_in:
        print("error: username and password are required", file=sys.stderr)
        return 2
    _print_json({"signed_in": True, "endpoint": client.endpoint})
    return 0


def cmd_whoami(client: TemplateLibraryClient, args: argparse.Namespace) -> int:
    return _report(client.get_current_user())


def cmd_templates(client: TemplateLibraryClient, args: argparse.Namespace) -> int:
    return _report(client.get_templates())


def cmd_template_types(client: TemplateLibraryClient, args: argparse.Namespace) -> int:
    return _report(client.get_template_types())


def cmd_versions(client: TemplateLibraryClient, args: argparse.Namespace) -> int:
    return _report(client.get_template_versions(args.template))


def cmd_download(client: TemplateLibraryClient, args: argparse.Namespace) -> int:
    """Download a version's files to a local path."""
    return _report(client.get_template_version_files(args.template, args.version, args.destination))


def cmd_create_template(client: TemplateLibraryClient, args: argparse.Namespace) -> int:
    return _report(
        client.post_template(args.name, args.description, args.template_type, args.public)
    )


def cmd_upload_version(client: TemplateLibraryClient, args: argparse.Namespace) -> int:
    """Upload a new version with its template, readme and implementation files."""
    return _report(
        client.post_version(
            args.template,
            args.version,
            args.template_file,
            readme_file=args.readme_file,
            implementation_files=args.implementation_file,
        )
    )


def cmd_find_csars(client: TemplateLibraryClient, args: argparse.Namespace) -> int:
    if args.exact:
        uploaded = client.is_csar_uploaded(args.keyword)
        _print_json({"name": args.keyword, "uploaded": uploaded})
        return 0
    return _report(client.get_csars_from_name(args.keyword))


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="template-library-client",
        description="Command-line client for the template library REST API",
    )
    p.add_argument("--endpoint", default=None, help="Base API URL (overrides TEMPLATE_LIBRARY_ENDPOINT)")
    p.add_argument("--cookie", default=None, help="Cookie header sent with every request")
    p.add_argument("--username", default=None, help="Log in with this user before the command")
    p.add_argument("--password", default=None, help="Password for --username")
    p.add_argument("--log-level", default=None, help="DEBUG, INFO, WARNING or ERROR")

    sub = p.add_subparsers(dest="command", required=True)

    lp = sub.add_parser("login", help="Check that the configured credentials are accepted")
    lp.set_defaults(func=cmd_login)

    wp = sub.add_parser("whoami", help="Show the current user")
    wp.set_defaults(func=cmd_whoami)

    tp = sub.add_parser("templates", help="List templates")
    tp.set_defaults(func=cmd_templates)

    ttp = sub.add_parser("template-types", help="List template types")
    ttp.set_defaults(func=cmd_template_types)

    vp = sub.add_parser("versions", help="List versions of a template")
    vp.add_argument("template")
    vp.set_defaults(func=cmd_versions)

    dp = sub.add_parser("download", help="Download the files of a template version")
    dp.add_argument("template")
    dp.add_argument("version")
    dp.add_argument("destination")
    dp.set_defaults(func=cmd_download)

    cp = sub.add_parser("create-template", help="Create a new template")
    cp.add_argument("name")
    cp.add_argument("--description", default="")
    cp.add_argument("--type", dest="template_type", required=True, help="Template type name")
    cp.add_argument("--public", action="store_true", help="Make the template publicly accessible")
    cp.set_defaults(func=cmd_create_template)

    up = sub.add_parser("upload-version", help="Upload a new template version")
    up.add_argument("template")
    up.add_argument("version")
    up.add_argument("--template-file", required=True)
    up.add_argument("--readme-file", default=None)
    up.add_argument("--implementation-file", action="append", default=[])
    up.set_defaults(func=cmd_upload_version)

    fp = sub.add_parser("find-csars", help="Search CSAR templates by name")
    fp.add_argument("keyword")
    fp.add_argument("--exact", action="store_true", help="Only report whether this exact name exists")
    fp.set_defaults(func=cmd_find_csars)

    return p


def main(argv: list[str] | None = None, client_factory: Callable[..., TemplateLibraryClient] = build_client) -> int:
    args = build_parser().parse_args(argv)

    try:
        settings = ClientSettings.from_env()
        overrides = {
            key: value
            for key, value in {
                "endpoint": args.endpoint.rstrip("/") if args.endpoint else None,
                "cookie": args.cookie,
                "username": args.username,
                "password": args.password,
                "log_level": args.log_level.upper() if args.log_level else None,
            }.items()
            if value is not None
        }
        settings = replace(settings, **overrides)
        settings.validate()
    except ConfigurationError as exc:
        print(f"error: configuration: {exc}", file=sys.stderr)
        return 1

    configure_logging(settings.log_level)
    client = client_factory(settings)

    rc = _login_if_configured(client, settings)
    if rc:
        return rc
    return args.func(client, args)
