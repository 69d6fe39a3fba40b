from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path


DEFAULT_ENDPOINT = "https://template-library-radon.xlab.si/api"


class ConfigurationError(ValueError):
    pass


@dataclass(frozen=True)
class ClientSettings:
    endpoint: str = DEFAULT_ENDPOINT
    cookie: str | None = None
    username: str | None = None
    password: str | None = None
    current_user_timeout_seconds: float = 5.0
    download_timeout_seconds: float = 10.0
    log_level: str = "INFO"

    @staticmethod
    def from_env() -> "ClientSettings":
        _load_dotenv_if_present()

        endpoint = os.getenv("TEMPLATE_LIBRARY_ENDPOINT", DEFAULT_ENDPOINT).strip().rstrip("/")
        cookie = os.getenv("TEMPLATE_LIBRARY_COOKIE", "").strip() or None
        username = os.getenv("TEMPLATE_LIBRARY_USERNAME", "").strip() or None
        password = os.getenv("TEMPLATE_LIBRARY_PASSWORD", "") or None

        current_user_timeout_seconds = _read_float("TEMPLATE_LIBRARY_CURRENT_USER_TIMEOUT_SECONDS", "5")
        download_timeout_seconds = _read_float("TEMPLATE_LIBRARY_DOWNLOAD_TIMEOUT_SECONDS", "10")
        log_level = os.getenv("TEMPLATE_LIBRARY_LOG_LEVEL", "INFO").strip().upper()

        settings = ClientSettings(
            endpoint=endpoint,
            cookie=cookie,
            username=username,
            password=password,
            current_user_timeout_seconds=current_user_timeout_seconds,
            download_timeout_seconds=download_timeout_seconds,
            log_level=log_level,
        )
        settings.validate()
        return settings

    def validate(self) -> None:
        if not self.endpoint.startswith(("http://", "https://")):
            raise ConfigurationError(
                "TEMPLATE_LIBRARY_ENDPOINT must be an http:// or https:// URL"
            )

        if self.current_user_timeout_seconds <= 0:
            raise ConfigurationError(
                "TEMPLATE_LIBRARY_CURRENT_USER_TIMEOUT_SECONDS must be greater than 0"
            )

        if self.download_timeout_seconds <= 0:
            raise ConfigurationError(
                "TEMPLATE_LIBRARY_DOWNLOAD_TIMEOUT_SECONDS must be greater than 0"
            )

        valid_log_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if self.log_level not in valid_log_levels:
            raise ConfigurationError(
                "TEMPLATE_LIBRARY_LOG_LEVEL must be one of: DEBUG, INFO, WARNING, ERROR, CRITICAL"
            )


def _read_float(name: str, default: str) -> float:
    raw_value = os.getenv(name, default).strip()
    try:
        return float(raw_value)
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be a number, got {raw_value!r}") from exc


def _load_dotenv_if_present(file_name: str = ".env") -> None:
    """Apply KEY=VALUE pairs from TEMPLATE_LIBRARY_ENV_FILE and ./.env.

    The explicit file is read first, so its values win over ./.env. Neither
    overrides a variable that is already set in the environment.
    """
    explicit = os.getenv("TEMPLATE_LIBRARY_ENV_FILE", "").strip()
    paths = [Path(explicit).expanduser()] if explicit else []
    paths.append(Path.cwd() / file_name)

    loaded: set[Path] = set()
    for path in paths:
        if not path.is_file() or path.resolve() in loaded:
            continue
        loaded.add(path.resolve())
        for key, value in _parse_env_lines(path.read_text(encoding="utf-8")):
            os.environ.setdefault(key, value)


def _parse_env_lines(text: str) -> list[tuple[str, str]]:
    pairs: list[tuple[str, str]] = []
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if line.startswith("export "):
            line = line[len("export "):].lstrip()
        key, sep, value = line.partition("=")
        if not sep or line.startswith("#") or not key.strip():
            continue
        pairs.append((key.strip(), value.strip().strip('"').strip("'")))
    return pairs
