from .config import ClientSettings, ConfigurationError
from .http import ApiHttpError, HttpClient, raise_for_outcome
from .models import (
    ApiOutcome,
    RequestTimeout,
    ServerError,
    SessionState,
    Success,
    TransportError,
)
from .observers import LoggingObserver, RequestObserver
from .services import TemplateLibraryClient, build_client

__all__ = [
    "ApiHttpError",
    "ApiOutcome",
    "ClientSettings",
    "ConfigurationError",
    "HttpClient",
    "LoggingObserver",
    "RequestObserver",
    "RequestTimeout",
    "ServerError",
    "SessionState",
    "Success",
    "TemplateLibraryClient",
    "TransportError",
    "build_client",
    "raise_for_outcome",
]
