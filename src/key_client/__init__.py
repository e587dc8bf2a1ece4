"""Request builder for key service (HKP and HTTP) endpoints."""

from key_client.client import (
    DEFAULT_CONFIG,
    Client,
    Config,
    PageDetails,
    default_http_client,
    new_client,
)
from key_client.exceptions import (
    InvalidBaseURL,
    KeyClientError,
    RequestConstructionError,
    UnsupportedScheme,
)
from key_client.urls import DEFAULT_BASE_URL, HKP_DEFAULT_PORT, normalize_url

__all__ = [
    "Client",
    "Config",
    "DEFAULT_BASE_URL",
    "DEFAULT_CONFIG",
    "HKP_DEFAULT_PORT",
    "InvalidBaseURL",
    "KeyClientError",
    "PageDetails",
    "RequestConstructionError",
    "UnsupportedScheme",
    "default_http_client",
    "new_client",
    "normalize_url",
]
