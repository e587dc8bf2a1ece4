"""Exception hierarchy for the key service client.

Every error raised by this package derives from KeyClientError, so callers can
catch the whole family with a single except clause.
"""

from __future__ import annotations


class KeyClientError(Exception):
    """Base exception for all key service client errors."""


class InvalidBaseURL(KeyClientError, ValueError):
    """Raised when the configured base URL cannot be parsed.

    Attributes:
        base_url: The string that failed to parse.
    """

    def __init__(self, message: str, base_url: str) -> None:
        super().__init__(message)
        self.base_url = base_url


class UnsupportedScheme(KeyClientError, ValueError):
    """Raised when a base URL uses a scheme other than http, https, hkp or hkps.

    Attributes:
        scheme: The offending scheme string, e.g. ``"ftp"``.
    """

    def __init__(self, scheme: str) -> None:
        super().__init__(f"unsupported protocol scheme {scheme!r}")
        self.scheme = scheme


class RequestConstructionError(KeyClientError):
    """Raised when an outgoing request cannot be assembled.

    Attributes:
        method: The HTTP method that was requested.
        url: The resolved URL, or None if resolution itself failed.
    """

    def __init__(self, message: str, method: str, url: str | None = None) -> None:
        super().__init__(message)
        self.method = method
        self.url = url


__all__ = [
    "InvalidBaseURL",
    "KeyClientError",
    "RequestConstructionError",
    "UnsupportedScheme",
]
