from __future__ import annotations

import logging
import re
from collections.abc import Collection
from dataclasses import dataclass
from functools import lru_cache
from typing import IO, AsyncIterable, Iterable, Union
from urllib.parse import quote

import httpx

from key_client.exceptions import InvalidBaseURL, RequestConstructionError
from key_client.urls import DEFAULT_BASE_URL, normalize_url

HTTPClient = Union[httpx.Client, httpx.AsyncClient]
RequestBody = Union[bytes, bytearray, memoryview, str, IO[bytes], Iterable[bytes], AsyncIterable[bytes]]

# RFC 7230 token characters.
_METHOD_TOKEN = re.compile(r"[!#$%&'*+\-.^_`|~0-9A-Za-z]+")

# Everything outside these, "?" and "#" included, is percent-escaped in paths.
_PATH_SAFE = "/:@!$&'()*+,;=%~"
# Printable ASCII except "#".
_QUERY_SAFE = "".join(chr(c) for c in range(0x21, 0x7F) if chr(c) != "#")

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class Config:
    """Client configuration. Empty or None fields fall back to defaults."""

    base_url: str | None = None
    auth_token: str | None = None
    user_agent: str | None = None
    http_client: HTTPClient | None = None


DEFAULT_CONFIG = Config()


@dataclass
class PageDetails:
    """Pagination details carried through to higher level callers.

    ``size`` is the requested number of results per page; the server may ignore
    it or return fewer. ``token`` is empty for the first and last page.
    """

    size: int = 0
    token: str = ""


@lru_cache(maxsize=1)
def default_http_client() -> httpx.Client:
    """Process-wide client used when a Config does not supply one."""

    return httpx.Client()


@dataclass(frozen=True)
class Client:
    """Validated key service client.

    ``base_url`` always has the http or https scheme and a host.
    """

    base_url: httpx.URL
    auth_token: str | None
    user_agent: str | None
    http_client: HTTPClient

    def new_request(
        self,
        method: str,
        path: str,
        raw_query: str = "",
        body: RequestBody | None = None,
    ) -> httpx.Request:
        """Build a request for ``path`` relative to the base URL.

        ``path`` is a decoded path: ``?`` and ``#`` in it are escaped rather
        than starting a query or fragment. ``raw_query`` must already be
        encoded; it is inserted verbatim apart from escaping spaces, ``#`` and
        non-ASCII characters. httpx upper-cases ``method``, so ``get`` goes out
        as ``GET``.

        The returned request is not sent and belongs to the caller, as does
        ``body`` once passed in.
        """

        if not _METHOD_TOKEN.fullmatch(method):
            raise RequestConstructionError(f"invalid method {method!r}", method)

        url = self._resolve(method, path, raw_query)
        content = self._prepare_body(method, url, body)

        headers: dict[str, str] = {}
        if self.auth_token:
            headers["Authorization"] = f"BEARER {self.auth_token}"
        if self.user_agent:
            headers["User-Agent"] = self.user_agent

        try:
            return httpx.Request(method, url, headers=headers, content=content)
        except (TypeError, httpx.InvalidURL) as exc:
            raise RequestConstructionError(
                f"cannot build {method} request for {url}: {exc}", method, str(url)
            ) from exc

    def _resolve(self, method: str, path: str, raw_query: str) -> httpx.URL:
        query = quote(raw_query, safe=_QUERY_SAFE).encode("ascii") if raw_query else None
        try:
            reference = httpx.URL(path=quote(path, safe=_PATH_SAFE), query=query)
            url = self.base_url.join(reference)
        except httpx.InvalidURL as exc:
            raise RequestConstructionError(
                f"cannot resolve path {path!r} against {self.base_url}: {exc}", method
            ) from exc

        if (url.scheme, url.host, url.port) != (
            self.base_url.scheme,
            self.base_url.host,
            self.base_url.port,
        ):
            raise RequestConstructionError(
                f"path {path!r} resolves outside {self.base_url}", method, str(url)
            )
        return url

    def _prepare_body(self, method: str, url: httpx.URL, body: RequestBody | None) -> RequestBody | None:
        if body is None or isinstance(body, (bytes, str)):
            return body
        if isinstance(body, (bytearray, memoryview)):
            return bytes(body)
        is_async = hasattr(body, "__aiter__")
        if is_async and isinstance(self.http_client, httpx.Client):
            raise RequestConstructionError(
                "cannot send an async body with a synchronous client", method, str(url)
            )
        if not is_async and isinstance(self.http_client, httpx.AsyncClient):
            raise RequestConstructionError(
                "cannot send a synchronous body with an async client", method, str(url)
            )
        # In-memory containers must hold bytes chunks; streams are read lazily.
        if isinstance(body, Collection) and not hasattr(body, "read"):
            if not all(isinstance(chunk, bytes) for chunk in body):
                raise RequestConstructionError(
                    f"body of type {type(body).__name__} must contain only bytes", method, str(url)
                )
        return body


def new_client(config: Config | None = None) -> Client:
    """Validate ``config`` and return a client for the key service.

    Raises InvalidBaseURL when the base URL does not parse or has no host, and
    UnsupportedScheme when its scheme is not http, https, hkp or hkps.
    """

    if config is None:
        config = DEFAULT_CONFIG

    raw_base_url = config.base_url or DEFAULT_BASE_URL
    try:
        parsed = httpx.URL(raw_base_url)
    except httpx.InvalidURL as exc:
        raise InvalidBaseURL(f"invalid base URL {raw_base_url!r}: {exc}", raw_base_url) from exc
    base_url = normalize_url(parsed)
    if not base_url.host:
        raise InvalidBaseURL(f"base URL {raw_base_url!r} has no host", raw_base_url)

    http_client = config.http_client if config.http_client is not None else default_http_client()
    LOGGER.debug("Key service client using %s", base_url)
    return Client(
        base_url=base_url,
        auth_token=config.auth_token,
        user_agent=config.user_agent,
        http_client=http_client,
    )


__all__ = [
    "Client",
    "Config",
    "DEFAULT_CONFIG",
    "HTTPClient",
    "PageDetails",
    "RequestBody",
    "default_http_client",
    "new_client",
]
