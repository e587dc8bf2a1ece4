from __future__ import annotations

import logging

import httpx

from key_client.exceptions import InvalidBaseURL, UnsupportedScheme

DEFAULT_BASE_URL = "https://keys.sylabs.io"
HKP_DEFAULT_PORT = 11371

LOGGER = logging.getLogger(__name__)


def normalize_url(url: httpx.URL) -> httpx.URL:
    """Map a key service URL onto the http or https scheme.

    ``hkp`` is plain HTTP on port 11371 unless a port is given, and ``hkps`` is
    HTTPS on its usual port. Any other scheme raises UnsupportedScheme; a
    legacy URL that cannot be rewritten (``hkp:example.org``) raises
    InvalidBaseURL.
    """

    scheme = url.scheme
    if scheme in ("http", "https"):
        return url
    try:
        if scheme == "hkp":
            port = url.port if url.port is not None else HKP_DEFAULT_PORT
            normalized = url.copy_with(scheme="http", port=port)
        elif scheme == "hkps":
            normalized = url.copy_with(scheme="https")
        else:
            raise UnsupportedScheme(scheme)
    except httpx.InvalidURL as exc:
        raise InvalidBaseURL(f"cannot rewrite {scheme} URL {str(url)!r}: {exc}", str(url)) from exc
    LOGGER.debug("Rewrote %s URL to %s", scheme, normalized)
    return normalized


__all__ = ["DEFAULT_BASE_URL", "HKP_DEFAULT_PORT", "normalize_url"]
