from __future__ import annotations

import logging
from typing import Sequence

DEFAULT_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
PACKAGE_LOGGER = "key_client"


def configure_logging(level: str = "INFO", *, extra_handlers: Sequence[logging.Handler] | None = None) -> None:
    """Configure logging for the key service client.

    The root logger gets the shared format if nothing configured it yet. The
    ``key_client`` logger always gets ``level``, so base URL rewrites and built
    requests show up at DEBUG even when a host application already owns the
    root logger. Unknown level names fall back to INFO. Handlers in
    ``extra_handlers`` are attached to the root with the same format.
    """

    resolved = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(level=resolved, format=DEFAULT_FORMAT)
    logging.getLogger(PACKAGE_LOGGER).setLevel(resolved)
    if extra_handlers:
        root = logging.getLogger()
        for handler in extra_handlers:
            handler.setFormatter(logging.Formatter(DEFAULT_FORMAT))
            root.addHandler(handler)


__all__ = ["DEFAULT_FORMAT", "PACKAGE_LOGGER", "configure_logging"]
