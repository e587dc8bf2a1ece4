from __future__ import annotations

import argparse
import dataclasses
import logging
import sys
from typing import TextIO

import httpx
from pydantic import ValidationError

from key_client.client import new_client
from key_client.config.settings import get_settings, load_config
from key_client.exceptions import KeyClientError
from key_client.observability.logging import configure_logging

LOGGER = logging.getLogger(__name__)
REDACTED = "BEARER ***"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="key-client-request",
        description="Build a key service request and print it without sending",
    )
    parser.add_argument("path", help="Path relative to the base URL, e.g. /v1/keys")
    parser.add_argument(
        "--method",
        default="GET",
        help="HTTP method (default: GET)",
    )
    parser.add_argument(
        "--query",
        default="",
        help="Raw, already encoded query string, e.g. fingerprint=AA",
    )
    parser.add_argument(
        "--base-url",
        help="Key service base URL (http, https, hkp or hkps); overrides KEY_CLIENT_BASE_URL",
    )
    parser.add_argument("--token", help="Bearer token; overrides KEY_CLIENT_AUTH_TOKEN")
    parser.add_argument("--user-agent", help="User agent; overrides KEY_CLIENT_USER_AGENT")
    parser.add_argument(
        "--show-token",
        action="store_true",
        help="Print the Authorization header unredacted",
    )
    parser.add_argument(
        "--log-level",
        help="Logging level; overrides KEY_CLIENT_LOG_LEVEL",
    )
    return parser


def format_request(request: httpx.Request, *, show_token: bool = False) -> str:
    lines = [f"{request.method} {request.url}"]
    for name, value in request.headers.items():
        if name.lower() == "authorization" and not show_token:
            value = REDACTED
        lines.append(f"{name}: {value}")
    return "\n".join(lines)


def main(argv: list[str] | None = None, *, out: TextIO | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    out = out or sys.stdout

    try:
        settings = get_settings()
    except ValidationError as exc:
        print(f"error: invalid KEY_CLIENT_ settings: {exc}", file=sys.stderr)
        return 1
    configure_logging(args.log_level or settings.log_level)

    config = load_config(settings)
    overrides = {
        key: value
        for key, value in (
            ("base_url", args.base_url),
            ("auth_token", args.token),
            ("user_agent", args.user_agent),
        )
        if value is not None
    }
    config = dataclasses.replace(config, **overrides)

    try:
        client = new_client(config)
        request = client.new_request(args.method, args.path, args.query)
    except KeyClientError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    finally:
        if config.http_client is not None:
            config.http_client.close()

    LOGGER.debug("Built %s request for %s", request.method, request.url)
    print(format_request(request, show_token=args.show_token), file=out)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
