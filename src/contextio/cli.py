"""Command-line interface for ad-hoc Context.IO requests.

Signs a request for a path under the configured account and either sends it
or prints the signed request.  Credentials come from the environment (see
``contextio.config.Settings``) or from the credential store file.

Usage::

    contextio messages --param limit=5
    contextio --method POST --param first_name=Ada ""
    contextio --dry-run sources/0/folders
"""

from __future__ import annotations

import argparse
import json
import sys
from collections.abc import Sequence
from typing import Any

import structlog

from contextio.auth.store import JsonFileCredentialStore
from contextio.client import ContextIOClient
from contextio.config import get_settings, validate_credentials
from contextio.domain.errors import ContextIOError, MissingCredentialsError
from contextio.domain.types import HttpMethod, ResponseShape
from contextio.observability import configure_logging
from contextio.resources.paths import ACCOUNT_PREFIX, API_VERSION, escape_segment

logger = structlog.get_logger()


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser.

    Returns:
        A configured :class:`argparse.ArgumentParser`.
    """
    parser = argparse.ArgumentParser(description="Send a signed Context.IO 2.0 request")

    parser.add_argument(
        "path",
        type=str,
        help="Path relative to the account, e.g. 'messages' ('' for the account itself)",
    )
    parser.add_argument(
        "--method",
        type=str.upper,
        choices=[m.value for m in HttpMethod],
        default=HttpMethod.GET.value,
        help="HTTP method (default: GET)",
    )
    parser.add_argument(
        "--param",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Request parameter; may be repeated",
    )
    parser.add_argument(
        "--shape",
        type=str,
        choices=[s.value for s in ResponseShape],
        default=ResponseShape.DICTIONARY.value,
        help="Expected response shape (default: dictionary)",
    )
    parser.add_argument(
        "--global",
        action="store_true",
        dest="global_path",
        help="Treat PATH as relative to 2.0/ instead of the account",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the signed request instead of sending it",
    )

    return parser


def parse_param_pairs(pairs: Sequence[str]) -> dict[str, str]:
    """Convert ``KEY=VALUE`` strings into a dict.

    Raises:
        ValueError: If a pair has no ``=`` or an empty key.
    """
    params: dict[str, str] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            msg = f"Expected KEY=VALUE, got {pair!r}"
            raise ValueError(msg)
        params[key] = value
    return params


def resolve_cli_path(client: ContextIOClient, path: str, global_path: bool) -> str:
    """Return the full ``2.0/...`` path for a CLI path argument."""
    relative = path.strip("/")
    if global_path:
        return f"{API_VERSION}/{relative}" if relative else API_VERSION
    if client.account_id is None:
        raise MissingCredentialsError("account_id")
    prefix = ACCOUNT_PREFIX.format(account_id=escape_segment(client.account_id))
    return f"{prefix}/{relative}" if relative else prefix


def format_output(result: Any) -> str:
    """Render an interpreted response for the terminal."""
    if isinstance(result, bytes):
        return result.decode("utf-8", errors="replace")
    if isinstance(result, str):
        return result
    return json.dumps(result, indent=2)


def main(argv: Sequence[str] | None = None) -> int:
    """Parse arguments, sign the request, and print the result.

    Returns:
        The process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    settings = get_settings()
    configure_logging(production=settings.production, level=settings.log_level, stream=sys.stderr)
    validate_credentials(settings)

    client = ContextIOClient.from_settings(
        settings, credential_store=JsonFileCredentialStore(settings.credentials_path)
    )
    if not client.is_authorized:
        client.restore_credentials()

    try:
        params = parse_param_pairs(args.param)
        path = resolve_cli_path(client, args.path, args.global_path)
        signed = client.request_for_path(path, args.method, params, ResponseShape(args.shape))

        if args.dry_run:
            print(
                json.dumps(
                    {
                        "method": str(signed.method),
                        "url": signed.url,
                        "headers": signed.headers,
                        "body": signed.body,
                    },
                    indent=2,
                )
            )
            return 0

        result = client.execute(signed.descriptor)
    except ValueError as exc:
        parser.error(str(exc))
    except ContextIOError as exc:
        logger.error("cli_request_failed", error=str(exc))
        print(f"error: {exc}", file=sys.stderr)
        return 1

    print(format_output(result))
    return 0


if __name__ == "__main__":
    sys.exit(main())
