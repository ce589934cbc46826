"""Command-line interface for the TokBox client.

WHY: Operators need to create sessions, inspect or stop recordings, and
mint tokens without writing a script. The CLI wires the library's
operations behind a handful of subcommands.

HOW: Uses argparse with nested subcommands (session, archive, token).
Credentials come from --key/--secret or the .env file. Results are
printed to stdout as JSON so the CLI can be piped into jq; status and
errors go to stderr via logging and plain prints.

RULES:
- session create
- archive list SESSION_ID | archive start SESSION_ID [--name] | archive stop ARCHIVE_ID
- token client SESSION_ID | token bearer
- Exit code 0 on success, 1 on any TokboxError or configuration error
- ApiError output includes the remote code and message
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any, List, Optional

import httpx

from tokbox_client.api.client import TokboxClient
from tokbox_client.config import load_config, load_credentials
from tokbox_client.errors import ApiError, TokboxError

logger = logging.getLogger(__name__)


def _emit(value: Any) -> None:
    """Print a JSON result to stdout."""
    print(json.dumps(value, indent=2, sort_keys=True))


def _run_session_create(client: TokboxClient, args: argparse.Namespace) -> Any:
    with client:
        return client.create_session().to_dict()


def _run_archive_list(client: TokboxClient, args: argparse.Namespace) -> Any:
    with client:
        return [archive.to_dict() for archive in client.archives(args.session_id)]


def _run_archive_start(client: TokboxClient, args: argparse.Namespace) -> Any:
    with client:
        return client.start_archive(args.session_id, args.name).to_dict()


def _run_archive_stop(client: TokboxClient, args: argparse.Namespace) -> Any:
    with client:
        return client.stop_archive(args.archive_id).to_dict()


def _run_token_client(client: TokboxClient, args: argparse.Namespace) -> Any:
    return {"session_id": args.session_id, "token": client.generate_token(args.session_id)}


def _run_token_bearer(client: TokboxClient, args: argparse.Namespace) -> Any:
    return {"token": client.bearer_token()}


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the CLI.

    WHY: Separating parser construction from main() makes the CLI
    testable — tests can inspect the parser without touching the network.

    HOW: One subparser per resource, one nested subparser per action.
    Each leaf stores its handler in ``func``.
    """
    parser = argparse.ArgumentParser(
        prog="tokbox_client",
        description="Create TokBox sessions, manage archives and mint tokens.",
    )
    parser.add_argument("--key", default=None, help="Project API key (default: $TOKBOX_API_KEY).")
    parser.add_argument(
        "--secret", default=None, help="Project API secret (default: $TOKBOX_API_SECRET)."
    )
    parser.add_argument(
        "--base-url", default=None, help="REST API base URL (default: $TOKBOX_BASE_URL)."
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log HTTP requests.")

    resources = parser.add_subparsers(dest="resource", required=True)

    session = resources.add_parser("session", help="Session operations.")
    session_actions = session.add_subparsers(dest="action", required=True)
    create = session_actions.add_parser("create", help="Create a manually-archived session.")
    create.set_defaults(func=_run_session_create)

    archive = resources.add_parser("archive", help="Archive (recording) operations.")
    archive_actions = archive.add_subparsers(dest="action", required=True)

    archive_list = archive_actions.add_parser("list", help="List archives of a session.")
    archive_list.add_argument("session_id")
    archive_list.set_defaults(func=_run_archive_list)

    archive_start = archive_actions.add_parser("start", help="Start a composed archive.")
    archive_start.add_argument("session_id")
    archive_start.add_argument("--name", default="", help="Archive name.")
    archive_start.set_defaults(func=_run_archive_start)

    archive_stop = archive_actions.add_parser("stop", help="Stop a running archive.")
    archive_stop.add_argument("archive_id")
    archive_stop.set_defaults(func=_run_archive_stop)

    token = resources.add_parser("token", help="Mint authentication tokens.")
    token_actions = token.add_subparsers(dest="action", required=True)

    token_client = token_actions.add_parser("client", help="Legacy client token for a session.")
    token_client.add_argument("session_id")
    token_client.set_defaults(func=_run_token_client)

    token_bearer = token_actions.add_parser("bearer", help="JWT for the REST API auth header.")
    token_bearer.set_defaults(func=_run_token_bearer)

    return parser


def main(
    argv: Optional[List[str]] = None,
    transport: Optional[httpx.BaseTransport] = None,
) -> int:
    """Entry point for the CLI.

    RULES:
    - argv=None means use sys.argv (normal CLI invocation)
    - transport is for tests; None uses the real network
    - Returns the process exit code
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    try:
        credentials = load_credentials(args.key, args.secret)
        config = load_config(base_url=args.base_url)
        client = TokboxClient.from_credentials(credentials, config=config, transport=transport)
        result = args.func(client, args)
    except ValueError as e:
        # Config errors (missing key/secret, bad TTL)
        print("Error: {}".format(e), file=sys.stderr)
        return 1
    except ApiError as e:
        print("Error: API error {}: {}".format(e.code, e.message), file=sys.stderr)
        return 1
    except TokboxError as e:
        logger.debug("Request failed", exc_info=True)
        print("Error: {}".format(e), file=sys.stderr)
        return 1

    _emit(result)
    return 0


if __name__ == "__main__":
    sys.exit(main())
