from __future__ import annotations

import argparse
import json
import logging
import sys
from signal import SIGINT, signal
from typing import TYPE_CHECKING
from uuid import UUID

from dotenv import load_dotenv

from worksfinder.app import create_discovery_request, run_catalog_discovery
from worksfinder.config import configure_logging
from worksfinder.domain.discovery.trigger import DEFAULT_MAX_SONGS

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Discover and reconcile songwriter catalogs")
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log per-page and per-work detail",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    request = subparsers.add_parser("request", help="Discovery request management commands")
    request_sub = request.add_subparsers(dest="request_command", required=True)
    request_create = request_sub.add_parser("create", help="Create a pending discovery request")
    request_create.add_argument(
        "--songwriter",
        type=str,
        required=True,
        help="Songwriter name to discover works for",
    )
    request_create.add_argument(
        "--user-id",
        type=str,
        required=True,
        help="Owner of the request",
    )

    discover = subparsers.add_parser("discover", help="Run catalog discovery for a request")
    discover.add_argument(
        "--request-id",
        type=str,
        required=True,
        help="Existing discovery request id (create one first)",
    )
    discover.add_argument(
        "--songwriter",
        type=str,
        required=True,
        help="Songwriter name to discover works for",
    )
    discover.add_argument(
        "--user-id",
        type=str,
        required=True,
        help="Owner of the request",
    )
    discover.add_argument(
        "--max-songs",
        type=int,
        default=DEFAULT_MAX_SONGS,
        help="Number of works to enrich and store (default: %(default)s)",
    )

    return parser.parse_args(list(argv))


def _parse_uuid(value: str) -> UUID:
    try:
        return UUID(value)
    except ValueError as exc:
        raise ValueError(f"Invalid UUID: {value}") from exc


def _validate(args: argparse.Namespace) -> None:
    _parse_uuid(args.user_id)
    if args.command == "discover":
        _parse_uuid(args.request_id)
        if args.max_songs <= 0:
            raise ValueError("--max-songs must be positive")
    if not args.songwriter.strip():
        raise ValueError("--songwriter must not be empty")


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args: argparse.Namespace
    try:
        parsed_args = _parse_args(args_list)
        configure_logging(verbose=parsed_args.verbose)
        _validate(parsed_args)
    except ValueError:
        log.exception("CLI validation error")
        sys.exit(2)

    try:
        if parsed_args.command == "request" and parsed_args.request_command == "create":
            request = create_discovery_request(
                songwriter_name=parsed_args.songwriter,
                user_id=_parse_uuid(parsed_args.user_id),
            )
            print(request.id)  # noqa: T201
        elif parsed_args.command == "discover":
            response = run_catalog_discovery(
                {
                    "requestId": parsed_args.request_id,
                    "songwriterName": parsed_args.songwriter,
                    "userId": parsed_args.user_id,
                    "maxSongs": parsed_args.max_songs,
                }
            )
            print(json.dumps(response.to_payload()))  # noqa: T201
            if not response.success:
                sys.exit(1)
        else:
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301

    except Exception:
        log.exception("Fatal error during discovery")
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    """Console-script entry point: load `.env`, install the SIGINT handler, run."""
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
