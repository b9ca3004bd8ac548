from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from hotzone.app import (
    create_container,
    create_user,
    create_zone,
    export_spreadsheet,
    import_spreadsheet,
    inventory_overview,
    list_containers,
    list_zones,
)
from hotzone.config import ConfigurationError, configure_logging, get_actor_config
from hotzone.domain.reconciliation import ImportStatus

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

log = logging.getLogger(__name__)


def _add_user_id(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--user-id",
        type=str,
        help="Acting user id (defaults to HOTZONE_USER_ID)",
    )


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Manage a collectibles inventory")
    subparsers = parser.add_subparsers(dest="command", required=True)

    user = subparsers.add_parser("user", help="User management commands")
    user_sub = user.add_subparsers(dest="user_command", required=True)
    user_create = user_sub.add_parser("create", help="Create a user")
    user_create.add_argument(
        "--display-name",
        type=str,
        required=True,
        help="Display name for the user",
    )
    user_create.add_argument(
        "--email",
        type=str,
        help="Optional email address",
    )

    zone = subparsers.add_parser("zone", help="Zone management commands")
    zone_sub = zone.add_subparsers(dest="zone_command", required=True)
    zone_create = zone_sub.add_parser("create", help="Create a zone")
    _add_user_id(zone_create)
    zone_create.add_argument("--name", type=str, required=True, help="Zone name")
    zone_list = zone_sub.add_parser("list", help="List zones with container and item counts")
    _add_user_id(zone_list)

    container = subparsers.add_parser("container", help="Container management commands")
    container_sub = container.add_subparsers(dest="container_command", required=True)
    container_create = container_sub.add_parser("create", help="Create a container in a zone")
    _add_user_id(container_create)
    container_create.add_argument(
        "--zone",
        type=str,
        required=True,
        help="Name of the existing zone holding the container",
    )
    container_create.add_argument("--name", type=str, required=True, help="Container name")
    container_list = container_sub.add_parser(
        "list", help="List containers with their zone and item counts"
    )
    _add_user_id(container_list)

    stats = subparsers.add_parser("stats", help="Show inventory totals and recent items")
    _add_user_id(stats)

    import_ = subparsers.add_parser("import", help="Reconcile a Cards/Comics workbook")
    _add_user_id(import_)
    import_.add_argument("path", type=Path, help="Path to the .xlsx file")

    export = subparsers.add_parser("export", help="Export all items to a workbook")
    _add_user_id(export)
    export.add_argument(
        "--output",
        type=Path,
        help="Target file (defaults to the data directory's exports folder)",
    )

    return parser.parse_args(list(argv))


def _print_json(payload: object) -> None:
    print(json.dumps(payload, indent=2))  # noqa: T201


def _run_import(args: argparse.Namespace, user_id: int) -> bool:
    data = args.path.read_bytes()
    result = import_spreadsheet(data, user_id=user_id)
    _print_json(result.to_dict())
    return result.status is ImportStatus.SUCCESS


def _resolve_user_id(args: argparse.Namespace) -> int | None:
    if args.command == "user":
        return None
    return get_actor_config(args.user_id).user_id


def _dispatch(args: argparse.Namespace, user_id: int | None) -> bool:
    """Run the selected command; ``False`` signals a non-zero exit."""

    if args.command == "user" and args.user_command == "create":
        user = create_user(display_name=args.display_name, email=args.email)
        log.info("Created user %s", user.id)
        return True

    if user_id is None:
        raise ValueError(f"Command {args.command} requires an acting user")
    if args.command == "zone" and args.zone_command == "create":
        zone = create_zone(user_id=user_id, name=args.name)
        log.info("Created zone %s", zone.id)
    elif args.command == "zone" and args.zone_command == "list":
        _print_json([zone.to_dict() for zone in list_zones(user_id=user_id)])
    elif args.command == "container" and args.container_command == "create":
        container = create_container(user_id=user_id, zone_name=args.zone, name=args.name)
        log.info("Created container %s", container.id)
    elif args.command == "container" and args.container_command == "list":
        _print_json([container.to_dict() for container in list_containers(user_id=user_id)])
    elif args.command == "stats":
        _print_json(inventory_overview(user_id=user_id).to_dict())
    elif args.command == "import":
        return _run_import(args, user_id)
    elif args.command == "export":
        path = export_spreadsheet(user_id=user_id, output=args.output)
        log.info("Wrote %s", path)
    else:
        raise ValueError(f"Unsupported command: {args.command}")
    return True


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    parsed_args: argparse.Namespace
    user_id: int | None
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    try:
        configure_logging()
        parsed_args = _parse_args(args_list)
        user_id = _resolve_user_id(parsed_args)
    except (ValueError, ConfigurationError):
        log.exception("CLI validation error")
        sys.exit(2)

    try:
        succeeded = _dispatch(parsed_args, user_id)
    except Exception:
        log.exception("Fatal error during %s", parsed_args.command)
        sys.exit(1)
    if not succeeded:
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    """Console script entry point."""
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
