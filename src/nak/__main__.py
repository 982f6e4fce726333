"""CLI entry point for nak.

Examples:
    ```bash
    nak event -k 1 -c hello                      # print the signed event
    nak event -k 1 -c hello --envelope | nostcat wss://nos.lol
    nak event -t e=<id>;wss://relay;reply -p <pubkey> wss://nos.lol wss://relay.damus.io
    nak --config ~/.config/nak.yaml event --nson
    ```
"""

import argparse
import asyncio
import sys
from collections.abc import Awaitable, Callable, Sequence
from pathlib import Path
from typing import Any

from nak.core.exceptions import NakError
from nak.core.logger import Logger, setup_logging
from nak.core.yaml import load_yaml
from nak.models.constants import DEFAULT_CONTENT, DEFAULT_KIND, NOW
from nak.services.event import EventConfig, run_event


EVENT_FIELDS = "EVENT FIELDS"

EVENT_EPILOG = """\
example usage (for sending directly to a relay with 'nostcat'):
    nak event -k 1 -c hello --envelope | nostcat wss://nos.lol
standalone:
    nak event -k 1 -c hello wss://nos.lol
"""

# Flags whose values feed EventConfig; None means "not given on the CLI".
_EVENT_FIELDS = (
    "sec",
    "kind",
    "content",
    "tags",
    "e_tags",
    "p_tags",
    "created_at",
    "envelope",
    "nson",
    "relays",
    "publish_timeout",
    "connect_timeout",
)

logger = Logger("nak.cli")


def build_parser() -> argparse.ArgumentParser:
    """Build the ``nak`` argument parser."""
    parser = argparse.ArgumentParser(prog="nak", description="nostr army knife")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="INFO",
        help="Diagnostic log level (default: INFO)",
    )
    parser.add_argument(
        "--json-logs",
        action="store_true",
        help="Emit diagnostics as JSON lines",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="YAML file with default values for command flags",
    )

    commands = parser.add_subparsers(dest="command", required=True)

    event = commands.add_parser(
        "event",
        help="generates an encoded event and either prints it or sends it to a set of relays",
        description="generates an encoded event and either prints it or sends it to a set of relays",
        epilog=EVENT_EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    event.add_argument(
        "--sec",
        default=None,
        help="secret key to sign the event, hex or nsec (default: $NAK_SECRET_KEY or the key '1')",
    )
    event.add_argument(
        "--envelope",
        action="store_true",
        default=None,
        help='print the event enveloped in a ["EVENT", ...] message ready to be sent to a relay',
    )
    event.add_argument(
        "--nson",
        action="store_true",
        default=None,
        help="encode the event using NSON",
    )
    event.add_argument(
        "--timeout",
        dest="publish_timeout",
        type=float,
        default=None,
        help="seconds to wait for each relay to accept the event (default: 10)",
    )
    event.add_argument(
        "--connect-timeout",
        type=float,
        default=None,
        help="seconds to wait for each relay connection (default: 10)",
    )

    fields = event.add_argument_group(EVENT_FIELDS)
    fields.add_argument(
        "-k",
        "--kind",
        type=int,
        default=None,
        help=f"event kind (default: {DEFAULT_KIND})",
    )
    fields.add_argument(
        "-c",
        "--content",
        default=None,
        help=f"event content (default: {DEFAULT_CONTENT!r})",
    )
    fields.add_argument(
        "-t",
        "--tag",
        dest="tags",
        action="append",
        default=None,
        metavar="KEY=VALUE",
        help="sets a tag field on the event, takes a value like -t e=<id>",
    )
    fields.add_argument(
        "-e",
        dest="e_tags",
        action="append",
        default=None,
        metavar="VALUE",
        help="shortcut for --tag e=<value>",
    )
    fields.add_argument(
        "-p",
        dest="p_tags",
        action="append",
        default=None,
        metavar="VALUE",
        help="shortcut for --tag p=<value>",
    )
    fields.add_argument(
        "--created-at",
        "--time",
        "--ts",
        dest="created_at",
        default=None,
        help=f"unix timestamp value for the created_at field (default: {NOW})",
    )

    event.add_argument("relays", nargs="*", metavar="relay", help="relays to publish to")
    return parser


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    return build_parser().parse_args(argv)


def load_event_config(args: argparse.Namespace) -> EventConfig:
    """Combine CLI flags with the optional YAML defaults file.

    Raises:
        ConfigurationError: If the YAML file or the merged values are invalid.
    """
    cli_values: dict[str, Any] = {name: getattr(args, name, None) for name in _EVENT_FIELDS}
    if not cli_values["relays"]:
        cli_values["relays"] = None
    file_defaults = load_yaml(args.config) if args.config else None
    return EventConfig.from_sources(cli_values, file_defaults)


async def _event_command(args: argparse.Namespace) -> int:
    config = load_event_config(args)
    await run_event(config)
    return 0


COMMANDS: dict[str, Callable[[argparse.Namespace], Awaitable[int]]] = {
    "event": _event_command,
}


async def main(argv: Sequence[str] | None = None) -> int:
    """Parse arguments, configure logging, and run the selected command.

    Returns:
        Exit code: 0 on success (relay outcomes do not matter), 1 on a
        configuration, parse, signing, or encoding failure.
    """
    args = parse_args(argv)
    setup_logging(args.log_level, json_output=args.json_logs)

    try:
        return await COMMANDS[args.command](args)
    except NakError as e:
        logger.error(f"{args.command}_failed", error=str(e))
        return 1


def cli() -> None:
    """Synchronous entry point for console_scripts."""
    try:
        code = asyncio.run(main())
    except KeyboardInterrupt:
        logger.info("interrupted")
        code = 130
    sys.exit(code)


if __name__ == "__main__":
    cli()
