"""Command line entry point for quick admin operations against a server."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Sequence

from .config import CONFIG_FILE, ClientConfig, PairConfig, SlotValue, load_config, save_config
from .errors import CommandFailedError
from .handles import DemoCatalog
from .server import Server

LOG = logging.getLogger(__name__)


def parse_slot(text: str) -> SlotValue:
    """Turn ``host``, ``port`` or ``host:port`` into a pair slot value."""

    if text.isdigit():
        return int(text)
    host, sep, port = text.rpartition(":")
    if sep and host and port.isdigit():
        return [host, int(port)]
    return text


def parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="mongohandle", description=__doc__)
    parser.add_argument("--host", help="Single server host name")
    parser.add_argument("--port", type=int, help="Single server port")
    parser.add_argument("--left", type=parse_slot, help="Left server of a pair (host, port or host:port)")
    parser.add_argument("--right", type=parse_slot, help="Right server of a pair (host, port or host:port)")
    parser.add_argument("--slave-ok", action="store_true", default=None, help="Allow reads from a non-master")
    parser.add_argument("--auto-reconnect", action="store_true", default=None, help="Reconnect to the master on errors")
    parser.add_argument("--demo", action="store_true", default=None, help="Use the in-memory demo server")
    parser.add_argument("--save", action="store_true", help=f"Write the effective settings to {CONFIG_FILE}")
    parser.add_argument("--log-level", default="WARNING", help="Logging level (default WARNING)")
    commands = parser.add_subparsers(dest="command", required=True)
    commands.add_parser("list", help="Show each database with its size on disk")
    commands.add_parser("names", help="Show database names")
    commands.add_parser("endpoints", help="Show the resolved endpoints")
    drop = commands.add_parser("drop", help="Drop a database")
    drop.add_argument("name", help="Database to drop")
    return parser.parse_args(argv)


def build_config(args: argparse.Namespace, base: ClientConfig) -> ClientConfig:
    """Apply command line overrides on top of the loaded configuration."""

    updates: dict[str, object] = {}
    if args.left is not None or args.right is not None:
        updates.update(pair=PairConfig(left=args.left, right=args.right), host=None, port=None)
    elif args.host is not None:
        updates.update(host=args.host, port=args.port, pair=None)
    elif args.port is not None:
        updates["port"] = args.port
    if args.demo is not None:
        updates["demo"] = args.demo
    config = base.model_copy(update=updates)
    option_updates = {
        key: value
        for key, value in (("slave_ok", args.slave_ok), ("auto_reconnect", args.auto_reconnect))
        if value is not None
    }
    if option_updates:
        config = config.with_options(**option_updates)
    return config


def build_server(config: ClientConfig) -> Server:
    factory = DemoCatalog().open if config.demo else None
    return Server(config.address_spec(), options=config.options, handle_factory=factory)


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(sys.argv[1:] if argv is None else argv)
    logging.basicConfig(level=args.log_level.upper())
    config = build_config(args, load_config())
    if args.save:
        save_config(config)
    server = build_server(config)
    LOG.debug("Using server", extra={"endpoints": server.endpoints})
    try:
        if args.command == "list":
            for name, size in server.list_databases().items():
                print(f"{name}\t{size}")
        elif args.command == "names":
            for name in server.list_database_names():
                print(name)
        elif args.command == "endpoints":
            for host, port in server.endpoints:
                print(f"{host}:{port}")
        elif args.command == "drop":
            server.drop_database(args.name)
            print(f"Dropped {args.name}")
    except CommandFailedError as exc:
        print(f"error: {exc.response!r}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
