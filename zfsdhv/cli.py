"""Command line entry point: ``zfs fingerprint|create|delete``."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from collections.abc import Sequence

from . import plugin
from .config import ConfigError, load_config


class _UsageError(Exception):
    pass


class _Parser(argparse.ArgumentParser):
    def error(self, message: str):  # type: ignore[override]
        raise _UsageError(message)


_COMMANDS = {
    "fingerprint": (
        plugin.fingerprint,
        "Displays the version; Is also used to validate the plugin during startup",
    ),
    "create": (
        plugin.create,
        "Creates a new mount with the provided nomad host volume configuration",
    ),
    "delete": (
        plugin.delete,
        "Deletes the mount defined during nomad host volume deletion",
    ),
}


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with its three sub-commands."""
    parser = _Parser(prog="zfs")
    subparsers = parser.add_subparsers(dest="command")
    for name, (_, summary) in _COMMANDS.items():
        subparsers.add_parser(name, help=summary, description=summary)
    return parser


def _report(message: str) -> int:
    print(json.dumps({"error": message}, separators=(",", ":")), end="")
    return 1


def main(argv: Sequence[str] | None = None) -> int:
    """Run one plugin operation; errors are printed as JSON and give status 1."""
    logging.basicConfig(
        level=logging.INFO,
        stream=sys.stderr,
        format="%(asctime)s %(message)s",
        datefmt="%Y/%m/%d %H:%M:%S",
    )
    parser = build_parser()
    try:
        args = parser.parse_args(argv)
    except _UsageError as exc:
        return _report(str(exc))
    except SystemExit as exc:
        return exc.code if isinstance(exc.code, int) else 0

    if args.command is None:
        parser.print_help()
        return 0

    try:
        cfg = load_config()
    except ConfigError as exc:
        return _report(f"failed to setup dynamic host volume config: {exc}")

    operation, _ = _COMMANDS[args.command]
    try:
        operation(cfg)
    except (plugin.PluginError, OSError) as exc:
        return _report(str(exc))
    return 0


if __name__ == "__main__":
    sys.exit(main())