# -*- coding: utf-8 -*-
"""``distox`` command-line dispatcher.

Sub-commands are looked up in the ``distox_lib.actions`` entry-point group
and receive the remaining arguments. Logging is configured here, once, so
every sub-command writes to stderr in the same format.
"""

from __future__ import annotations

import argparse
import logging
from importlib.metadata import entry_points

import distox_lib

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def main(argv: list[str] | None = None) -> int:
    registered_commands = entry_points(group="distox_lib.actions")

    parser = argparse.ArgumentParser(
        prog="distox",
        description="Tools for DistoX rangefinder captures",
    )
    parser.add_argument(
        "-v",
        "--version",
        action="version",
        version=f"%(prog)s version: {distox_lib.__version__}",
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        default="WARNING",
        help="Minimum level of log messages written to stderr (default: WARNING)",
    )
    parser.add_argument(
        "command",
        choices=sorted(registered_commands.names),
    )
    parser.add_argument(
        "args",
        help=argparse.SUPPRESS,
        nargs=argparse.REMAINDER,
    )

    parsed_args = parser.parse_args(argv)

    logging.basicConfig(level=parsed_args.log_level, format=LOG_FORMAT)

    main_fn = registered_commands[parsed_args.command].load()
    return main_fn(parsed_args.args)
