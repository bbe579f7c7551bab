#!/usr/bin/env python3
"""
rhdh-e2e - utility commands for e2e deployments.

Usage:
    rhdh-e2e plugins name oci://quay.io/rhdh/tech-radar:1.0!tech-radar
    rhdh-e2e plugins generate --metadata-dir ../metadata -o dynamic-plugins.yaml
    rhdh-e2e plugins inject dynamic-plugins.yaml
    rhdh-e2e config merge app-config.yaml auth.yaml --if-exists
    rhdh-e2e --help
"""

import argparse
import os
import sys
from collections.abc import Sequence
from typing import TextIO

from .. import __version__
from ..exceptions import E2EError
from ..log import LOG_LEVEL_ENV, InvalidLogLevelError, configure, get_lg
from .tools import TOOL_GROUPS


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with every tool registered."""
    parser = argparse.ArgumentParser(
        prog="rhdh-e2e", description="Utility commands for e2e deployments"
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Log level (default: $RHDH_E2E_LOG_LEVEL or info)",
    )
    parser.add_argument(
        "-v", "--version", action="version", version=f"rhdh-e2e {__version__}"
    )

    groups = parser.add_subparsers(dest="group", metavar="GROUP", required=True)
    for group_name, (group_help, tool_classes) in TOOL_GROUPS.items():
        group_parser = groups.add_parser(group_name, help=group_help)
        tools = group_parser.add_subparsers(dest="command", metavar="COMMAND", required=True)
        for tool_cls in tool_classes:
            tool = tool_cls()
            tool_parser = tools.add_parser(tool.name, help=tool.help_text)
            tool.add_args(tool_parser)
            tool_parser.set_defaults(tool=tool)
    return parser


def main(argv: Sequence[str] | None = None, out: TextIO | None = None) -> int:
    """Main entry point for the rhdh-e2e CLI."""
    args = build_parser().parse_args(argv)
    command = f"{args.group} {args.command}"
    try:
        # Logs go to stderr so YAML on stdout stays clean
        configure(args.log_level or os.environ.get(LOG_LEVEL_ENV) or "info", stream=sys.stderr)
    except InvalidLogLevelError as e:
        # The rejected level must not be read back from the environment
        configure("info", stream=sys.stderr)
        get_lg("cli").error(str(e), extra={"command": command})
        return 1
    try:
        return args.tool.run(args, out if out is not None else sys.stdout)
    except E2EError as e:
        get_lg("cli").error(str(e), extra={"command": command})
        return 1


if __name__ == "__main__":
    sys.exit(main())
