#!/usr/bin/env python3
"""Local development stack tools: CLI entrypoint."""

import argparse
import sys

from devstack.commands.app import register_app_commands
from devstack.commands.infra import register_infra_commands
from devstack.logging_setup import setup_cli_logging


def main():
    parser = argparse.ArgumentParser(prog="devstack", description="Local development stack tools")
    subparsers = parser.add_subparsers(dest="command", required=True)

    register_app_commands(subparsers)
    register_infra_commands(subparsers)

    args = parser.parse_args()
    setup_cli_logging(verbose=args.verbose)
    try:
        args.func(args)
    except KeyboardInterrupt:
        # The child got the same SIGINT; just leave quietly
        sys.exit(130)


if __name__ == "__main__":
    main()
