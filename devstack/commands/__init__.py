"""Shared plumbing for CLI command handlers."""

import argparse
import asyncio
import logging
import sys

from devstack.config import find_root_dir, load_params, resolve_context
from devstack.environment import probe_host
from devstack.errors import ConfigurationError, PreconditionNotMet, ProcessFailure, UserAborted
from devstack.process import make_run_cmd

logger = logging.getLogger(__name__)


def common_parser():
    """Parent parser with the options every command accepts."""
    parser = argparse.ArgumentParser(add_help=False)
    parser.add_argument("--root-dir", default=None, help="Project root (default: discovered from the current directory)")
    parser.add_argument("--dry-run", action="store_true", help="Print commands without executing")
    parser.add_argument("-v", "--verbose", action="store_true", help="Show debug output")
    return parser


def build_context(args):
    """Probe the host and resolve the project context for this invocation."""
    root_dir = args.root_dir or find_root_dir()
    params = load_params(root_dir)
    return resolve_context(params, probe_host(), root_dir)


def exit_code(returncode):
    """Map a child return code to a CLI exit status.

    A child killed by signal N (negative return code) exits 128 + N; zero maps to 1.
    """
    if returncode < 0:
        return 128 + abs(returncode)
    return returncode or 1


def run_task(task, args, **kwargs):
    """Build the context, run ``task(run_cmd, ctx, **kwargs)`` and map errors to exit codes."""
    try:
        ctx = build_context(args)
        run_cmd = make_run_cmd(ctx, dry_run=args.dry_run)
        return asyncio.run(task(run_cmd, ctx, **kwargs))
    except UserAborted:
        logger.info("Aborted.")
        return None
    except ProcessFailure as e:
        logger.error(str(e))
        if e.stdout:
            logger.error(e.stdout)
        if e.stderr:
            logger.error(e.stderr)
        sys.exit(exit_code(e.returncode))
    except (ConfigurationError, PreconditionNotMet) as e:
        logger.error(f"Error: {e}")
        sys.exit(1)


def confirm(question):
    """Ask a yes/no question on the terminal; defaults to no."""
    try:
        answer = input(f"{question} (yes/no) [no]: ")
    except EOFError:
        return False
    return answer.strip().lower() in ("y", "yes")
