"""Run composed commands as child processes."""

import asyncio
import logging
import os
import sys

from devstack.compose.command import ComposedCommand
from devstack.environment.probe import CI
from devstack.errors import ProcessFailure
from devstack.process.policy import ProcessPolicy, ProcessResult

logger = logging.getLogger(__name__)

TIMEOUT_RETURNCODE = 124
NOT_FOUND_RETURNCODE = 127


async def _start(command: ComposedCommand, policy: ProcessPolicy):
    """Spawn the child; returns (proc, captured) where captured means piped output."""
    kwargs = {"cwd": command.cwd, "env": command.merged_environment()}

    if policy.tty:
        # Fully interactive: the child owns the terminal
        return await asyncio.create_subprocess_exec(*command.args, **kwargs), False

    kwargs["stdin"] = asyncio.subprocess.DEVNULL
    if policy.pty and not policy.quiet:
        return await asyncio.create_subprocess_exec(*command.args, **kwargs), False

    proc = await asyncio.create_subprocess_exec(
        *command.args,
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.PIPE,
        **kwargs,
    )
    return proc, True


async def _read_stream(pipe, lines, level, log):
    async for raw_line in pipe:
        line = raw_line.decode(errors="replace").rstrip("\n")
        if log:
            logger.log(level, line)
        lines.append(line)


async def _collect(proc, captured, log):
    if not captured:
        await proc.wait()
        return "", ""

    stdout_lines, stderr_lines = [], []
    await asyncio.gather(
        _read_stream(proc.stdout, stdout_lines, logging.INFO, log),
        _read_stream(proc.stderr, stderr_lines, logging.ERROR, log),
        proc.wait(),
    )
    return "\n".join(stdout_lines), "\n".join(stderr_lines)


async def invoke(command: ComposedCommand, policy=None, environment_mode="dev", dry_run=False) -> ProcessResult:
    """Run ``command`` and return its result.

    Raises ProcessFailure on a non-zero exit unless the policy allows
    failure. In CI mode tty/pty requests are dropped so nothing waits on
    a terminal.
    """
    policy = policy or ProcessPolicy()
    if environment_mode == CI:
        policy = policy.with_tty(False).with_pty(False)

    if dry_run:
        logger.info(f"[dry-run] {command.display()}")
        return ProcessResult(0)

    logger.debug(f"Running: {command.display()}")
    try:
        proc, captured = await _start(command, policy)
    except FileNotFoundError:
        logger.error(f"Error: '{command.args[0]}' not found. Is it installed and on PATH?")
        result = ProcessResult(NOT_FOUND_RETURNCODE, "", f"'{command.args[0]}' not found")
    else:
        try:
            stdout, stderr = await asyncio.wait_for(_collect(proc, captured, not policy.quiet), timeout=policy.timeout)
            result = ProcessResult(proc.returncode, stdout, stderr)
        except TimeoutError:
            logger.error(f"Command timed out after {policy.timeout}s: {command.display()}")
            proc.kill()
            await proc.wait()
            result = ProcessResult(TIMEOUT_RETURNCODE, "", f"timed out after {policy.timeout}s")

    if not result.ok and not policy.allow_failure:
        raise ProcessFailure(command.display(), result.returncode, result.stdout, result.stderr)
    return result


def make_run_cmd(context, dry_run=False):
    """Create a run_cmd callable bound to the context's environment mode.

    The default policy allocates a terminal in dev mode when stdout is one.
    """
    default_policy = ProcessPolicy(pty=context.pty and sys.stdout.isatty())

    async def run_cmd(command: ComposedCommand, policy=None) -> ProcessResult:
        return await invoke(
            command,
            policy or default_policy,
            environment_mode=context.environment_mode,
            dry_run=dry_run,
        )

    return run_cmd


def make_remove_file(dry_run=False):
    """Create a remove_file callable for local file deletion.

    A missing file is not an error.
    """

    async def remove_file(path):
        if dry_run:
            logger.info(f"[dry-run] rm {path}")
            return
        try:
            os.remove(path)
        except FileNotFoundError:
            logger.debug(f"{path} already absent")

    return remove_file
