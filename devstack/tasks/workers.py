"""Background worker containers, found by project label."""

import logging

from devstack.compose.command import docker_command
from devstack.config.context import Context
from devstack.process.policy import ProcessPolicy

logger = logging.getLogger(__name__)

WORKER_LABEL_PREFIX = "docker-starter.worker."


async def get_workers(run_cmd, ctx: Context) -> set[str]:
    """Ids of this project's worker containers, running or stopped."""
    command = docker_command(
        "ps",
        "-a",
        "--filter", f"label={WORKER_LABEL_PREFIX}{ctx.project_name}",
        "--quiet",
    )
    result = await run_cmd(command, ProcessPolicy(quiet=True))
    return {line.strip() for line in result.stdout.splitlines() if line.strip()}


async def workers_start(run_cmd, ctx: Context):
    workers = sorted(await get_workers(run_cmd, ctx))
    if not workers:
        return

    quiet = ProcessPolicy(quiet=True)
    await run_cmd(docker_command("update", "--restart=unless-stopped", *workers), quiet)
    await run_cmd(docker_command("start", *workers), quiet)
    logger.debug(f"Started {len(workers)} worker(s)")


async def workers_stop(run_cmd, ctx: Context):
    workers = sorted(await get_workers(run_cmd, ctx))
    if not workers:
        return

    await run_cmd(docker_command("update", "--restart=no", *workers))
    await run_cmd(docker_command("stop", *workers))
