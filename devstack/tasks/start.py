"""The full bring-up sequence."""

import logging

from devstack.config.context import Context
from devstack.environment.probe import find_tool as default_find_tool
from devstack.errors import PreconditionNotMet
from devstack.tasks.about import about
from devstack.tasks.app import cache_clear, install, migrate
from devstack.tasks.certificates import generate_certificates
from devstack.tasks.infra import build, up
from devstack.tasks.workers import workers_start, workers_stop

logger = logging.getLogger(__name__)


async def start(run_cmd, ctx: Context, find_tool=default_find_tool, client=None, discover=True, remove_file=None):
    """Build and start the stack, then install the application.

    Each step runs to completion before the next one; a ProcessFailure
    stops the sequence. Missing certificate prerequisites are reported
    and the stack comes up without new certificates.
    """
    await workers_stop(run_cmd, ctx)
    try:
        await generate_certificates(run_cmd, ctx, force=False, find_tool=find_tool, remove_file=remove_file)
    except PreconditionNotMet as e:
        logger.warning(f"Skipping certificate generation: {e}")
    await build(run_cmd, ctx)
    await up(run_cmd, ctx)
    await cache_clear(run_cmd, ctx)
    await install(run_cmd, ctx)
    await migrate(run_cmd, ctx)
    await workers_start(run_cmd, ctx)

    logger.info("")
    logger.info("[OK] The stack is now up and running.")
    logger.info("")

    await about(run_cmd, ctx, client=client, discover=discover)
