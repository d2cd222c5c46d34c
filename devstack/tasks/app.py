"""Application tasks run inside the builder container."""

import logging
import os

from devstack.compose.command import compose_run_command, host_shell_command
from devstack.config.context import Context
from devstack.process.policy import ProcessPolicy

logger = logging.getLogger(__name__)

INSTALL_TIMEOUT = 1800


async def install(run_cmd, ctx: Context):
    """Install PHP and JS dependencies found in the project directory."""
    base_path = ctx.project_path
    policy = ProcessPolicy(timeout=INSTALL_TIMEOUT)

    if os.path.isfile(os.path.join(base_path, "composer.json")):
        await run_cmd(compose_run_command(ctx, "composer install -n --prefer-dist --optimize-autoloader"), policy)
    if os.path.isfile(os.path.join(base_path, "yarn.lock")):
        await run_cmd(compose_run_command(ctx, "yarn"), policy)
    elif os.path.isfile(os.path.join(base_path, "package.json")):
        await run_cmd(compose_run_command(ctx, "npm install"), policy)


async def cache_clear(run_cmd, ctx: Context):
    """Hook for clearing the application cache; nothing to do by default."""
    logger.debug("cache-clear: no command configured for this project")


async def migrate(run_cmd, ctx: Context):
    """Hook for database migrations; nothing to do by default."""
    logger.debug("migrate: no command configured for this project")


async def builder(run_cmd, ctx: Context, user="app", environ=None):
    """Open an interactive bash in a builder container.

    The host environment is merged first so the shell sees it; the
    session's exit status is not treated as a failure.
    """
    environ = dict(os.environ if environ is None else environ)
    policy = ProcessPolicy(timeout=None, tty=True, quiet=True, allow_failure=True)
    return await run_cmd(compose_run_command(ctx, "bash", user=user, base_environment=environ), policy)


async def run_in_docker_or_locally(run_cmd, ctx: Context, command, no_deps=False):
    """Run front-end tooling on the macOS host, inside the builder elsewhere.

    JS toolchains are slow on Docker for Mac bind mounts. This is an
    extension helper for project-specific tasks; no built-in command
    calls it.
    """
    if ctx.macos:
        return await run_cmd(host_shell_command(ctx, command))
    return await run_cmd(compose_run_command(ctx, command, no_deps=no_deps))
