"""Infrastructure tasks: build, up, stop, logs, ps, destroy."""

import glob
import logging
import os

from devstack.compose.command import compose_command
from devstack.config.context import Context
from devstack.errors import UserAborted
from devstack.process.policy import ProcessPolicy
from devstack.process.runner import make_remove_file

logger = logging.getLogger(__name__)

LOG_TAIL = 150


async def build(run_cmd, ctx: Context):
    """Build images with the builder overlay."""
    command = [
        "build",
        "--build-arg", f"USER_ID={ctx.user_id}",
        "--build-arg", f"PHP_VERSION={ctx.php_version}",
    ]
    await run_cmd(compose_command(ctx, command, with_builder=True))


async def up(run_cmd, ctx: Context):
    await run_cmd(compose_command(ctx, ["up", "--remove-orphans", "--detach"]))


async def stop(run_cmd, ctx: Context):
    await run_cmd(compose_command(ctx, ["stop"]))


async def logs(run_cmd, ctx: Context):
    """Follow service logs until interrupted."""
    await run_cmd(
        compose_command(ctx, ["logs", "-f", "--tail", str(LOG_TAIL)]),
        ProcessPolicy(timeout=None, tty=True),
    )


async def ps(run_cmd, ctx: Context):
    await run_cmd(compose_command(ctx, ["ps"], with_builder=False))


async def destroy(run_cmd, ctx: Context, force=False, confirm=None, remove_file=None):
    """Remove containers, volumes, networks and local images, then certificates.

    Without ``force``, ``confirm(question)`` must return True or the task
    raises UserAborted before anything runs. Certificates are deleted
    through ``remove_file``.
    """
    remove_file = remove_file or make_remove_file()

    if not force:
        logger.warning("This will permanently remove all containers, volumes, networks... created for this project.")
        logger.info("You can use the --force option to avoid this confirmation.")
        if confirm is None or not confirm("Are you sure?"):
            raise UserAborted("Destruction declined")

    await run_cmd(compose_command(ctx, ["down", "--remove-orphans", "--volumes", "--rmi=local"], with_builder=True))

    for path in glob.glob(os.path.join(ctx.certs_dir, "*.pem")):
        await remove_file(path)
    logger.info("The infrastructure has been destroyed.")
