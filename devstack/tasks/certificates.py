"""Certificate generation task: NoCertPresent -> Generating -> Present."""

import enum
import logging
import os

from devstack.certificates import CERTS_DIR, cert_path, key_path, select_strategy
from devstack.config.context import Context
from devstack.environment.probe import find_tool as default_find_tool
from devstack.process.runner import make_remove_file

logger = logging.getLogger(__name__)


class CertificateState(enum.Enum):
    PRESENT = "present"
    GENERATED = "generated"


async def generate_certificates(
    run_cmd,
    ctx: Context,
    force=False,
    find_tool=default_find_tool,
    remove_file=None,
) -> CertificateState:
    """Generate router certificates unless they already exist.

    ``force`` deletes any existing pair first through ``remove_file``. The
    generator is picked on every call: mkcert when it is on PATH,
    otherwise the self-signed script. Raises PreconditionNotMet when
    mkcert has no CA root yet.
    """
    remove_file = remove_file or make_remove_file()

    if os.path.exists(cert_path(ctx)) and not force:
        logger.info("SSL certificates already exists.")
        logger.info('Run "devstack generate-certificates --force" to generate new certificates.')
        return CertificateState.PRESENT

    if force:
        if os.path.exists(cert_path(ctx)):
            logger.info(f"Removing existing certificates in {CERTS_DIR}/*.pem.")
        await remove_file(cert_path(ctx))
        await remove_file(key_path(ctx))

    strategy = select_strategy(find_tool)
    logger.debug(f"Generating certificates with {strategy.name}")
    await strategy.generate(run_cmd, ctx)

    for message in strategy.success_messages():
        logger.info(message)
    if force:
        logger.info('Please restart the infrastructure to use the new certificates with "devstack up" or "devstack start".')

    return CertificateState.GENERATED
