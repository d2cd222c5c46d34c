"""TLS certificate generation strategies for the local router."""

import logging
import os

from devstack.compose.command import ComposedCommand
from devstack.config.context import CERTS_DIR, DOCKER_DIR
from devstack.errors import PreconditionNotMet
from devstack.process.policy import ProcessPolicy

logger = logging.getLogger(__name__)

CERT_FILENAME = "cert.pem"
KEY_FILENAME = "key.pem"
SELF_SIGNED_SCRIPT = os.path.join(DOCKER_DIR, "services", "router", "generate-ssl.sh")
MKCERT = "mkcert"


def cert_path(context):
    return os.path.join(context.certs_dir, CERT_FILENAME)


def key_path(context):
    return os.path.join(context.certs_dir, KEY_FILENAME)


def certificate_subjects(context):
    """Root domain, its wildcard, then extra domains in configured order."""
    return [context.root_domain, f"*.{context.root_domain}", *context.extra_domains]


class CertificateStrategy:
    """A way of producing cert.pem / key.pem for the router."""

    name = ""

    async def generate(self, run_cmd, context):
        raise NotImplementedError

    def success_messages(self):
        return []


class MkcertStrategy(CertificateStrategy):
    """Locally trusted certificates signed by the host mkcert CA."""

    name = "mkcert"

    def __init__(self, binary=MKCERT, is_dir=os.path.isdir):
        self.binary = binary
        self._is_dir = is_dir

    async def ca_root(self, run_cmd):
        result = await run_cmd(ComposedCommand(args=(self.binary, "-CAROOT")), ProcessPolicy(quiet=True))
        return result.stdout.strip()

    async def generate(self, run_cmd, context):
        ca_root = await self.ca_root(run_cmd)
        if not ca_root or not self._is_dir(ca_root):
            raise PreconditionNotMet('You must have mkcert CA Root installed on your host with "mkcert -install" command.')

        command = ComposedCommand(
            args=(
                self.binary,
                "-cert-file", os.path.join(CERTS_DIR, CERT_FILENAME),
                "-key-file", os.path.join(CERTS_DIR, KEY_FILENAME),
                *certificate_subjects(context),
            ),
            cwd=context.root_dir,
        )
        await run_cmd(command)

    def success_messages(self):
        return ["Successfully generated SSL certificates with mkcert."]


class SelfSignedScriptStrategy(CertificateStrategy):
    """Self-signed certificates from the script shipped with the router."""

    name = "self-signed"

    async def generate(self, run_cmd, context):
        await run_cmd(ComposedCommand(args=(os.path.join(context.root_dir, SELF_SIGNED_SCRIPT),), cwd=context.root_dir))

    def success_messages(self):
        return [
            f"Successfully generated self-signed SSL certificates in {CERTS_DIR}/*.pem.",
            'Consider installing mkcert to generate locally trusted SSL certificates and run "devstack generate-certificates --force".',
        ]


def select_strategy(find_tool) -> CertificateStrategy:
    """Pick mkcert when it is on PATH, else the self-signed script."""
    mkcert = find_tool(MKCERT)
    if mkcert:
        return MkcertStrategy(binary=mkcert)
    return SelfSignedScriptStrategy()
