"""Immutable per-invocation context built from params and the host probe."""

import logging
import os
from dataclasses import dataclass

from devstack.config.params import ProjectParams
from devstack.environment.probe import DEV, HostProbe

logger = logging.getLogger(__name__)

DOCKER_DIR = os.path.join("infrastructure", "docker")
CERTS_DIR = os.path.join(DOCKER_DIR, "services", "router", "etc", "ssl", "certs")

BASE_COMPOSE_FILES = ("docker-compose.yml", "docker-compose.worker.yml")
OVERRIDE_COMPOSE_FILE = "docker-compose.override.yml"
PLATFORM_COMPOSE_FILE = "docker-compose.docker-for-x.yml"
BUILDER_COMPOSE_FILE = "docker-compose.builder.yml"
KNOWN_COMPOSE_FILES = frozenset(
    (*BASE_COMPOSE_FILES, OVERRIDE_COMPOSE_FILE, PLATFORM_COMPOSE_FILE, BUILDER_COMPOSE_FILE)
)

MAX_USER_ID = 256000
FALLBACK_USER_ID = 1000


@dataclass(frozen=True)
class Context:
    """Everything a task needs to know about the project and the host.

    Built once per CLI invocation. Variations are derived with
    ``dataclasses.replace``; nothing mutates an existing instance.
    """

    project_name: str
    root_domain: str
    extra_domains: tuple[str, ...]
    php_version: str
    project_directory: str
    root_dir: str
    compose_files: tuple[str, ...]
    user_id: int
    environment_mode: str
    dependency_cache_dir: str
    macos: bool = False
    windows: bool = False

    @property
    def domains(self) -> tuple[str, ...]:
        """Root domain followed by the extra domains, in order."""
        return (self.root_domain, *self.extra_domains)

    @property
    def docker_dir(self) -> str:
        return os.path.join(self.root_dir, DOCKER_DIR)

    @property
    def certs_dir(self) -> str:
        return os.path.join(self.root_dir, CERTS_DIR)

    @property
    def project_path(self) -> str:
        return os.path.join(self.root_dir, self.project_directory)

    @property
    def pty(self) -> bool:
        """Commands get a pseudo-terminal by default in interactive mode."""
        return self.environment_mode == DEV


def resolve_user_id(user_id: int) -> int:
    """Map root and out-of-range ids to a safe non-privileged id."""
    if user_id > MAX_USER_ID:
        return FALLBACK_USER_ID
    if user_id == 0:
        logger.warning("Running as root? Fallback to fake user id.")
        return FALLBACK_USER_ID
    return user_id


def resolve_context(params: ProjectParams, probe: HostProbe, root_dir) -> Context:
    """Merge static params with the host probe.

    The only I/O is the existence check for the local override file.
    """
    root_dir = os.path.abspath(root_dir)

    compose_files = list(BASE_COMPOSE_FILES)
    if os.path.exists(os.path.join(root_dir, DOCKER_DIR, OVERRIDE_COMPOSE_FILE)):
        compose_files.append(OVERRIDE_COMPOSE_FILE)
    if probe.is_macos or probe.is_windows:
        compose_files.append(PLATFORM_COMPOSE_FILE)

    return Context(
        project_name=params.project_name,
        root_domain=params.root_domain,
        extra_domains=tuple(params.extra_domains),
        php_version=params.php_version,
        project_directory=params.project_directory,
        root_dir=root_dir,
        compose_files=tuple(compose_files),
        user_id=resolve_user_id(probe.user_id),
        environment_mode=probe.environment_mode,
        dependency_cache_dir=probe.dependency_cache_dir.value,
        macos=probe.is_macos,
        windows=probe.is_windows,
    )
