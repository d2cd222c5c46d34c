"""Task library: infra, certificates, workers, app, about, start."""

from devstack.tasks.about import about, discover_router_hosts, project_urls
from devstack.tasks.app import builder, cache_clear, install, migrate, run_in_docker_or_locally
from devstack.tasks.certificates import CertificateState, generate_certificates
from devstack.tasks.infra import build, destroy, logs, ps, stop, up
from devstack.tasks.start import start
from devstack.tasks.workers import get_workers, workers_start, workers_stop

__all__ = [
    "CertificateState",
    "about",
    "build",
    "builder",
    "cache_clear",
    "destroy",
    "discover_router_hosts",
    "generate_certificates",
    "get_workers",
    "install",
    "logs",
    "migrate",
    "project_urls",
    "ps",
    "run_in_docker_or_locally",
    "start",
    "stop",
    "up",
    "workers_start",
    "workers_stop",
]
