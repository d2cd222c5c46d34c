"""Command composition for docker compose, docker and host shells."""

from devstack.compose.command import (
    COMPOSE_BINARY,
    DOCKER_BINARY,
    ComposedCommand,
    compose_command,
    compose_environment,
    compose_run_command,
    docker_command,
    format_domains,
    host_shell_command,
)

__all__ = [
    "COMPOSE_BINARY",
    "DOCKER_BINARY",
    "ComposedCommand",
    "compose_command",
    "compose_environment",
    "compose_run_command",
    "docker_command",
    "format_domains",
    "host_shell_command",
]
