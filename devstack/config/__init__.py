"""Project configuration: static parameters, root discovery, context."""

from devstack.config.context import (
    BASE_COMPOSE_FILES,
    BUILDER_COMPOSE_FILE,
    KNOWN_COMPOSE_FILES,
    OVERRIDE_COMPOSE_FILE,
    PLATFORM_COMPOSE_FILE,
    Context,
    resolve_context,
    resolve_user_id,
)
from devstack.config.discovery import find_root_dir
from devstack.config.params import CONFIG_FILENAME, ProjectParams, load_params

__all__ = [
    "BASE_COMPOSE_FILES",
    "BUILDER_COMPOSE_FILE",
    "KNOWN_COMPOSE_FILES",
    "OVERRIDE_COMPOSE_FILE",
    "PLATFORM_COMPOSE_FILE",
    "CONFIG_FILENAME",
    "Context",
    "ProjectParams",
    "find_root_dir",
    "load_params",
    "resolve_context",
    "resolve_user_id",
]
