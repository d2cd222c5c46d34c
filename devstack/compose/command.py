"""Build argument vectors and environments for external commands.

Everything here is pure: the same Context and inputs always give the
same ComposedCommand. Commands are token lists, never interpolated
shell strings.
"""

import os
import shlex
from dataclasses import dataclass, field

from devstack.config.context import BUILDER_COMPOSE_FILE, DOCKER_DIR, KNOWN_COMPOSE_FILES, Context
from devstack.errors import ConfigurationError

DOCKER_BINARY = "docker"
COMPOSE_BINARY = (DOCKER_BINARY, "compose")

DEFAULT_RUN_SERVICE = "builder"
DEFAULT_RUN_USER = "app"


@dataclass(frozen=True)
class ComposedCommand:
    """One external invocation: argv, environment and working directory.

    ``environment`` entries win over the inherited host environment only
    when ``override_environment`` is set; otherwise host values win.
    """

    args: tuple[str, ...]
    environment: dict[str, str] = field(default_factory=dict)
    override_environment: bool = True
    cwd: str | None = None

    def merged_environment(self, host_environment=None) -> dict[str, str]:
        host_environment = dict(os.environ if host_environment is None else host_environment)
        if self.override_environment:
            return {**host_environment, **self.environment}
        return {**self.environment, **host_environment}

    def display(self) -> str:
        """Shell-quoted command line for logs and dry-run output."""
        return shlex.join(self.args)


def format_domains(domains) -> str:
    """Render domains as a backtick-quoted list: `a`, `b`."""
    return "`" + "`, `".join(domains) + "`"


def compose_environment(context: Context) -> dict[str, str]:
    """Project variables consumed by the compose files."""
    return {
        "PROJECT_NAME": context.project_name,
        "PROJECT_DIRECTORY": context.project_directory,
        "PROJECT_ROOT_DOMAIN": context.root_domain,
        "PROJECT_DOMAINS": format_domains(context.domains),
        "COMPOSER_CACHE_DIR": context.dependency_cache_dir,
        "PHP_VERSION": context.php_version,
    }


def _compose_file_path(context: Context, name):
    if name not in KNOWN_COMPOSE_FILES:
        raise ConfigurationError(f"Unknown compose file: {name}")
    return os.path.join(context.root_dir, DOCKER_DIR, name)


def compose_command(context: Context, sub_command, with_builder=False, base_environment=None) -> ComposedCommand:
    """Build ``docker compose -p <project> -f ... <sub_command>``.

    The builder overlay, when requested, is always the last ``-f`` so it
    wins the compose merge. Project variables do not override host
    variables of the same name, unless ``base_environment`` is given: the
    project variables are then layered over that snapshot and override.
    """
    args = [*COMPOSE_BINARY, "-p", context.project_name]
    for name in context.compose_files:
        args += ["-f", _compose_file_path(context, name)]
    if with_builder:
        args += ["-f", _compose_file_path(context, BUILDER_COMPOSE_FILE)]
    args += list(sub_command)

    environment = compose_environment(context)
    if base_environment is not None:
        return ComposedCommand(
            args=tuple(args),
            environment={**base_environment, **environment},
            override_environment=True,
        )
    return ComposedCommand(args=tuple(args), environment=environment, override_environment=False)


def compose_run_command(
    context: Context,
    run_command,
    service=DEFAULT_RUN_SERVICE,
    user=DEFAULT_RUN_USER,
    no_deps=True,
    workdir=None,
    port_mapping=False,
    with_builder=True,
    base_environment=None,
) -> ComposedCommand:
    """Run a one-off command inside a throwaway service container.

    The command goes through ``/bin/sh -c "exec ..."`` so the shell is
    replaced and signals reach the user process directly.
    """
    sub_command = ["run", "--rm", "-u", user]
    if no_deps:
        sub_command.append("--no-deps")
    if port_mapping:
        sub_command.append("--service-ports")
    if workdir is not None:
        sub_command += ["-w", workdir]
    sub_command += [service, "/bin/sh", "-c", f"exec {run_command}"]

    return compose_command(context, sub_command, with_builder=with_builder, base_environment=base_environment)


def docker_command(*args) -> ComposedCommand:
    """Plain ``docker`` invocation with no extra environment."""
    return ComposedCommand(args=(DOCKER_BINARY, *args))


def host_shell_command(context: Context, command) -> ComposedCommand:
    """Run a shell command on the host from the repository root."""
    return ComposedCommand(args=("/bin/sh", "-c", command), cwd=context.root_dir)
