"""Static project parameters and their loading from devstack.yaml."""

import os
import re
from dataclasses import dataclass, field

import yaml

from devstack.errors import ConfigurationError

CONFIG_FILENAME = "devstack.yaml"
PHP_VERSION_ENV = "DS_PHP_VERSION"

DEFAULT_PROJECT_NAME = "app"
DEFAULT_TLD = "test"
DEFAULT_PHP_VERSION = "8.2"
DEFAULT_PROJECT_DIRECTORY = "application"

_ALLOWED_KEYS = {"project_name", "tld", "root_domain", "extra_domains", "php_version", "project_directory"}
_PROJECT_NAME_RE = re.compile(r"^[a-z0-9][a-z0-9_-]*$")


@dataclass
class ProjectParams:
    """Project identity, domains and runtime version."""

    project_name: str = DEFAULT_PROJECT_NAME
    root_domain: str = f"{DEFAULT_PROJECT_NAME}.{DEFAULT_TLD}"
    extra_domains: list[str] = field(default_factory=lambda: [f"www.{DEFAULT_PROJECT_NAME}.{DEFAULT_TLD}"])
    php_version: str = DEFAULT_PHP_VERSION
    project_directory: str = DEFAULT_PROJECT_DIRECTORY

    @classmethod
    def from_dict(cls, d: dict) -> "ProjectParams":
        """Build params from a parsed devstack.yaml mapping.

        Domains default to ``<project_name>.<tld>`` and ``www.<project_name>.<tld>``
        when ``root_domain`` is not given.
        """
        unknown = set(d) - _ALLOWED_KEYS
        if unknown:
            raise ConfigurationError(f"Unknown keys in {CONFIG_FILENAME}: {', '.join(sorted(unknown))}")

        project_name = str(d.get("project_name", DEFAULT_PROJECT_NAME))
        tld = str(d.get("tld", DEFAULT_TLD))

        if "root_domain" in d:
            root_domain = d["root_domain"]
            extra_domains = d.get("extra_domains", [])
        else:
            root_domain = f"{project_name}.{tld}"
            extra_domains = d.get("extra_domains", [f"www.{project_name}.{tld}"])

        params = cls(
            project_name=project_name,
            root_domain=root_domain,
            extra_domains=extra_domains,
            php_version=str(d.get("php_version", DEFAULT_PHP_VERSION)),
            project_directory=d.get("project_directory", DEFAULT_PROJECT_DIRECTORY),
        )
        params.validate()
        params.extra_domains = _dedupe_domains(params.root_domain, params.extra_domains)
        return params

    def validate(self) -> None:
        """Raise ConfigurationError if any parameter is malformed."""
        if not _PROJECT_NAME_RE.match(self.project_name):
            raise ConfigurationError(
                f"Invalid project_name '{self.project_name}': "
                "use lowercase letters, digits, '-' and '_', starting with a letter or digit"
            )
        if not isinstance(self.root_domain, str) or not self.root_domain.strip():
            raise ConfigurationError("root_domain must be a non-empty string")
        if not isinstance(self.extra_domains, list):
            raise ConfigurationError("extra_domains must be a list of domain names")
        for domain in self.extra_domains:
            if not isinstance(domain, str) or not domain.strip():
                raise ConfigurationError(f"Invalid extra domain: {domain!r}")
        if not self.php_version:
            raise ConfigurationError("php_version must not be empty")
        directory = self.project_directory
        if not isinstance(directory, str) or not directory or os.path.isabs(directory):
            raise ConfigurationError(f"project_directory must be a relative path, got {directory!r}")
        if ".." in directory.replace("\\", "/").split("/"):
            raise ConfigurationError(f"project_directory must stay inside the repository, got {directory!r}")


def _dedupe_domains(root_domain, extra_domains):
    """Drop repeats of the root domain or earlier entries, keeping order."""
    seen = {root_domain}
    result = []
    for domain in extra_domains:
        if domain in seen:
            continue
        seen.add(domain)
        result.append(domain)
    return result


def load_params(root_dir, environ=None) -> ProjectParams:
    """Load devstack.yaml from root_dir (optional) and apply env overrides."""
    environ = os.environ if environ is None else environ
    config_path = os.path.join(root_dir, CONFIG_FILENAME)

    config = {}
    if os.path.isfile(config_path):
        try:
            with open(config_path) as f:
                config = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Error parsing {config_path}: {e}") from e
        if not isinstance(config, dict):
            raise ConfigurationError(f"{config_path} must contain a mapping at the top level")

    if environ.get(PHP_VERSION_ENV):
        config = {**config, "php_version": environ[PHP_VERSION_ENV]}

    return ProjectParams.from_dict(config)
