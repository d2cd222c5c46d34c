"""Shared pytest fixtures for all test modules."""

import os
import subprocess
import sys

import pytest

from devstack.config import ProjectParams, resolve_context
from devstack.environment.probe import DEV, FALLBACK, OTHER, HostProbe, Resolved
from devstack.process import ProcessResult

PROJECT_ROOT = os.path.normpath(os.path.join(os.path.dirname(__file__), ".."))


@pytest.fixture(scope="session")
def project_root():
    """Absolute path to the repository root."""
    return PROJECT_ROOT


@pytest.fixture(scope="session")
def run_cli(project_root):
    """Return a callable that invokes the devstack CLI as a subprocess.

    PATH is restricted to the interpreter's directory so host tools such
    as mkcert or composer never influence the outcome.
    """

    def _run(*args, cwd=None, env=None, input=None):
        environ = {
            "PATH": os.path.dirname(sys.executable),
            "PYTHONPATH": project_root,
            "CI": "1",
        }
        environ.update(env or {})
        result = subprocess.run(
            [sys.executable, "-m", "devstack.devstack", *args],
            capture_output=True,
            text=True,
            cwd=cwd or project_root,
            input=input,
            env=environ,
        )
        return result.returncode, result.stdout, result.stderr

    return _run


# ── Unit-test fixtures ──────────────────────────────────────────────


@pytest.fixture
def make_probe():
    """Return a factory for HostProbe snapshots with Linux defaults."""

    def _make(platform=OTHER, user_id=1000, environment_mode=DEV, cache_dir="/tmp/devstack/composer"):
        return HostProbe(
            platform=Resolved(platform),
            user_id=user_id,
            environment_mode=environment_mode,
            dependency_cache_dir=Resolved(cache_dir, FALLBACK),
        )

    return _make


@pytest.fixture
def project_dir(tmp_path):
    """A repository skeleton with the docker directory and an app directory."""
    (tmp_path / "infrastructure" / "docker" / "services" / "router" / "etc" / "ssl" / "certs").mkdir(parents=True)
    (tmp_path / "infrastructure" / "docker" / "docker-compose.yml").write_text("services: {}\n")
    (tmp_path / "application").mkdir()
    return tmp_path


@pytest.fixture
def make_context(project_dir, make_probe):
    """Return a factory building a Context rooted at project_dir."""

    def _make(params=None, **probe_kwargs):
        return resolve_context(params or ProjectParams(), make_probe(**probe_kwargs), str(project_dir))

    return _make


@pytest.fixture
def ctx(make_context):
    return make_context()


class RecordingRunner:
    """Fake run_cmd that records commands and answers from a responder."""

    def __init__(self, responder=None):
        self.calls = []
        self.responder = responder

    async def __call__(self, command, policy=None):
        self.calls.append((command, policy))
        if self.responder is not None:
            result = self.responder(command)
            if result is not None:
                return result
        return ProcessResult(0)

    @property
    def commands(self):
        return [command for command, _ in self.calls]

    @property
    def argvs(self):
        return [list(command.args) for command, _ in self.calls]


@pytest.fixture
def recorder():
    return RecordingRunner()


@pytest.fixture
def make_recorder():
    return RecordingRunner
