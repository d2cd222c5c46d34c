"""Read-only host probing.

Every probe here degrades to a documented default instead of raising.
Values that can come from a fallback are wrapped in ``Resolved`` so the
caller (and tests) can tell which branch produced them.
"""

import logging
import os
import platform
import shutil
import subprocess
import tempfile
from dataclasses import dataclass

logger = logging.getLogger(__name__)

PRIMARY = "primary"
FALLBACK = "fallback"

MACOS = "macos"
WINDOWS = "windows"
OTHER = "other"

CI = "ci"
DEV = "dev"

_FALSY_FLAGS = {"", "0", "false", "no"}

CACHE_DIR_COMMAND = ["composer", "global", "config", "cache-dir", "-q"]
CACHE_DIR_TIMEOUT = 30


@dataclass(frozen=True)
class Resolved:
    """A probed value tagged with the branch that produced it."""

    value: object
    source: str = PRIMARY

    @property
    def is_fallback(self) -> bool:
        return self.source == FALLBACK


@dataclass(frozen=True)
class HostProbe:
    """One-shot snapshot of the host state for this process."""

    platform: Resolved
    user_id: int
    environment_mode: str
    dependency_cache_dir: Resolved

    @property
    def is_macos(self) -> bool:
        return self.platform.value == MACOS

    @property
    def is_windows(self) -> bool:
        return self.platform.value == WINDOWS


def detect_platform(system=None) -> Resolved:
    """Classify the host OS name into macos / windows / other."""
    name = (system if system is not None else platform.system()).lower()
    if "darwin" in name:
        return Resolved(MACOS)
    if name in ("windows", "win32", "win64"):
        return Resolved(WINDOWS)
    if name == "linux":
        return Resolved(OTHER)
    # Unknown systems are handled like Linux: no extra compose overlay
    return Resolved(OTHER, FALLBACK)


def detect_user_id() -> int:
    """Effective numeric user id; hosts without one report 1000."""
    geteuid = getattr(os, "geteuid", None)
    if geteuid is None:
        return 1000
    return geteuid()


def detect_environment_mode(environ=None) -> str:
    """``ci`` when the CI flag is set to a truthy value, else ``dev``."""
    environ = os.environ if environ is None else environ
    flag = environ.get("CI", "").strip().lower()
    return DEV if flag in _FALSY_FLAGS else CI


def default_cache_dir() -> str:
    return os.path.join(tempfile.gettempdir(), "devstack", "composer")


def resolve_dependency_cache_dir(command=None, timeout=CACHE_DIR_TIMEOUT) -> Resolved:
    """Ask composer for its cache directory, falling back to a temp dir.

    Never raises: a missing tool, a non-zero exit, a timeout or empty
    output all select the fallback.
    """
    command = command or CACHE_DIR_COMMAND
    try:
        result = subprocess.run(command, capture_output=True, text=True, timeout=timeout)
    except (OSError, subprocess.SubprocessError) as e:
        logger.debug(f"Could not query dependency cache dir ({e}); using fallback")
        return Resolved(default_cache_dir(), FALLBACK)

    path = result.stdout.strip()
    if result.returncode != 0 or not path:
        logger.debug(f"'{' '.join(command)}' exited with {result.returncode}; using fallback cache dir")
        return Resolved(default_cache_dir(), FALLBACK)
    return Resolved(path)


def find_tool(name):
    """Absolute path of ``name`` on PATH, or None."""
    return shutil.which(name)


def probe_host(environ=None) -> HostProbe:
    """Collect the full host snapshot."""
    return HostProbe(
        platform=detect_platform(),
        user_id=detect_user_id(),
        environment_mode=detect_environment_mode(environ),
        dependency_cache_dir=resolve_dependency_cache_dir(),
    )
