"""Repository root discovery."""

import os

from devstack.config.params import CONFIG_FILENAME

_MARKERS = (
    CONFIG_FILENAME,
    os.path.join("infrastructure", "docker", "docker-compose.yml"),
)


def find_root_dir(start=None):
    """Walk up from ``start`` to the first directory holding a project marker.

    Falls back to ``start`` itself when no parent qualifies.
    """
    start = os.path.abspath(start or os.getcwd())
    current = start
    while True:
        if any(os.path.exists(os.path.join(current, marker)) for marker in _MARKERS):
            return current
        parent = os.path.dirname(current)
        if parent == current:
            return start
        current = parent
