"""Host environment probing: platform, user id, CI mode, cache dir."""

from devstack.environment.probe import (
    HostProbe,
    Resolved,
    detect_environment_mode,
    detect_platform,
    detect_user_id,
    find_tool,
    probe_host,
    resolve_dependency_cache_dir,
)

__all__ = [
    "HostProbe",
    "Resolved",
    "detect_environment_mode",
    "detect_platform",
    "detect_user_id",
    "find_tool",
    "probe_host",
    "resolve_dependency_cache_dir",
]
