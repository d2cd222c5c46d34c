"""Unit tests for host probing and its fallbacks."""

import os
import sys
import tempfile

from devstack.environment.probe import (
    CI,
    DEV,
    FALLBACK,
    MACOS,
    OTHER,
    PRIMARY,
    WINDOWS,
    detect_environment_mode,
    detect_platform,
    probe_host,
    resolve_dependency_cache_dir,
)

# ── detect_platform ─────────────────────────────────────────────────


def test_detect_platform_darwin():
    assert detect_platform("Darwin") == detect_platform("darwin")
    assert detect_platform("Darwin").value == MACOS
    assert detect_platform("Darwin").source == PRIMARY


def test_detect_platform_windows():
    for name in ("Windows", "win32", "WIN64"):
        assert detect_platform(name).value == WINDOWS


def test_detect_platform_linux():
    result = detect_platform("Linux")
    assert result.value == OTHER
    assert not result.is_fallback


def test_detect_platform_unknown_falls_back_to_other():
    result = detect_platform("SunOS")
    assert result.value == OTHER
    assert result.source == FALLBACK


# ── detect_environment_mode ─────────────────────────────────────────


def test_environment_mode_dev_without_ci_flag():
    assert detect_environment_mode({}) == DEV


def test_environment_mode_ci_with_flag():
    assert detect_environment_mode({"CI": "true"}) == CI
    assert detect_environment_mode({"CI": "1"}) == CI


def test_environment_mode_falsy_flag_is_dev():
    for value in ("", "0", "false", "FALSE", "no"):
        assert detect_environment_mode({"CI": value}) == DEV


# ── resolve_dependency_cache_dir ────────────────────────────────────


def test_cache_dir_from_tool_output():
    result = resolve_dependency_cache_dir([sys.executable, "-c", "print('/home/dev/.cache/composer')"])
    assert result.value == "/home/dev/.cache/composer"
    assert result.source == PRIMARY


def test_cache_dir_missing_tool_falls_back():
    result = resolve_dependency_cache_dir(["devstack-no-such-tool-xyz", "cache-dir"])
    assert result.source == FALLBACK
    assert result.value == os.path.join(tempfile.gettempdir(), "devstack", "composer")


def test_cache_dir_non_zero_exit_falls_back():
    result = resolve_dependency_cache_dir([sys.executable, "-c", "import sys; print('/x'); sys.exit(3)"])
    assert result.is_fallback


def test_cache_dir_empty_output_falls_back():
    result = resolve_dependency_cache_dir([sys.executable, "-c", "pass"])
    assert result.is_fallback


# ── probe_host ──────────────────────────────────────────────────────


def test_probe_host_never_raises(monkeypatch):
    monkeypatch.setenv("PATH", "")
    probe = probe_host({"CI": "1"})
    assert probe.environment_mode == CI
    assert probe.dependency_cache_dir.is_fallback
    assert isinstance(probe.user_id, int)
