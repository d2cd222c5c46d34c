"""Execution policy and result types."""

from dataclasses import dataclass, replace


@dataclass(frozen=True)
class ProcessPolicy:
    """How a command is run.

    ``timeout=None`` waits forever (interactive shells, log following).
    """

    timeout: float | None = None
    tty: bool = False
    pty: bool = False
    quiet: bool = False
    allow_failure: bool = False

    def with_timeout(self, timeout):
        return replace(self, timeout=timeout)

    def with_tty(self, tty=True):
        return replace(self, tty=tty)

    def with_pty(self, pty=True):
        return replace(self, pty=pty)

    def with_quiet(self, quiet=True):
        return replace(self, quiet=quiet)

    def with_allow_failure(self, allow_failure=True):
        return replace(self, allow_failure=allow_failure)


@dataclass
class ProcessResult:
    """Exit status and captured output of one invocation."""

    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0
