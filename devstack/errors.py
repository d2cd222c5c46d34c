"""Error taxonomy shared by every layer."""


class DevstackError(Exception):
    """Base class for errors surfaced to the CLI."""


class ConfigurationError(DevstackError):
    """Static project parameters are missing or malformed."""


class PreconditionNotMet(DevstackError):
    """A task cannot run until the operator fixes something on the host."""


class UserAborted(DevstackError):
    """Interactive confirmation was declined."""


class ProcessFailure(DevstackError):
    """An external process exited non-zero."""

    def __init__(self, command, returncode, stdout="", stderr=""):
        self.command = command
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr
        super().__init__(f"Command failed with exit code {returncode}: {command}")
