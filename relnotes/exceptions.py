"""Exception classes raised by the release notes pipeline."""

from typing import Optional, Sequence


class ReleaseNotesError(Exception):
    """Base exception for all relnotes errors."""


class ConfigurationError(ReleaseNotesError):
    """Raised when configuration is invalid or cannot be loaded."""


class CommandFailedError(ReleaseNotesError):
    """Raised when an external command cannot be run or exits non-zero."""

    def __init__(self, command: Sequence[str], returncode: Optional[int], stderr: str = ""):
        self.command = list(command)
        self.returncode = returncode
        self.stderr = stderr
        message = f"Command '{' '.join(self.command)}' "
        if returncode is None:
            message += "could not be run"
        else:
            message += f"exited with status {returncode}"
        if stderr:
            message += f": {stderr}"
        super().__init__(message)


class CommandTimeoutError(CommandFailedError):
    """Raised when an external command runs longer than its timeout."""

    def __init__(self, command: Sequence[str], timeout: float, stderr: str = ""):
        super().__init__(command, None, stderr)
        self.timeout = timeout
        self.args = (f"Command '{' '.join(self.command)}' timed out after {timeout} seconds",)


class MalformedMetadataError(ReleaseNotesError):
    """Raised when pull request metadata does not match the expected schema."""

    def __init__(self, number: int, reason: str):
        self.number = number
        super().__init__(f"Malformed metadata for PR #{number}: {reason}")
