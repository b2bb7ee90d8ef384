"""
Exception hierarchy for vscode_sync.

Per-item failures (a file that could not be copied, an extension that would
not install) are reported as outcome objects, not exceptions. The classes
below cover the cases where an operation as a whole cannot proceed.
"""


class VSCodeSyncError(Exception):
    """Base class for all vscode_sync errors."""


class ConfigError(VSCodeSyncError):
    """Configuration file could not be found or parsed."""


class CommandLaunchError(VSCodeSyncError):
    """An external process could not be started."""

    def __init__(self, command: str, reason: str):
        self.command = command
        self.reason = reason
        super().__init__(f"Failed to run '{command}': {reason}")


class ExtensionCommandError(VSCodeSyncError):
    """The editor CLI ran but reported failure."""

    def __init__(self, message: str, returncode: int = None, stderr: str = ""):
        self.returncode = returncode
        self.stderr = stderr
        super().__init__(message)


class InvalidStateTransition(VSCodeSyncError):
    """Raised when the workflow attempts an invalid state transition."""
