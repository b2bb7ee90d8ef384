"""
ShellRunner - runs literal command strings through the platform shell.

Every call blocks until the process exits. Output streams are either captured
in full or sent to DEVNULL so a chatty child can never fill a pipe buffer.
No timeouts are applied.
"""

import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, TYPE_CHECKING

from ..errors import CommandLaunchError

if TYPE_CHECKING:
    from ..discovery.platform import PlatformProfile


@dataclass
class CommandResult:
    """Result of one shell command."""
    command: str
    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0


class ShellRunner:
    """Runs commands via the shell described by a PlatformProfile."""

    def __init__(self, profile: "PlatformProfile"):
        self.profile = profile

    def run(self, command: str) -> CommandResult:
        """
        Run a command and capture stdout/stderr as UTF-8 text.

        Raises:
            CommandLaunchError: If the shell itself could not be started
        """
        try:
            result = subprocess.run(
                self.profile.shell_args(command),
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
            )
        except OSError as e:
            raise CommandLaunchError(command, str(e)) from e

        return CommandResult(
            command=command,
            returncode=result.returncode,
            stdout=result.stdout or "",
            stderr=result.stderr or "",
        )

    def run_quiet(self, command: str) -> CommandResult:
        """
        Run a command, discarding its output.

        Raises:
            CommandLaunchError: If the shell itself could not be started
        """
        try:
            result = subprocess.run(
                self.profile.shell_args(command),
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
            )
        except OSError as e:
            raise CommandLaunchError(command, str(e)) from e

        return CommandResult(command=command, returncode=result.returncode)

    def open_directory(self, path: Path) -> Optional[str]:
        """
        Open a directory in the platform's file browser without waiting.

        Returns:
            None on success, otherwise the reason it failed
        """
        try:
            subprocess.Popen(
                self.profile.browser_args(path),
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
            )
        except OSError as e:
            return str(e)
        return None
