"""
SystemScanner - reports the host platform and the installed editor.

Shown before the mode prompt so the user can see what the tool will operate
on. The editor version doubles as the "is the CLI reachable" check.
"""

import os
import platform
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from ..errors import CommandLaunchError
from ..runner.shell import ShellRunner
from .platform import PlatformProfile


@dataclass
class SystemInfo:
    """Host and editor facts gathered at startup."""
    platform_name: str
    cpu_architecture: str
    logical_processors: int
    user_dir: Path
    user_dir_exists: bool
    editor_version: Optional[str] = None

    @property
    def editor_installed(self) -> bool:
        return bool(self.editor_version)


class SystemScanner:
    """
    Scans the local machine for the environment report.
    """

    def __init__(self, profile: PlatformProfile, runner: Optional[ShellRunner] = None):
        self.profile = profile
        self.runner = runner or ShellRunner(profile)

    def scan(self, editor_cli: str = "code") -> SystemInfo:
        """Perform the environment scan."""
        return SystemInfo(
            platform_name=self.profile.os_family.display_name,
            cpu_architecture=platform.machine() or "Unknown",
            logical_processors=os.cpu_count() or 1,
            user_dir=self.profile.user_dir,
            user_dir_exists=self.profile.user_dir.is_dir(),
            editor_version=self.get_editor_version(editor_cli),
        )

    def get_editor_version(self, editor_cli: str = "code") -> Optional[str]:
        """
        Editor version as a single line, or None if the CLI did not answer.

        Multi-line output (version, commit, architecture) is joined with ' | '.
        """
        try:
            result = self.runner.run(f"{editor_cli} --version")
        except CommandLaunchError:
            return None

        lines = [line.strip() for line in result.stdout.splitlines() if line.strip()]
        if not lines:
            return None
        return " | ".join(lines)
