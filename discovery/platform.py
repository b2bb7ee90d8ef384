"""
Platform resolution - maps the running OS to editor paths and shell conventions.

Resolution happens once at startup. The resulting PlatformProfile is passed
explicitly to every component that needs to run a command or locate the
editor's user directory.
"""

import os
import platform
import shlex
import subprocess
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import List, Mapping, Optional, Union


class OSFamily(str, Enum):
    """Operating system families with distinct editor layouts."""
    WINDOWS = "windows"
    MACOS = "macos"
    LINUX = "linux"

    @property
    def display_name(self) -> str:
        return {
            OSFamily.WINDOWS: "Windows",
            OSFamily.MACOS: "macOS",
            OSFamily.LINUX: "Linux",
        }[self]


@dataclass(frozen=True)
class PlatformProfile:
    """Immutable description of how to talk to the editor on this machine."""
    os_family: OSFamily
    user_dir: Path
    shell: str
    file_browser: str

    @property
    def is_windows(self) -> bool:
        return self.os_family == OSFamily.WINDOWS

    @property
    def is_macos(self) -> bool:
        return self.os_family == OSFamily.MACOS

    def shell_args(self, command: str) -> Union[str, List[str]]:
        """
        Wrap a literal command string into the shell's invocation arguments.

        On Windows the result is a complete command line. cmd.exe does not
        understand the backslash-escaped quotes that subprocess would add to a
        list, and /s makes it strip exactly the outer pair of quotes.
        """
        if self.is_windows:
            return f'{self.shell} /s /c "{command}"'
        return [self.shell, "-c", command]

    def quote(self, arg: str) -> str:
        """Quote a single argument for this platform's shell."""
        if self.is_windows:
            return subprocess.list2cmdline([arg])
        return shlex.quote(arg)

    def browser_args(self, path: Path) -> List[str]:
        """Arguments that open `path` in the platform's file browser."""
        return [self.file_browser, str(path)]

    def with_user_dir(self, user_dir: Path) -> "PlatformProfile":
        """Copy of this profile pointing at a different user directory."""
        return PlatformProfile(
            os_family=self.os_family,
            user_dir=Path(user_dir),
            shell=self.shell,
            file_browser=self.file_browser,
        )


# Shell and file browser per OS family
SHELLS = {
    OSFamily.WINDOWS: "cmd.exe",
    OSFamily.MACOS: "/bin/zsh",
    OSFamily.LINUX: "/bin/bash",
}

FILE_BROWSERS = {
    OSFamily.WINDOWS: "explorer.exe",
    OSFamily.MACOS: "open",
    OSFamily.LINUX: "xdg-open",
}


def detect_os_family(system: Optional[str] = None) -> OSFamily:
    """
    Map `platform.system()` output to an OSFamily.

    Anything that is neither Windows nor macOS is treated as Linux.
    """
    name = (system if system is not None else platform.system()).lower()
    if name.startswith("win") or name.startswith("cygwin"):
        return OSFamily.WINDOWS
    if name == "darwin":
        return OSFamily.MACOS
    return OSFamily.LINUX


def editor_user_dir(
    os_family: OSFamily,
    home: Path,
    environ: Mapping[str, str],
) -> Path:
    """Location of the editor's live user configuration for an OS family."""
    if os_family == OSFamily.WINDOWS:
        appdata = environ.get("APPDATA")
        base = Path(appdata) if appdata else home / "AppData" / "Roaming"
        return base / "Code" / "User"
    if os_family == OSFamily.MACOS:
        return home / "Library" / "Application Support" / "Code" / "User"
    return home / ".config" / "Code" / "User"


def resolve_platform(
    system: Optional[str] = None,
    home: Optional[Path] = None,
    environ: Optional[Mapping[str, str]] = None,
    user_dir: Optional[Path] = None,
) -> PlatformProfile:
    """
    Resolve the platform profile for the running (or given) OS.

    Args:
        system: Value shaped like `platform.system()`; detected when None
        home: Home directory; `Path.home()` when None
        environ: Environment mapping; `os.environ` when None
        user_dir: Explicit user directory, bypassing the OS default

    Returns:
        PlatformProfile. The user directory is not required to exist.
    """
    os_family = detect_os_family(system)
    home = Path(home) if home is not None else Path.home()
    environ = environ if environ is not None else os.environ

    return PlatformProfile(
        os_family=os_family,
        user_dir=Path(user_dir) if user_dir else editor_user_dir(os_family, home, environ),
        shell=SHELLS[os_family],
        file_browser=FILE_BROWSERS[os_family],
    )
