"""
Extension manager - lists and installs editor extensions.

ExtensionManager is the capability the snapshot code depends on.
ShellExtensionManager is the real backend: it drives the editor's command-line
interface through the platform shell.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Iterable, List, Optional, Sequence

from ..discovery.platform import PlatformProfile
from ..errors import CommandLaunchError, ExtensionCommandError
from ..runner.shell import ShellRunner


EDITOR_CLI = "code"

# macOS fallbacks when `code` is not on PATH, in priority order
MACOS_CLI_CANDIDATES = (
    "/opt/homebrew/bin/code",
    "/usr/local/bin/code",
    "/Applications/Visual Studio Code.app/Contents/Resources/app/bin/code",
)


class InstallStatus(str, Enum):
    """Outcome of one extension install."""
    INSTALLED = "installed"
    FAILED = "failed"


@dataclass
class InstallOutcome:
    """Per-extension result of an install."""
    identifier: str
    status: InstallStatus
    message: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status == InstallStatus.INSTALLED

    @classmethod
    def installed(cls, identifier: str) -> 'InstallOutcome':
        return cls(identifier=identifier, status=InstallStatus.INSTALLED)

    @classmethod
    def failed(cls, identifier: str, message: str) -> 'InstallOutcome':
        return cls(identifier=identifier, status=InstallStatus.FAILED, message=message)


def parse_extension_list(text: str) -> List[str]:
    """Extension identifiers from newline-separated text, blanks dropped."""
    return [line.strip() for line in text.splitlines() if line.strip()]


def read_extension_list(path: Path) -> List[str]:
    """Read identifiers from an extensions.txt file (UTF-8, BOM tolerated)."""
    return parse_extension_list(Path(path).read_bytes().decode("utf-8-sig"))


class ExtensionManager(ABC):
    """Capability for listing and installing editor extensions."""

    # Diagnostic output from the last list call, if any
    last_stderr: str = ""

    @abstractmethod
    def list_raw(self) -> str:
        """
        Raw listing output, one identifier per line.

        Raises:
            ExtensionCommandError: If the listing could not be produced
        """

    @abstractmethod
    def install(self, identifier: str) -> InstallOutcome:
        """Install (or force-reinstall) one extension."""

    def list(self) -> List[str]:
        """Installed extension identifiers."""
        return parse_extension_list(self.list_raw())

    def install_all(self, identifiers: Iterable[str]) -> List[InstallOutcome]:
        """
        Install every non-blank identifier, continuing past failures.

        Returns:
            One InstallOutcome per attempted identifier
        """
        outcomes = []
        for raw in identifiers:
            identifier = raw.strip()
            if not identifier:
                continue
            try:
                outcomes.append(self.install(identifier))
            except ExtensionCommandError as e:
                outcomes.append(InstallOutcome.failed(identifier, str(e)))
        return outcomes


def command_available(runner: ShellRunner, name: str) -> bool:
    """Ask the shell for `name` on PATH; True when it answers OK."""
    check = f"command -v {name} >/dev/null 2>&1 && echo OK || echo NO"
    try:
        result = runner.run(check)
    except CommandLaunchError:
        return False
    return result.stdout.strip().endswith("OK")


def resolve_editor_cli(
    profile: PlatformProfile,
    runner: ShellRunner,
    override: Optional[str] = None,
    candidates: Sequence[str] = MACOS_CLI_CANDIDATES,
) -> str:
    """
    Shell-ready command token for the editor CLI.

    An explicit override always wins. On macOS `code` is used only if it is on
    PATH; otherwise the first existing candidate path is used. Everywhere else
    (and when nothing is found) the plain `code` command is returned.
    """
    if override:
        return profile.quote(override)

    if not profile.is_macos:
        return EDITOR_CLI

    if command_available(runner, EDITOR_CLI):
        return EDITOR_CLI

    for candidate in candidates:
        if Path(candidate).exists():
            return profile.quote(candidate)

    return EDITOR_CLI


class ShellExtensionManager(ExtensionManager):
    """Extension manager backed by the editor CLI."""

    def __init__(
        self,
        profile: PlatformProfile,
        runner: Optional[ShellRunner] = None,
        cli: Optional[str] = None,
    ):
        """
        Args:
            profile: Resolved platform profile
            runner: Shell runner (created from the profile when omitted)
            cli: Explicit editor CLI path; resolved lazily when omitted
        """
        self.profile = profile
        self.runner = runner or ShellRunner(profile)
        self._cli_override = cli
        self._cli: Optional[str] = None
        self.last_stderr = ""

    @property
    def cli(self) -> str:
        """Editor CLI command token, resolved on first use."""
        if self._cli is None:
            self._cli = resolve_editor_cli(self.profile, self.runner, self._cli_override)
        return self._cli

    def list_raw(self) -> str:
        command = f"{self.cli} --list-extensions"
        try:
            result = self.runner.run(command)
        except CommandLaunchError as e:
            raise ExtensionCommandError(str(e)) from e

        self.last_stderr = result.stderr.strip()
        if not result.ok:
            raise ExtensionCommandError(
                f"'{command}' exited with code {result.returncode}",
                returncode=result.returncode,
                stderr=self.last_stderr,
            )
        return result.stdout

    def install(self, identifier: str) -> InstallOutcome:
        command = f"{self.cli} --install-extension {self.profile.quote(identifier)} --force"
        try:
            result = self.runner.run_quiet(command)
        except CommandLaunchError as e:
            return InstallOutcome.failed(identifier, e.reason)

        if not result.ok:
            return InstallOutcome.failed(identifier, f"exit code {result.returncode}")
        return InstallOutcome.installed(identifier)
