"""
SyncEngine - Main orchestrator for the collect/sync workflow.

START → CHECK_PREREQUISITES → COLLECT | SYNC | INVALID_CHOICE → END

The platform is resolved once and the resulting profile is handed to every
component. All work is sequential and blocks on each external command.
"""

from pathlib import Path
from typing import Optional, Dict, Any, Callable
from dataclasses import dataclass, field

from .state import StateMachine, State, Mode
from .shell import ShellRunner
from ..config import Config, default_root
from ..discovery.platform import PlatformProfile, resolve_platform
from ..discovery.system import SystemInfo, SystemScanner
from ..extensions.manager import ExtensionManager, ShellExtensionManager
from ..snapshot.manager import SnapshotManager, DEFAULT_CONFIGS_DIR
from ..snapshot.models import CollectResult, RestoreResult
from ..ui.console import ConsoleUI


@dataclass
class EngineConfig:
    """Configuration for the sync engine."""
    root: Path = field(default_factory=default_root)
    configs_dir: str = DEFAULT_CONFIGS_DIR
    user_dir: Optional[Path] = None
    editor_cli: Optional[str] = None

    # Behavior
    include_extensions: bool = True
    open_after: bool = True

    @classmethod
    def from_config(cls, config: Config) -> "EngineConfig":
        """Build engine settings from the loaded Config."""
        return cls(
            root=config.paths.root_path,
            configs_dir=config.paths.configs_dir,
            user_dir=config.paths.user_dir_path,
            editor_cli=config.editor.cli or None,
            include_extensions=config.sync.extensions,
            open_after=config.sync.open_after,
        )


class SyncEngine:
    """
    Main orchestrator for collecting and restoring editor configuration.
    """

    def __init__(
        self,
        config: Optional[EngineConfig] = None,
        ui: Optional[ConsoleUI] = None,
        profile: Optional[PlatformProfile] = None,
        extensions: Optional[ExtensionManager] = None,
        scanner: Optional[SystemScanner] = None,
        runner: Optional[ShellRunner] = None,
    ):
        self.config = config or EngineConfig()
        self.ui = ui or ConsoleUI(quiet=True)
        self.state_machine = StateMachine()

        # Components (initialized lazily)
        self._profile = profile
        self._runner = runner
        self._extensions = extensions
        self._scanner = scanner
        self._snapshots: Optional[SnapshotManager] = None

        self.system_info: Optional[SystemInfo] = None
        self._on_state_change: Optional[Callable] = None

    def on_state_change(self, callback: Callable[[State, State, Dict], None]):
        """Register callback for state changes."""
        self._on_state_change = callback

    @property
    def profile(self) -> PlatformProfile:
        """Get or resolve the platform profile."""
        if self._profile is None:
            self._profile = resolve_platform(user_dir=self.config.user_dir)
        return self._profile

    @property
    def runner(self) -> ShellRunner:
        """Get or initialize the shell runner."""
        if self._runner is None:
            self._runner = ShellRunner(self.profile)
        return self._runner

    @property
    def extensions(self) -> ExtensionManager:
        """Get or initialize the extension manager."""
        if self._extensions is None:
            self._extensions = ShellExtensionManager(
                self.profile,
                runner=self.runner,
                cli=self.config.editor_cli,
            )
        return self._extensions

    @property
    def scanner(self) -> SystemScanner:
        """Get or initialize the system scanner."""
        if self._scanner is None:
            self._scanner = SystemScanner(self.profile, runner=self.runner)
        return self._scanner

    @property
    def snapshots(self) -> SnapshotManager:
        """Get or initialize the snapshot manager."""
        if self._snapshots is None:
            self._snapshots = SnapshotManager(self.config.root, self.config.configs_dir)
        return self._snapshots

    @property
    def user_dir(self) -> Path:
        return self.profile.user_dir

    # =========================================================================
    # Workflow
    # =========================================================================

    def run(
        self,
        mode: Optional[Mode] = None,
        choose: Optional[Callable[[], Optional[Mode]]] = None,
        snapshot_name: Optional[str] = None,
    ) -> bool:
        """
        Run the workflow once.

        Args:
            mode: Operation to run; when None, `choose` is asked after the
                prerequisite check
            choose: Callback returning the selected Mode, None if invalid
            snapshot_name: Restore this snapshot instead of the latest

        Returns:
            True unless prerequisites failed or the operation reported failure.
            An invalid selection is not a failure.
        """
        self._transition(State.CHECK_PREREQUISITES)
        if not self.check_prerequisites():
            self._transition(State.END, {'reason': 'prerequisites'})
            return False

        if mode is None and choose is not None:
            mode = choose()

        if mode == Mode.COLLECT:
            self._transition(State.COLLECT)
            success = self.collect().success
        elif mode == Mode.SYNC:
            self._transition(State.SYNC)
            success = self.sync(snapshot_name).success
        else:
            self._transition(State.INVALID_CHOICE)
            self.ui.print("Invalid selection. Exit.")
            success = True

        self._transition(State.END)
        return success

    def check_prerequisites(self) -> bool:
        """
        Verify the editor CLI answers and the user directory exists.

        Prints the environment report and a diagnostic on failure. Nothing is
        written to disk.
        """
        editor_cli = getattr(self.extensions, "cli", "code")
        self.system_info = self.scanner.scan(editor_cli)
        self.ui.print_system_info(self.system_info)

        if not self.system_info.editor_installed:
            self.ui.print_error("VS Code CLI not found. Install VS Code and add `code` to PATH.")
            return False
        if not self.system_info.user_dir_exists:
            self.ui.print_error(f"VSCode user directory not found: {self.system_info.user_dir}")
            return False
        return True

    def collect(self) -> CollectResult:
        """Collect the live configuration into a new snapshot and open it."""
        result = self.snapshots.collect(
            self.user_dir,
            extensions=self.extensions if self.config.include_extensions else None,
            include_extensions=self.config.include_extensions,
        )
        self.ui.print_collect_result(result)

        if result.success and self.config.open_after:
            self.open_directory(result.snapshot_dir)
        return result

    def sync(self, snapshot_name: Optional[str] = None) -> RestoreResult:
        """Restore the latest (or named) snapshot and open the user directory."""
        extensions = self.extensions if self.config.include_extensions else None
        if snapshot_name:
            result = self.snapshots.restore_to(
                snapshot_name,
                self.user_dir,
                extensions=extensions,
                include_extensions=self.config.include_extensions,
            )
        else:
            result = self.snapshots.restore_latest(
                self.user_dir,
                extensions=extensions,
                include_extensions=self.config.include_extensions,
            )
        self.ui.print_restore_result(result)

        if result.success and self.config.open_after:
            self.open_directory(self.user_dir)
        return result

    def open_directory(self, path: Path) -> bool:
        """Open `path` in the file browser; failure is only a warning."""
        error = self.runner.open_directory(path)
        if error:
            self.ui.print_warning(f"Failed to open directory: {error}")
            return False
        return True

    def _transition(self, to_state: State, metadata: Optional[Dict[str, Any]] = None):
        from_state = self.state_machine.state
        self.state_machine.transition(to_state, metadata)
        if self._on_state_change:
            self._on_state_change(from_state, to_state, metadata or {})
