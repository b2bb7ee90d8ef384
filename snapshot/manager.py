"""
Snapshot manager - high-level snapshot operations.
"""

from datetime import datetime
from pathlib import Path
from typing import List, Optional

from ..extensions.manager import ExtensionManager, read_extension_list
from .capture import SnapshotCapture
from .files import FileSynchronizer
from .models import (
    CollectResult,
    RestoreResult,
    SnapshotInfo,
    EXTENSIONS_FILE,
    SNIPPETS_DIR,
    format_snapshot_name,
    parse_snapshot_name,
)
from .restore import SnapshotRestore


DEFAULT_CONFIGS_DIR = "Configs"


class SnapshotManager:
    """High-level snapshot operations over a Configs/ archive."""

    def __init__(
        self,
        root: Path,
        configs_dir_name: str = DEFAULT_CONFIGS_DIR,
        synchronizer: Optional[FileSynchronizer] = None,
    ):
        """
        Initialize snapshot manager.

        Nothing is created on disk until a snapshot is collected.

        Args:
            root: Directory that holds the Configs/ archive
            configs_dir_name: Name of the archive directory under root
            synchronizer: File synchronizer shared by capture and restore
        """
        self.root = Path(root)
        self.configs_dir = self.root / configs_dir_name
        self.synchronizer = synchronizer or FileSynchronizer()

    # =========================================================================
    # Core Operations
    # =========================================================================

    def ensure_configs_dir(self) -> Path:
        """Create Configs/ if needed."""
        self.configs_dir.mkdir(parents=True, exist_ok=True)
        return self.configs_dir

    def new_snapshot_dir(self, now: Optional[datetime] = None) -> Path:
        """
        Create the directory for a new snapshot named after `now`.

        Two collects within the same second share a directory.
        """
        path = self.ensure_configs_dir() / format_snapshot_name(now)
        path.mkdir(exist_ok=True)
        return path

    def collect(
        self,
        user_dir: Path,
        extensions: Optional[ExtensionManager] = None,
        include_extensions: bool = True,
        now: Optional[datetime] = None,
    ) -> CollectResult:
        """
        Collect the live configuration into a new timestamped snapshot.

        Args:
            user_dir: Live editor user directory
            extensions: Extension manager for extensions.txt
            include_extensions: Export the extension list
            now: Snapshot time (defaults to the current local time)

        Returns:
            CollectResult describing what was written
        """
        user_dir = Path(user_dir)
        if not user_dir.is_dir():
            return CollectResult.failure(f"VSCode user directory not found: {user_dir}")

        target = self.new_snapshot_dir(now)
        capture = SnapshotCapture(user_dir, extensions, self.synchronizer)
        return capture.capture(target, include_extensions=include_extensions)

    def restore_latest(
        self,
        user_dir: Path,
        extensions: Optional[ExtensionManager] = None,
        include_extensions: bool = True,
    ) -> RestoreResult:
        """
        Restore the most recent snapshot into the live user directory.

        Returns:
            RestoreResult; a failure when Configs/ is missing or empty
        """
        if not self.configs_dir.is_dir():
            return RestoreResult.failure(f"Configs directory not found: {self.configs_dir}")

        latest = self.latest()
        if latest is None:
            return RestoreResult.failure("No snapshots found in Configs/")

        restore = SnapshotRestore(user_dir, extensions, self.synchronizer)
        return restore.restore(latest, include_extensions=include_extensions)

    def restore_to(
        self,
        name: str,
        user_dir: Path,
        extensions: Optional[ExtensionManager] = None,
        include_extensions: bool = True,
    ) -> RestoreResult:
        """Restore a named snapshot into the live user directory."""
        snapshot = self.get(name)
        if snapshot is None:
            return RestoreResult.failure(f"Snapshot '{name}' not found")

        restore = SnapshotRestore(user_dir, extensions, self.synchronizer)
        return restore.restore(snapshot, include_extensions=include_extensions)

    # =========================================================================
    # Query Operations
    # =========================================================================

    def snapshot_dirs(self) -> List[Path]:
        """All snapshot directories, oldest first."""
        if not self.configs_dir.is_dir():
            return []
        return sorted(
            (p for p in self.configs_dir.iterdir() if p.is_dir()),
            key=lambda p: p.name,
        )

    def latest(self) -> Optional[Path]:
        """Snapshot with the lexicographically greatest name, if any."""
        dirs = self.snapshot_dirs()
        return dirs[-1] if dirs else None

    def get(self, name: str) -> Optional[Path]:
        """Get a snapshot directory by name."""
        if not name or Path(name).name != name:
            return None
        path = self.configs_dir / name
        return path if path.is_dir() else None

    def list_snapshots(self) -> List[SnapshotInfo]:
        """
        List all snapshots with summary info.

        Returns:
            List of SnapshotInfo, newest first
        """
        snapshots = []
        for path in reversed(self.snapshot_dirs()):
            extensions_file = path / EXTENSIONS_FILE
            count = 0
            if extensions_file.is_file():
                try:
                    count = len(read_extension_list(extensions_file))
                except (OSError, UnicodeDecodeError):
                    count = 0

            snapshots.append(SnapshotInfo(
                name=path.name,
                path=path,
                created_at=parse_snapshot_name(path.name),
                has_settings=(path / "settings.json").is_file(),
                has_keybindings=(path / "keybindings.json").is_file(),
                has_snippets=(path / SNIPPETS_DIR).is_dir(),
                has_extensions=extensions_file.is_file(),
                extension_count=count,
            ))
        return snapshots
