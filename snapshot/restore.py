"""
Snapshot restore - writes a snapshot back into the live editor directory.
"""

from pathlib import Path
from typing import List, Optional

from ..extensions.manager import ExtensionManager, InstallOutcome, read_extension_list
from .files import FileSynchronizer
from .models import (
    CopyOutcome,
    RestoreResult,
    EXTENSIONS_FILE,
    SNIPPETS_DIR,
    TRACKED_FILES,
)


class SnapshotRestore:
    """Restores editor configuration from a snapshot directory."""

    def __init__(
        self,
        user_dir: Path,
        extensions: Optional[ExtensionManager] = None,
        synchronizer: Optional[FileSynchronizer] = None,
    ):
        """
        Initialize snapshot restore.

        Args:
            user_dir: Live editor user directory to write into
            extensions: Extension manager used to reinstall extensions
            synchronizer: File synchronizer (default instance when omitted)
        """
        self.user_dir = Path(user_dir)
        self.extensions = extensions
        self.synchronizer = synchronizer or FileSynchronizer()

    def restore(self, snapshot_dir: Path, include_extensions: bool = True) -> RestoreResult:
        """
        Restore the editor configuration from `snapshot_dir`.

        Files are overwritten, never removed. Extensions listed in the
        snapshot are installed with --force, one failure not stopping the
        rest.

        Args:
            snapshot_dir: Snapshot to restore from
            include_extensions: Install extensions from extensions.txt

        Returns:
            RestoreResult with copy and install outcomes
        """
        snapshot_dir = Path(snapshot_dir)
        if not snapshot_dir.is_dir():
            return RestoreResult.failure(f"Snapshot not found: {snapshot_dir}")

        copies = self._restore_files(snapshot_dir)

        installs: List[InstallOutcome] = []
        requested = False
        extensions_file = snapshot_dir / EXTENSIONS_FILE
        if include_extensions and self.extensions is not None and extensions_file.is_file():
            requested = True
            installs = self.install_from(extensions_file)

        return RestoreResult(
            success=True,
            snapshot_name=snapshot_dir.name,
            source_dir=snapshot_dir,
            user_dir=self.user_dir,
            copies=copies,
            installs=installs,
            extensions_requested=requested,
        )

    def _restore_files(self, snapshot_dir: Path) -> List[CopyOutcome]:
        copies = []
        for name in TRACKED_FILES:
            copies.append(self.synchronizer.copy_if_exists(snapshot_dir / name, self.user_dir))

        snippets = snapshot_dir / SNIPPETS_DIR
        if snippets.is_dir():
            copies.extend(self.synchronizer.copy_directory(snippets, self.user_dir / SNIPPETS_DIR))

        return copies

    def install_from(self, extensions_file: Path) -> List[InstallOutcome]:
        """Install every identifier listed in an extensions.txt file."""
        try:
            identifiers = read_extension_list(extensions_file)
        except (OSError, UnicodeDecodeError) as e:
            return [InstallOutcome.failed(EXTENSIONS_FILE, f"could not read list: {e}")]

        return self.extensions.install_all(identifiers)
