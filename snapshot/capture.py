"""
Snapshot capture - copies the live editor configuration into a snapshot.
"""

from pathlib import Path
from typing import List, Optional

from ..errors import ExtensionCommandError
from ..extensions.manager import ExtensionManager, parse_extension_list
from .files import FileSynchronizer
from .models import (
    CollectResult,
    CopyOutcome,
    ExtensionExport,
    EXTENSIONS_FILE,
    SNIPPETS_DIR,
    TRACKED_FILES,
)


class SnapshotCapture:
    """Captures editor configuration from a user directory."""

    def __init__(
        self,
        user_dir: Path,
        extensions: Optional[ExtensionManager] = None,
        synchronizer: Optional[FileSynchronizer] = None,
    ):
        """
        Initialize snapshot capture.

        Args:
            user_dir: Live editor user directory to read from
            extensions: Extension manager used to export extensions.txt
            synchronizer: File synchronizer (default instance when omitted)
        """
        self.user_dir = Path(user_dir)
        self.extensions = extensions
        self.synchronizer = synchronizer or FileSynchronizer()

    def capture(self, target_dir: Path, include_extensions: bool = True) -> CollectResult:
        """
        Capture the tracked configuration into `target_dir`.

        Args:
            target_dir: Snapshot directory (created if needed)
            include_extensions: Also export extensions.txt

        Returns:
            CollectResult with one outcome per copied file
        """
        target_dir = Path(target_dir)
        if not self.user_dir.is_dir():
            return CollectResult.failure(f"VSCode user directory not found: {self.user_dir}")

        target_dir.mkdir(parents=True, exist_ok=True)
        copies = self._capture_files(target_dir)

        export = None
        if include_extensions and self.extensions is not None:
            export = self.export_extensions(target_dir / EXTENSIONS_FILE)

        return CollectResult(
            success=True,
            snapshot_dir=target_dir,
            source_dir=self.user_dir,
            copies=copies,
            export=export,
        )

    def _capture_files(self, target_dir: Path) -> List[CopyOutcome]:
        """Copy settings, keybindings and snippets that exist."""
        copies = []
        for name in TRACKED_FILES:
            copies.append(self.synchronizer.copy_if_exists(self.user_dir / name, target_dir))

        snippets = self.user_dir / SNIPPETS_DIR
        if snippets.is_dir():
            copies.extend(self.synchronizer.copy_directory(snippets, target_dir / SNIPPETS_DIR))

        return copies

    def export_extensions(self, target_file: Path) -> ExtensionExport:
        """
        Write the installed extension list verbatim to `target_file`.

        Nothing is written when the listing fails; an empty listing still
        produces an empty file.
        """
        try:
            output = self.extensions.list_raw()
        except ExtensionCommandError as e:
            return ExtensionExport(
                path=target_file,
                success=False,
                stderr=e.stderr or self.extensions.last_stderr,
                error=str(e),
            )

        try:
            target_file.write_bytes((output or "").encode("utf-8"))
        except OSError as e:
            return ExtensionExport(path=target_file, success=False, error=str(e))

        return ExtensionExport(
            path=target_file,
            success=True,
            count=len(parse_extension_list(output or "")),
            stderr=self.extensions.last_stderr,
        )
