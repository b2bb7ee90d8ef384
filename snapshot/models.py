"""
Data models for the snapshot/restore system.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import List, Optional

from ..extensions.manager import InstallOutcome


# Snapshot directory names sort lexicographically in chronological order
TIMESTAMP_FORMAT = "%Y-%m-%d-%H%M%S"

# Tracked items inside the editor user directory and inside each snapshot
TRACKED_FILES = ("settings.json", "keybindings.json")
SNIPPETS_DIR = "snippets"
EXTENSIONS_FILE = "extensions.txt"


def format_snapshot_name(moment: Optional[datetime] = None) -> str:
    """Timestamp-based snapshot directory name, e.g. '2024-12-31-235959'."""
    return (moment or datetime.now()).strftime(TIMESTAMP_FORMAT)


def parse_snapshot_name(name: str) -> Optional[datetime]:
    """Creation time encoded in a snapshot name, or None for foreign names."""
    try:
        return datetime.strptime(name, TIMESTAMP_FORMAT)
    except ValueError:
        return None


class CopyStatus(str, Enum):
    """What happened to a single file during a copy."""
    COPIED = "copied"           # Copied and rewritten as UTF-8 without BOM
    COPIED_RAW = "copied_raw"   # Copied, original bytes kept
    SKIPPED = "skipped"         # Nothing written


@dataclass
class CopyOutcome:
    """Per-file result of the file synchronizer."""
    source: Path
    destination: Optional[Path]
    status: CopyStatus
    reason: Optional[str] = None

    @classmethod
    def copied(cls, source: Path, destination: Path) -> 'CopyOutcome':
        return cls(source=source, destination=destination, status=CopyStatus.COPIED)

    @classmethod
    def copied_raw(cls, source: Path, destination: Path, reason: str = "") -> 'CopyOutcome':
        return cls(
            source=source,
            destination=destination,
            status=CopyStatus.COPIED_RAW,
            reason=reason or None,
        )

    @classmethod
    def skipped(cls, source: Path, reason: str) -> 'CopyOutcome':
        return cls(source=source, destination=None, status=CopyStatus.SKIPPED, reason=reason)

    @property
    def written(self) -> bool:
        """True if the destination file now exists."""
        return self.status != CopyStatus.SKIPPED

    @property
    def missing_source(self) -> bool:
        return self.status == CopyStatus.SKIPPED and self.reason == "not found"


@dataclass
class ExtensionExport:
    """Result of writing extensions.txt."""
    path: Path
    success: bool
    count: int = 0
    stderr: str = ""
    error: Optional[str] = None


@dataclass
class SnapshotInfo:
    """Summary info for listing snapshots."""
    name: str
    path: Path
    created_at: Optional[datetime]
    has_settings: bool = False
    has_keybindings: bool = False
    has_snippets: bool = False
    has_extensions: bool = False
    extension_count: int = 0

    @property
    def contents(self) -> List[str]:
        """Names of the tracked items present in this snapshot."""
        items = []
        if self.has_settings:
            items.append("settings.json")
        if self.has_keybindings:
            items.append("keybindings.json")
        if self.has_snippets:
            items.append(f"{SNIPPETS_DIR}/")
        if self.has_extensions:
            items.append(EXTENSIONS_FILE)
        return items


@dataclass
class CollectResult:
    """Result of a collect operation."""
    success: bool
    snapshot_dir: Optional[Path] = None
    source_dir: Optional[Path] = None
    copies: List[CopyOutcome] = field(default_factory=list)
    export: Optional[ExtensionExport] = None
    error: Optional[str] = None

    @property
    def files_written(self) -> int:
        return sum(1 for c in self.copies if c.written)

    @classmethod
    def failure(cls, error: str) -> 'CollectResult':
        return cls(success=False, error=error)


@dataclass
class RestoreResult:
    """Result of a restore operation."""
    success: bool
    snapshot_name: Optional[str] = None
    source_dir: Optional[Path] = None
    user_dir: Optional[Path] = None
    copies: List[CopyOutcome] = field(default_factory=list)
    installs: List[InstallOutcome] = field(default_factory=list)
    extensions_requested: bool = False
    error: Optional[str] = None

    @property
    def files_written(self) -> int:
        return sum(1 for c in self.copies if c.written)

    @property
    def failed_installs(self) -> List[InstallOutcome]:
        return [i for i in self.installs if not i.ok]

    @classmethod
    def failure(cls, error: str) -> 'RestoreResult':
        """Create a failure result."""
        return cls(success=False, error=error)
