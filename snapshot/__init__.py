"""
Snapshot/Restore system for vscode_sync.

Snapshots are timestamp-named directories under Configs/ holding a copy of
the editor configuration:

- settings.json and keybindings.json
- the snippets/ tree
- extensions.txt with one extension identifier per line

Collect writes a new snapshot; sync restores the newest one into the live
editor user directory and reinstalls the listed extensions.
"""

from .models import (
    CollectResult,
    CopyOutcome,
    CopyStatus,
    ExtensionExport,
    RestoreResult,
    SnapshotInfo,
)
from .files import FileSynchronizer
from .capture import SnapshotCapture
from .restore import SnapshotRestore
from .manager import SnapshotManager

__all__ = [
    'CollectResult',
    'CopyOutcome',
    'CopyStatus',
    'ExtensionExport',
    'RestoreResult',
    'SnapshotInfo',
    'FileSynchronizer',
    'SnapshotCapture',
    'SnapshotRestore',
    'SnapshotManager',
]
