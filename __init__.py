"""
vscode_sync - Snapshot & restore tool for VS Code user configuration

Collects settings.json, keybindings.json, snippets/ and the installed
extension list into timestamped snapshots under Configs/, and restores the
newest snapshot back into the editor's user directory.

Usage:
    # As a module
    python -m vscode_sync
    python -m vscode_sync --mode collect

    # Programmatically
    from vscode_sync import SyncEngine, EngineConfig

    engine = SyncEngine(EngineConfig(root=Path("~/dotfiles").expanduser()))
    engine.run(mode=Mode.COLLECT)
"""

__version__ = "1.0.0"

# Main exports
from .runner.engine import SyncEngine, EngineConfig
from .runner.state import StateMachine, State, Mode

# Platform
from .discovery.platform import PlatformProfile, resolve_platform

# Snapshots
from .snapshot import SnapshotManager, FileSynchronizer, CopyOutcome, CopyStatus

# Extensions
from .extensions import ExtensionManager, ShellExtensionManager

__all__ = [
    # Version
    "__version__",
    # Engine
    "SyncEngine",
    "EngineConfig",
    "StateMachine",
    "State",
    "Mode",
    # Platform
    "PlatformProfile",
    "resolve_platform",
    # Snapshots
    "SnapshotManager",
    "FileSynchronizer",
    "CopyOutcome",
    "CopyStatus",
    # Extensions
    "ExtensionManager",
    "ShellExtensionManager",
]
