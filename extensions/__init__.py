"""
Extension handling - export and reinstall the editor's extension list.
"""

from .manager import (
    ExtensionManager,
    ShellExtensionManager,
    InstallOutcome,
    InstallStatus,
    command_available,
    parse_extension_list,
    read_extension_list,
    resolve_editor_cli,
)

__all__ = [
    "ExtensionManager",
    "ShellExtensionManager",
    "InstallOutcome",
    "InstallStatus",
    "command_available",
    "parse_extension_list",
    "read_extension_list",
    "resolve_editor_cli",
]
