"""
Mock components for testing vscode_sync.

These mocks stand in for the editor CLI and the platform shell so collect and
sync can be exercised without VS Code installed.
"""

from .mock_extensions import MockExtensionManager
from .mock_shell import MockShellRunner

__all__ = [
    'MockExtensionManager',
    'MockShellRunner',
]
