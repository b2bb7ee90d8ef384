"""
Entry point for running vscode_sync as a module.

Usage:
    python -m vscode_sync
"""

from .cli import run

if __name__ == "__main__":
    run()
