"""
UI module - Rich console interface.

Provides:
- Environment report and progress lines
- Collect/sync result formatting
- Snapshot listing
- The interactive mode menu
"""

from .console import ConsoleUI
from .interaction import InteractionManager

__all__ = [
    "ConsoleUI",
    "InteractionManager",
]
