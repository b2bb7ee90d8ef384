"""
Runner module - drives the collect/sync workflow.

- StateMachine: START → CHECK_PREREQUISITES → COLLECT | SYNC → END
- ShellRunner: runs editor CLI commands through the platform shell

SyncEngine lives in runner.engine and is imported from there; it depends on
the snapshot and extension packages, which themselves use ShellRunner.
"""

from .state import StateMachine, State, Mode, parse_choice
from .shell import ShellRunner, CommandResult

__all__ = [
    "StateMachine",
    "State",
    "Mode",
    "parse_choice",
    "ShellRunner",
    "CommandResult",
]
