"""
StateMachine - Manages the collect/sync workflow states.

START → CHECK_PREREQUISITES → COLLECT ────────┐
                            → SYNC ───────────┤
                            → INVALID_CHOICE ─┤
                            → END ────────────┴→ END

CHECK_PREREQUISITES goes straight to END when the editor CLI or the user
directory is missing.
"""

from enum import Enum, auto
from typing import Callable, Dict, List, Optional, Any
from dataclasses import dataclass, field
from datetime import datetime

from ..errors import InvalidStateTransition


class State(Enum):
    """Workflow states."""
    START = auto()
    CHECK_PREREQUISITES = auto()
    COLLECT = auto()
    SYNC = auto()
    INVALID_CHOICE = auto()
    END = auto()


# Valid state transitions
TRANSITIONS: Dict[State, List[State]] = {
    State.START: [State.CHECK_PREREQUISITES],
    State.CHECK_PREREQUISITES: [State.COLLECT, State.SYNC, State.INVALID_CHOICE, State.END],
    State.COLLECT: [State.END],
    State.SYNC: [State.END],
    State.INVALID_CHOICE: [State.END],
    State.END: [],
}


@dataclass
class StateEvent:
    """Record of a state transition."""
    from_state: State
    to_state: State
    timestamp: datetime
    duration_ms: int
    metadata: Dict[str, Any] = field(default_factory=dict)


class StateMachine:
    """
    Manages state transitions for the workflow.

    Ensures valid transitions and tracks history.
    """

    def __init__(self, initial_state: State = State.START):
        self._state = initial_state
        self._history: List[StateEvent] = []
        self._state_entered_at = datetime.now()
        self._callbacks: Dict[State, List[Callable]] = {}

    @property
    def state(self) -> State:
        """Get current state."""
        return self._state

    @property
    def history(self) -> List[StateEvent]:
        """Get state transition history."""
        return self._history.copy()

    def can_transition(self, to_state: State) -> bool:
        """Check if transition to target state is valid."""
        return to_state in TRANSITIONS.get(self._state, [])

    def transition(self, to_state: State, metadata: Optional[Dict[str, Any]] = None):
        """
        Transition to a new state.

        Args:
            to_state: Target state
            metadata: Optional data about the transition

        Raises:
            InvalidStateTransition: If transition is not valid
        """
        if not self.can_transition(to_state):
            raise InvalidStateTransition(
                f"Invalid transition: {self._state.name} → {to_state.name}. "
                f"Valid transitions: {[s.name for s in TRANSITIONS.get(self._state, [])]}"
            )

        now = datetime.now()
        duration_ms = int((now - self._state_entered_at).total_seconds() * 1000)

        event = StateEvent(
            from_state=self._state,
            to_state=to_state,
            timestamp=now,
            duration_ms=duration_ms,
            metadata=metadata or {},
        )
        self._history.append(event)

        self._state = to_state
        self._state_entered_at = now

        for callback in self._callbacks.get(to_state, []):
            callback(event)

    def on_enter(self, state: State, callback: Callable[[StateEvent], None]):
        """Register callback for state entry."""
        self._callbacks.setdefault(state, []).append(callback)

    def is_terminal(self) -> bool:
        """Check if in terminal state."""
        return self._state == State.END

    def visited(self, state: State) -> bool:
        """True if the workflow entered `state` at some point."""
        return any(event.to_state == state for event in self._history)


class Mode(str, Enum):
    """Operation selected at the prompt."""
    COLLECT = "collect"
    SYNC = "sync"


# Numeric menu entries
MODE_CHOICES: Dict[str, Mode] = {
    "1": Mode.COLLECT,
    "2": Mode.SYNC,
}


def parse_choice(choice: Optional[str]) -> Optional[Mode]:
    """Map a menu answer to a Mode; None for anything but '1' or '2'."""
    if choice is None:
        return None
    return MODE_CHOICES.get(choice.strip())
