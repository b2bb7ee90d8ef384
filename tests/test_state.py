"""Tests for the workflow state machine and menu parsing."""

import pytest

from vscode_sync.errors import InvalidStateTransition
from vscode_sync.runner.state import Mode, State, StateMachine, parse_choice


class TestStateMachine:
    def test_starts_at_start(self):
        machine = StateMachine()

        assert machine.state == State.START
        assert not machine.is_terminal()

    def test_collect_path(self):
        machine = StateMachine()

        machine.transition(State.CHECK_PREREQUISITES)
        machine.transition(State.COLLECT)
        machine.transition(State.END)

        assert machine.is_terminal()
        assert machine.visited(State.COLLECT)
        assert not machine.visited(State.SYNC)
        assert [e.to_state for e in machine.history] == [
            State.CHECK_PREREQUISITES, State.COLLECT, State.END,
        ]

    def test_prerequisite_failure_goes_straight_to_end(self):
        machine = StateMachine()

        machine.transition(State.CHECK_PREREQUISITES)
        machine.transition(State.END, {"reason": "prerequisites"})

        assert machine.history[-1].metadata == {"reason": "prerequisites"}

    @pytest.mark.parametrize("path", [
        [State.COLLECT],
        [State.CHECK_PREREQUISITES, State.COLLECT, State.SYNC],
        [State.CHECK_PREREQUISITES, State.END, State.CHECK_PREREQUISITES],
    ])
    def test_invalid_transitions_raise(self, path):
        machine = StateMachine()

        with pytest.raises(InvalidStateTransition):
            for state in path:
                machine.transition(state)

    def test_on_enter_callback(self):
        machine = StateMachine()
        seen = []
        machine.on_enter(State.SYNC, lambda event: seen.append(event.from_state))

        machine.transition(State.CHECK_PREREQUISITES)
        machine.transition(State.SYNC)

        assert seen == [State.CHECK_PREREQUISITES]

    def test_history_records_each_step(self):
        machine = StateMachine()
        machine.transition(State.CHECK_PREREQUISITES)
        machine.transition(State.INVALID_CHOICE)
        machine.transition(State.END)

        history = machine.history
        assert [(e.from_state, e.to_state) for e in history] == [
            (State.START, State.CHECK_PREREQUISITES),
            (State.CHECK_PREREQUISITES, State.INVALID_CHOICE),
            (State.INVALID_CHOICE, State.END),
        ]
        assert all(e.duration_ms >= 0 for e in history)

        # The returned history is a copy
        history.clear()
        assert len(machine.history) == 3


class TestParseChoice:
    @pytest.mark.parametrize("answer,expected", [
        ("1", Mode.COLLECT),
        ("2", Mode.SYNC),
        (" 2\n", Mode.SYNC),
        ("3", None),
        ("", None),
        ("collect", None),
        ("01", None),
        (None, None),
    ])
    def test_only_one_and_two_are_valid(self, answer, expected):
        assert parse_choice(answer) == expected
