"""
Tests for frontdesk.engine - transition validation and the status lifecycles
"""
import pytest

from frontdesk.engine.lifecycles import (
    BOOKING_LIFECYCLE, KITCHEN_ORDER_LIFECYCLE, BAR_ORDER_LIFECYCLE
)
from frontdesk.engine.state_machine import (
    StateMachine, StateMachineConfig, StateTransition
)
from frontdesk.errors import BusinessRuleError, IllegalTransitionError


# ============== StateMachine Tests ==============
class TestStateMachine:

    @pytest.fixture
    def machine(self):
        return StateMachine(StateMachineConfig(
            name="Door",
            states=["open", "closed", "locked"],
            transitions=[
                StateTransition("open", "closed", "close"),
                StateTransition("closed", "open", "open"),
                StateTransition("closed", "locked", "lock"),
            ],
            initial_state="open",
        ))

    def test_can_transition(self, machine):
        assert machine.can_transition("open", "closed")
        assert not machine.can_transition("open", "locked")
        assert not machine.can_transition("open", "ajar")

    def test_validate_returns_transition(self, machine):
        transition = machine.validate("closed", "locked")
        assert transition.trigger == "lock"

    def test_validate_rejects(self, machine):
        with pytest.raises(IllegalTransitionError) as exc_info:
            machine.validate("locked", "open")

        error = exc_info.value
        assert isinstance(error, BusinessRuleError)
        assert error.status_code == 409
        assert error.message == "Door cannot move from 'locked' to 'open'"

    def test_next_state_only_when_unambiguous(self, machine):
        assert machine.next_state("open") == "closed"
        assert machine.next_state("closed") is None
        assert machine.next_state("locked") is None

    def test_terminal(self, machine):
        assert machine.is_terminal("locked")
        assert not machine.is_terminal("closed")

    def test_unknown_state_in_config(self):
        with pytest.raises(ValueError, match="unknown states"):
            StateMachine(StateMachineConfig(
                name="Broken",
                states=["a"],
                transitions=[StateTransition("a", "b", "go")],
                initial_state="a",
            ))


# ============== Lifecycle Tests ==============
class TestLifecycles:

    def test_booking(self):
        assert set(BOOKING_LIFECYCLE.allowed_targets("active")) == {"completed", "cancelled"}
        assert BOOKING_LIFECYCLE.is_terminal("completed")
        assert BOOKING_LIFECYCLE.is_terminal("cancelled")
        assert not BOOKING_LIFECYCLE.can_transition("completed", "active")
        assert not BOOKING_LIFECYCLE.can_transition("cancelled", "completed")

    def test_kitchen_order_is_linear(self):
        state = KITCHEN_ORDER_LIFECYCLE.initial_state
        path = [state]
        while KITCHEN_ORDER_LIFECYCLE.next_state(state):
            state = KITCHEN_ORDER_LIFECYCLE.next_state(state)
            path.append(state)
        assert path == ["pending", "preparing", "ready", "delivered", "completed"]

    def test_bar_order_serves(self):
        assert BAR_ORDER_LIFECYCLE.next_state("ready") == "served"
        assert not BAR_ORDER_LIFECYCLE.can_transition("ready", "delivered")
        assert not BAR_ORDER_LIFECYCLE.can_transition("pending", "ready")

