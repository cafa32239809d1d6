"""
frontdesk/engine/state_machine.py

State machine engine - central legality check for status changes

Entities keep their status in the database, so a machine here does not
hold a current state of its own: every request is checked as
(current status, requested status) against the configured transitions.
"""
from typing import Dict, List, Optional
from dataclasses import dataclass, field
import logging

from frontdesk.errors import IllegalTransitionError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StateTransition:
    """
    Transition definition

    Attributes:
        from_state: source state
        to_state: target state
        trigger: action name that causes it
    """

    from_state: str
    to_state: str
    trigger: str


@dataclass
class StateMachineConfig:
    """
    Attributes:
        name: entity name used in error messages
        states: every state of the entity
        transitions: allowed transitions
        initial_state: state of a freshly created entity
        terminal_states: states with no way out
    """

    name: str
    states: List[str]
    transitions: List[StateTransition]
    initial_state: str
    terminal_states: List[str] = field(default_factory=list)


class StateMachine:
    """
    Transition validator for one entity type

    Example:
        >>> machine = StateMachine(StateMachineConfig(
        ...     name="Booking",
        ...     states=["active", "completed", "cancelled"],
        ...     transitions=[StateTransition("active", "completed", "complete")],
        ...     initial_state="active",
        ... ))
        >>> machine.can_transition("active", "completed")
        True
    """

    def __init__(self, config: StateMachineConfig):
        unknown = {
            s for t in config.transitions for s in (t.from_state, t.to_state)
        } - set(config.states)
        if unknown:
            raise ValueError(f"{config.name}: transitions reference unknown states {sorted(unknown)}")

        self._config = config
        # from_state -> {to_state: transition}
        self._transition_map: Dict[str, Dict[str, StateTransition]] = {}
        for t in config.transitions:
            self._transition_map.setdefault(t.from_state, {})[t.to_state] = t

    @property
    def name(self) -> str:
        return self._config.name

    @property
    def initial_state(self) -> str:
        return self._config.initial_state

    def is_terminal(self, state: str) -> bool:
        return state in self._config.terminal_states or not self._transition_map.get(state)

    def allowed_targets(self, current: str) -> List[str]:
        """States reachable from `current` in one step"""
        return list(self._transition_map.get(current, {}).keys())

    def next_state(self, current: str) -> Optional[str]:
        """The single forward step for linear lifecycles, None at the end"""
        targets = self.allowed_targets(current)
        return targets[0] if len(targets) == 1 else None

    def can_transition(self, current: str, target: str) -> bool:
        if target not in self._config.states:
            return False
        return target in self._transition_map.get(current, {})

    def validate(self, current: str, target: str) -> StateTransition:
        """
        Check a requested transition

        Raises:
            IllegalTransitionError: the transition is not configured
        """
        if not self.can_transition(current, target):
            logger.warning(f"Rejected transition for {self.name}: {current} -> {target}")
            raise IllegalTransitionError(self.name, current, target)
        return self._transition_map[current][target]


__all__ = [
    "StateTransition",
    "StateMachineConfig",
    "StateMachine",
]
