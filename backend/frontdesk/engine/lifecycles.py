"""
Lifecycles of bookings and kitchen/bar orders

Bookings: active -> completed | cancelled, both terminal.
Orders: strictly forward, one step at a time:
    kitchen  pending -> preparing -> ready -> delivered -> completed
    bar      pending -> preparing -> ready -> served    -> completed
"""
from frontdesk.engine.state_machine import StateMachine, StateMachineConfig, StateTransition
from frontdesk.models.ontology import BookingStatus, KitchenOrderStatus, BarOrderStatus


def _linear(name: str, states: list) -> StateMachine:
    transitions = [
        StateTransition(a, b, f"advance_to_{b}")
        for a, b in zip(states, states[1:])
    ]
    return StateMachine(StateMachineConfig(
        name=name,
        states=list(states),
        transitions=transitions,
        initial_state=states[0],
        terminal_states=[states[-1]],
    ))


BOOKING_LIFECYCLE = StateMachine(StateMachineConfig(
    name="Booking",
    states=[s.value for s in BookingStatus],
    transitions=[
        StateTransition(BookingStatus.ACTIVE.value, BookingStatus.COMPLETED.value, "complete"),
        StateTransition(BookingStatus.ACTIVE.value, BookingStatus.CANCELLED.value, "cancel"),
    ],
    initial_state=BookingStatus.ACTIVE.value,
    terminal_states=[BookingStatus.COMPLETED.value, BookingStatus.CANCELLED.value],
))

KITCHEN_ORDER_LIFECYCLE = _linear("Kitchen order", [s.value for s in KitchenOrderStatus])

BAR_ORDER_LIFECYCLE = _linear("Bar order", [s.value for s in BarOrderStatus])
