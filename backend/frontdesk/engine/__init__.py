"""
State machines for entity status changes
"""
from frontdesk.engine.state_machine import StateTransition, StateMachineConfig, StateMachine

__all__ = ["StateTransition", "StateMachineConfig", "StateMachine"]
