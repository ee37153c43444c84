"""
Interaction Layer

Models user intent and resolves it into the next interaction state.
No graph building and no rendering happens here.
"""

from .state_machine import (
    InteractionState, INITIAL_STATE, ActionType, Action, Transition,
    InteractionResolver,
)

__all__ = [
    'InteractionState', 'INITIAL_STATE', 'ActionType', 'Action', 'Transition',
    'InteractionResolver',
]
