"""Core FSM components."""

from undo_fsm.core.exceptions import (
    ConfigError,
    FSMError,
    InvalidStateError,
    InvalidTransitionError,
)
from undo_fsm.core.history import StateHistory
from undo_fsm.core.fsm import FSM
from undo_fsm.core.synchronized import SynchronizedFSM

__all__ = [
    # FSM
    "FSM",
    "SynchronizedFSM",
    # History
    "StateHistory",
    # Errors
    "FSMError",
    "ConfigError",
    "InvalidStateError",
    "InvalidTransitionError",
]
