"""Finite state machine engine with undo/redo history.

Define states and their event transitions declaratively, then drive the
machine with direct state changes or events and step back and forth
through the states it has visited.
"""

__version__ = "0.1.0"

# Core FSM components
from .core.fsm import FSM
from .core.synchronized import SynchronizedFSM
from .core.history import StateHistory
from .core.exceptions import (
    ConfigError,
    FSMError,
    InvalidStateError,
    InvalidTransitionError,
)

# Configuration
from .config.schema import FSMConfig, StateDefinition
from .config.loader import ConfigLoader
from .config.validator import ConfigValidator
from .config.builder import FSMBuilder

__all__ = [
    "__version__",
    # Core
    "FSM",
    "SynchronizedFSM",
    "StateHistory",
    # Errors
    "FSMError",
    "ConfigError",
    "InvalidStateError",
    "InvalidTransitionError",
    # Config
    "FSMConfig",
    "StateDefinition",
    "ConfigLoader",
    "ConfigValidator",
    "FSMBuilder",
]
