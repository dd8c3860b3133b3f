"""FSM Core Exceptions Module.

This module defines the exception types raised by the FSM engine and its
configuration layer. Every error derives from ``FSMError`` and can carry a
context dictionary with structured details about the failure.

Example:
    ```python
    from undo_fsm.core.exceptions import FSMError, InvalidTransitionError

    try:
        fsm.trigger("missing")
    except InvalidTransitionError as e:
        logger.error(f"Error: {e}")
        logger.error(f"Available events: {e.context['available_events']}")
    ```
"""

from typing import Any, Dict, List


class FSMError(Exception):
    """Base exception for the FSM package.

    Attributes:
        context: Dictionary containing contextual information about the error
        details: Alias for context

    Args:
        message: Human-readable error message
        context: Optional dictionary with error context
        details: Alternative to context (both are supported)
    """

    def __init__(
        self,
        message: str,
        context: Dict[str, Any] | None = None,
        details: Dict[str, Any] | None = None,
    ):
        super().__init__(message)
        # Details takes precedence if both are provided
        self.context = details or context or {}
        self.details = self.context


class ConfigError(FSMError):
    """Raised when FSM configuration is invalid or missing.

    Covers a missing initial state, a configuration that does not have the
    expected shape, unresolved environment references and, in strict mode,
    references to states that are not configured.
    """
    pass


class InvalidStateError(FSMError):
    """Raised when changing to a state that is not configured."""

    def __init__(self, state: str, known_states: List[str] | None = None):
        super().__init__(
            f"Unknown state '{state}'",
            context={"state": state, "known_states": list(known_states or [])}
        )
        self.state = state


class InvalidTransitionError(FSMError):
    """Raised when the current state has no transition for an event."""

    def __init__(self, state: str, event: str, available_events: List[str] | None = None):
        super().__init__(
            f"No transition for event '{event}' from state '{state}'",
            context={
                "state": state,
                "event": event,
                "available_events": list(available_events or []),
            }
        )
        self.state = state
        self.event = event


__all__ = [
    "FSMError",
    "ConfigError",
    "InvalidStateError",
    "InvalidTransitionError",
]
