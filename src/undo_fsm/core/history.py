"""Undo/redo history tracking for FSM state changes."""

import logging
from typing import Any, Dict, List

logger = logging.getLogger(__name__)


class StateHistory:
    """Linear undo/redo timeline of visited states.

    Both stacks keep their most recent entry last. Moving back through the
    timeline pushes the current state onto the redo stack; moving forward
    pushes it onto the undo stack.
    """

    def __init__(
        self,
        undo_stack: List[str] | None = None,
        redo_stack: List[str] | None = None,
    ):
        """Initialize history.

        Args:
            undo_stack: Previously visited states, oldest first.
            redo_stack: Undone states, most recently undone last.
        """
        self.undo_stack: List[str] = list(undo_stack or [])
        self.redo_stack: List[str] = list(redo_stack or [])

    @property
    def can_undo(self) -> bool:
        """Whether there is a previous state to return to."""
        return bool(self.undo_stack)

    @property
    def can_redo(self) -> bool:
        """Whether there is an undone state to move forward to."""
        return bool(self.redo_stack)

    def record(self, state: str) -> None:
        """Record a state being left.

        Args:
            state: The state that was active before a change.
        """
        self.undo_stack.append(state)

    def discard_redo(self) -> None:
        """Drop the redo branch after a fresh state change."""
        if self.redo_stack:
            logger.debug(f"Discarding {len(self.redo_stack)} redo entries")
        self.redo_stack.clear()

    def step_back(self, current: str) -> str | None:
        """Move one step back in the timeline.

        Args:
            current: The currently active state.

        Returns:
            The state to become active, or None if there is nothing to undo.
        """
        if not self.undo_stack:
            return None
        self.redo_stack.append(current)
        return self.undo_stack.pop()

    def step_forward(self, current: str) -> str | None:
        """Move one step forward in the timeline.

        Args:
            current: The currently active state.

        Returns:
            The state to become active, or None if there is nothing to redo.
        """
        if not self.redo_stack:
            return None
        self.undo_stack.append(current)
        return self.redo_stack.pop()

    def clear(self) -> None:
        """Empty both stacks."""
        self.undo_stack.clear()
        self.redo_stack.clear()

    def __len__(self) -> int:
        return len(self.undo_stack)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            'undo_history': list(self.undo_stack),
            'redo_history': list(self.redo_stack),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'StateHistory':
        """Create StateHistory from dictionary representation.

        Args:
            data: Dictionary with 'undo_history' and 'redo_history' lists.

        Returns:
            StateHistory instance.
        """
        return cls(
            undo_stack=data.get('undo_history', []),
            redo_stack=data.get('redo_history', []),
        )
