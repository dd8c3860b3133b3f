"""Core FSM engine.

The engine tracks the current state of a machine described by an
``FSMConfig``, moves between states either directly (``change_state``) or
through event transitions (``trigger``), and keeps a linear undo/redo
timeline of every state it leaves.

Example:
    ```python
    from undo_fsm import FSM

    fsm = FSM({
        "initial": "off",
        "states": {
            "off": {"transitions": {"toggle": "on"}},
            "on": {"transitions": {"toggle": "off"}},
        },
    })
    fsm.trigger("toggle")
    fsm.get_state()  # 'on'
    fsm.undo()       # True
    fsm.get_state()  # 'off'
    ```
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Mapping, Union

from undo_fsm.config.loader import ConfigLoader
from undo_fsm.config.schema import FSMConfig, find_unknown_references
from undo_fsm.core.exceptions import (
    ConfigError,
    InvalidStateError,
    InvalidTransitionError,
)
from undo_fsm.core.history import StateHistory

logger = logging.getLogger(__name__)


class FSM:
    """Finite state machine with undo/redo history.

    Every operation either applies completely or raises without changing
    the state or either history stack.
    """

    def __init__(
        self,
        config: Union[FSMConfig, Mapping[str, Any]],
        strict: bool = False,
        clear_redo_on_reset: bool = False,
    ):
        """Initialize the FSM.

        Args:
            config: An FSMConfig or a mapping with ``initial`` and ``states``.
            strict: Reject configurations whose initial state or transition
                targets are not configured states.
            clear_redo_on_reset: Discard the redo branch on ``reset()`` the
                same way ``change_state()`` and ``trigger()`` do.

        Raises:
            ConfigError: If the configuration has no initial state, does not
                have the expected shape, or (in strict mode) references
                unknown states.
        """
        if not isinstance(config, FSMConfig):
            config = ConfigLoader().load_from_dict(dict(config), resolve_env=False)

        if config.initial is None:
            raise ConfigError("no initial state", context={"name": config.name})

        if strict:
            problems = find_unknown_references(config)
            if problems:
                raise ConfigError(
                    "Configuration references unknown states",
                    context={"name": config.name, "problems": problems}
                )

        self._config = config
        self._state = config.initial
        self._history = StateHistory()
        self.clear_redo_on_reset = clear_redo_on_reset

    @classmethod
    def from_file(cls, file_path: Union[str, Path], **kwargs: Any) -> 'FSM':
        """Create an FSM from a JSON or YAML configuration file.

        Args:
            file_path: Path to the configuration file.
            **kwargs: Passed through to the FSM constructor.

        Returns:
            FSM instance in its initial state.
        """
        return cls(ConfigLoader().load_from_file(file_path), **kwargs)

    @classmethod
    def from_dict(
        cls,
        config: Union[FSMConfig, Mapping[str, Any]],
        snapshot: Dict[str, Any],
        **kwargs: Any,
    ) -> 'FSM':
        """Restore an FSM from a configuration and a ``to_dict()`` snapshot.

        Args:
            config: Configuration the snapshot was taken with.
            snapshot: Dictionary produced by ``to_dict()``.
            **kwargs: Passed through to the FSM constructor.

        Returns:
            FSM instance positioned at the snapshot's state and history.
        """
        fsm = cls(config, **kwargs)
        fsm._state = snapshot.get('state', fsm._state)
        fsm._history = StateHistory.from_dict(snapshot)
        return fsm

    @property
    def config(self) -> FSMConfig:
        """The configuration this FSM was built from."""
        return self._config

    @property
    def state(self) -> str:
        """The currently active state."""
        return self._state

    @property
    def undo_history(self) -> List[str]:
        """Previously visited states, oldest first."""
        return list(self._history.undo_stack)

    @property
    def redo_history(self) -> List[str]:
        """Undone states, most recently undone last."""
        return list(self._history.redo_stack)

    def get_state(self) -> str:
        """Return the active state."""
        return self._state

    def change_state(self, state: str) -> None:
        """Go to the specified state.

        Args:
            state: A configured state identifier.

        Raises:
            InvalidStateError: If the state is not configured.
        """
        if state not in self._config.states:
            raise InvalidStateError(state, list(self._config.states))
        self._move_to(state)
        self._history.discard_redo()

    def trigger(self, event: str) -> None:
        """Change state according to the current state's transition for an event.

        Args:
            event: Event identifier.

        Raises:
            InvalidTransitionError: If the current state has no transition
                for the event.
        """
        transitions = self._transitions_of(self._state)
        if event not in transitions:
            raise InvalidTransitionError(self._state, event, list(transitions))
        self._move_to(transitions[event], event=event)
        self._history.discard_redo()

    def reset(self) -> None:
        """Reset the FSM to its initial state.

        The state being left is recorded for undo. The redo branch is kept
        unless the FSM was created with ``clear_redo_on_reset=True``.
        """
        self._move_to(self._config.initial)
        if self.clear_redo_on_reset:
            self._history.discard_redo()

    def get_states(self, event: str | None = None) -> List[str]:
        """Return configured states, optionally only those handling an event.

        Args:
            event: If given, only states with a transition for this event
                are returned.

        Returns:
            State identifiers in configuration order.
        """
        if event is None:
            return list(self._config.states)
        return [
            name for name, definition in self._config.states.items()
            if event in definition.transitions
        ]

    def get_events(self, state: str | None = None) -> List[str]:
        """Return the events a state has transitions for.

        Args:
            state: State identifier; defaults to the active state.

        Returns:
            Event identifiers in configuration order (empty for unknown states).
        """
        return list(self._transitions_of(self._state if state is None else state))

    def can_undo(self) -> bool:
        """Whether undo() would change the state."""
        return self._history.can_undo

    def can_redo(self) -> bool:
        """Whether redo() would change the state."""
        return self._history.can_redo

    def undo(self) -> bool:
        """Go back to the previous state.

        Returns:
            False if there is nothing to undo, True otherwise.
        """
        previous = self._history.step_back(self._state)
        if previous is None:
            return False
        logger.debug(f"Undo: '{self._state}' -> '{previous}'")
        self._state = previous
        return True

    def redo(self) -> bool:
        """Go forward to the most recently undone state.

        Returns:
            False if there is nothing to redo, True otherwise.
        """
        following = self._history.step_forward(self._state)
        if following is None:
            return False
        logger.debug(f"Redo: '{self._state}' -> '{following}'")
        self._state = following
        return True

    def clear_history(self) -> None:
        """Clear undo and redo history. The active state is unchanged."""
        self._history.clear()

    def to_dict(self) -> Dict[str, Any]:
        """Snapshot the active state and both history stacks."""
        return {'state': self._state, **self._history.to_dict()}

    def _transitions_of(self, state: str) -> Dict[str, str]:
        definition = self._config.states.get(state)
        return definition.transitions if definition is not None else {}

    def _move_to(self, state: str, event: str | None = None) -> None:
        if event is None:
            logger.debug(f"State change: '{self._state}' -> '{state}'")
        else:
            logger.debug(f"Event '{event}': '{self._state}' -> '{state}'")
        self._history.record(self._state)
        self._state = state

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(name={self._config.name!r}, state={self._state!r}, "
            f"undo={len(self._history)}, redo={len(self._history.redo_stack)})"
        )
