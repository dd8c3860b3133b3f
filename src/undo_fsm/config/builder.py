"""FSM builder for assembling configurations in code.

This module provides the FSMBuilder class, a fluent alternative to writing
configuration dictionaries or files by hand:

```python
fsm = (
    FSMBuilder()
    .initial("off")
    .state("off", toggle="on")
    .state("on", toggle="off")
    .build()
)
```
"""

from typing import Any, Dict

from undo_fsm.config.schema import FSMConfig, StateDefinition
from undo_fsm.core.fsm import FSM


class FSMBuilder:
    """Build FSMConfig and FSM instances step by step."""

    def __init__(self, name: str = "fsm"):
        """Initialize the FSMBuilder.

        Args:
            name: Name recorded in the built configuration.
        """
        self._name = name
        self._initial: str | None = None
        self._states: Dict[str, Dict[str, str]] = {}

    def named(self, name: str) -> "FSMBuilder":
        """Set the configuration name."""
        self._name = name
        return self

    def initial(self, state: str) -> "FSMBuilder":
        """Set the initial state.

        Args:
            state: Initial state identifier.

        Returns:
            The builder, for chaining.
        """
        self._initial = state
        return self

    def state(self, name: str, **transitions: str) -> "FSMBuilder":
        """Declare a state and merge the given event transitions into it.

        Args:
            name: State identifier.
            **transitions: Event identifier to destination state.

        Returns:
            The builder, for chaining.
        """
        self._states.setdefault(name, {}).update(transitions)
        return self

    def transition(self, source: str, event: str, target: str) -> "FSMBuilder":
        """Add a single transition, declaring the source state if needed.

        Useful for event names that are not valid Python identifiers.
        """
        self._states.setdefault(source, {})[event] = target
        return self

    def to_config(self) -> FSMConfig:
        """Build the configuration described so far."""
        return FSMConfig(
            name=self._name,
            initial=self._initial,
            states={
                name: StateDefinition(transitions=dict(transitions))
                for name, transitions in self._states.items()
            },
        )

    def build(self, **fsm_kwargs: Any) -> FSM:
        """Build an FSM instance.

        Args:
            **fsm_kwargs: Passed through to the FSM constructor
                (e.g. ``strict=True``).

        Returns:
            FSM in its initial state.

        Raises:
            ConfigError: If no initial state was set, or strict validation fails.
        """
        return FSM(self.to_config(), **fsm_kwargs)
