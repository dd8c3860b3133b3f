"""Configuration schema definitions for FSM using Pydantic.

This module defines the schema for FSM configurations:
- State definition (event to destination-state transitions)
- FSM definition (initial state and ordered state table)
"""

from typing import Any, Dict, List

from pydantic import BaseModel, Field, field_validator


class StateDefinition(BaseModel):
    """Configuration for a single state."""

    transitions: Dict[str, str] = Field(default_factory=dict)

    @field_validator("transitions", mode="before")
    @classmethod
    def validate_transitions(cls, v: Any) -> Any:
        """Treat an explicit null transition table as empty."""
        return {} if v is None else v


class FSMConfig(BaseModel):
    """Complete FSM configuration.

    ``initial`` is optional at the schema level so that a missing initial
    state is reported by the engine as a ``ConfigError`` rather than as a
    schema failure.
    """

    name: str = "fsm"
    description: str | None = None
    initial: str | None = None
    states: Dict[str, StateDefinition] = Field(default_factory=dict)
    metadata: Dict[str, Any] = Field(default_factory=dict)

    @field_validator("states", mode="before")
    @classmethod
    def validate_states(cls, v: Any) -> Any:
        """Allow states declared without a body (e.g. ``done:`` in YAML)."""
        if v is None:
            return {}
        if isinstance(v, dict):
            return {name: ({} if body is None else body) for name, body in v.items()}
        return v


def generate_json_schema() -> Dict[str, Any]:
    """Generate JSON schema for FSM configuration.

    Returns:
        JSON schema as a dictionary.
    """
    return FSMConfig.model_json_schema()


def validate_config(config: Dict[str, Any]) -> FSMConfig:
    """Validate a configuration dictionary.

    Args:
        config: Configuration dictionary.

    Returns:
        Validated FSMConfig instance.

    Raises:
        ValidationError: If configuration is invalid.
    """
    return FSMConfig(**config)


def find_unknown_references(config: FSMConfig) -> List[str]:
    """List initial/transition targets that are not configured states.

    Args:
        config: Validated configuration.

    Returns:
        One message per unknown reference, in configuration order.
    """
    problems = []
    if config.initial is not None and config.initial not in config.states:
        problems.append(f"Initial state '{config.initial}' not found in states")
    for name, state in config.states.items():
        for event, target in state.transitions.items():
            if target not in config.states:
                problems.append(
                    f"Transition '{event}' of state '{name}' targets unknown state '{target}'"
                )
    return problems
