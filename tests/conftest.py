"""Pytest configuration and shared fixtures for undo_fsm tests."""

import pytest

from undo_fsm import FSM


@pytest.fixture
def toggle_config():
    """Two-state toggle configuration."""
    return {
        "initial": "off",
        "states": {
            "off": {"transitions": {"toggle": "on"}},
            "on": {"transitions": {"toggle": "off"}},
        },
    }


@pytest.fixture
def workflow_config():
    """Document workflow with a terminal state and a shared 'cancel' event."""
    return {
        "name": "documents",
        "initial": "draft",
        "states": {
            "draft": {"transitions": {"submit": "review", "cancel": "archived"}},
            "review": {"transitions": {"approve": "published", "reject": "draft", "cancel": "archived"}},
            "published": {"transitions": {"retract": "draft"}},
            "archived": {"transitions": {}},
        },
    }


@pytest.fixture
def toggle_fsm(toggle_config):
    """FSM built from the toggle configuration."""
    return FSM(toggle_config)


@pytest.fixture
def workflow_fsm(workflow_config):
    """FSM built from the workflow configuration."""
    return FSM(workflow_config)
