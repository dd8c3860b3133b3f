"""Tests for FSM configuration modules."""

import json

import pytest
import yaml
from pydantic import ValidationError

from undo_fsm.config.builder import FSMBuilder
from undo_fsm.config.loader import ConfigLoader
from undo_fsm.config.schema import (
    FSMConfig,
    StateDefinition,
    find_unknown_references,
    generate_json_schema,
    validate_config,
)
from undo_fsm.config.validator import ConfigValidator
from undo_fsm.core.exceptions import ConfigError


class TestConfigSchema:
    """Test configuration schema definitions."""

    def test_state_definition(self):
        """Test StateDefinition creation."""
        state = StateDefinition(transitions={"go": "next"})

        assert state.transitions == {"go": "next"}
        assert StateDefinition().transitions == {}
        assert StateDefinition(transitions=None).transitions == {}

    def test_fsm_config(self, workflow_config):
        """Test FSMConfig creation and defaults."""
        config = validate_config(workflow_config)

        assert config.name == "documents"
        assert config.initial == "draft"
        assert list(config.states) == ["draft", "review", "published", "archived"]
        assert config.states["review"].transitions["approve"] == "published"
        assert FSMConfig().initial is None
        assert FSMConfig().name == "fsm"

    def test_invalid_transition_table(self):
        """Test that transitions must map events to state names."""
        with pytest.raises(ValidationError):
            validate_config({"initial": "a", "states": {"a": {"transitions": ["b"]}}})

    def test_extra_keys_ignored(self):
        """Test that unknown top-level keys are ignored."""
        config = validate_config({"initial": "a", "states": {"a": {}}, "owner": "ops"})

        assert config.initial == "a"

    def test_find_unknown_references(self):
        """Test reporting of unknown initial and transition targets."""
        config = FSMConfig(
            initial="a",
            states={
                "a": StateDefinition(transitions={"go": "b", "jump": "z"}),
                "b": StateDefinition(),
            },
        )

        problems = find_unknown_references(config)

        assert problems == [
            "Transition 'jump' of state 'a' targets unknown state 'z'"
        ]
        assert find_unknown_references(FSMConfig(initial="q")) == [
            "Initial state 'q' not found in states"
        ]

    def test_generate_json_schema(self):
        """Test that a JSON schema is produced."""
        schema = generate_json_schema()

        assert "properties" in schema
        assert "initial" in schema["properties"]
        assert "states" in schema["properties"]


class TestConfigLoader:
    """Test configuration loading."""

    def test_load_from_dict(self, toggle_config):
        """Test loading from a dictionary."""
        config = ConfigLoader().load_from_dict(toggle_config)

        assert isinstance(config, FSMConfig)
        assert config.initial == "off"

    def test_load_from_dict_rejects_non_mapping(self):
        """Test that a non-dict configuration is rejected."""
        with pytest.raises(ConfigError, match="must be a mapping"):
            ConfigLoader().load_from_dict(["off", "on"])

    def test_load_json_file(self, tmp_path, workflow_config):
        """Test loading a JSON configuration file."""
        path = tmp_path / "workflow.json"
        path.write_text(json.dumps(workflow_config))

        config = ConfigLoader().load_from_file(path)

        assert config.name == "documents"
        assert config.states["archived"].transitions == {}

    def test_load_yaml_file(self, tmp_path, workflow_config):
        """Test loading a YAML configuration file."""
        path = tmp_path / "workflow.yml"
        path.write_text(yaml.safe_dump(workflow_config, sort_keys=False))

        config = ConfigLoader().load_from_file(str(path))

        assert config.initial == "draft"
        assert list(config.states) == ["draft", "review", "published", "archived"]

    def test_missing_file(self, tmp_path):
        """Test that a missing file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            ConfigLoader().load_from_file(tmp_path / "nope.yaml")

    def test_unsupported_format(self, tmp_path):
        """Test that unknown file suffixes are rejected."""
        path = tmp_path / "config.toml"
        path.write_text("initial = 'a'")

        with pytest.raises(ConfigError, match="Unsupported file format"):
            ConfigLoader().load_from_file(path)

    def test_unparseable_file(self, tmp_path):
        """Test that malformed JSON is reported as ConfigError."""
        path = tmp_path / "broken.json"
        path.write_text("{not json")

        with pytest.raises(ConfigError, match="Failed to parse"):
            ConfigLoader().load_from_file(path)

    def test_invalid_shape(self):
        """Test that pydantic failures are wrapped in ConfigError."""
        with pytest.raises(ConfigError) as exc_info:
            ConfigLoader().load_from_dict({"initial": "a", "states": "a"})

        assert exc_info.value.context["errors"]
        assert isinstance(exc_info.value.__cause__, ValidationError)

    def test_env_var_resolution(self, monkeypatch):
        """Test ${VAR}, ${VAR:-default} and prefixed variable resolution."""
        monkeypatch.setenv("START_STATE", "idle")
        monkeypatch.setenv("FSM_TARGET", "busy")
        monkeypatch.delenv("TARGET", raising=False)
        monkeypatch.delenv("FALLBACK", raising=False)

        config = ConfigLoader().load_from_dict({
            "initial": "${START_STATE}",
            "description": "${FALLBACK:-no description}",
            "states": {
                "idle": {"transitions": {"work": "${TARGET}"}},
                "busy": {"transitions": {"rest": "idle"}},
            },
        })

        assert config.initial == "idle"
        assert config.description == "no description"
        assert config.states["idle"].transitions["work"] == "busy"

    def test_env_var_required_message(self, monkeypatch):
        """Test ${VAR:?message} when the variable is unset."""
        monkeypatch.delenv("MISSING_STATE", raising=False)

        with pytest.raises(ConfigError, match="set the start state"):
            ConfigLoader().load_from_dict({"initial": "${MISSING_STATE:?set the start state}"})

    def test_env_var_not_found(self, monkeypatch):
        """Test that an unset ${VAR} is reported."""
        monkeypatch.delenv("NOT_THERE", raising=False)
        monkeypatch.delenv("FSM_NOT_THERE", raising=False)

        with pytest.raises(ConfigError, match="Environment variable not found"):
            ConfigLoader().load_from_dict({"initial": "${NOT_THERE}"})

    def test_env_resolution_disabled(self):
        """Test that resolve_env=False keeps references verbatim."""
        config = ConfigLoader().load_from_dict({"initial": "${ANYTHING}"}, resolve_env=False)

        assert config.initial == "${ANYTHING}"

    def test_dollar_var_left_when_unset(self, monkeypatch):
        """Test that an unset $VAR stays as written."""
        monkeypatch.delenv("PLAIN", raising=False)
        monkeypatch.delenv("FSM_PLAIN", raising=False)

        config = ConfigLoader().load_from_dict({"initial": "$PLAIN"})

        assert config.initial == "$PLAIN"


class TestConfigValidator:
    """Test configuration validation."""

    def test_valid_dict(self, workflow_config):
        """Test that a valid configuration yields no errors."""
        assert ConfigValidator().validate_dict(workflow_config) == []

    def test_missing_initial(self):
        """Test that a missing initial state is reported."""
        errors = ConfigValidator().validate_dict({"states": {"a": {}}})

        assert errors == ["no initial state"]

    def test_invalid_shape(self):
        """Test that schema errors are reported."""
        errors = ConfigValidator().validate_dict({"initial": "a", "states": 5})

        assert errors
        assert all(e.startswith("Invalid FSM configuration") for e in errors)

    def test_strict_reports_unknown_references(self):
        """Test that strict validation reports unknown targets."""
        config = {"initial": "a", "states": {"a": {"transitions": {"go": "b"}}}}

        assert ConfigValidator().validate_dict(config) == []
        assert ConfigValidator(strict=True).validate_dict(config) == [
            "Transition 'go' of state 'a' targets unknown state 'b'"
        ]

    def test_validate_file(self, tmp_path, toggle_config):
        """Test validating configuration files."""
        good = tmp_path / "good.json"
        good.write_text(json.dumps(toggle_config))

        assert ConfigValidator().validate_file(good) == []

        errors = ConfigValidator().validate_file(tmp_path / "missing.json")
        assert len(errors) == 1
        assert "not found" in errors[0]


class TestFSMBuilder:
    """Test building configurations and FSMs in code."""

    def test_build(self):
        """Test building a working FSM."""
        fsm = (
            FSMBuilder()
            .initial("off")
            .state("off", toggle="on")
            .state("on", toggle="off")
            .build()
        )

        fsm.trigger("toggle")

        assert fsm.get_state() == "on"
        assert fsm.get_states("toggle") == ["off", "on"]

    def test_to_config(self):
        """Test the configuration produced by the builder."""
        config = (
            FSMBuilder("doors")
            .initial("closed")
            .state("closed", open="opened")
            .transition("opened", "slam-shut", "closed")
            .state("closed", lock="locked")
            .state("locked")
            .to_config()
        )

        assert config.name == "doors"
        assert list(config.states) == ["closed", "opened", "locked"]
        assert config.states["closed"].transitions == {"open": "opened", "lock": "locked"}
        assert config.states["opened"].transitions == {"slam-shut": "closed"}
        assert config.states["locked"].transitions == {}

    def test_named(self):
        """Test renaming the configuration."""
        assert FSMBuilder().named("lamp").initial("a").to_config().name == "lamp"

    def test_build_without_initial(self):
        """Test that building without an initial state fails."""
        with pytest.raises(ConfigError, match="no initial state"):
            FSMBuilder().state("a").build()

    def test_build_strict(self):
        """Test passing engine options through build()."""
        builder = FSMBuilder().initial("a").state("a", go="b")

        with pytest.raises(ConfigError):
            builder.build(strict=True)
        assert builder.build().get_state() == "a"
