"""Configuration loader for FSM configurations.

This module provides functionality to load FSM configurations from various sources:
- Files (JSON, YAML)
- Dictionaries
- Environment variables referenced from either of the above
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Union

import yaml
from pydantic import ValidationError

from undo_fsm.config.schema import FSMConfig, validate_config
from undo_fsm.core.exceptions import ConfigError

logger = logging.getLogger(__name__)


class ConfigLoader:
    """Load and process FSM configurations from various sources."""

    def __init__(self, env_prefix: str = "FSM_"):
        """Initialize the ConfigLoader.

        Args:
            env_prefix: Prefix tried when a referenced environment variable
                is not set under its plain name.
        """
        self._env_prefix = env_prefix

    def load_from_file(
        self,
        file_path: Union[str, Path],
        resolve_env: bool = True,
    ) -> FSMConfig:
        """Load configuration from a file.

        Args:
            file_path: Path to configuration file (JSON or YAML).
            resolve_env: Whether to resolve environment variables.

        Returns:
            Validated FSMConfig instance.

        Raises:
            FileNotFoundError: If file doesn't exist.
            ConfigError: If the file format is not supported or the content
                is not a valid configuration.
        """
        file_path = Path(file_path)

        if not file_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {file_path}")

        raw_config = self._load_file(file_path)
        logger.info(f"Loaded FSM configuration from {file_path}")

        return self.load_from_dict(raw_config, resolve_env=resolve_env)

    def load_from_dict(
        self,
        config_dict: Dict[str, Any],
        resolve_env: bool = True,
    ) -> FSMConfig:
        """Load configuration from a dictionary.

        Args:
            config_dict: Configuration dictionary.
            resolve_env: Whether to resolve environment variables.

        Returns:
            Validated FSMConfig instance.

        Raises:
            ConfigError: If the dictionary is not a valid configuration.
        """
        if not isinstance(config_dict, dict):
            raise ConfigError(
                "Configuration must be a mapping",
                context={"type": type(config_dict).__name__}
            )

        processed_config = config_dict.copy()

        if resolve_env:
            processed_config = self._resolve_environment_vars(processed_config)

        return self._finalize_config(processed_config)

    def _load_file(self, file_path: Path) -> Dict[str, Any]:
        """Load raw configuration from a file.

        Args:
            file_path: Path to configuration file.

        Returns:
            Raw configuration dictionary.

        Raises:
            ConfigError: If file format is not supported or cannot be parsed.
        """
        suffix = file_path.suffix.lower()

        with open(file_path) as f:
            try:
                if suffix == ".json":
                    return json.load(f)
                elif suffix in [".yaml", ".yml"]:
                    # An empty YAML document loads as None
                    return yaml.safe_load(f) or {}
                else:
                    raise ConfigError(
                        f"Unsupported file format: {suffix}",
                        context={"path": str(file_path)}
                    )
            except (json.JSONDecodeError, yaml.YAMLError) as e:
                raise ConfigError(
                    f"Failed to parse configuration file: {file_path}",
                    context={"path": str(file_path), "error": str(e)}
                ) from e

    def _resolve_environment_vars(self, config: Any) -> Any:
        """Resolve environment variables in configuration.

        Supports:
        - ${VAR_NAME} - Required variable
        - ${VAR_NAME:-default} - Variable with default value
        - ${VAR_NAME:?error message} - Required with custom error
        - $VAR_NAME - Optional variable, left as-is when unset

        Args:
            config: Configuration to process.

        Returns:
            Configuration with resolved environment variables.
        """
        if isinstance(config, str):
            if config.startswith("${") and config.endswith("}"):
                var_expr = config[2:-1]

                if ":-" in var_expr:
                    var_name, default_value = var_expr.split(":-", 1)
                    return os.environ.get(var_name, default_value)

                elif ":?" in var_expr:
                    var_name, error_msg = var_expr.split(":?", 1)
                    if var_name not in os.environ:
                        raise ConfigError(
                            f"Required environment variable: {error_msg}",
                            context={"variable": var_name}
                        )
                    return os.environ[var_name]

                else:
                    if var_expr in os.environ:
                        return os.environ[var_expr]
                    prefixed_var = f"{self._env_prefix}{var_expr}"
                    if prefixed_var in os.environ:
                        return os.environ[prefixed_var]
                    raise ConfigError(
                        f"Environment variable not found: {var_expr}",
                        context={"variable": var_expr}
                    )

            elif config.startswith("$") and len(config) > 1:
                var_name = config[1:]
                if var_name in os.environ:
                    return os.environ[var_name]
                prefixed_var = f"{self._env_prefix}{var_name}"
                if prefixed_var in os.environ:
                    return os.environ[prefixed_var]

            return config

        elif isinstance(config, dict):
            return {key: self._resolve_environment_vars(value) for key, value in config.items()}

        elif isinstance(config, list):
            return [self._resolve_environment_vars(item) for item in config]

        else:
            return config

    def _finalize_config(self, config: Dict[str, Any]) -> FSMConfig:
        """Validate a processed configuration dictionary.

        Args:
            config: Configuration dictionary.

        Returns:
            Validated FSMConfig instance.

        Raises:
            ConfigError: If pydantic rejects the configuration.
        """
        try:
            return validate_config(config)
        except ValidationError as e:
            raise ConfigError(
                "Invalid FSM configuration",
                context={"errors": [err["msg"] for err in e.errors()]}
            ) from e
