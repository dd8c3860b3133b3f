"""Configuration validation utilities."""

from typing import Dict, Any, List
from pathlib import Path

from undo_fsm.config.loader import ConfigLoader
from undo_fsm.config.schema import FSMConfig, find_unknown_references
from undo_fsm.core.exceptions import ConfigError


class ConfigValidator:
    """Configuration validation utility."""

    def __init__(self, strict: bool = False):
        """Initialize the validator.

        Args:
            strict: Also report initial/transition targets that are not
                configured states.
        """
        self.loader = ConfigLoader()
        self.strict = strict

    def validate_file(self, file_path: str | Path) -> List[str]:
        """Validate configuration file.

        Args:
            file_path: Path to configuration file

        Returns:
            List of validation errors (empty if valid)
        """
        try:
            config = self.loader.load_from_file(Path(file_path))
        except (ConfigError, FileNotFoundError) as e:
            return self._describe(e)
        return self._check(config)

    def validate_dict(self, config_dict: Dict[str, Any]) -> List[str]:
        """Validate configuration dictionary.

        Args:
            config_dict: Configuration dictionary

        Returns:
            List of validation errors (empty if valid)
        """
        try:
            config = self.loader.load_from_dict(config_dict, resolve_env=False)
        except ConfigError as e:
            return self._describe(e)
        return self._check(config)

    def _check(self, config: FSMConfig) -> List[str]:
        errors = []
        if config.initial is None:
            errors.append("no initial state")
        if self.strict:
            errors.extend(find_unknown_references(config))
        return errors

    @staticmethod
    def _describe(error: Exception) -> List[str]:
        # Surface individual pydantic messages where the loader collected them
        details = getattr(error, "context", {}).get("errors")
        if details:
            return [f"{error}: {msg}" for msg in details]
        return [str(error)]
