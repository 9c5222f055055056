"""Configuration data model for validation runs.

This module defines the ValidatorConfig dataclass. It switches whole rule
categories on or off and bounds the size of files read from disk. The
default configuration enables every category, which is what
``validate_lua_code`` uses when no configuration is given.

Example:
    Disabling style advice:

    >>> config = ValidatorConfig(name="CI", rules={"best_practice": False})
    >>> config.validate()
    >>> config.is_enabled("best_practice")
    False

    Converting to dictionary for JSON serialization:

    >>> config_dict = config.to_dict()
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict

from luavalidator.utils.logger import get_logger

logger = get_logger("luavalidator.core.config")

# Rule categories, in the order the validator runs them
RULE_SYNTAX = "syntax"
RULE_DEPRECATED_API = "deprecated_api"
RULE_BEST_PRACTICE = "best_practice"
RULE_UNKNOWN_SERVICE = "unknown_service"
RULE_LOCAL_PLAYER = "local_player"

RULE_CATEGORIES: tuple[str, ...] = (
    RULE_SYNTAX,
    RULE_DEPRECATED_API,
    RULE_BEST_PRACTICE,
    RULE_UNKNOWN_SERVICE,
    RULE_LOCAL_PLAYER,
)

CONFIG_VERSION = "1.0"
DEFAULT_MAX_FILE_SIZE_MB = 10


def _default_rules() -> Dict[str, bool]:
    return {category: True for category in RULE_CATEGORIES}


@dataclass
class ValidatorConfig:
    """Rule switches and limits for a validation run.

    Attributes:
        name: Profile name.
        version: Schema version (currently "1.0").
        rules: Mapping of rule category to enabled flag. Categories left out
            are enabled.
        max_file_size_mb: Largest source file, in megabytes, that file
            entry points will read.
    """

    name: str = "default"
    version: str = CONFIG_VERSION
    rules: Dict[str, bool] = field(default_factory=_default_rules)
    max_file_size_mb: int = DEFAULT_MAX_FILE_SIZE_MB

    def is_enabled(self, category: str) -> bool:
        """Return True if the rule category runs under this configuration."""
        if category not in RULE_CATEGORIES:
            raise ValueError(f"Unknown rule category: {category}. Valid categories: {RULE_CATEGORIES}")
        return self.rules.get(category, True)

    @property
    def max_file_size_bytes(self) -> int:
        return self.max_file_size_mb * 1024 * 1024

    def validate(self) -> None:
        """Validate the configuration.

        Raises:
            ValueError: If any validation check fails
        """
        if self.version != CONFIG_VERSION:
            raise ValueError(f"Invalid version: {self.version}. Expected '{CONFIG_VERSION}'")

        if not isinstance(self.name, str) or not self.name.strip():
            raise ValueError("Configuration name must be a non-empty string")

        for category, enabled in self.rules.items():
            if category not in RULE_CATEGORIES:
                raise ValueError(
                    f"Unknown rule category '{category}' in configuration. "
                    f"Valid categories: {RULE_CATEGORIES}"
                )
            if not isinstance(enabled, bool):
                raise ValueError(f"Rule '{category}' must be a boolean")

        if isinstance(self.max_file_size_mb, bool) or not isinstance(self.max_file_size_mb, int):
            raise ValueError("Option 'max_file_size_mb' must be an integer")
        if self.max_file_size_mb <= 0:
            raise ValueError("Option 'max_file_size_mb' must be a positive integer")

        disabled = [category for category in RULE_CATEGORIES if not self.is_enabled(category)]
        if len(disabled) == len(RULE_CATEGORIES):
            logger.warning(f"Configuration '{self.name}' disables every rule category")

        logger.debug(f"Configuration '{self.name}' validated successfully")

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary for JSON serialization."""
        return {
            "version": self.version,
            "name": self.name,
            "rules": self.rules.copy(),
            "max_file_size_mb": self.max_file_size_mb,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> ValidatorConfig:
        """Create configuration from dictionary.

        Args:
            data: Dictionary containing configuration data

        Returns:
            ValidatorConfig instance

        Raises:
            KeyError: If required fields are missing
            ValueError: If "rules" is not a mapping
        """
        overrides = data.get("rules", {})
        if not isinstance(overrides, dict):
            raise ValueError(f"rules must be a mapping of category to bool, got {type(overrides).__name__}")

        try:
            rules = _default_rules()
            rules.update(overrides)
            config = cls(
                version=data["version"],
                name=data["name"],
                rules=rules,
                max_file_size_mb=data.get("max_file_size_mb", DEFAULT_MAX_FILE_SIZE_MB),
            )
        except KeyError as e:
            raise KeyError(f"Missing required field in configuration: {e}")

        logger.debug(f"Created configuration from dictionary: {config.name}")
        return config

