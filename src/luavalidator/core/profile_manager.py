"""Profile management for validator configurations.

This module provides the ProfileManager class for saving, loading and
validating ValidatorConfig profiles stored as JSON.

Example:
    Saving a profile:

    >>> from pathlib import Path
    >>> config = ValidatorConfig(name="Strict")
    >>> ProfileManager.save_profile(config, Path("strict.json"))

    Loading a profile:

    >>> config = ProfileManager.load_profile(Path("strict.json"))
    >>> print(config.name)
    Strict
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import List

from luavalidator.core.config import (
    RULE_BEST_PRACTICE,
    RULE_DEPRECATED_API,
    RULE_LOCAL_PLAYER,
    RULE_UNKNOWN_SERVICE,
    ValidatorConfig,
)
from luavalidator.utils.logger import get_logger
from luavalidator.utils.path_utils import ensure_directory

logger = get_logger("luavalidator.core.profile_manager")

# Built-in profiles, keyed by lowercase name
DEFAULT_PROFILES = {
    "default": {},
    "syntax-only": {
        RULE_DEPRECATED_API: False,
        RULE_BEST_PRACTICE: False,
        RULE_UNKNOWN_SERVICE: False,
        RULE_LOCAL_PLAYER: False,
    },
    # LocalScripts are where LocalPlayer belongs
    "client": {
        RULE_LOCAL_PLAYER: False,
    },
    "no-style": {
        RULE_BEST_PRACTICE: False,
    },
}


class ProfileManager:
    """Manager for validator configuration profiles.

    Handles JSON serialization of ValidatorConfig and provides the
    built-in profiles.
    """

    @staticmethod
    def save_profile(config: ValidatorConfig, file_path: Path) -> None:
        """Save a configuration profile to a JSON file.

        Args:
            config: ValidatorConfig instance to save
            file_path: Path where the profile should be saved

        Raises:
            ValueError: If configuration validation fails
            OSError: If file write operation fails
        """
        try:
            config.validate()
            ensure_directory(file_path.parent)
            with open(file_path, 'w', encoding='utf-8') as f:
                json.dump(config.to_dict(), f, indent=2)
            logger.debug(f"Profile '{config.name}' saved to {file_path}")
        except ValueError as e:
            logger.error(f"Validation failed for profile '{config.name}': {e}")
            raise ValueError(f"Configuration validation failed: {e}")
        except OSError as e:
            logger.error(f"Failed to write profile to {file_path}: {e}")
            raise OSError(f"Failed to write profile file: {e}")

    @staticmethod
    def load_profile(file_path: Path) -> ValidatorConfig:
        """Load a configuration profile from a JSON file.

        Args:
            file_path: Path to the profile JSON file

        Returns:
            ValidatorConfig instance loaded from file

        Raises:
            FileNotFoundError: If the file does not exist
            ValueError: If JSON is invalid or validation fails
        """
        if not file_path.exists():
            logger.error(f"Profile file not found: {file_path}")
            raise FileNotFoundError(f"Profile file not found: {file_path}")

        try:
            with open(file_path, 'r', encoding='utf-8') as f:
                data = json.load(f)

            if not isinstance(data, dict):
                raise ValueError("Profile must be a JSON object")

            config = ValidatorConfig.from_dict(data)
            config.validate()

            logger.debug(f"Profile '{config.name}' loaded from {file_path}")
            return config

        except json.JSONDecodeError as e:
            logger.error(f"Invalid JSON in profile file {file_path}: {e}")
            raise ValueError(f"Invalid JSON format in profile file: {e}")
        except KeyError as e:
            logger.error(f"Missing required field in profile {file_path}: {e}")
            raise ValueError(f"Missing required field in profile: {e}")
        except ValueError as e:
            logger.error(f"Validation failed for profile from {file_path}: {e}")
            raise ValueError(f"Profile validation failed: {e}")

    @staticmethod
    def validate_profile(file_path: Path) -> bool:
        """Return True if the profile file loads and validates."""
        try:
            ProfileManager.load_profile(file_path)
            return True
        except (OSError, ValueError) as e:
            logger.warning(f"Profile validation failed for {file_path}: {e}")
            return False

    @staticmethod
    def get_default_profile(profile_name: str) -> ValidatorConfig:
        """Get a built-in profile by name (case-insensitive).

        Raises:
            ValueError: If the profile name is unknown
        """
        key = profile_name.lower()
        if key not in DEFAULT_PROFILES:
            raise ValueError(
                f"Unknown profile: {profile_name}. "
                f"Available profiles: {ProfileManager.list_default_profiles()}"
            )

        config = ValidatorConfig(name=key)
        config.rules.update(DEFAULT_PROFILES[key])
        return config

    @staticmethod
    def list_default_profiles() -> List[str]:
        return list(DEFAULT_PROFILES)
