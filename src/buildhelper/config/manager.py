"""
Configuration management and singleton pattern.

This module provides the main configuration access interface, loading the
configuration at most once per process unless the cache is cleared.
"""

import logging
import os
from pathlib import Path
from typing import Optional

from ..models.config import AppConfig
from ..validation import ErrorSeverity, ValidationError, handle_config_error
from .loader import load_config_file

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "BUILD_HELPER_CONFIG"

# --- Global Singleton for Configuration ---

_CONFIG: Optional[AppConfig] = None

# Explicitly selected configuration file; takes precedence over the
# environment variable.
_CONFIG_FILE_PATH: Optional[Path] = None


def set_config_path(config_path: Optional[Path]) -> None:
    """
    Set a custom configuration file path.

    Passing None restores the default lookup. The cached configuration is
    dropped so the next get_config() reads the new file.
    """
    global _CONFIG_FILE_PATH, _CONFIG
    _CONFIG_FILE_PATH = Path(config_path) if config_path is not None else None
    _CONFIG = None
    logger.info(f"Configuration path set to: {config_path}")


def clear_config_cache() -> None:
    """
    Clear the cached configuration, forcing a reload on next access.
    """
    global _CONFIG
    _CONFIG = None
    logger.debug("Configuration cache cleared")


def resolve_config_path() -> Optional[Path]:
    """Configuration file to load, or None to use built-in defaults."""
    if _CONFIG_FILE_PATH is not None:
        return _CONFIG_FILE_PATH
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path)
    return None


def _load_config(config_path: Optional[Path]) -> AppConfig:
    """
    Load the application configuration.

    Raises:
        FileNotFoundError: If the configured file is missing
        ValidationError: If configuration validation fails
        tomllib.TOMLDecodeError: If the file is malformed
    """
    if config_path is None:
        logger.debug("No configuration file selected, using defaults")
        return AppConfig()

    try:
        app_config = load_config_file(config_path)
    except (FileNotFoundError, ValidationError) as e:
        handle_config_error(
            error=e,
            context=f"loading {config_path}",
            severity=ErrorSeverity.CRITICAL,
            reraise=True,
            logger=logger
        )
        raise
    logger.info(f"Successfully loaded configuration from {config_path}")
    return app_config


def get_config() -> AppConfig:
    """
    Get the global application configuration, loading it if necessary.

    Returns:
        The singleton AppConfig instance
    """
    global _CONFIG
    if _CONFIG is None:
        _CONFIG = _load_config(resolve_config_path())
    return _CONFIG


def is_config_loaded() -> bool:
    """Check if configuration has been loaded and cached."""
    return _CONFIG is not None
