"""
Configuration file loading utilities.

This module handles the low-level loading and parsing of the TOML
configuration file and its conversion into an AppConfig.
"""

import logging
import tomllib
from pathlib import Path
from typing import Any, Dict

from ..models.config import AppConfig, LoggingConfig, MakeDefaults, PatchDefaults
from ..validation import (
    ErrorSeverity,
    ValidationError,
    handle_config_error,
    validate_enum_choice,
    validate_env_overlay,
    validate_positive_integer,
)

logger = logging.getLogger(__name__)

LOG_LEVELS = ["TRACE", "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def load_toml_file(file_path: Path, description: str = "configuration file") -> Dict[str, Any]:
    """
    Load and parse a TOML file with error handling.

    Args:
        file_path: Path to the TOML file to load
        description: Human-readable description for error messages

    Returns:
        Parsed TOML data as a dictionary

    Raises:
        FileNotFoundError: If the file doesn't exist
        tomllib.TOMLDecodeError: If the file is malformed
    """
    logger.info(f"Loading {description} from: {file_path}")

    if not file_path.exists():
        logger.error(f"{description} not found: {file_path}")
        raise FileNotFoundError(f"{description} not found: {file_path}")

    try:
        with open(file_path, "rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        handle_config_error(
            error=e,
            context=f"parsing {description}",
            severity=ErrorSeverity.CRITICAL,
            reraise=True,
            logger=logger
        )
        raise


def _section(data: Dict[str, Any], name: str) -> Dict[str, Any]:
    section = data.get(name, {})
    if not isinstance(section, dict):
        raise ValidationError(
            f"[{name}] must be a table, got {type(section).__name__}",
            field_name=name,
            value=section
        )
    return section


def _validate_bool(value: Any, field_name: str) -> bool:
    if not isinstance(value, bool):
        raise ValidationError(
            f"{field_name} must be true or false, got {value!r}",
            field_name=field_name,
            value=value
        )
    return value


def parse_config(data: Dict[str, Any]) -> AppConfig:
    """
    Validate parsed TOML data and build an AppConfig.

    Missing sections and keys fall back to the dataclass defaults.

    Raises:
        ValidationError: If any value is of the wrong type or out of range.
    """
    make_data = _section(data, "make")
    make = MakeDefaults()
    if "supports_parallel_build" in make_data:
        make.supports_parallel_build = _validate_bool(
            make_data["supports_parallel_build"], "make.supports_parallel_build"
        )
    if "max_parallel_jobs" in make_data:
        make.max_parallel_jobs = validate_positive_integer(
            make_data["max_parallel_jobs"], field_name="make.max_parallel_jobs"
        )

    patch_data = _section(data, "patch")
    patch = PatchDefaults()
    if "patch_level" in patch_data:
        patch.patch_level = validate_positive_integer(
            patch_data["patch_level"], min_value=0, field_name="patch.patch_level"
        )

    environment = validate_env_overlay(_section(data, "environment"), field_name="environment")

    logging_data = _section(data, "logging")
    logging_config = LoggingConfig()
    if "level" in logging_data:
        logging_config.level = validate_enum_choice(
            logging_data["level"], LOG_LEVELS, field_name="logging.level", case_sensitive=False
        )

    return AppConfig(
        make=make,
        patch=patch,
        environment=environment,
        logging=logging_config,
    )


def load_config_file(config_path: Path) -> AppConfig:
    """Load and validate a configuration file."""
    return parse_config(load_toml_file(config_path, "build-helper configuration file"))
