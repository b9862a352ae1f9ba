"""
Validation and error handling for the buildhelper package.

This module provides the exception taxonomy for build tool invocations,
input validation and consistent error reporting across the package.
"""

from .exceptions import (
    BuildHelperError,
    ConfigNotFoundError,
    ErrorSeverity,
    ExecutionError,
    SpawnError,
    ValidationError,
    handle_cli_error,
    handle_config_error,
    handle_error,
    handle_subprocess_error,
)

from .validators import (
    parse_env_assignment,
    validate_directory,
    validate_enum_choice,
    validate_env_overlay,
    validate_no_nul,
    validate_path_exists,
    validate_positive_integer,
)

__all__ = [
    # Errors
    "BuildHelperError",
    "ConfigNotFoundError",
    "ErrorSeverity",
    "ExecutionError",
    "SpawnError",
    "ValidationError",
    "handle_cli_error",
    "handle_config_error",
    "handle_error",
    "handle_subprocess_error",
    # Validators
    "parse_env_assignment",
    "validate_directory",
    "validate_enum_choice",
    "validate_env_overlay",
    "validate_no_nul",
    "validate_path_exists",
    "validate_positive_integer",
]
