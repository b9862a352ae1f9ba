"""
Input validation functions.

Small validators for option values and paths, raising ValidationError with
the offending field name.
"""

import os
from pathlib import Path
from typing import Any, List, Mapping, Optional, Union, Dict

from .exceptions import ValidationError


def validate_positive_integer(
    value: Any,
    min_value: int = 1,
    max_value: Optional[int] = None,
    field_name: str = "value"
) -> int:
    """
    Validate that a value is a positive integer.

    Args:
        value: Value to validate
        min_value: Minimum allowed value (inclusive)
        max_value: Maximum allowed value (inclusive), None for no limit
        field_name: Name of the field being validated

    Returns:
        Validated integer value

    Raises:
        ValidationError: If validation fails
    """
    # bool is an int subclass but never a meaningful count
    if isinstance(value, bool):
        raise ValidationError(
            f"{field_name} must be a valid integer, got {value}",
            field_name=field_name,
            value=value
        )
    try:
        int_value = int(value)
    except (ValueError, TypeError):
        raise ValidationError(
            f"{field_name} must be a valid integer, got {value}",
            field_name=field_name,
            value=value
        )
    if int_value < min_value:
        raise ValidationError(
            f"{field_name} must be >= {min_value}, got {int_value}",
            field_name=field_name,
            value=value
        )
    if max_value is not None and int_value > max_value:
        raise ValidationError(
            f"{field_name} must be <= {max_value}, got {int_value}",
            field_name=field_name,
            value=value
        )
    return int_value


def validate_path_exists(path: Union[str, Path], field_name: str = "path") -> str:
    """
    Validate that a path exists.

    Args:
        path: Path to validate
        field_name: Name of the field being validated

    Returns:
        Validated path string

    Raises:
        ValidationError: If path doesn't exist
    """
    path_str = os.fspath(path)
    if not os.path.exists(path_str):
        raise ValidationError(
            f"{field_name} does not exist: {path_str}",
            field_name=field_name,
            value=path_str
        )
    return path_str


def validate_directory(path: Union[str, Path], field_name: str = "cwd") -> Path:
    """Validate that a path exists and is a directory."""
    path_str = validate_path_exists(path, field_name=field_name)
    if not os.path.isdir(path_str):
        raise ValidationError(
            f"{field_name} is not a directory: {path_str}",
            field_name=field_name,
            value=path_str
        )
    return Path(path_str)


def validate_enum_choice(
    value: Any,
    choices: List[str],
    field_name: str = "value",
    case_sensitive: bool = True
) -> str:
    """
    Validate that a value is one of the allowed choices.

    Args:
        value: Value to validate
        choices: List of allowed values
        field_name: Name of the field being validated
        case_sensitive: Whether comparison is case-sensitive

    Returns:
        The matching choice as spelled in ``choices``

    Raises:
        ValidationError: If value is not a valid choice
    """
    if not isinstance(value, str):
        raise ValidationError(
            f"{field_name} must be a string, got {type(value).__name__}",
            field_name=field_name,
            value=value
        )

    for choice in choices:
        if value == choice or (not case_sensitive and value.lower() == choice.lower()):
            return choice

    raise ValidationError(
        f"{field_name} must be one of {choices}, got '{value}'",
        field_name=field_name,
        value=value
    )


def validate_no_nul(value: str, field_name: str = "value") -> str:
    """Reject strings that cannot be passed to a child process."""
    if "\0" in value:
        raise ValidationError(
            f"{field_name} must not contain NUL bytes, got {value!r}",
            field_name=field_name,
            value=value
        )
    return value


def validate_env_overlay(env: Optional[Mapping[Any, Any]], field_name: str = "env") -> Dict[str, str]:
    """
    Validate an environment overlay and stringify its values.

    Keys must be non-empty strings without '='; values are converted with str()
    so that numbers and booleans can be passed directly.
    """
    if env is None:
        return {}
    if not isinstance(env, Mapping):
        raise ValidationError(
            f"{field_name} must be a mapping, got {type(env).__name__}",
            field_name=field_name,
            value=env
        )
    result = {}
    for key, value in env.items():
        if not isinstance(key, str) or not key or "=" in key or "\0" in key:
            raise ValidationError(
                f"{field_name} contains an invalid variable name: {key!r}",
                field_name=field_name,
                value=key
            )
        if value is None:
            raise ValidationError(
                f"{field_name} value for {key} must not be None",
                field_name=field_name,
                value=value
            )
        result[key] = validate_no_nul(str(value), field_name=f"{field_name}.{key}")
    return result


def parse_env_assignment(assignment: str, field_name: str = "--env") -> tuple:
    """Split a KEY=VALUE string as given on the command line."""
    key, sep, value = assignment.partition("=")
    if not sep or not key:
        raise ValidationError(
            f"{field_name} expects KEY=VALUE, got '{assignment}'",
            field_name=field_name,
            value=assignment
        )
    return key, value
