"""
Exception taxonomy and error handling helpers.

This module defines the errors raised while driving native build tools and
the small set of helpers used to log and propagate them consistently.
"""

import logging
import sys
from enum import Enum
from typing import Any, Optional, Sequence, Union

logger = logging.getLogger(__name__)


class ErrorSeverity(Enum):
    """Severity levels for error handling."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class BuildHelperError(Exception):
    """
    Base class for errors raised by build tool invocations.

    Attributes:
        exit_code: Process exit status suitable for returning from a CLI.
    """

    exit_code = 1


class ConfigNotFoundError(BuildHelperError):
    """Raised when no configure-style script exists in a directory."""

    exit_code = 3

    def __init__(self, directory: str, candidates: Sequence[str]):
        self.directory = directory
        self.candidates = tuple(candidates)
        super().__init__(
            f"Cannot find any of {', '.join(self.candidates)} under {directory}"
        )


class SpawnError(BuildHelperError):
    """Raised when an executable cannot be located or started."""

    exit_code = 127

    def __init__(self, command: str, cwd: str, cause: OSError):
        self.command = command
        self.cwd = cwd
        self.cause = cause
        super().__init__(
            f"Unable to start '{command}' in '{cwd}': "
            f"{type(cause).__name__}: {cause.strerror or cause}"
        )


class ExecutionError(BuildHelperError):
    """
    Raised when a child process runs but exits with a nonzero status.

    The captured output is kept so callers can inspect what the tool printed
    without re-running it.
    """

    def __init__(
        self,
        command: str,
        args: Sequence[str],
        code: int,
        stdout: str = "",
        stderr: str = "",
    ):
        self.command = command
        self.args_list = tuple(args)
        self.code = code
        self.stdout = stdout
        self.stderr = stderr
        message = f"Program exited with exit code {code}"
        if stderr.strip():
            message = f"{message}\n{stderr.rstrip()}"
        super().__init__(message)

    @property
    def exit_code(self) -> int:
        # Signals show up as negative return codes.
        if 0 < self.code < 256:
            return self.code
        return 1


class ValidationError(BuildHelperError):
    """
    Exception raised when validation fails.

    This is the exception type used for bad arguments and configuration values.
    """

    def __init__(self, message: str, field_name: Optional[str] = None,
                 value: Any = None, severity: ErrorSeverity = ErrorSeverity.ERROR):
        super().__init__(message)
        self.field_name = field_name
        self.value = value
        self.severity = severity


def handle_error(
    error: Exception,
    context: str,
    severity: Union[ErrorSeverity, str] = ErrorSeverity.ERROR,
    reraise: bool = True,
    logger: Optional[logging.Logger] = None
) -> None:
    """
    Handle errors with consistent logging and optional re-raising.

    Args:
        error: The exception that occurred
        context: Context description of where the error occurred
        severity: Severity level for logging
        reraise: Whether to re-raise the exception after logging
        logger: Logger instance to use (defaults to module logger)
    """
    effective_logger = logger or globals()['logger']

    error_msg = f"Error in {context}: {error}"

    if isinstance(severity, str):
        severity_str = severity.lower()
    else:
        severity_str = severity.value

    if severity_str == "debug":
        effective_logger.debug(error_msg, exc_info=True)
    elif severity_str == "info":
        effective_logger.info(error_msg)
    elif severity_str == "warning":
        effective_logger.warning(error_msg)
    elif severity_str == "error":
        effective_logger.error(error_msg)
    elif severity_str == "critical":
        effective_logger.critical(error_msg, exc_info=True)

    if reraise:
        raise error


def handle_config_error(error: Exception, context: str, **kwargs) -> None:
    """Handle configuration-related errors."""
    handle_error(error, f"config {context}", **kwargs)


def handle_subprocess_error(error: Exception, command: str, **kwargs) -> None:
    """Handle subprocess-related errors."""
    handle_error(error, f"subprocess command '{command}'", **kwargs)


def handle_cli_error(error: Exception, context: str, **kwargs) -> None:
    """Log an error raised under the CLI and exit the interpreter."""
    exit_code = kwargs.pop('exit_code', None)
    if exit_code is None:
        exit_code = getattr(error, "exit_code", 1)
    include_traceback = kwargs.pop('include_traceback', False)

    severity = kwargs.pop('severity', ErrorSeverity.ERROR)
    if include_traceback:
        severity = ErrorSeverity.CRITICAL
    handle_error(error, f"CLI {context}", severity=severity, reraise=False, **kwargs)

    sys.exit(exit_code)
