"""
Command execution utilities.

This module runs external programs synchronously with a controlled working
directory, argument list and environment overlay, captures their output and
reports each execution to an optional CommandLogger.
"""

import json
import logging
import subprocess
from pathlib import Path
from typing import Optional, Union

from ..models.execution import ArgsLike, ExecutionRequest, ExecutionResult, RunOptions
from ..validation import (
    ErrorSeverity,
    ExecutionError,
    SpawnError,
    handle_subprocess_error,
    validate_directory,
)

logger = logging.getLogger(__name__)


def format_command_line(request: ExecutionRequest) -> str:
    """Render the command and its arguments for the "Executing:" line."""
    return " ".join(request.argv)


def format_environment(request: ExecutionRequest) -> str:
    """Render the overlay as the "ENVIRONMENT VARIABLES:" block."""
    lines = [f"{key}={value}" for key, value in request.env.items()]
    return "ENVIRONMENT VARIABLES:\n" + "\n".join(lines)


def format_result(result: ExecutionResult) -> str:
    """Render the result as a compact JSON "RESULT:" line."""
    return "RESULT: " + json.dumps(
        result.to_log_dict(), separators=(",", ":"), ensure_ascii=False
    )


def execute_request(request: ExecutionRequest) -> ExecutionResult:
    """Execute a request and capture its output.

    The call blocks until the child exits. Output is decoded as UTF-8 with
    replacement of undecodable bytes.

    Args:
        request: The fully resolved invocation.

    Returns:
        ExecutionResult of a child that exited with status 0.

    Raises:
        ValidationError: If the working directory does not exist.
        SpawnError: If the executable cannot be found or started.
        ExecutionError: If the child exits with a nonzero status.
    """
    cwd = validate_directory(request.cwd, field_name="cwd")
    command_line = format_command_line(request)

    request.logger.info(f"Executing: {command_line}")
    if request.env:
        request.logger.debug(format_environment(request))

    logger.debug(f"Executing command: '{command_line}' in '{cwd}'")
    try:
        process = subprocess.run(
            list(request.argv),
            cwd=cwd,
            env=request.child_environment(),
            stdin=subprocess.DEVNULL,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            check=False,
        )
    except OSError as e:
        error = SpawnError(request.command, str(cwd), e)
        handle_subprocess_error(
            error=error,
            command=request.command,
            severity=ErrorSeverity.ERROR,
            reraise=False,
            logger=logger,
        )
        raise error from e

    result = ExecutionResult(
        code=process.returncode, stdout=process.stdout, stderr=process.stderr
    )
    request.logger.trace(format_result(result))

    if not result.succeeded:
        error = ExecutionError(
            command=request.command,
            args=request.args,
            code=result.code,
            stdout=result.stdout,
            stderr=result.stderr,
        )
        handle_subprocess_error(
            error=error,
            command=command_line,
            severity=ErrorSeverity.ERROR,
            reraise=True,
            logger=logger,
        )

    logger.debug(f"Command '{request.command}' finished with exit code 0")
    return result


def run_within_environment(
    cwd: Union[str, Path],
    command: Union[str, Path],
    args: ArgsLike = None,
    options: Optional[RunOptions] = None,
) -> str:
    """Run a command using a specific environment, logging the result.

    Args:
        cwd: Working directory for the child process. Must exist.
        command: Executable name, looked up on PATH, or a path to it.
        args: Arguments of the command. A single string is one argument.
        options: RunOptions with the environment overlay and logger.

    Returns:
        The captured standard output.

    Raises:
        ValidationError: If cwd does not exist.
        SpawnError: If the executable cannot be found or started.
        ExecutionError: If the command exits with a nonzero status.
    """
    options = options or RunOptions()
    request = ExecutionRequest.create(
        cwd, command, args, env=options.env, logger=options.logger
    )
    return execute_request(request).stdout
