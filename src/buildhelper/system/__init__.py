"""
System interaction utilities.

This module provides the process and host level functionality the build
tool invokers are layered on:

- Synchronous command execution with a working directory, argument list and
  environment overlay, captured output and structured logging
- Host CPU detection, cached for the process lifetime
"""

# Command execution
from .commands import (
    execute_request,
    format_command_line,
    format_environment,
    format_result,
    run_within_environment,
)

# Host information
from .cpu import (
    clear_host_info_cache,
    count_cpuinfo_processors,
    detect_host_info,
    get_host_info,
)

__all__ = [
    # Commands
    "execute_request",
    "format_command_line",
    "format_environment",
    "format_result",
    "run_within_environment",
    # Host information
    "clear_host_info_cache",
    "count_cpuinfo_processors",
    "detect_host_info",
    "get_host_info",
]
