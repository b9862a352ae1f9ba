"""
Data models used throughout the package.

Configuration Models:
- Defaults for make, patch, the environment overlay and logging

Execution Models:
- Requests describing a single command invocation
- Results carrying exit status and captured output
- Per-tool option structures

Runtime Models:
- Host information used to size parallel builds
"""

from .config import AppConfig, LoggingConfig, MakeDefaults, PatchDefaults

from .execution import (
    DEFAULT_PATCH_LEVEL,
    ExecutionRequest,
    ExecutionResult,
    MakeOptions,
    PatchOptions,
    RunOptions,
    coerce_options,
    normalize_args,
)

from .runtime import DEFAULT_CORE_COUNT, HostInfo

__all__ = [
    # Configuration
    "AppConfig",
    "LoggingConfig",
    "MakeDefaults",
    "PatchDefaults",
    # Execution
    "ExecutionRequest",
    "ExecutionResult",
    "MakeOptions",
    "PatchOptions",
    "RunOptions",
    "coerce_options",
    "normalize_args",
    "DEFAULT_PATCH_LEVEL",
    # Runtime
    "DEFAULT_CORE_COUNT",
    "HostInfo",
]
