"""
buildhelper: drive native build tools with a controlled environment.

This package runs ``configure``, ``patch`` and ``make`` (or any other
program) synchronously with a given working directory, argument list and
environment overlay, captures their output and reports every execution to an
optional logger.

The package is organized into specialized modules:
- models: Requests, results, per-tool options and host information
- validation: Error taxonomy and input validation
- system: Command runner and host CPU detection
- execution: Configure, patch and make invokers and the BuildTools facade
- config: TOML configuration with cached access
- cli: Command-line interface

Usage:
    From command line:
        build-helper make ./src install

    Programmatically:
        from buildhelper import configure, make, MakeOptions
        configure(src_dir, ["--prefix=/opt/foo"])
        make(src_dir, ["install"], MakeOptions(max_parallel_jobs=4))
"""

from .command_logger import (
    TRACE,
    CommandLogger,
    LoggingCommandLogger,
    NullCommandLogger,
    TraceDebugCommandLogger,
    as_command_logger,
)

from .models import (
    AppConfig,
    ExecutionRequest,
    ExecutionResult,
    HostInfo,
    MakeOptions,
    PatchOptions,
    RunOptions,
)

from .validation import (
    BuildHelperError,
    ConfigNotFoundError,
    ExecutionError,
    SpawnError,
    ValidationError,
)

from .system import (
    clear_host_info_cache,
    detect_host_info,
    execute_request,
    get_host_info,
    run_within_environment,
)

from .execution import BuildTools, configure, make, patch

from .config import clear_config_cache, get_config, set_config_path

__version__ = "1.0.0"

__all__ = [
    # Invokers
    "run_within_environment",
    "execute_request",
    "configure",
    "patch",
    "make",
    "BuildTools",
    # Models
    "AppConfig",
    "ExecutionRequest",
    "ExecutionResult",
    "HostInfo",
    "MakeOptions",
    "PatchOptions",
    "RunOptions",
    # Errors
    "BuildHelperError",
    "ConfigNotFoundError",
    "ExecutionError",
    "SpawnError",
    "ValidationError",
    # Logging
    "TRACE",
    "CommandLogger",
    "LoggingCommandLogger",
    "NullCommandLogger",
    "TraceDebugCommandLogger",
    "as_command_logger",
    # Host information
    "clear_host_info_cache",
    "detect_host_info",
    "get_host_info",
    # Configuration
    "clear_config_cache",
    "get_config",
    "set_config_path",
]
