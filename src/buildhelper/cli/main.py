"""
Command-line interface for buildhelper.

Exposes the command runner and the configure, patch and make invokers as
subcommands. The captured standard output of the tool is written to stdout;
log lines go to stderr so the two never interleave.

Examples:
    build-helper configure ./src --prefix=/opt/foo
    build-helper patch -p 1 ./src ../fix-build.patch
    build-helper make --max-jobs 4 ./src install
    build-helper run -e CC=clang ./src ./autogen.sh
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Dict, List, Optional

from ..command_logger import TRACE
from ..config import get_config, set_config_path
from ..execution import BuildTools
from ..models.execution import MakeOptions, PatchOptions, RunOptions
from ..system.cpu import get_host_info
from ..validation import (
    BuildHelperError,
    ValidationError,
    handle_cli_error,
    parse_env_assignment,
    validate_positive_integer,
)

LOG_FORMAT = "%(asctime)s [%(levelname)-5.5s] %(name)s:%(filename)s:%(lineno)d\t %(message)s"
COMMAND_LOGGER_NAME = "buildhelper.commands"

logger = logging.getLogger(__name__)


def setup_logging(level_name: str) -> None:
    """Configure root logging for a CLI run."""
    level = TRACE if level_name.upper() == "TRACE" else getattr(logging, level_name.upper())
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
        force=True,
    )


def _positive_int(value: str) -> int:
    try:
        return validate_positive_integer(value, field_name="--max-jobs")
    except ValidationError as e:
        raise argparse.ArgumentTypeError(str(e))


def _non_negative_int(value: str) -> int:
    try:
        return validate_positive_integer(value, min_value=0, field_name="--patch-level")
    except ValidationError as e:
        raise argparse.ArgumentTypeError(str(e))


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser with one subparser per build step."""
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "-e",
        "--env",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Add a variable to the environment of the command (repeatable).",
    )
    common.add_argument(
        "--config",
        type=Path,
        help="Path to a TOML configuration file with default settings.",
    )
    verbosity = common.add_mutually_exclusive_group()
    verbosity.add_argument(
        "-v", "--verbose", action="store_true", help="Log environment overlays."
    )
    verbosity.add_argument(
        "--trace", action="store_true", help="Also log the full result of every command."
    )

    parser = argparse.ArgumentParser(
        prog="build-helper",
        description="Run configure, patch and make with a controlled environment.",
    )
    subparsers = parser.add_subparsers(dest="action", required=True)

    run_parser = subparsers.add_parser(
        "run", parents=[common], help="Run an arbitrary command."
    )
    run_parser.add_argument("cwd", type=Path, help="Working directory.")
    run_parser.add_argument("command", help="Command to execute.")
    run_parser.add_argument("args", nargs=argparse.REMAINDER, help="Command arguments.")

    configure_parser = subparsers.add_parser(
        "configure", parents=[common], help="Run the configure script of a directory."
    )
    configure_parser.add_argument("cwd", type=Path, help="Directory holding the script.")
    configure_parser.add_argument("args", nargs=argparse.REMAINDER, help="Script arguments.")

    patch_parser = subparsers.add_parser(
        "patch", parents=[common], help="Apply a patch file."
    )
    patch_parser.add_argument(
        "-p",
        "--patch-level",
        type=_non_negative_int,
        default=None,
        help="Leading path components to strip (default from config, else 0).",
    )
    patch_parser.add_argument("cwd", type=Path, help="Directory to apply the patch in.")
    patch_parser.add_argument("patch_file", help="Patch file, relative to CWD or absolute.")

    make_parser = subparsers.add_parser(
        "make", parents=[common], help="Run make with a default job count."
    )
    parallel = make_parser.add_mutually_exclusive_group()
    parallel.add_argument(
        "--no-parallel",
        action="store_true",
        help="Do not pass a --jobs flag to make.",
    )
    parallel.add_argument(
        "--max-jobs",
        type=_positive_int,
        default=None,
        help="Upper bound on the number of parallel jobs.",
    )
    make_parser.add_argument("cwd", type=Path, help="Directory holding the Makefile.")
    make_parser.add_argument("args", nargs=argparse.REMAINDER, help="Targets and variables.")

    subparsers.add_parser("host-info", parents=[common], help="Show detected host information.")

    return parser


def _parse_env(assignments: List[str]) -> Dict[str, str]:
    env = {}
    for assignment in assignments:
        key, value = parse_env_assignment(assignment)
        env[key] = value
    return env


def _log_level(args: argparse.Namespace, configured: str) -> str:
    if args.trace:
        return "TRACE"
    if args.verbose:
        return "DEBUG"
    return configured


def dispatch(args: argparse.Namespace, tools: BuildTools) -> str:
    """Run the selected subcommand and return the captured output."""
    env = _parse_env(args.env)

    if args.action == "run":
        return tools.run(args.cwd, args.command, args.args, RunOptions(env=env))
    if args.action == "configure":
        return tools.configure(args.cwd, args.args, RunOptions(env=env))
    if args.action == "patch":
        return tools.patch(
            args.cwd, args.patch_file, PatchOptions(env=env, patch_level=args.patch_level)
        )
    if args.action == "make":
        options = MakeOptions(
            env=env,
            supports_parallel_build=False if args.no_parallel else None,
            max_parallel_jobs=args.max_jobs,
        )
        return tools.make(args.cwd, args.args, options)
    if args.action == "host-info":
        info = tools.host_info
        return (
            f"platform: {info.platform}\n"
            f"cores: {info.core_count}\n"
            f"logical_cpus: {info.logical_cpus if info.logical_cpus is not None else 'unknown'}\n"
            f"default_jobs: {info.default_job_count}\n"
        )
    raise ValueError(f"Unknown action: {args.action}")


def main_cli(argv: Optional[List[str]] = None) -> None:
    """
    Main command-line entry point.

    Parses arguments, loads the configuration, runs the requested build step
    and writes its output to stdout.

    Raises:
        SystemExit: With the error's exit code when a build step fails.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        if args.config is not None:
            set_config_path(args.config)
        app_config = get_config()
    except (FileNotFoundError, ValueError, BuildHelperError) as e:
        setup_logging("INFO")
        handle_cli_error(
            error=e,
            context="configuration loading",
            exit_code=2,
            logger=logger,
        )

    setup_logging(_log_level(args, app_config.logging.level))

    tools = BuildTools.from_config(
        app_config,
        logger=logging.getLogger(COMMAND_LOGGER_NAME),
        host_info=get_host_info(),
    )

    try:
        output = dispatch(args, tools)
    except BuildHelperError as e:
        handle_cli_error(error=e, context=args.action, logger=logger)

    sys.stdout.write(output)
    sys.stdout.flush()


if __name__ == "__main__":
    main_cli()
