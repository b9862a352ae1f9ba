"""
Execution data models.

This module contains the value objects passed to and returned from the
command runner, together with the per-tool option structures.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple, Type, TypeVar, Union

from ..command_logger import CommandLogger, NULL_LOGGER, as_command_logger
from ..validation import validate_env_overlay, validate_no_nul

ArgsLike = Union[None, str, Iterable[Any]]

DEFAULT_PATCH_LEVEL = 0


def normalize_args(args: ArgsLike) -> Tuple[str, ...]:
    """
    Turn user supplied arguments into an immutable tuple of strings.

    A single string is one argument, not a sequence of characters.

    Raises:
        TypeError: If a mapping is passed where arguments are expected.
        ValidationError: If an argument contains a NUL byte.
    """
    if args is None:
        return ()
    if isinstance(args, (str, bytes, os.PathLike)):
        args = [args]
    elif isinstance(args, Mapping):
        raise TypeError(
            "args must be a sequence of strings; pass settings such as env "
            "or logger through options="
        )
    return tuple(
        validate_no_nul(
            os.fsdecode(a) if isinstance(a, (bytes, os.PathLike)) else str(a),
            field_name="args",
        )
        for a in args
    )


@dataclass
class RunOptions:
    """
    Options shared by every invocation.

    env is overlaid on the inherited process environment. logger may be
    None, a ``logging.Logger`` or any CommandLogger implementation.
    """

    env: Mapping[str, Any] = field(default_factory=dict)
    logger: Optional[Any] = None


@dataclass
class PatchOptions(RunOptions):
    """
    Options for applying a patch; patch_level is the ``-p`` strip count.

    A patch_level of None is unset and means DEFAULT_PATCH_LEVEL, or the
    default held by a ``BuildTools`` instance.
    """

    patch_level: Optional[int] = None

    @property
    def effective_patch_level(self) -> int:
        return DEFAULT_PATCH_LEVEL if self.patch_level is None else self.patch_level


@dataclass
class MakeOptions(RunOptions):
    """
    Options for running make.

    Fields left at None are unset: supports_parallel_build then means True
    and max_parallel_jobs means no upper bound beyond the host default. A
    ``BuildTools`` instance fills unset fields from its own defaults first.
    """

    supports_parallel_build: Optional[bool] = None
    max_parallel_jobs: Optional[int] = None

    @property
    def parallel_build_enabled(self) -> bool:
        return self.supports_parallel_build is not False


OptionsT = TypeVar("OptionsT", bound=RunOptions)


def coerce_options(options: Optional[RunOptions], options_class: Type[OptionsT]) -> OptionsT:
    """
    Return options as an instance of options_class.

    None gives a default instance, and a plain RunOptions keeps its env and
    logger while the tool specific fields stay unset.

    Raises:
        TypeError: If options is not a RunOptions.
    """
    if options is None:
        return options_class()
    if isinstance(options, options_class):
        return options
    if isinstance(options, RunOptions):
        return options_class(env=options.env, logger=options.logger)
    raise TypeError(
        f"options must be a {options_class.__name__}, got {type(options).__name__}"
    )


@dataclass(frozen=True)
class ExecutionRequest:
    """A single, fully resolved command invocation."""

    cwd: Path
    command: str
    args: Tuple[str, ...] = ()
    env: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    logger: CommandLogger = NULL_LOGGER

    @classmethod
    def create(
        cls,
        cwd: Union[str, Path],
        command: Union[str, Path],
        args: ArgsLike = None,
        env: Optional[Mapping[str, Any]] = None,
        logger: Optional[Any] = None,
    ) -> "ExecutionRequest":
        """Build a request, copying and freezing args and env."""
        return cls(
            cwd=Path(cwd),
            command=validate_no_nul(os.fsdecode(command), field_name="command"),
            args=normalize_args(args),
            env=MappingProxyType(validate_env_overlay(env)),
            logger=as_command_logger(logger),
        )

    @property
    def argv(self) -> Tuple[str, ...]:
        return (self.command,) + self.args

    def child_environment(self) -> Dict[str, str]:
        """Inherited environment with the overlay applied on top."""
        merged = dict(os.environ)
        merged.update(self.env)
        return merged


@dataclass(frozen=True)
class ExecutionResult:
    """Exit status and captured output of a finished child process."""

    code: int
    stdout: str
    stderr: str

    @property
    def succeeded(self) -> bool:
        return self.code == 0

    def to_log_dict(self) -> Dict[str, Any]:
        return {"code": self.code, "stderr": self.stderr, "stdout": self.stdout}
