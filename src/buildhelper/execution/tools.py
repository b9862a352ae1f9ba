"""
Build tool facade.

BuildTools bundles the values every build step shares (host information,
a logger and an environment overlay) so callers can drive a sequence of
configure, patch and make steps without repeating them.
"""

import dataclasses
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

from ..models.config import AppConfig
from ..models.execution import (
    ArgsLike,
    MakeOptions,
    OptionsT,
    PatchOptions,
    RunOptions,
    coerce_options,
)
from ..models.runtime import HostInfo
from ..system.commands import run_within_environment
from ..system.cpu import get_host_info
from ..validation import validate_env_overlay
from .configure import configure
from .make import make
from .patch import patch


class BuildTools:
    """
    Runs build steps with shared defaults.

    The host information is resolved once, when the instance is created, and
    reused for every make invocation.

    Attributes:
        host_info: Host facts used to size parallel builds.
        logger: Default logger for every command (None for no logging).
        env: Default environment overlay; per-call values take precedence.
        make_defaults: MakeOptions filling the fields a make() call leaves unset.
        patch_defaults: PatchOptions filling the fields a patch() call leaves unset.
    """

    def __init__(
        self,
        host_info: Optional[HostInfo] = None,
        logger: Optional[Any] = None,
        env: Optional[Mapping[str, Any]] = None,
        make_defaults: Optional[MakeOptions] = None,
        patch_defaults: Optional[PatchOptions] = None,
    ):
        self.host_info = host_info or get_host_info()
        self.logger = logger
        self.env: Dict[str, str] = validate_env_overlay(env)
        self.make_defaults = make_defaults or MakeOptions()
        self.patch_defaults = patch_defaults or PatchOptions()

    @classmethod
    def from_config(
        cls,
        app_config: AppConfig,
        logger: Optional[Any] = None,
        host_info: Optional[HostInfo] = None,
    ) -> "BuildTools":
        """Create an instance using the defaults of a loaded configuration."""
        return cls(
            host_info=host_info,
            logger=logger,
            env=app_config.environment,
            make_defaults=MakeOptions(
                supports_parallel_build=app_config.make.supports_parallel_build,
                max_parallel_jobs=app_config.make.max_parallel_jobs,
            ),
            patch_defaults=PatchOptions(patch_level=app_config.patch.patch_level),
        )

    def _merge(self, options: Optional[RunOptions], defaults: OptionsT) -> OptionsT:
        """
        Layer per-call options over the defaults.

        Fields the caller left unset (None) take the default value. The env
        overlay is built from the instance env, then the defaults, then the
        per-call env.
        """
        call = coerce_options(options, type(defaults))
        unset = {
            f.name: getattr(defaults, f.name)
            for f in dataclasses.fields(defaults)
            if f.name not in ("env", "logger") and getattr(call, f.name) is None
        }
        env = dict(self.env)
        env.update(validate_env_overlay(defaults.env))
        env.update(validate_env_overlay(call.env))
        logger = call.logger
        if logger is None:
            logger = defaults.logger if defaults.logger is not None else self.logger
        return dataclasses.replace(call, env=env, logger=logger, **unset)

    def run(
        self,
        cwd: Union[str, Path],
        command: Union[str, Path],
        args: ArgsLike = None,
        options: Optional[RunOptions] = None,
    ) -> str:
        """Run an arbitrary command; see run_within_environment()."""
        return run_within_environment(cwd, command, args, self._merge(options, RunOptions()))

    def configure(
        self,
        cwd: Union[str, Path],
        args: ArgsLike = None,
        options: Optional[RunOptions] = None,
    ) -> str:
        """Run the configure script of cwd; see execution.configure()."""
        return configure(cwd, args, self._merge(options, RunOptions()))

    def patch(
        self,
        cwd: Union[str, Path],
        patch_file: Union[str, Path],
        options: Optional[RunOptions] = None,
    ) -> str:
        """Apply a patch; see execution.patch()."""
        return patch(cwd, patch_file, self._merge(options, self.patch_defaults))

    def make(
        self,
        cwd: Union[str, Path],
        args: ArgsLike = None,
        options: Optional[RunOptions] = None,
    ) -> str:
        """Run make with this instance's host info; see execution.make()."""
        return make(cwd, args, self._merge(options, self.make_defaults), self.host_info)

    def __repr__(self) -> str:
        return f"BuildTools(host_info={self.host_info!r}, env={self.env!r})"
