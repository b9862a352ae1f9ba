"""
Configure script invocation.
"""

import logging
from pathlib import Path
from typing import Optional, Union

from ..models.execution import ArgsLike, RunOptions
from ..system.commands import run_within_environment
from ..validation import ConfigNotFoundError

logger = logging.getLogger(__name__)

CONFIGURE_SCRIPTS = ("configure", "config")


def find_configure_script(cwd: Union[str, Path]) -> Path:
    """Locate the configure-style script directly under a directory.

    Candidates are tried in the order of CONFIGURE_SCRIPTS.

    Raises:
        ConfigNotFoundError: If none of the candidates exists.
    """
    directory = Path(cwd).absolute()
    for name in CONFIGURE_SCRIPTS:
        candidate = directory / name
        if candidate.exists():
            logger.debug(f"Using configure script {candidate}")
            return candidate
    raise ConfigNotFoundError(str(directory), CONFIGURE_SCRIPTS)


def configure(
    cwd: Union[str, Path],
    args: ArgsLike = None,
    options: Optional[RunOptions] = None,
) -> str:
    """Run the 'configure' (or 'config') script of a source tree.

    Args:
        cwd: Source directory holding the script; also the working directory.
        args: Arguments for the script.
        options: RunOptions with the environment overlay and logger.

    Returns:
        The captured standard output of the script.

    Raises:
        ConfigNotFoundError: If no configure script is present.
        SpawnError: If the script cannot be started (e.g. not executable).
        ExecutionError: If the script exits with a nonzero status.
    """
    script = find_configure_script(cwd)
    return run_within_environment(cwd, script, args, options)
