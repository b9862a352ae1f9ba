"""
Patch application.
"""

import os
from pathlib import Path
from typing import List, Optional, Union

from ..models.execution import DEFAULT_PATCH_LEVEL, PatchOptions, RunOptions, coerce_options
from ..system.commands import run_within_environment
from ..validation import validate_positive_integer

PATCH_COMMAND = "patch"


def build_patch_args(
    patch_file: Union[str, Path], patch_level: int = DEFAULT_PATCH_LEVEL
) -> List[str]:
    """Arguments for ``patch``: strip level followed by the input file."""
    level = validate_positive_integer(patch_level, min_value=0, field_name="patch_level")
    return [f"-p{level}", "-i", os.fspath(patch_file)]


def patch(
    cwd: Union[str, Path],
    patch_file: Union[str, Path],
    options: Optional[RunOptions] = None,
) -> str:
    """Apply a patch file inside a directory.

    Args:
        cwd: Directory the patch is applied in.
        patch_file: Patch to apply, absolute or relative to cwd.
        options: PatchOptions; patch_level is the number of leading path
            components stripped from the file names in the patch. A plain
            RunOptions applies the patch with DEFAULT_PATCH_LEVEL.

    Returns:
        The captured standard output of patch.

    Raises:
        ValidationError: If patch_level is negative or not an integer.
        ExecutionError: If the patch does not apply.
    """
    options = coerce_options(options, PatchOptions)
    return run_within_environment(
        cwd, PATCH_COMMAND, build_patch_args(patch_file, options.effective_patch_level), options
    )
