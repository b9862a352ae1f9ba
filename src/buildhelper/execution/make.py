"""
Make invocation with a default parallelism level.

The job count defaults to one more than the detected number of cores and
can be capped per call. Host information is passed in explicitly; when it is
not, the process-wide cached value is used.
"""

import logging
from pathlib import Path
from typing import List, Optional, Union

from ..models.execution import ArgsLike, MakeOptions, RunOptions, coerce_options, normalize_args
from ..models.runtime import HostInfo
from ..system.commands import run_within_environment
from ..system.cpu import get_host_info
from ..validation import validate_positive_integer

logger = logging.getLogger(__name__)

MAKE_COMMAND = "make"


def compute_job_count(host_info: HostInfo, max_parallel_jobs: Optional[int] = None) -> int:
    """Number of make jobs: cores + 1, capped by max_parallel_jobs."""
    jobs = host_info.default_job_count
    if max_parallel_jobs is not None:
        limit = validate_positive_integer(max_parallel_jobs, field_name="max_parallel_jobs")
        jobs = min(jobs, limit)
    return jobs


def build_make_args(
    args: ArgsLike = None,
    options: Optional[RunOptions] = None,
    host_info: Optional[HostInfo] = None,
) -> List[str]:
    """Full argument list for make, the jobs flag first."""
    options = coerce_options(options, MakeOptions)
    make_args = []
    if options.parallel_build_enabled:
        jobs = compute_job_count(host_info or get_host_info(), options.max_parallel_jobs)
        logger.debug(f"Running make with {jobs} parallel jobs")
        make_args.append(f"--jobs={jobs}")
    make_args.extend(normalize_args(args))
    return make_args


def make(
    cwd: Union[str, Path],
    args: ArgsLike = None,
    options: Optional[RunOptions] = None,
    host_info: Optional[HostInfo] = None,
) -> str:
    """Run make in a directory.

    Args:
        cwd: Directory holding the Makefile.
        args: Targets and variable assignments passed after the jobs flag.
        options: MakeOptions controlling parallelism, environment and logger.
            A plain RunOptions runs with the default parallelism.
        host_info: Host facts used for the default job count.

    Returns:
        The captured standard output of make.

    Raises:
        ValidationError: If max_parallel_jobs is not a positive integer.
        SpawnError: If make is not installed.
        ExecutionError: If make exits with a nonzero status.
    """
    options = coerce_options(options, MakeOptions)
    make_args = build_make_args(args, options, host_info)
    return run_within_environment(cwd, MAKE_COMMAND, make_args, options)
