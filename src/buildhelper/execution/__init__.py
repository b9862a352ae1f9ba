"""
Build tool invokers.

Thin wrappers over the command runner for the usual autotools-style steps:
running a configure script, applying a patch and running make.
"""

from .configure import CONFIGURE_SCRIPTS, configure, find_configure_script
from .make import build_make_args, compute_job_count, make
from .patch import build_patch_args, patch
from .tools import BuildTools

__all__ = [
    "BuildTools",
    "CONFIGURE_SCRIPTS",
    "build_make_args",
    "build_patch_args",
    "compute_job_count",
    "configure",
    "find_configure_script",
    "make",
    "patch",
]
