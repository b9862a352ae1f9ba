"""
Host CPU detection.

The number of processors is read from /proc/cpuinfo on Linux-like hosts and
defaults to two elsewhere. The detected value is cached for the lifetime of
the process since it cannot change while the process runs.
"""

import logging
import re
import sys
import threading
from pathlib import Path
from typing import Optional, Union

import psutil

from ..models.runtime import DEFAULT_CORE_COUNT, HostInfo

logger = logging.getLogger(__name__)

CPUINFO_PATH = Path("/proc/cpuinfo")
_PROCESSOR_LINE = re.compile(r"^processor\s+:")


def is_linux_like(platform: str) -> bool:
    return platform.startswith("linux")


def count_cpuinfo_processors(cpuinfo_path: Union[str, Path] = CPUINFO_PATH) -> int:
    """Count the "processor : N" entries of a cpuinfo file.

    Raises:
        OSError: If the file cannot be read.
    """
    count = 0
    with open(cpuinfo_path, "r", encoding="utf-8", errors="replace") as f:
        for line in f:
            if _PROCESSOR_LINE.match(line):
                count += 1
    return count


def _logical_cpu_count() -> Optional[int]:
    try:
        return psutil.cpu_count(logical=True)
    except Exception as e:
        logger.warning(f"Failed to get logical CPU count: {type(e).__name__}: {e}")
        return None


def detect_host_info(
    cpuinfo_path: Union[str, Path] = CPUINFO_PATH,
    platform: Optional[str] = None,
) -> HostInfo:
    """Inspect the host and build a HostInfo.

    Args:
        cpuinfo_path: Location of the cpuinfo pseudo-file.
        platform: Platform identifier, defaults to ``sys.platform``.

    Returns:
        HostInfo whose core_count is at least DEFAULT_CORE_COUNT.
    """
    platform = platform or sys.platform
    cores = DEFAULT_CORE_COUNT
    if is_linux_like(platform):
        try:
            cores = max(count_cpuinfo_processors(cpuinfo_path), DEFAULT_CORE_COUNT)
        except OSError as e:
            logger.warning(
                f"Could not read {cpuinfo_path}: {type(e).__name__}: {e}. "
                f"Assuming {DEFAULT_CORE_COUNT} cores."
            )

    info = HostInfo(
        core_count=cores, platform=platform, logical_cpus=_logical_cpu_count()
    )
    logger.debug(f"Detected host info: {info}")
    return info


# Global host info instance
_host_info: Optional[HostInfo] = None
_host_info_lock = threading.Lock()


def get_host_info() -> HostInfo:
    """Get the host info for this process, detecting it on first use."""
    global _host_info
    if _host_info is None:
        with _host_info_lock:
            if _host_info is None:
                _host_info = detect_host_info()
    return _host_info


def clear_host_info_cache() -> None:
    """Forget the cached host info so the next access detects it again."""
    global _host_info
    with _host_info_lock:
        _host_info = None
