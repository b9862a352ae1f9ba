"""
Runtime data models.

Host information gathered once per process and handed to the invokers that
depend on it.
"""

from dataclasses import dataclass
from typing import Optional

DEFAULT_CORE_COUNT = 2


@dataclass(frozen=True)
class HostInfo:
    """
    Facts about the machine running the build.

    core_count drives the default make parallelism and is never below
    DEFAULT_CORE_COUNT. logical_cpus is informational only.
    """

    core_count: int = DEFAULT_CORE_COUNT
    platform: str = "unknown"
    logical_cpus: Optional[int] = None

    @property
    def default_job_count(self) -> int:
        return self.core_count + 1
