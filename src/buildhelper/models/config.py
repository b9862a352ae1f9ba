"""
Configuration data models.

Defaults applied by the CLI and ``BuildTools.from_config``, loaded from a
TOML file.
"""

from dataclasses import dataclass, field
from typing import Dict, Optional


@dataclass
class MakeDefaults:
    """[make] section."""

    supports_parallel_build: bool = True
    max_parallel_jobs: Optional[int] = None


@dataclass
class PatchDefaults:
    """[patch] section."""

    patch_level: int = 0


@dataclass
class LoggingConfig:
    """[logging] section."""

    level: str = "INFO"


@dataclass
class AppConfig:
    """
    Complete application configuration.

    environment is an overlay applied to every command run through a
    ``BuildTools`` built from this configuration.
    """

    make: MakeDefaults = field(default_factory=MakeDefaults)
    patch: PatchDefaults = field(default_factory=PatchDefaults)
    environment: Dict[str, str] = field(default_factory=dict)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
