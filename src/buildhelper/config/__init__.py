"""
Configuration management for the buildhelper package.

Loads defaults for build steps from a TOML file and caches them for the
process.
"""

from .manager import (
    CONFIG_ENV_VAR,
    clear_config_cache,
    get_config,
    is_config_loaded,
    resolve_config_path,
    set_config_path,
)

from .loader import load_config_file, load_toml_file, parse_config

__all__ = [
    # Main interface
    "CONFIG_ENV_VAR",
    "clear_config_cache",
    "get_config",
    "is_config_loaded",
    "resolve_config_path",
    "set_config_path",
    # Advanced interface
    "load_config_file",
    "load_toml_file",
    "parse_config",
]
