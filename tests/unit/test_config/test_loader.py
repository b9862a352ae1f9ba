"""
Unit tests for configuration loading, validation and caching.
"""

import tomllib

import pytest
import toml

from buildhelper.config import (
    CONFIG_ENV_VAR,
    clear_config_cache,
    get_config,
    is_config_loaded,
    load_config_file,
    parse_config,
    resolve_config_path,
    set_config_path,
)
from buildhelper.models import AppConfig
from buildhelper.validation import ValidationError


@pytest.fixture
def sample_config_data():
    """Sample configuration data for testing."""
    return {
        "make": {"supports_parallel_build": False, "max_parallel_jobs": 8},
        "patch": {"patch_level": 1},
        "environment": {"CFLAGS": "-O2", "JOBS_HINT": 4},
        "logging": {"level": "debug"},
    }


@pytest.fixture
def config_file(temp_dir, sample_config_data):
    """Write the sample configuration to a TOML file."""
    path = temp_dir / "build-helper.toml"
    with open(path, "w") as f:
        toml.dump(sample_config_data, f)
    return path


@pytest.mark.unit
class TestParseConfig:

    def test_empty_uses_defaults(self):
        assert parse_config({}) == AppConfig()

    def test_full_config(self, sample_config_data):
        config = parse_config(sample_config_data)
        assert config.make.supports_parallel_build is False
        assert config.make.max_parallel_jobs == 8
        assert config.patch.patch_level == 1
        assert config.environment == {"CFLAGS": "-O2", "JOBS_HINT": "4"}
        assert config.logging.level == "DEBUG"

    @pytest.mark.parametrize(
        "data, field",
        [
            ({"make": {"max_parallel_jobs": 0}}, "make.max_parallel_jobs"),
            ({"make": {"supports_parallel_build": "yes"}}, "make.supports_parallel_build"),
            ({"patch": {"patch_level": -1}}, "patch.patch_level"),
            ({"logging": {"level": "LOUD"}}, "logging.level"),
            ({"make": "fast"}, "make"),
        ],
    )
    def test_invalid_values(self, data, field):
        with pytest.raises(ValidationError) as exc_info:
            parse_config(data)
        assert exc_info.value.field_name == field

    def test_invalid_environment_name(self):
        with pytest.raises(ValidationError, match="invalid variable name"):
            parse_config({"environment": {"A=B": "x"}})


@pytest.mark.unit
class TestLoadConfigFile:

    def test_loads_file(self, config_file):
        config = load_config_file(config_file)
        assert config.make.max_parallel_jobs == 8
        assert config.environment["CFLAGS"] == "-O2"

    def test_missing_file(self, temp_dir):
        with pytest.raises(FileNotFoundError):
            load_config_file(temp_dir / "missing.toml")

    def test_malformed_file(self, temp_dir):
        path = temp_dir / "broken.toml"
        path.write_text("[make\nmax_parallel_jobs = ")
        with pytest.raises(tomllib.TOMLDecodeError):
            load_config_file(path)


@pytest.mark.unit
class TestConfigManager:

    def test_defaults_without_file(self):
        assert resolve_config_path() is None
        assert get_config() == AppConfig()

    def test_cached(self, config_file):
        set_config_path(config_file)
        first = get_config()
        assert is_config_loaded()
        assert get_config() is first

    def test_clear_cache_reloads(self, config_file):
        set_config_path(config_file)
        first = get_config()
        clear_config_cache()
        assert not is_config_loaded()
        second = get_config()
        assert second is not first
        assert second == first

    def test_environment_variable(self, config_file, monkeypatch):
        monkeypatch.setenv(CONFIG_ENV_VAR, str(config_file))
        assert resolve_config_path() == config_file
        assert get_config().patch.patch_level == 1

    def test_explicit_path_wins(self, config_file, temp_dir, monkeypatch):
        monkeypatch.setenv(CONFIG_ENV_VAR, str(temp_dir / "other.toml"))
        set_config_path(config_file)
        assert resolve_config_path() == config_file

    def test_missing_selected_file(self, temp_dir):
        set_config_path(temp_dir / "missing.toml")
        with pytest.raises(FileNotFoundError):
            get_config()
        assert not is_config_loaded()

    def test_invalid_selected_file(self, temp_dir):
        path = temp_dir / "invalid.toml"
        with open(path, "w") as f:
            toml.dump({"patch": {"patch_level": -3}}, f)
        set_config_path(path)
        with pytest.raises(ValidationError):
            get_config()
