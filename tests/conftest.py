"""
Pytest configuration and shared fixtures for the buildhelper test suite.

This module provides common fixtures, test utilities, and configuration
for all test modules in the project.
"""

import os
import shutil
import stat
import sys
import tempfile
from pathlib import Path
from typing import Dict, List, Tuple

import pytest

# Add src to Python path for testing
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))


# ============================================================================
# Test Configuration
# ============================================================================


def pytest_configure(config):
    """Configure pytest with custom markers and settings."""
    config.addinivalue_line("markers", "unit: mark test as a unit test")
    config.addinivalue_line("markers", "integration: mark test as an integration test")


# ============================================================================
# Core Fixtures
# ============================================================================


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    temp_path = tempfile.mkdtemp()
    yield Path(temp_path).resolve()
    shutil.rmtree(temp_path, ignore_errors=True)


class RecordingLogger:
    """CommandLogger that keeps every message with its level."""

    def __init__(self):
        self.records: List[Tuple[str, str]] = []

    def info(self, message: str) -> None:
        self.records.append(("info", message))

    def debug(self, message: str) -> None:
        self.records.append(("debug", message))

    def trace(self, message: str) -> None:
        self.records.append(("trace", message))

    @property
    def text(self) -> str:
        return "".join(message for _, message in self.records)

    def messages(self, level: str) -> List[str]:
        return [message for lvl, message in self.records if lvl == level]


@pytest.fixture
def recording_logger():
    """Provide a fresh RecordingLogger."""
    return RecordingLogger()


@pytest.fixture
def recording_logger_factory():
    """Provide the RecordingLogger class for tests needing several loggers."""
    return RecordingLogger


def write_script(path: Path, body: str, executable: bool = True) -> Path:
    """Write a shell script, optionally marking it executable."""
    path.write_text(f"#!/bin/sh\n{body}\n")
    mode = 0o644
    if executable:
        mode |= stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH
    path.chmod(mode)
    return path


@pytest.fixture
def script_writer():
    """Provide the write_script helper."""
    return write_script


@pytest.fixture
def fake_make_env(temp_dir) -> Dict[str, str]:
    """
    Environment overlay whose PATH resolves 'make' to a script echoing its
    arguments, so job flags can be checked without a real make.
    """
    bin_dir = temp_dir / "fake-bin"
    bin_dir.mkdir()
    write_script(bin_dir / "make", 'echo "$@"')
    return {"PATH": f"{bin_dir}{os.pathsep}{os.environ.get('PATH', '')}"}


@pytest.fixture(autouse=True)
def reset_process_state(monkeypatch):
    """Automatically clear cached configuration and host info around each test."""
    from buildhelper.config import clear_config_cache, set_config_path
    from buildhelper.config.manager import CONFIG_ENV_VAR
    from buildhelper.system.cpu import clear_host_info_cache

    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    set_config_path(None)
    clear_host_info_cache()

    yield

    clear_config_cache()
    set_config_path(None)
    clear_host_info_cache()
