"""
Unit tests for make argument construction and invocation.

Invocation tests resolve 'make' to a script that echoes its arguments (see
the fake_make_env fixture) so the job flag can be checked exactly.
"""

from unittest.mock import patch

import pytest

from buildhelper.execution import build_make_args, compute_job_count, make
from buildhelper.models import HostInfo, MakeOptions, RunOptions
from buildhelper.validation import ValidationError

FOUR_CORES = HostInfo(core_count=4, platform="linux")


@pytest.mark.unit
class TestComputeJobCount:

    def test_cores_plus_one(self):
        assert compute_job_count(FOUR_CORES) == 5

    def test_capped(self):
        assert compute_job_count(FOUR_CORES, 1) == 1
        assert compute_job_count(FOUR_CORES, 3) == 3

    def test_cap_above_default(self):
        assert compute_job_count(FOUR_CORES, 64) == 5

    @pytest.mark.parametrize("bad", [0, -2, "many", True])
    def test_invalid_cap(self, bad):
        with pytest.raises(ValidationError):
            compute_job_count(FOUR_CORES, bad)


@pytest.mark.unit
class TestBuildMakeArgs:

    def test_jobs_flag_first(self):
        args = build_make_args(["install", "DESTDIR=/tmp/x"], MakeOptions(), FOUR_CORES)
        assert args == ["--jobs=5", "install", "DESTDIR=/tmp/x"]

    def test_no_args(self):
        assert build_make_args(None, None, FOUR_CORES) == ["--jobs=5"]

    def test_parallel_disabled(self):
        options = MakeOptions(supports_parallel_build=False, max_parallel_jobs=1)
        assert build_make_args(["all"], options, FOUR_CORES) == ["all"]

    def test_max_parallel_jobs(self):
        assert build_make_args([], MakeOptions(max_parallel_jobs=1), FOUR_CORES) == ["--jobs=1"]

    def test_uses_cached_host_info_by_default(self):
        with patch(
            "buildhelper.execution.make.get_host_info",
            return_value=HostInfo(core_count=7),
        ) as mock_get:
            assert build_make_args() == ["--jobs=8"]
        mock_get.assert_called_once_with()

    def test_host_info_not_needed_without_parallelism(self):
        with patch("buildhelper.execution.make.get_host_info") as mock_get:
            build_make_args([], MakeOptions(supports_parallel_build=False))
        mock_get.assert_not_called()


@pytest.mark.unit
class TestMake:

    def test_default_jobs(self, temp_dir, fake_make_env):
        out = make(temp_dir, None, MakeOptions(env=fake_make_env), FOUR_CORES)
        assert out == "--jobs=5\n"

    def test_passes_arguments(self, temp_dir, fake_make_env):
        out = make(temp_dir, ["test=true"], MakeOptions(env=fake_make_env), FOUR_CORES)
        assert out == "--jobs=5 test=true\n"

    def test_disables_parallel_build(self, temp_dir, fake_make_env):
        options = MakeOptions(env=fake_make_env, supports_parallel_build=False)
        assert make(temp_dir, [], options, FOUR_CORES) == "\n"

    def test_single_job(self, temp_dir, fake_make_env):
        options = MakeOptions(env=fake_make_env, max_parallel_jobs=1)
        assert make(temp_dir, [], options) == "--jobs=1\n"

    def test_detected_host_info(self, temp_dir, fake_make_env):
        out = make(temp_dir, options=MakeOptions(env=fake_make_env))
        assert out.startswith("--jobs=")
        assert int(out.strip().split("=", 1)[1]) >= 3

    def test_logs_command(self, temp_dir, fake_make_env, recording_logger):
        make(
            temp_dir,
            ["install"],
            MakeOptions(env=fake_make_env, logger=recording_logger),
            FOUR_CORES,
        )
        assert recording_logger.messages("info") == ["Executing: make --jobs=5 install"]

    def test_plain_run_options(self, temp_dir, fake_make_env, recording_logger):
        options = RunOptions(env=fake_make_env, logger=recording_logger)
        assert make(temp_dir, ["all"], options, FOUR_CORES) == "--jobs=5 all\n"
        assert recording_logger.messages("info") == ["Executing: make --jobs=5 all"]


@pytest.mark.unit
def test_build_args_with_plain_run_options():
    assert build_make_args(["all"], RunOptions(env={"A": "1"}), FOUR_CORES) == ["--jobs=5", "all"]


@pytest.mark.unit
def test_unset_parallelism_means_enabled():
    assert MakeOptions().supports_parallel_build is None
    assert MakeOptions().parallel_build_enabled
    assert not MakeOptions(supports_parallel_build=False).parallel_build_enabled
