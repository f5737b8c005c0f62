"""Tests for the test runner script."""

import importlib.util
import sys
from pathlib import Path
from unittest.mock import Mock, patch

import pytest

RUNNER_PATH = Path(__file__).parent.parent / "run_tests.py"


@pytest.fixture
def runner():
    """Load run_tests.py as a module."""
    spec = importlib.util.spec_from_file_location("run_tests", RUNNER_PATH)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


class TestBuildCommand:
    """Test the build_command function."""

    def test_default_includes_coverage(self, runner):
        command = runner.build_command([])

        assert command[:3] == [sys.executable, "-m", "pytest"]
        assert "--cov=joplin_sync" in command
        assert "--cov-report=term-missing" in command

    def test_no_cov_flag(self, runner):
        command = runner.build_command(["--no-cov"])

        assert not any(arg.startswith("--cov") for arg in command)
        assert "--no-cov" not in command

    def test_extra_args_passed_through(self, runner):
        command = runner.build_command(["-k", "pipeline"])

        assert command[-2:] == ["-k", "pipeline"]


class TestRunTests:
    """Test the run_tests function."""

    def test_returns_pytest_exit_code(self, runner):
        with patch.object(runner.subprocess, 'run', return_value=Mock(returncode=1)) as mock_run:
            assert runner.run_tests(["--no-cov"]) == 1

        assert mock_run.call_args.kwargs['cwd'] == runner.PROJECT_DIR

    def test_success(self, runner):
        with patch.object(runner.subprocess, 'run', return_value=Mock(returncode=0)):
            assert runner.run_tests([]) == 0
