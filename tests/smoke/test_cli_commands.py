"""
Smoke Tests for CLI Commands.

These tests verify that CLI commands run without errors and print the
headline number. Scoring correctness is covered by the unit tests.

Usage:
    pytest tests/smoke/test_cli_commands.py -v
    pytest tests/smoke/test_cli_commands.py -v -m smoke
"""

import subprocess
import sys
from pathlib import Path

import pytest

# Mark all tests in this module as smoke tests
pytestmark = pytest.mark.smoke

# Project root
PROJECT_ROOT = Path(__file__).parent.parent.parent


def run_cli_command(command: str, timeout: int = 30) -> tuple[int, str, str]:
    """
    Run a CLI command and return exit code, stdout, stderr.

    Args:
        command: The command to run (after 'python -m src.cli.main')
        timeout: Maximum time to wait

    Returns:
        Tuple of (exit_code, stdout, stderr)
    """
    full_command = f"{sys.executable} -m src.cli.main {command}"

    result = subprocess.run(
        full_command,
        shell=True,
        cwd=PROJECT_ROOT,
        capture_output=True,
        text=True,
        timeout=timeout,
    )

    return result.returncode, result.stdout, result.stderr


class TestCLIHelp:
    """Test that help commands work."""

    def test_main_help(self):
        """Main help should list every command."""
        code, stdout, stderr = run_cli_command("--help")

        assert code == 0, f"Help failed: {stderr}"
        for command in ("explain", "level", "estimate"):
            assert command in stdout

    @pytest.mark.parametrize("command", ["explain", "level", "estimate"])
    def test_command_help(self, command):
        code, stdout, stderr = run_cli_command(f"{command} --help")

        assert code == 0, f"{command} help failed: {stderr}"


class TestExplain:
    def test_correct_answer(self):
        code, stdout, stderr = run_cli_command("explain 3.0 --correct")

        assert code == 0, stderr
        assert "Score update" in stdout
        assert "2.4" in stdout

    def test_wrong_answer_with_recent_failures(self):
        code, stdout, stderr = run_cli_command("explain 4.5 --wrong -f 2")

        assert code == 0, stderr
        assert "recent_failures" in stdout
        assert "4.9" in stdout

    def test_verbose_logs_diagnostics(self):
        code, stdout, stderr = run_cli_command("--verbose explain 3.0")

        assert code == 0, stderr
        assert "DEBUG" in stderr


class TestLevel:
    def test_score_to_level(self):
        code, stdout, _ = run_cli_command("level 2.4")

        assert code == 0
        assert "level 3" in stdout
        assert "Medium" in stdout

    def test_level_to_score(self):
        code, stdout, _ = run_cli_command("level 4 --to-score")

        assert code == 0
        assert "4.25" in stdout


class TestEstimate:
    def test_median_without_previous(self):
        code, stdout, _ = run_cli_command("estimate 3000 4000 5000")

        assert code == 0
        assert "Kept 3/3" in stdout
        assert "4000 ms" in stdout

    def test_outlier_dropped_with_previous(self):
        code, stdout, _ = run_cli_command("estimate 3000 50000 4000 --previous 3500")

        assert code == 0
        assert "Kept 2/3" in stdout
