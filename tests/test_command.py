"""Tests for the external command primitive."""

import subprocess
from unittest.mock import patch

from qdrant_local.runners.command import CommandResult, run_command


class TestRunCommand:
    """Tests for run_command."""

    @patch("qdrant_local.runners.command.subprocess.run")
    def test_success(self, mock_run):
        mock_run.return_value = subprocess.CompletedProcess(
            args=["docker", "--version"], returncode=0, stdout="Docker version 27.0.3\n", stderr=""
        )

        result = run_command("docker", ["--version"])

        assert result == CommandResult(stdout="Docker version 27.0.3\n", stderr="", exit_code=0)
        assert result.success is True
        assert mock_run.call_args.args[0] == ["docker", "--version"]
        assert mock_run.call_args.kwargs["check"] is False
        assert "shell" not in mock_run.call_args.kwargs

    @patch("qdrant_local.runners.command.subprocess.run")
    def test_non_zero_exit(self, mock_run):
        mock_run.return_value = subprocess.CompletedProcess(
            args=[], returncode=125, stdout="", stderr="Error: No such container"
        )

        result = run_command("docker", ["start", "local-qdrant"])

        assert result.exit_code == 125
        assert result.success is False
        assert result.stderr == "Error: No such container"

    @patch("qdrant_local.runners.command.subprocess.run")
    def test_launch_failure_is_normalized(self, mock_run):
        mock_run.side_effect = FileNotFoundError(2, "No such file or directory", "docker")

        result = run_command("docker", ["info"])

        assert result.exit_code == 1
        assert result.stdout == ""
        assert "No such file or directory" in result.stderr

    @patch("qdrant_local.runners.command.subprocess.run")
    def test_permission_error_is_normalized(self, mock_run):
        mock_run.side_effect = PermissionError(13, "Permission denied")

        result = run_command("docker", ["info"])

        assert result.exit_code == 1
        assert "Permission denied" in result.stderr

    @patch("qdrant_local.runners.command.subprocess.run")
    def test_timeout(self, mock_run):
        mock_run.side_effect = subprocess.TimeoutExpired(cmd=["docker", "info"], timeout=5)

        result = run_command("docker", ["info"], timeout=5)

        assert result.exit_code == 1
        assert "timed out" in result.stderr

    @patch("qdrant_local.runners.command.subprocess.run")
    def test_killed_by_signal(self, mock_run):
        mock_run.return_value = subprocess.CompletedProcess(
            args=[], returncode=-9, stdout="", stderr=""
        )

        result = run_command("docker", ["stop", "local-qdrant"])

        assert result.exit_code == 1

    def test_real_missing_binary(self):
        result = run_command("definitely-not-a-real-binary-qdrant-local", [])
        assert result.exit_code == 1
        assert result.stderr
