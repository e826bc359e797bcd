"""Tests for DockerEnvironment."""

from unittest.mock import MagicMock, patch

import pytest
from docker.errors import APIError, DockerException

from qdrant_local.runners.command import CommandResult
from qdrant_local.runners.docker_env import INSTALL_INSTRUCTIONS, DockerEnvironment


class TestDockerInstalled:
    """Tests for check_docker_installed."""

    def test_installed(self):
        runner = MagicMock(return_value=CommandResult("Docker version 27.0.3", "", 0))
        env = DockerEnvironment(runner=runner)

        assert env.check_docker_installed() is True
        runner.assert_called_once_with("docker", ["--version"])

    def test_missing(self):
        runner = MagicMock(return_value=CommandResult("", "No such file or directory", 1))
        assert DockerEnvironment(runner=runner).check_docker_installed() is False

    def test_custom_runtime(self):
        runner = MagicMock(return_value=CommandResult("podman version 5.0.0", "", 0))
        DockerEnvironment(runtime="podman", runner=runner).check_docker_installed()
        runner.assert_called_once_with("podman", ["--version"])


class TestDockerRunning:
    """Tests for is_docker_running."""

    @patch("qdrant_local.runners.docker_env.docker.from_env")
    def test_daemon_answers(self, mock_from_env):
        client = mock_from_env.return_value
        client.ping.return_value = True

        assert DockerEnvironment().is_docker_running() is True
        client.close.assert_called_once()

    @patch("qdrant_local.runners.docker_env.docker.from_env")
    def test_no_daemon_socket(self, mock_from_env):
        mock_from_env.side_effect = DockerException("Error while fetching server API version")
        assert DockerEnvironment().is_docker_running() is False

    @patch("qdrant_local.runners.docker_env.docker.from_env")
    def test_ping_api_error(self, mock_from_env):
        client = mock_from_env.return_value
        client.ping.side_effect = APIError("500 Server Error")

        assert DockerEnvironment().is_docker_running() is False
        client.close.assert_called_once()

    @patch("qdrant_local.runners.docker_env.docker.from_env")
    def test_ping_connection_error(self, mock_from_env):
        mock_from_env.return_value.ping.side_effect = ConnectionError("refused")
        assert DockerEnvironment().is_docker_running() is False


class TestInstallInstructions:
    """Tests for install guidance."""

    @pytest.mark.parametrize(
        "platform,key",
        [
            ("win32", "win32"),
            ("darwin", "darwin"),
            ("linux", "linux"),
            ("linux2", "linux"),
            ("freebsd14", "default"),
        ],
    )
    def test_platform_mapping(self, platform, key):
        env = DockerEnvironment(platform=platform)
        assert env.get_install_instructions() == INSTALL_INSTRUCTIONS[key]

    def test_offer_accepted_opens_url(self):
        prompt = MagicMock(return_value="Open Docker Desktop for Mac")
        opener = MagicMock()
        env = DockerEnvironment(platform="darwin")

        opened = env.offer_installation(prompt, opener=opener)

        assert opened is True
        message, options = prompt.call_args.args
        assert "Docker is required" in message
        assert list(options) == ["Open Docker Desktop for Mac", "Later"]
        opener.assert_called_once_with("https://docs.docker.com/desktop/install/mac-install/")

    @pytest.mark.parametrize("selection", ["Later", None])
    def test_offer_declined(self, selection):
        prompt = MagicMock(return_value=selection)
        opener = MagicMock()

        opened = DockerEnvironment(platform="linux").offer_installation(prompt, opener=opener)

        assert opened is False
        opener.assert_not_called()
