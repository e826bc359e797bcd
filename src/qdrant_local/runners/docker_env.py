"""Docker installation and daemon checks.

Answers "can we manage a container here at all?" before the lifecycle
manager is used, and points the operator at installation docs when not.
"""

from __future__ import annotations

import logging
import sys
import webbrowser
from collections.abc import Callable, Sequence
from dataclasses import dataclass

import docker
from docker.errors import DockerException

from qdrant_local.core.constants import DEFAULT_RUNTIME
from qdrant_local.runners.command import CommandRunner, run_command

logger = logging.getLogger(__name__)

# prompt(message, options) -> chosen option, or None if dismissed
PromptCallback = Callable[[str, Sequence[str]], str | None]
UrlOpener = Callable[[str], object]

LATER_OPTION = "Later"


@dataclass(frozen=True)
class InstallInstruction:
    """Where to get Docker for one platform."""

    label: str
    url: str


INSTALL_INSTRUCTIONS: dict[str, InstallInstruction] = {
    "win32": InstallInstruction(
        label="Docker Desktop for Windows",
        url="https://docs.docker.com/desktop/install/windows-install/",
    ),
    "darwin": InstallInstruction(
        label="Docker Desktop for Mac",
        url="https://docs.docker.com/desktop/install/mac-install/",
    ),
    "linux": InstallInstruction(
        label="Docker Engine for Linux",
        url="https://docs.docker.com/engine/install/",
    ),
    "default": InstallInstruction(
        label="Docker Installation Guide",
        url="https://docs.docker.com/get-docker/",
    ),
}


class DockerEnvironment:
    """Checks for a usable Docker installation on this host."""

    def __init__(
        self,
        platform: str | None = None,
        runtime: str = DEFAULT_RUNTIME,
        runner: CommandRunner | None = None,
    ) -> None:
        self.platform = platform or sys.platform
        self.runtime = runtime
        self._runner = runner or run_command

    def check_docker_installed(self) -> bool:
        """True if the runtime CLI is on PATH and answers ``--version``."""
        result = self._runner(self.runtime, ["--version"])
        if not result.success:
            logger.debug(f"{self.runtime} --version failed: {result.stderr.strip()}")
        return result.success

    def is_docker_running(self) -> bool:
        """True if the Docker daemon answers a ping."""
        try:
            client = docker.from_env()
        except DockerException as e:
            logger.debug(f"Docker daemon unreachable: {e}")
            return False

        try:
            return bool(client.ping())
        except (DockerException, OSError) as e:
            # requests' connection errors are OSError subclasses
            logger.debug(f"Docker ping failed: {e}")
            return False
        finally:
            client.close()

    def get_install_instructions(self) -> InstallInstruction:
        """Install instructions for the current platform."""
        if self.platform.startswith("linux"):
            return INSTALL_INSTRUCTIONS["linux"]
        return INSTALL_INSTRUCTIONS.get(self.platform, INSTALL_INSTRUCTIONS["default"])

    def offer_installation(
        self,
        prompt: PromptCallback,
        opener: UrlOpener | None = None,
    ) -> bool:
        """Ask the operator whether to open the Docker install page.

        Args:
            prompt: UI callback receiving the message and the option labels
            opener: Opens a URL, ``webbrowser.open`` by default

        Returns:
            True if the install page was opened
        """
        instruction = self.get_install_instructions()
        open_option = f"Open {instruction.label}"
        selection = prompt(
            "Docker is required to run a local Qdrant container.",
            [open_option, LATER_OPTION],
        )
        if selection != open_option:
            return False

        logger.info(f"Opening {instruction.url}")
        (opener or webbrowser.open)(instruction.url)
        return True
