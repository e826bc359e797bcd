"""Lifecycle management for the local Qdrant container.

This module owns one named container and drives it through the runtime CLI:
- Inspection (absent / stopped / running)
- Start of an existing container, or creation with a mounted data directory
- Stop
- Status reporting, including the server version
- Health polling against the HTTP endpoint

Nothing is cached between calls. The runtime is the source of truth and may
be changed out-of-band (e.g. a manual ``docker stop``), so every operation
re-inspects.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from http.client import HTTPException
from pathlib import Path
from urllib.error import URLError
from urllib.request import urlopen

from qdrant_local.core.config import resolve_data_path
from qdrant_local.core.constants import HEALTH_PROBE_TIMEOUT_SECONDS, PORT_CONFLICT_MARKERS
from qdrant_local.core.exceptions import (
    ContainerStartError,
    ContainerStopError,
    HealthCheckTimeoutError,
)
from qdrant_local.core.schemas import (
    ContainerIdentity,
    ContainerStatus,
    InspectResult,
    ManagerConfig,
)
from qdrant_local.runners.command import CommandResult, CommandRunner, run_command

logger = logging.getLogger(__name__)

HealthProbe = Callable[[str], bool]


def probe_health_endpoint(url: str) -> bool:
    """Return True if ``GET url`` answers with a 2xx status."""
    try:
        with urlopen(url, timeout=HEALTH_PROBE_TIMEOUT_SECONDS) as response:
            return 200 <= response.status < 300
    except (URLError, HTTPException, OSError, ValueError) as e:
        # HTTPError (non-2xx) is a URLError subclass
        logger.debug(f"Health probe {url} failed: {e}")
        return False


class ContainerLifecycleManager:
    """Manages the lifecycle of a single Qdrant container.

    The container's state is derived on every call:
    ``absent -> stopped -> running -> healthy``, where running and healthy are
    told apart only by the HTTP health probe.

    Calls on one instance are not reentrant; callers that may invoke
    ``start()`` and ``stop()`` concurrently must serialize them.

    Example:
        ```python
        manager = ContainerLifecycleManager(
            ManagerConfig(workspace_path=Path("~/project")),
        )
        manager.start()
        manager.wait_for_healthy(timeout_ms=30_000)
        print(manager.get_status().version)
        ```
    """

    def __init__(
        self,
        config: ManagerConfig | None = None,
        runner: CommandRunner | None = None,
        health_probe: HealthProbe | None = None,
    ) -> None:
        """Initialize the manager.

        Args:
            config: Manager configuration (defaults apply when omitted)
            runner: Command invocation primitive, ``run_command`` by default
            health_probe: Callable taking the health URL and returning True
                when healthy, ``probe_health_endpoint`` by default
        """
        self.config = config or ManagerConfig()
        self._runner = runner or run_command
        self._health_probe = health_probe or probe_health_endpoint

        # Resolved once; the identity never changes for this manager.
        self._identity = ContainerIdentity(
            name=self.config.container_name,
            port=self.config.port,
            data_directory=resolve_data_path(
                data_path=self.config.data_path,
                workspace_path=self.config.workspace_path,
                global_storage_path=self.config.global_storage_path,
            ),
        )

    @property
    def identity(self) -> ContainerIdentity:
        return self._identity

    @property
    def container_name(self) -> str:
        return self._identity.name

    @property
    def port(self) -> int:
        return self._identity.port

    @property
    def data_path(self) -> Path:
        return self._identity.data_directory

    def is_running(self) -> bool:
        """Check whether the container exists and is running. Never raises."""
        info = self._inspect()
        return bool(info and info.running)

    def start(self) -> None:
        """Start the container, creating it if needed.

        Idempotent: a running container is left untouched.

        Raises:
            ContainerStartError: If the runtime rejects the start or run command
        """
        info = self._inspect()
        if info is not None and info.running:
            logger.debug(f"Container {self.container_name} already running")
            return

        if info is not None:
            logger.info(f"Starting existing container {self.container_name}")
            result = self._run_runtime(["start", self.container_name])
            if not result.success:
                raise ContainerStartError(result.stderr.strip() or None)
            return

        self.data_path.mkdir(parents=True, exist_ok=True)
        logger.info(
            f"Creating container {self.container_name} from {self.config.image} "
            f"on port {self.port} (data: {self.data_path})"
        )
        result = self._run_runtime(self._build_run_args())
        if not result.success:
            raise ContainerStartError(self._normalize_run_error(result.stderr))

    def stop(self) -> None:
        """Stop the container if it is running.

        Raises:
            ContainerStopError: If the runtime rejects the stop command
        """
        info = self._inspect()
        if info is None or not info.running:
            logger.debug(f"Container {self.container_name} not running, nothing to stop")
            return

        logger.info(f"Stopping container {self.container_name}")
        result = self._run_runtime(["stop", self.container_name])
        if not result.success:
            raise ContainerStopError(result.stderr.strip() or None)

    def get_status(self) -> ContainerStatus:
        """Report existence, runtime state, health and server version."""
        info = self._inspect()
        if info is None:
            return ContainerStatus(exists=False, running=False)

        version = self._get_container_version() if info.running else None
        return ContainerStatus(
            exists=True,
            running=info.running,
            status=info.status or None,
            health=info.health,
            version=version,
        )

    def wait_for_healthy(
        self,
        timeout_ms: int | None = None,
        interval_ms: int | None = None,
    ) -> None:
        """Poll the health endpoint until it succeeds or the deadline passes.

        Args:
            timeout_ms: Deadline measured from this call (config default if None)
            interval_ms: Fixed pause between probes (config default if None)

        Raises:
            HealthCheckTimeoutError: If no probe succeeded before the deadline
        """
        if timeout_ms is None:
            timeout_ms = self.config.health_timeout_ms
        if interval_ms is None:
            interval_ms = self.config.health_interval_ms

        url = self.config.health_url
        timeout_s = timeout_ms / 1000
        interval_s = interval_ms / 1000
        start = time.monotonic()
        attempts = 0

        while time.monotonic() - start < timeout_s:
            attempts += 1
            if self._health_probe(url):
                logger.info(f"Qdrant healthy at {url} after {attempts} probe(s)")
                return
            remaining = timeout_s - (time.monotonic() - start)
            if remaining <= 0:
                break
            # Never sleep past the deadline
            time.sleep(min(interval_s, remaining))

        logger.warning(f"Qdrant at {url} not healthy after {timeout_ms}ms ({attempts} probes)")
        raise HealthCheckTimeoutError()

    def ensure_healthy(
        self,
        timeout_ms: int | None = None,
        interval_ms: int | None = None,
    ) -> None:
        """Start the container and block until it answers health probes."""
        self.start()
        self.wait_for_healthy(timeout_ms=timeout_ms, interval_ms=interval_ms)

    def _build_run_args(self) -> list[str]:
        """Arguments for creating a detached container from the pinned image."""
        return [
            "run",
            "-d",
            "--name",
            self.container_name,
            "-p",
            f"{self.port}:{self.port}",
            "-v",
            f"{self.data_path}:{self.config.storage_mount}",
            self.config.image,
        ]

    def _normalize_run_error(self, stderr: str) -> str | None:
        if any(marker in stderr for marker in PORT_CONFLICT_MARKERS):
            return (
                f"Port {self.port} is already in use. Stop the process using this port "
                "or configure Qdrant to use a different port."
            )
        return stderr.strip() or None

    def _inspect(self) -> InspectResult | None:
        """Inspect the container; None means absent or runtime unavailable."""
        result = self._run_runtime(["inspect", self.container_name])
        if not result.success:
            return None
        return InspectResult.from_inspect_output(result.stdout)

    def _get_container_version(self) -> str | None:
        result = self._run_runtime(["exec", self.container_name, *self.config.version_command])
        if not result.success:
            logger.debug(f"Version query failed: {result.stderr.strip()}")
            return None
        return result.stdout.strip() or None

    def _run_runtime(self, args: list[str]) -> CommandResult:
        return self._runner(self.config.runtime, args)
