"""Pydantic schemas for qdrant-local.

This module defines the data contracts used throughout the package: the
managed container's identity, decoded ``docker inspect`` output, status
reports, the manager configuration and ntfy push settings.
"""

from __future__ import annotations

import json
import logging
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, ValidationError, field_validator

from qdrant_local.core.constants import (
    CONTAINER_STORAGE_MOUNT,
    DEFAULT_CONTAINER_NAME,
    DEFAULT_HEALTH_HOST,
    DEFAULT_HEALTH_INTERVAL_MS,
    DEFAULT_HEALTH_PATH,
    DEFAULT_HEALTH_TIMEOUT_MS,
    DEFAULT_IMAGE,
    DEFAULT_PORT,
    DEFAULT_RUNTIME,
    VERSION_COMMAND,
)

logger = logging.getLogger(__name__)


class ContainerIdentity(BaseModel):
    """Immutable identity of the one container a manager owns.

    Attributes:
        name: Container name, unique among all containers on the host
        port: Host port, mapped 1:1 into the container
        data_directory: Host directory mounted as Qdrant storage
    """

    name: str = Field(..., min_length=1)
    port: int = Field(..., ge=1, le=65535)
    data_directory: Path

    model_config = {"frozen": True}


class _HealthState(BaseModel):
    status: str | None = Field(default=None, alias="Status")

    model_config = {"extra": "ignore"}


class _ContainerState(BaseModel):
    running: bool = Field(default=False, alias="Running")
    status: str = Field(default="", alias="Status")
    health: _HealthState | None = Field(default=None, alias="Health")

    model_config = {"extra": "ignore"}


class _InspectEntry(BaseModel):
    state: _ContainerState = Field(alias="State")

    model_config = {"extra": "ignore"}


class InspectResult(BaseModel):
    """Runtime view of a container, recomputed on every query."""

    running: bool
    status: str = ""
    health: str | None = None

    @classmethod
    def from_inspect_output(cls, stdout: str) -> InspectResult | None:
        """Decode the JSON array printed by ``docker inspect <name>``.

        Returns:
            The decoded state of the first entry, or None when the output is
            empty, malformed, or describes no container.
        """
        if not stdout.strip():
            return None
        try:
            data: Any = json.loads(stdout)
        except json.JSONDecodeError as e:
            logger.debug(f"Inspect output is not JSON: {e}")
            return None

        if not isinstance(data, list) or not data:
            logger.debug("Inspect output is not a non-empty array")
            return None

        try:
            entry = _InspectEntry.model_validate(data[0])
        except ValidationError as e:
            logger.debug(f"Inspect output has unexpected shape: {e}")
            return None

        state = entry.state
        return cls(
            running=state.running,
            status=state.status,
            health=state.health.status if state.health else None,
        )


class ContainerStatus(BaseModel):
    """Status report returned by ``ContainerLifecycleManager.get_status``."""

    exists: bool
    running: bool
    status: str | None = None
    health: str | None = None
    version: str | None = None


class NtfyActionType(str, Enum):
    """Action button kinds understood by ntfy."""

    VIEW = "view"
    HTTP = "http"


class NtfyAction(BaseModel):
    """A button attached to an ntfy push notification."""

    action: NtfyActionType
    label: str = Field(..., min_length=1)
    url: str = Field(..., min_length=1)
    method: str | None = Field(default=None, description="HTTP method for http actions")
    clear: bool | None = Field(default=None, description="Dismiss notification on tap")

    def to_header_value(self) -> str:
        """Render in ntfy's short ``Actions`` header syntax."""
        parts = [self.action.value, self.label, self.url]
        if self.method:
            parts.append(f"method={self.method}")
        if self.clear is not None:
            parts.append(f"clear={'true' if self.clear else 'false'}")
        return ",".join(parts)


class NtfyConfig(BaseModel):
    """ntfy push settings; every field may also come from CLI flags."""

    endpoint: str | None = Field(default=None, description="ntfy server URL")
    topic: str | None = Field(default=None, description="Topic appended to the endpoint")
    access_token: str | None = None
    username: str | None = None
    password: str | None = None


class PushResult(BaseModel):
    """Outcome of a delivered push notification."""

    ok: bool
    status: int
    id: str | None = None


class ManagerConfig(BaseModel):
    """Top-level configuration for the container manager.

    This is the configuration loaded from YAML/JSON files.
    """

    runtime: str = Field(default=DEFAULT_RUNTIME, min_length=1, description="Runtime CLI binary")
    container_name: str = Field(default=DEFAULT_CONTAINER_NAME, min_length=1)
    port: int = Field(default=DEFAULT_PORT, ge=1, le=65535)
    image: str = Field(default=DEFAULT_IMAGE, min_length=1, description="Pinned image reference")
    storage_mount: str = Field(default=CONTAINER_STORAGE_MOUNT)
    version_command: list[str] = Field(default_factory=lambda: list(VERSION_COMMAND))
    health_host: str = Field(default=DEFAULT_HEALTH_HOST)
    health_path: str = Field(default=DEFAULT_HEALTH_PATH)
    health_timeout_ms: int = Field(default=DEFAULT_HEALTH_TIMEOUT_MS, ge=0)
    health_interval_ms: int = Field(default=DEFAULT_HEALTH_INTERVAL_MS, ge=1)
    data_path: Path | None = Field(default=None, description="Explicit data directory")
    workspace_path: Path | None = Field(default=None, description="Workspace root")
    global_storage_path: Path | None = Field(default=None, description="Global storage root")
    ntfy: NtfyConfig = Field(default_factory=NtfyConfig)

    @field_validator("image")
    @classmethod
    def validate_image(cls, v: str) -> str:
        """Require a version-qualified image reference."""
        name = v.rsplit("/", 1)[-1]
        if ":" not in name and "@" not in v:
            raise ValueError(f"Image reference must be pinned to a tag or digest: {v}")
        return v

    @field_validator("health_path")
    @classmethod
    def validate_health_path(cls, v: str) -> str:
        """Ensure the health path is absolute."""
        if not v.startswith("/"):
            return f"/{v}"
        return v

    @property
    def health_url(self) -> str:
        """URL probed by the health check."""
        return f"http://{self.health_host}:{self.port}{self.health_path}"
