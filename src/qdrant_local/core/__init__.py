"""Core module - configuration, schemas and errors."""

from __future__ import annotations

from qdrant_local.core.config import load_config, resolve_data_path
from qdrant_local.core.constants import DEFAULT_CONTAINER_NAME, DEFAULT_IMAGE, DEFAULT_PORT
from qdrant_local.core.exceptions import (
    ConfigError,
    ContainerStartError,
    ContainerStopError,
    HealthCheckTimeoutError,
    NotificationError,
    QdrantLocalError,
)
from qdrant_local.core.schemas import (
    ContainerIdentity,
    ContainerStatus,
    InspectResult,
    ManagerConfig,
    NtfyAction,
    NtfyActionType,
    NtfyConfig,
    PushResult,
)

__all__ = [
    "ConfigError",
    "ContainerIdentity",
    "ContainerStartError",
    "ContainerStatus",
    "ContainerStopError",
    "DEFAULT_CONTAINER_NAME",
    "DEFAULT_IMAGE",
    "DEFAULT_PORT",
    "HealthCheckTimeoutError",
    "InspectResult",
    "load_config",
    "ManagerConfig",
    "NotificationError",
    "NtfyAction",
    "NtfyActionType",
    "NtfyConfig",
    "PushResult",
    "QdrantLocalError",
    "resolve_data_path",
]
