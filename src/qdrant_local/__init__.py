"""qdrant-local - local Qdrant container lifecycle and notifications."""

from __future__ import annotations

from qdrant_local.core.exceptions import (
    ContainerStartError,
    ContainerStopError,
    HealthCheckTimeoutError,
    NotificationError,
    QdrantLocalError,
)
from qdrant_local.core.schemas import ContainerIdentity, ContainerStatus, ManagerConfig
from qdrant_local.runners.container_manager import ContainerLifecycleManager

__version__ = "0.1.0"

__all__ = [
    "ContainerIdentity",
    "ContainerLifecycleManager",
    "ContainerStartError",
    "ContainerStatus",
    "ContainerStopError",
    "HealthCheckTimeoutError",
    "ManagerConfig",
    "NotificationError",
    "QdrantLocalError",
    "__version__",
]
