"""Custom exceptions for qdrant-local."""

from __future__ import annotations


class QdrantLocalError(Exception):
    """Base exception for all qdrant-local errors."""

    default_message = "qdrant-local operation failed"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ContainerStartError(QdrantLocalError):
    """Raised when the container could not be started or created."""

    default_message = "Failed to start Qdrant container"


class ContainerStopError(QdrantLocalError):
    """Raised when a running container could not be stopped."""

    default_message = "Failed to stop Qdrant container"


class HealthCheckTimeoutError(QdrantLocalError):
    """Raised when the health endpoint never answered within the deadline."""

    default_message = "Qdrant health check timed out"


class NotificationError(QdrantLocalError):
    """Raised when a notification could not be delivered."""

    default_message = "Notification delivery failed"


class ConfigError(QdrantLocalError):
    """Raised for configuration that loads but cannot be used."""

    default_message = "Invalid configuration"
