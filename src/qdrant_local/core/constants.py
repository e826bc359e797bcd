"""Shared constants for qdrant-local.

Centralized defaults for the managed container, the health probe and
notification endpoints.
"""

from __future__ import annotations

# Container identity
DEFAULT_RUNTIME = "docker"
DEFAULT_CONTAINER_NAME = "local-qdrant"
DEFAULT_PORT = 6333

# Pinned image reference. Bump deliberately, never track :latest.
DEFAULT_IMAGE = "qdrant/qdrant:v1.13.4"

# Where Qdrant keeps its collections inside the container.
CONTAINER_STORAGE_MOUNT = "/qdrant/storage"
VERSION_COMMAND = ("/qdrant/qdrant", "--version")

# Data directory layout under the various roots
DATA_DIR_NAME = "qdrant-data"
APP_DIR_NAME = ".qdrant-local"

# Health probe
DEFAULT_HEALTH_HOST = "localhost"
DEFAULT_HEALTH_PATH = "/healthz"
DEFAULT_HEALTH_TIMEOUT_MS = 30_000
DEFAULT_HEALTH_INTERVAL_MS = 1_000
HEALTH_PROBE_TIMEOUT_SECONDS = 2.0

# Substrings Docker prints when the host port is taken.
PORT_CONFLICT_MARKERS = ("port is already allocated", "Bind for")

# Notifications
DEFAULT_NOTIFICATION_TITLE = "Qdrant Local"
NTFY_ENDPOINT_ENV_VARS = ("QDRANT_LOCAL_NTFY_ENDPOINT", "NTFY_ENDPOINT")
