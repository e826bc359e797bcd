"""Runners module - container runtime invocation and lifecycle management."""

from __future__ import annotations

from qdrant_local.runners.command import CommandResult, run_command
from qdrant_local.runners.container_manager import (
    ContainerLifecycleManager,
    probe_health_endpoint,
)
from qdrant_local.runners.docker_env import DockerEnvironment, InstallInstruction

__all__ = [
    "CommandResult",
    "ContainerLifecycleManager",
    "DockerEnvironment",
    "InstallInstruction",
    "probe_health_endpoint",
    "run_command",
]
