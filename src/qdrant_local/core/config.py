"""Configuration loading utilities.

Supports YAML and JSON configuration files with schema validation, and
resolves where the container's data directory lives on the host.
"""

from __future__ import annotations

import json
from pathlib import Path

import yaml

from qdrant_local.core.constants import APP_DIR_NAME, DATA_DIR_NAME
from qdrant_local.core.exceptions import ConfigError
from qdrant_local.core.schemas import ManagerConfig


def load_config(path: Path | str) -> ManagerConfig:
    """Load and validate a manager configuration file.

    Args:
        path: Path to YAML or JSON configuration file

    Returns:
        Validated ManagerConfig object

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValueError: If file format is unsupported
        ConfigError: If the file does not hold a mapping
        pydantic.ValidationError: If config is invalid
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {path}")

    suffix = path.suffix.lower()
    with open(path, encoding="utf-8") as f:
        if suffix in (".yaml", ".yml"):
            data = yaml.safe_load(f)
        elif suffix == ".json":
            data = json.load(f)
        else:
            raise ValueError(f"Unsupported config format: {suffix}. Use .yaml, .yml, or .json")

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Configuration root must be a mapping: {path}")

    return ManagerConfig.model_validate(data)


def resolve_data_path(
    data_path: Path | None = None,
    workspace_path: Path | None = None,
    global_storage_path: Path | None = None,
) -> Path:
    """Pick the host directory mounted as Qdrant storage.

    Precedence: explicit override, then workspace, then global storage,
    then the user's home directory.
    """
    if data_path is not None:
        return Path(data_path).expanduser()
    if workspace_path is not None:
        return Path(workspace_path).expanduser() / APP_DIR_NAME / DATA_DIR_NAME
    if global_storage_path is not None:
        return Path(global_storage_path).expanduser() / DATA_DIR_NAME
    return Path.home() / APP_DIR_NAME / DATA_DIR_NAME
