"""
YAML configuration loading and saving.

Provides utilities to load GlobalMeshConfig from YAML files, save
configurations for reproducibility, and build the configured mesh.
"""

import logging
from pathlib import Path
from typing import Any

import yaml

from gridmesh.mesh import GlobalMesh, MeshKind, MeshRegistry
from gridmesh.params.schema import GlobalMeshConfig, MeshParams, ValidationError

logger = logging.getLogger(__name__)


def load_config(path: str | Path) -> GlobalMeshConfig:
    """
    Load mesh configuration from a YAML file.

    Args:
        path: Path to YAML configuration file

    Returns:
        GlobalMeshConfig instance with validated parameters

    Raises:
        FileNotFoundError: If the config file doesn't exist
        ValidationError: If any parameter validation fails
        yaml.YAMLError: If the YAML is malformed

    Example:
        config = load_config("config/mesh.yaml")
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {path}")

    with open(path, "r") as f:
        data = yaml.safe_load(f)

    if data is None:
        data = {}

    if not isinstance(data, dict):
        raise ValidationError(f"Configuration must be a dictionary, got {type(data)}")

    logger.debug("Loaded mesh configuration from %s", path)
    return GlobalMeshConfig.from_dict(data)


def save_config(config: GlobalMeshConfig, path: str | Path) -> None:
    """
    Save mesh configuration to a YAML file.

    Args:
        config: GlobalMeshConfig instance to save
        path: Path to write YAML file
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    data = config.to_dict()

    with open(path, "w") as f:
        yaml.safe_dump(data, f, default_flow_style=False, sort_keys=False)


def load_config_with_overrides(
    path: str | Path | None = None,
    overrides: dict[str, Any] | None = None,
) -> GlobalMeshConfig:
    """
    Load configuration with optional overrides.

    Args:
        path: Optional path to base YAML file (uses defaults if None)
        overrides: Dictionary of parameter overrides to apply

    Returns:
        GlobalMeshConfig with overrides applied

    Example:
        config = load_config_with_overrides(
            path="config/base.yaml",
            overrides={"mesh": {"precision": "f32"}}
        )
    """
    if path is not None:
        config = load_config(path)
    else:
        config = GlobalMeshConfig()

    if overrides:
        config = config.with_updates(**overrides)

    return config


def build_global_mesh(
    config: GlobalMeshConfig | MeshParams,
    registry: MeshRegistry | None = None,
) -> GlobalMesh:
    """
    Build the global mesh described by a configuration.

    Args:
        config: Full configuration or just its mesh group
        registry: Mesh factory registry (default: built-in kinds)

    Returns:
        Mesh implementing the GlobalMesh protocol

    Raises:
        MeshConstructionError: If the configured geometry fails validation
    """
    params = config.mesh if isinstance(config, GlobalMeshConfig) else config
    registry = registry or MeshRegistry()

    if params.mesh_kind == MeshKind.UNIFORM:
        return registry.create(
            MeshKind.UNIFORM,
            params.low_corner,
            params.high_corner,
            cell_size=params.resolved_cell_size,
            global_num_cell=params.global_num_cell,
            dtype=params.scalar_type,
        )
    return registry.create(params.mesh_kind, *params.edges, dtype=params.scalar_type)
