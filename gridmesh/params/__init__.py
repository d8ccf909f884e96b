"""
Parameter management for GridMesh.

This module provides:
- Validated, immutable parameter containers (schema.py)
- YAML loading utilities (loader.py)
- Taichi mesh injection (taichi_params.py)
"""

from gridmesh.params.schema import (
    BACKENDS,
    GlobalMeshConfig,
    MeshParams,
    RuntimeParams,
    ValidationError,
)
from gridmesh.params.loader import (
    build_global_mesh,
    load_config,
    load_config_with_overrides,
    save_config,
)
from gridmesh.params.taichi_params import TaichiMeshParams

__all__ = [
    # Schema classes
    "MeshParams",
    "RuntimeParams",
    "GlobalMeshConfig",
    "ValidationError",
    "BACKENDS",
    # Loader functions
    "load_config",
    "save_config",
    "load_config_with_overrides",
    "build_global_mesh",
    # Taichi injection
    "TaichiMeshParams",
]
