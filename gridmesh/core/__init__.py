"""Core infrastructure: scalar types and dimension indexing."""

from gridmesh.core.dtypes import (
    DTYPE,
    machine_epsilon,
    mesh_tolerance,
    resolve_scalar_type,
    to_taichi_dtype,
)
from gridmesh.core.geometry import (
    NUM_SPACE_DIM,
    Dim,
    as_corner,
    check_dim,
    non_uniform_cell_center,
    uniform_cell_center,
)

__all__ = [
    "DTYPE",
    "Dim",
    "NUM_SPACE_DIM",
    "as_corner",
    "check_dim",
    "machine_epsilon",
    "mesh_tolerance",
    "non_uniform_cell_center",
    "resolve_scalar_type",
    "to_taichi_dtype",
    "uniform_cell_center",
]
