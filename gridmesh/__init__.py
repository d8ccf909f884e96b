"""
GridMesh: global mesh descriptions for structured-grid computations.

Uniform and non-uniform domain geometry shared by every participant of a
distributed decomposition, validated once at construction.
"""

__version__ = "0.1.0"

from gridmesh.core.geometry import Dim, NUM_SPACE_DIM
from gridmesh.mesh import (
    GlobalMesh,
    MeshKind,
    MeshRegistry,
    NonUniformGlobalMesh,
    UniformGlobalMesh,
    create_non_uniform_global_mesh,
    create_uniform_global_mesh,
)
from gridmesh.errors import (
    CellCountMismatchError,
    CellSizeMismatchError,
    ExtentNotDivisibleError,
    InvalidEdgesError,
    MeshConstructionError,
)

__all__ = [
    "Dim",
    "NUM_SPACE_DIM",
    "GlobalMesh",
    "MeshKind",
    "MeshRegistry",
    "UniformGlobalMesh",
    "NonUniformGlobalMesh",
    "create_uniform_global_mesh",
    "create_non_uniform_global_mesh",
    "MeshConstructionError",
    "ExtentNotDivisibleError",
    "CellSizeMismatchError",
    "CellCountMismatchError",
    "InvalidEdgesError",
]
