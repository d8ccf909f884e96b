"""
Global mesh protocol shared by all mesh kinds.

Downstream consumers (partitioners, index-space builders, boundary handlers)
are written against GlobalMesh rather than a concrete class, so new mesh
kinds can be added without touching them.

Every implementation provides:
- low_corner(dim) / high_corner(dim): physical bounds of the domain
- extent(dim): high_corner(dim) - low_corner(dim)
- global_num_cell(dim): number of cells along dim
- kind / scalar_type: mesh kind and NumPy scalar type of the coordinates
"""

from enum import Enum, auto
from typing import Protocol, runtime_checkable


class MeshKind(Enum):
    """Available global mesh kinds."""

    UNIFORM = auto()  # Single cell size in all dimensions
    NON_UNIFORM = auto()  # Explicit cell edges per dimension


@runtime_checkable
class GlobalMesh(Protocol):
    """Protocol for read-only global mesh descriptions."""

    kind: MeshKind
    scalar_type: type

    def low_corner(self, dim: int) -> float:
        """Global low corner coordinate in dimension dim."""
        ...

    def high_corner(self, dim: int) -> float:
        """Global high corner coordinate in dimension dim."""
        ...

    def extent(self, dim: int) -> float:
        """Physical length of the domain in dimension dim."""
        ...

    def global_num_cell(self, dim: int) -> int:
        """Global number of cells in dimension dim."""
        ...
