"""Dimension indexing for three-dimensional structured meshes.

Logical dimensions follow the I/J/K convention:
    Dim.I = 0  (x)
    Dim.J = 1  (y)
    Dim.K = 2  (z)
"""

from enum import IntEnum
from typing import Any, Sequence

import numpy as np
import taichi as ti

from gridmesh.core.dtypes import DTYPE
from gridmesh.errors import MeshConstructionError

# Number of spatial dimensions
NUM_SPACE_DIM: int = 3


class Dim(IntEnum):
    """Logical dimension index."""

    I = 0
    J = 1
    K = 2


def check_dim(dim: int) -> int:
    """Validate a dimension index.

    Args:
        dim: Dimension index (0-2 or a Dim member)

    Returns:
        The index as a plain int

    Raises:
        ValueError: If dim is not 0, 1 or 2
    """
    if isinstance(dim, bool) or not isinstance(dim, (int, np.integer)):
        raise ValueError(f"dim must be an integer 0-2, got {dim!r}")
    if dim < 0 or dim >= NUM_SPACE_DIM:
        raise ValueError(f"dim must be 0-2, got {dim}")
    return int(dim)


def as_corner(values: Sequence[Any], scalar_type: type, name: str) -> tuple:
    """Convert a three-component coordinate to a tuple of scalars.

    Args:
        values: Three coordinates, one per dimension
        scalar_type: NumPy scalar type to store them as
        name: Argument name used in error messages

    Returns:
        Tuple of three scalar_type values

    Raises:
        MeshConstructionError: If values does not have three components
    """
    values = tuple(values)
    if len(values) != NUM_SPACE_DIM:
        raise MeshConstructionError(
            f"{name} must have {NUM_SPACE_DIM} components, got {len(values)}"
        )
    return tuple(scalar_type(v) for v in values)


# =============================================================================
# Taichi helper functions for use in kernels
# =============================================================================


@ti.func
def uniform_cell_center(low, cell_size, i: int):
    """Coordinate of the center of cell i on a uniform axis.

    Args:
        low: Low corner coordinate of the axis
        cell_size: Uniform cell width
        i: Global cell index

    Returns:
        low + (i + 0.5) * cell_size
    """
    return low + (ti.cast(i, DTYPE) + 0.5) * cell_size


@ti.func
def non_uniform_cell_center(edges: ti.template(), i: int):
    """Coordinate of the center of cell i given its edge field or ndarray."""
    return 0.5 * (edges[i] + edges[i + 1])
