"""Uniform global mesh: one cell size shared by all three dimensions.

The domain [low_corner, high_corner] must decompose into an exact integer
number of equal-width cells in every dimension. Partitioners derive global
cell indices from physical coordinates, so a domain that only rounds to a
whole number of cells is rejected rather than adjusted:

    num_cell[d] = rint(extent[d] / cell_size)
    |num_cell[d] * cell_size - extent[d]| <= 100 * eps(Scalar)

The tolerance is absolute and scales with the machine epsilon of the chosen
scalar type (float32 or float64).
"""

import logging
from dataclasses import dataclass
from typing import Any, ClassVar, Sequence

import numpy as np

from gridmesh.core.dtypes import mesh_tolerance, resolve_scalar_type
from gridmesh.core.geometry import NUM_SPACE_DIM, Dim, as_corner, check_dim
from gridmesh.errors import (
    CellCountMismatchError,
    CellSizeMismatchError,
    ExtentNotDivisibleError,
    MeshConstructionError,
)
from gridmesh.mesh.protocol import MeshKind

logger = logging.getLogger(__name__)


def _check_corners(low: tuple, high: tuple) -> None:
    for d in range(NUM_SPACE_DIM):
        if not (np.isfinite(low[d]) and np.isfinite(high[d])):
            raise MeshConstructionError(
                f"corners must be finite in dim {d}, got {low[d]}, {high[d]}"
            )
        if not low[d] < high[d]:
            raise MeshConstructionError(
                f"low corner must be below high corner in dim {d}, "
                f"got {low[d]} >= {high[d]}"
            )
        with np.errstate(over="ignore"):
            extent = high[d] - low[d]
        if not np.isfinite(extent):
            raise MeshConstructionError(f"extent overflows in dim {d}")


def _check_num_cell(global_num_cell: Sequence[int]) -> tuple[int, ...]:
    num_cell = tuple(global_num_cell)
    if len(num_cell) != NUM_SPACE_DIM:
        raise MeshConstructionError(
            f"global_num_cell must have {NUM_SPACE_DIM} components, got {len(num_cell)}"
        )
    for d, n in enumerate(num_cell):
        if isinstance(n, bool) or not isinstance(n, (int, np.integer)):
            raise MeshConstructionError(
                f"global_num_cell[{d}] must be an integer, got {n!r}"
            )
        if n < 1:
            raise MeshConstructionError(f"global_num_cell[{d}] must be >= 1, got {n}")
    return tuple(int(n) for n in num_cell)


@dataclass(frozen=True)
class UniformGlobalMesh:
    """Immutable uniform global mesh.

    Attributes:
        global_low_corner: Low corner coordinates (I, J, K)
        global_high_corner: High corner coordinates (I, J, K)
        cell_size: Cell width, identical in every dimension
        scalar_type: NumPy scalar type of all coordinates (np.float32 or
            np.float64). Accepts anything resolve_scalar_type does; None
            selects the package default.

    Raises:
        MeshConstructionError: If the cell size or a corner is not finite,
            the cell size is not positive, or a low corner is not below its
            high corner
        ExtentNotDivisibleError: If an extent is not an integer multiple of
            the cell size within 100 * eps

    Example:
        mesh = UniformGlobalMesh((0.0, 0.0, 0.0), (10.0, 10.0, 10.0), 2.0)
        mesh.global_num_cell(Dim.I)  # 5
    """

    kind: ClassVar[MeshKind] = MeshKind.UNIFORM

    global_low_corner: tuple
    global_high_corner: tuple
    cell_size: float
    scalar_type: Any = None

    def __post_init__(self) -> None:
        """Normalize inputs to the scalar type and validate divisibility."""
        scalar_type = resolve_scalar_type(self.scalar_type)
        low = as_corner(self.global_low_corner, scalar_type, "global_low_corner")
        high = as_corner(self.global_high_corner, scalar_type, "global_high_corner")
        cell_size = scalar_type(self.cell_size)

        if not (np.isfinite(cell_size) and cell_size > 0):
            raise MeshConstructionError(
                f"cell_size must be finite and > 0, got {cell_size}"
            )
        _check_corners(low, high)
        for d in range(NUM_SPACE_DIM):
            with np.errstate(over="ignore"):
                ratio = (high[d] - low[d]) / cell_size
            if not np.isfinite(ratio):
                raise MeshConstructionError(
                    f"cell_size {cell_size} too small for extent in dim {d}"
                )

        object.__setattr__(self, "scalar_type", scalar_type)
        object.__setattr__(self, "global_low_corner", low)
        object.__setattr__(self, "global_high_corner", high)
        object.__setattr__(self, "cell_size", cell_size)

        self._check_divisible()
        logger.debug(
            "Created uniform global mesh: num_cell=%s, cell_size=%s, dtype=%s",
            self.shape,
            self.cell_size,
            np.dtype(scalar_type).name,
        )

    @classmethod
    def from_num_cell(
        cls,
        global_low_corner: Sequence[float],
        global_high_corner: Sequence[float],
        global_num_cell: Sequence[int],
        scalar_type: Any = None,
    ) -> "UniformGlobalMesh":
        """Create a uniform mesh from a cell count per dimension.

        The cell size implied by each dimension (extent / count) must agree
        with dimension I's within 100 * eps; dimension I's value becomes the
        mesh cell size. The divisibility check then runs as for the cell
        size constructor, and every recomputed cell count must equal the
        requested one.

        Args:
            global_low_corner: Low corner coordinates (I, J, K)
            global_high_corner: High corner coordinates (I, J, K)
            global_num_cell: Requested cell counts (I, J, K), each >= 1
            scalar_type: Scalar type (see UniformGlobalMesh)

        Returns:
            UniformGlobalMesh

        Raises:
            CellSizeMismatchError: If implied cell sizes differ between dimensions
            ExtentNotDivisibleError: If an extent is not a multiple of the cell size
            CellCountMismatchError: If a recomputed count differs from the request
        """
        scalar_type = resolve_scalar_type(scalar_type)
        low = as_corner(global_low_corner, scalar_type, "global_low_corner")
        high = as_corner(global_high_corner, scalar_type, "global_high_corner")
        num_cell = _check_num_cell(global_num_cell)
        _check_corners(low, high)

        cell_sizes = [
            (high[d] - low[d]) / scalar_type(num_cell[d]) for d in range(NUM_SPACE_DIM)
        ]
        tol = mesh_tolerance(scalar_type)
        if (
            not abs(cell_sizes[Dim.I] - cell_sizes[Dim.J]) <= tol
            or not abs(cell_sizes[Dim.I] - cell_sizes[Dim.K]) <= tol
        ):
            logger.debug("Rejected uniform mesh: implied cell sizes %s", cell_sizes)
            raise CellSizeMismatchError(
                f"Cell sizes not equal: {[float(c) for c in cell_sizes]}"
            )

        mesh = cls(low, high, cell_sizes[Dim.I], scalar_type)

        for d in range(NUM_SPACE_DIM):
            if mesh.global_num_cell(d) != num_cell[d]:
                logger.debug(
                    "Rejected uniform mesh: dim %d has %d cells, requested %d",
                    d,
                    mesh.global_num_cell(d),
                    num_cell[d],
                )
                raise CellCountMismatchError(
                    f"Global number of cells mismatch in dim {d}: "
                    f"got {mesh.global_num_cell(d)}, requested {num_cell[d]}"
                )
        return mesh

    def _check_divisible(self) -> None:
        tol = mesh_tolerance(self.scalar_type)
        for d in range(NUM_SPACE_DIM):
            ext = self.scalar_type(self.global_num_cell(d)) * self.cell_size
            if not abs(ext - self.extent(d)) <= tol:
                logger.debug(
                    "Rejected uniform mesh: dim %d extent %s vs %d cells of %s",
                    d,
                    self.extent(d),
                    self.global_num_cell(d),
                    self.cell_size,
                )
                raise ExtentNotDivisibleError(
                    f"Extent not evenly divisible by uniform cell size in dim {d}: "
                    f"extent={self.extent(d)}, cell_size={self.cell_size}"
                )

    # Global mesh interface

    def low_corner(self, dim: int) -> float:
        """Global low corner coordinate in dimension dim."""
        return self.global_low_corner[check_dim(dim)]

    def high_corner(self, dim: int) -> float:
        """Global high corner coordinate in dimension dim."""
        return self.global_high_corner[check_dim(dim)]

    def extent(self, dim: int) -> float:
        """Physical length of the domain in dimension dim."""
        return self.high_corner(dim) - self.low_corner(dim)

    def global_num_cell(self, dim: int) -> int:
        """Global number of cells in dimension dim.

        Recomputed from the extent on every call rather than cached.
        """
        return int(np.rint(self.extent(dim) / self.cell_size))

    # Uniform mesh specific

    def uniform_cell_size(self) -> float:
        """Cell width shared by all dimensions."""
        return self.cell_size

    @property
    def shape(self) -> tuple[int, int, int]:
        """Global cell counts as (I, J, K) tuple."""
        return tuple(self.global_num_cell(d) for d in range(NUM_SPACE_DIM))


def create_uniform_global_mesh(
    global_low_corner: Sequence[float],
    global_high_corner: Sequence[float],
    *,
    cell_size: float | None = None,
    global_num_cell: Sequence[int] | None = None,
    dtype: Any = None,
) -> UniformGlobalMesh:
    """Create a uniform global mesh from either a cell size or a cell count.

    Args:
        global_low_corner: Low corner coordinates (I, J, K)
        global_high_corner: High corner coordinates (I, J, K)
        cell_size: Cell width shared by all dimensions
        global_num_cell: Cell counts (I, J, K)
        dtype: Scalar type (ti.f32/ti.f64, np.float32/np.float64, "f32"/"f64")

    Returns:
        UniformGlobalMesh

    Raises:
        ValueError: If not exactly one of cell_size and global_num_cell is given
        MeshConstructionError: If the geometry fails validation

    Example:
        mesh = create_uniform_global_mesh(
            (0.0, 0.0, 0.0), (10.0, 10.0, 10.0), global_num_cell=(5, 5, 5)
        )
    """
    if (cell_size is None) == (global_num_cell is None):
        raise ValueError("Specify exactly one of cell_size and global_num_cell")
    if cell_size is not None:
        return UniformGlobalMesh(global_low_corner, global_high_corner, cell_size, dtype)
    return UniformGlobalMesh.from_num_cell(
        global_low_corner, global_high_corner, global_num_cell, dtype
    )
