"""Non-uniform global mesh: explicit cell edges per dimension.

Each dimension is described by its cell-boundary coordinates. n cells need
n + 1 edges; the first edge is the low corner and the last the high corner:

    edges_i = [0, 1, 3, 6]  ->  3 cells of widths 1, 2, 3 on [0, 6]

Edges are validated at construction (at least two per dimension, strictly
increasing) and stored as read-only NumPy arrays.
"""

import logging
from typing import Any, ClassVar, Sequence

import numpy as np

from gridmesh.core.dtypes import resolve_scalar_type
from gridmesh.core.geometry import NUM_SPACE_DIM, check_dim
from gridmesh.errors import InvalidEdgesError
from gridmesh.mesh.protocol import MeshKind

logger = logging.getLogger(__name__)


def _as_edges(values: Sequence[float], scalar_type: type, dim: int) -> np.ndarray:
    """Copy one edge sequence into a read-only 1D array."""
    edges = np.array(values, dtype=scalar_type)
    if edges.ndim != 1:
        raise InvalidEdgesError(
            f"Edges in dim {dim} must be one-dimensional, got shape {edges.shape}"
        )
    if edges.size < 2:
        raise InvalidEdgesError(
            f"Edges in dim {dim} need at least 2 values, got {edges.size}"
        )
    if not np.all(np.isfinite(edges)):
        raise InvalidEdgesError(f"Edges in dim {dim} must be finite")
    steps = np.diff(edges)
    if np.any(steps <= 0):
        bad = int(np.argmax(steps <= 0))
        raise InvalidEdgesError(
            f"Edges in dim {dim} must be strictly increasing: "
            f"edges[{bad}]={edges[bad]} >= edges[{bad + 1}]={edges[bad + 1]}"
        )
    edges.flags.writeable = False
    return edges


class NonUniformGlobalMesh:
    """Immutable non-uniform global mesh.

    Args:
        i_edges: Cell edges in dimension I
        j_edges: Cell edges in dimension J
        k_edges: Cell edges in dimension K
        scalar_type: NumPy scalar type of the edges (see resolve_scalar_type)

    Raises:
        InvalidEdgesError: If a sequence has fewer than 2 edges or is not
            strictly increasing

    Example:
        mesh = NonUniformGlobalMesh([0, 1, 3, 6], [0, 2, 4], [0, 5])
        mesh.global_num_cell(0)  # 3
    """

    kind: ClassVar[MeshKind] = MeshKind.NON_UNIFORM

    __slots__ = ("_edges", "_scalar_type")

    def __init__(
        self,
        i_edges: Sequence[float],
        j_edges: Sequence[float],
        k_edges: Sequence[float],
        scalar_type: Any = None,
    ):
        scalar_type = resolve_scalar_type(scalar_type)
        edges = tuple(
            _as_edges(values, scalar_type, d)
            for d, values in enumerate((i_edges, j_edges, k_edges))
        )
        object.__setattr__(self, "_scalar_type", scalar_type)
        object.__setattr__(self, "_edges", edges)
        logger.debug(
            "Created non-uniform global mesh: num_cell=%s, dtype=%s",
            self.shape,
            np.dtype(scalar_type).name,
        )

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, NonUniformGlobalMesh):
            return NotImplemented
        return self._scalar_type is other._scalar_type and all(
            np.array_equal(a, b) for a, b in zip(self._edges, other._edges)
        )

    def __hash__(self) -> int:
        return hash((self._scalar_type, tuple(e.tobytes() for e in self._edges)))

    def __repr__(self) -> str:
        edges = ", ".join(np.array2string(e, separator=", ") for e in self._edges)
        return (
            f"{type(self).__name__}({edges}, "
            f"scalar_type={np.dtype(self._scalar_type).name})"
        )

    @property
    def scalar_type(self) -> type:
        """NumPy scalar type of the edge coordinates."""
        return self._scalar_type

    # Global mesh interface

    def low_corner(self, dim: int) -> float:
        """Global low corner coordinate (first edge) in dimension dim."""
        return self._edges[check_dim(dim)][0]

    def high_corner(self, dim: int) -> float:
        """Global high corner coordinate (last edge) in dimension dim."""
        return self._edges[check_dim(dim)][-1]

    def extent(self, dim: int) -> float:
        """Physical length of the domain in dimension dim."""
        return self.high_corner(dim) - self.low_corner(dim)

    def global_num_cell(self, dim: int) -> int:
        """Global number of cells in dimension dim."""
        return self._edges[check_dim(dim)].size - 1

    # Non-uniform mesh specific

    def non_uniform_edge(self, dim: int) -> np.ndarray:
        """Read-only view of all cell edges in dimension dim."""
        return self._edges[check_dim(dim)]

    def cell_widths(self, dim: int) -> np.ndarray:
        """Width of every cell in dimension dim."""
        return np.diff(self.non_uniform_edge(dim))

    @property
    def shape(self) -> tuple[int, int, int]:
        """Global cell counts as (I, J, K) tuple."""
        return tuple(self.global_num_cell(d) for d in range(NUM_SPACE_DIM))


def create_non_uniform_global_mesh(
    i_edges: Sequence[float],
    j_edges: Sequence[float],
    k_edges: Sequence[float],
    dtype: Any = None,
) -> NonUniformGlobalMesh:
    """Create a non-uniform global mesh from per-dimension cell edges."""
    return NonUniformGlobalMesh(i_edges, j_edges, k_edges, dtype)
