"""Taichi mesh injection.

Bridges a global mesh to Taichi fields for kernel access.

Corner, count and cell-size fields are allocated once per TaichiMeshParams.
Edges and cell-center outputs vary in length between meshes, so they are
passed to kernels as ndarrays; reloading a mesh or computing centers never
allocates new fields.
"""

import numpy as np
import taichi as ti

from gridmesh.core.dtypes import DTYPE, resolve_scalar_type
from gridmesh.core.geometry import (
    NUM_SPACE_DIM,
    check_dim,
    non_uniform_cell_center,
    uniform_cell_center,
)
from gridmesh.mesh import GlobalMesh, MeshKind


@ti.kernel
def _fill_uniform_centers(
    out: ti.types.ndarray(dtype=DTYPE, ndim=1), low: DTYPE, cell_size: DTYPE
):
    for i in range(out.shape[0]):
        out[i] = uniform_cell_center(low, cell_size, i)


@ti.kernel
def _fill_non_uniform_centers(
    out: ti.types.ndarray(dtype=DTYPE, ndim=1),
    edges: ti.types.ndarray(dtype=DTYPE, ndim=1),
):
    for i in range(out.shape[0]):
        out[i] = non_uniform_cell_center(edges, i)


class TaichiMeshParams:
    """Taichi-accessible copy of a global mesh.

    Corners, cell counts and the cell size are stored in DTYPE fields;
    non-uniform meshes also get one DTYPE edge ndarray per dimension.
    """

    def __init__(self) -> None:
        """Create Taichi mesh fields."""
        self.low_corner = ti.field(DTYPE, shape=NUM_SPACE_DIM)
        self.high_corner = ti.field(DTYPE, shape=NUM_SPACE_DIM)
        self.num_cell = ti.field(ti.i32, shape=NUM_SPACE_DIM)

        # Uniform
        self.cell_size = ti.field(DTYPE, shape=())

        # Non-uniform, ndarrays replaced on load
        self.edges: list | None = None

        self._kind: MeshKind | None = None
        self._shape: tuple[int, ...] = (0, 0, 0)

    def load(self, mesh: GlobalMesh) -> None:
        """Load corners, counts and cell size or edges from a mesh."""
        for d in range(NUM_SPACE_DIM):
            self.low_corner[d] = float(mesh.low_corner(d))
            self.high_corner[d] = float(mesh.high_corner(d))
            self.num_cell[d] = mesh.global_num_cell(d)

        if mesh.kind == MeshKind.UNIFORM:
            self.cell_size[None] = float(mesh.uniform_cell_size())
            self.edges = None
        else:
            self.cell_size[None] = 0.0
            self.edges = []
            for d in range(NUM_SPACE_DIM):
                edges = mesh.non_uniform_edge(d)
                arr = ti.ndarray(DTYPE, shape=edges.size)
                arr.from_numpy(edges.astype(resolve_scalar_type(DTYPE)))
                self.edges.append(arr)

        self._kind = mesh.kind
        self._shape = tuple(mesh.global_num_cell(d) for d in range(NUM_SPACE_DIM))

    @property
    def is_loaded(self) -> bool:
        return self._kind is not None

    def cell_centers(self, dim: int) -> np.ndarray:
        """Compute the center coordinate of every cell along dim.

        Raises:
            RuntimeError: If no mesh has been loaded
        """
        dim = check_dim(dim)
        if not self.is_loaded:
            raise RuntimeError("No mesh loaded; call load() first")

        out = np.empty(self._shape[dim], dtype=resolve_scalar_type(DTYPE))
        if self._kind == MeshKind.UNIFORM:
            _fill_uniform_centers(out, self.low_corner[dim], self.cell_size[None])
        else:
            _fill_non_uniform_centers(out, self.edges[dim])
        return out

    def to_dict(self) -> dict:
        """Extract current values as dictionary."""
        data = {
            "low_corner": [float(self.low_corner[d]) for d in range(NUM_SPACE_DIM)],
            "high_corner": [float(self.high_corner[d]) for d in range(NUM_SPACE_DIM)],
            "num_cell": [int(self.num_cell[d]) for d in range(NUM_SPACE_DIM)],
        }
        if self._kind == MeshKind.UNIFORM:
            data["cell_size"] = float(self.cell_size[None])
        elif self.edges is not None:
            data["edges"] = [e.to_numpy().tolist() for e in self.edges]
        return data


def create_taichi_mesh_params(mesh: GlobalMesh) -> TaichiMeshParams:
    """Create and load TaichiMeshParams from a mesh."""
    params = TaichiMeshParams()
    params.load(mesh)
    return params
