"""Tests for Taichi mesh injection and kernel helpers."""

import numpy as np
import pytest
import taichi as ti

from gridmesh.core.dtypes import DTYPE
from gridmesh.core.geometry import non_uniform_cell_center, uniform_cell_center
from gridmesh.mesh import NonUniformGlobalMesh, UniformGlobalMesh
from gridmesh.params.taichi_params import TaichiMeshParams, create_taichi_mesh_params


class TestKernelHelpers:
    """Tests for ti.func helpers."""

    def test_uniform_cell_center(self):
        """Cell 2 of width 0.5 starting at 1.0 is centered at 2.25."""

        @ti.kernel
        def center() -> DTYPE:
            return uniform_cell_center(1.0, 0.5, 2)

        assert center() == pytest.approx(2.25)

    def test_non_uniform_cell_center(self):
        """Center of cell 1 is the midpoint of edges 1 and 2."""
        edges = ti.field(DTYPE, shape=4)
        edges.from_numpy(np.array([0.0, 1.0, 3.0, 6.0]))

        @ti.kernel
        def center() -> DTYPE:
            return non_uniform_cell_center(edges, 1)

        assert center() == pytest.approx(2.0)


class TestTaichiMeshParams:
    """Tests for TaichiMeshParams."""

    def test_not_loaded(self):
        """Fresh params have no mesh."""
        params = TaichiMeshParams()
        assert not params.is_loaded
        with pytest.raises(RuntimeError, match="No mesh loaded"):
            params.cell_centers(0)

    def test_load_uniform(self, cube_corners):
        """Uniform mesh values are copied into fields."""
        low, high = cube_corners
        params = create_taichi_mesh_params(UniformGlobalMesh(low, high, 2.0))
        assert params.is_loaded
        data = params.to_dict()
        assert data["low_corner"] == [0.0, 0.0, 0.0]
        assert data["high_corner"] == [10.0, 10.0, 10.0]
        assert data["num_cell"] == [5, 5, 5]
        assert data["cell_size"] == 2.0
        assert "edges" not in data

    def test_uniform_cell_centers(self):
        """Cell centers are offset by half a cell from the low corner."""
        mesh = UniformGlobalMesh((-1.0, 0.0, 0.0), (1.0, 1.0, 1.0), 0.5)
        params = create_taichi_mesh_params(mesh)
        np.testing.assert_allclose(params.cell_centers(0), [-0.75, -0.25, 0.25, 0.75])
        np.testing.assert_allclose(params.cell_centers(2), [0.25, 0.75])

    def test_load_non_uniform(self, graded_edges):
        """Non-uniform meshes get one edge field per dimension."""
        params = create_taichi_mesh_params(NonUniformGlobalMesh(*graded_edges))
        data = params.to_dict()
        assert data["num_cell"] == [3, 2, 1]
        assert data["edges"] == [list(e) for e in graded_edges]
        assert "cell_size" not in data

    def test_non_uniform_cell_centers(self, graded_edges):
        """Cell centers are edge midpoints."""
        params = create_taichi_mesh_params(NonUniformGlobalMesh(*graded_edges))
        np.testing.assert_allclose(params.cell_centers(0), [0.5, 2.0, 4.5])
        np.testing.assert_allclose(params.cell_centers(1), [1.0, 3.0])
        np.testing.assert_allclose(params.cell_centers(2), [2.5])

    def test_edges_are_ndarrays(self, graded_edges):
        """Edges live in ndarrays sized to each dimension."""
        params = create_taichi_mesh_params(NonUniformGlobalMesh(*graded_edges))
        assert all(isinstance(e, ti.Ndarray) for e in params.edges)
        assert [e.shape for e in params.edges] == [(4,), (3,), (2,)]

    def test_repeated_cell_centers(self, graded_edges):
        """Repeated center queries return fresh, identical host arrays."""
        params = create_taichi_mesh_params(NonUniformGlobalMesh(*graded_edges))
        first = params.cell_centers(0)
        for _ in range(50):
            again = params.cell_centers(0)
            assert isinstance(again, np.ndarray)
            assert again is not first
            np.testing.assert_array_equal(again, first)

    def test_reload_keeps_fields(self, graded_edges):
        """Reloading reuses the scalar fields and replaces the edges."""
        params = create_taichi_mesh_params(NonUniformGlobalMesh(*graded_edges))
        fields = [params.low_corner, params.high_corner, params.num_cell, params.cell_size]
        finer = NonUniformGlobalMesh([0.0, 0.5, 1.0], [0.0, 1.0], [0.0, 2.0, 3.0, 4.0])
        for _ in range(20):
            params.load(finer)
            params.load(NonUniformGlobalMesh(*graded_edges))
        params.load(finer)
        kept = [params.low_corner, params.high_corner, params.num_cell, params.cell_size]
        assert all(a is b for a, b in zip(kept, fields))
        assert params.to_dict()["num_cell"] == [2, 1, 3]
        np.testing.assert_allclose(params.cell_centers(0), [0.25, 0.75])
        np.testing.assert_allclose(params.cell_centers(2), [1.0, 2.5, 3.5])

    def test_reload_switches_kind(self, cube_corners, graded_edges):
        """Loading a uniform mesh after a non-uniform one drops the edges."""
        low, high = cube_corners
        params = create_taichi_mesh_params(NonUniformGlobalMesh(*graded_edges))
        params.load(UniformGlobalMesh(low, high, 2.0))
        assert params.edges is None
        assert params.to_dict()["num_cell"] == [5, 5, 5]
