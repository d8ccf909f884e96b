"""Tests for the mesh registry and the GlobalMesh protocol."""

import pytest

from gridmesh.core.geometry import NUM_SPACE_DIM
from gridmesh.mesh import (
    GlobalMesh,
    MeshKind,
    MeshRegistry,
    NonUniformGlobalMesh,
    UniformGlobalMesh,
)


def total_cells(mesh: GlobalMesh) -> int:
    """Protocol-only consumer, as a partitioner would be written."""
    count = 1
    for d in range(NUM_SPACE_DIM):
        count *= mesh.global_num_cell(d)
    return count


class TestMeshRegistry:
    """Tests for MeshRegistry."""

    def test_builtin_kinds(self):
        """Both mesh kinds are registered by default."""
        registry = MeshRegistry()
        assert set(registry.kinds) == {MeshKind.UNIFORM, MeshKind.NON_UNIFORM}

    def test_create_uniform(self):
        """Uniform factory accepts keyword arguments."""
        mesh = MeshRegistry().create(
            MeshKind.UNIFORM,
            global_low_corner=(0.0, 0.0, 0.0),
            global_high_corner=(1.0, 1.0, 1.0),
            cell_size=0.25,
        )
        assert isinstance(mesh, UniformGlobalMesh)
        assert mesh.shape == (4, 4, 4)

    def test_create_non_uniform(self, graded_edges):
        """Non-uniform factory takes the three edge sequences."""
        mesh = MeshRegistry().create(MeshKind.NON_UNIFORM, *graded_edges)
        assert isinstance(mesh, NonUniformGlobalMesh)
        assert mesh.shape == (3, 2, 1)

    def test_unknown_kind(self):
        """Unregistered kinds raise KeyError listing the available ones."""
        registry = MeshRegistry()
        registry._factories.pop(MeshKind.NON_UNIFORM)
        with pytest.raises(KeyError, match="Available"):
            registry.get(MeshKind.NON_UNIFORM)

    def test_register_replaces_factory(self, graded_edges):
        """Registered factories take precedence."""
        calls = []

        def factory(*edges, dtype=None):
            calls.append(len(edges))
            return NonUniformGlobalMesh(*edges, scalar_type=dtype)

        registry = MeshRegistry()
        registry.register(MeshKind.NON_UNIFORM, factory)
        registry.create(MeshKind.NON_UNIFORM, *graded_edges)
        assert calls == [3]


class TestPolymorphicConsumer:
    """Downstream code written against the protocol works for both kinds."""

    def test_total_cells(self, cube_corners, graded_edges):
        """Same consumer, both mesh kinds."""
        low, high = cube_corners
        assert total_cells(UniformGlobalMesh(low, high, 2.0)) == 125
        assert total_cells(NonUniformGlobalMesh(*graded_edges)) == 6
