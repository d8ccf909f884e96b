"""
Global mesh kinds and a registry for selecting between them.

Usage:
    from gridmesh.mesh import MeshRegistry, MeshKind

    registry = MeshRegistry()
    mesh = registry.create(
        MeshKind.UNIFORM,
        global_low_corner=(0.0, 0.0, 0.0),
        global_high_corner=(1.0, 1.0, 1.0),
        cell_size=0.1,
    )

Submodules:
- protocol: GlobalMesh interface and MeshKind
- uniform: UniformGlobalMesh (single cell size)
- non_uniform: NonUniformGlobalMesh (explicit edges)
"""

from typing import Any, Callable

from gridmesh.mesh.protocol import GlobalMesh, MeshKind
from gridmesh.mesh.uniform import UniformGlobalMesh, create_uniform_global_mesh
from gridmesh.mesh.non_uniform import (
    NonUniformGlobalMesh,
    create_non_uniform_global_mesh,
)

MeshFactory = Callable[..., GlobalMesh]


class MeshRegistry:
    """Registry of mesh factories keyed by MeshKind.

    Consumers that build meshes from configuration look the factory up by
    kind, so a new mesh kind only needs to be registered here.

    Example:
        registry = MeshRegistry()
        registry.register(MeshKind.UNIFORM, my_uniform_factory)
        mesh = registry.create(MeshKind.UNIFORM, ...)
    """

    def __init__(self):
        """Initialize registry with the built-in mesh kinds."""
        self._factories: dict[MeshKind, MeshFactory] = {
            MeshKind.UNIFORM: create_uniform_global_mesh,
            MeshKind.NON_UNIFORM: create_non_uniform_global_mesh,
        }

    @property
    def kinds(self) -> list[MeshKind]:
        """Registered mesh kinds."""
        return list(self._factories.keys())

    def register(self, kind: MeshKind, factory: MeshFactory) -> None:
        """Register (or replace) the factory for a mesh kind."""
        self._factories[kind] = factory

    def get(self, kind: MeshKind) -> MeshFactory:
        """Get the factory for a mesh kind.

        Raises:
            KeyError: If kind not registered
        """
        if kind not in self._factories:
            raise KeyError(
                f"No mesh factory registered for kind {kind}. "
                f"Available: {self.kinds}"
            )
        return self._factories[kind]

    def create(self, kind: MeshKind, *args: Any, **kwargs: Any) -> GlobalMesh:
        """Build a mesh of the given kind."""
        return self.get(kind)(*args, **kwargs)


__all__ = [
    "GlobalMesh",
    "MeshKind",
    "MeshRegistry",
    "UniformGlobalMesh",
    "NonUniformGlobalMesh",
    "create_uniform_global_mesh",
    "create_non_uniform_global_mesh",
]
