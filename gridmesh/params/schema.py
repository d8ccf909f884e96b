"""Mesh configuration schema with validation."""

from dataclasses import asdict, dataclass, field
from typing import Any

from gridmesh.core.dtypes import resolve_scalar_type
from gridmesh.core.geometry import NUM_SPACE_DIM
from gridmesh.mesh.protocol import MeshKind


class ValidationError(ValueError):
    """Parameter validation failed."""
    pass


MESH_KINDS = {
    "uniform": MeshKind.UNIFORM,
    "non_uniform": MeshKind.NON_UNIFORM,
}

BACKENDS = ("auto", "cuda", "vulkan", "cpu")

# Uniform cell size used when neither cell_size nor global_num_cell is given
DEFAULT_CELL_SIZE: float = 0.1


def _triple(value: Any, name: str) -> tuple:
    try:
        values = tuple(value)
    except TypeError:
        raise ValidationError(f"{name} must be a sequence, got {value!r}") from None
    if len(values) != NUM_SPACE_DIM:
        raise ValidationError(
            f"{name} must have {NUM_SPACE_DIM} components, got {len(values)}"
        )
    return values


@dataclass(frozen=True)
class MeshParams:
    """Mesh: kind, corners, cell_size or global_num_cell (uniform), edges (non_uniform), precision."""
    kind: str = "uniform"
    low_corner: tuple = (0.0, 0.0, 0.0)
    high_corner: tuple = (1.0, 1.0, 1.0)
    cell_size: float | None = None
    global_num_cell: tuple | None = None
    edges: tuple | None = None
    precision: str = "f64"

    def __post_init__(self) -> None:
        if self.kind not in MESH_KINDS:
            raise ValidationError(
                f"kind must be one of {sorted(MESH_KINDS)}, got {self.kind!r}"
            )
        try:
            resolve_scalar_type(self.precision)
        except ValueError as e:
            raise ValidationError(str(e)) from e

        object.__setattr__(self, "low_corner", _triple(self.low_corner, "low_corner"))
        object.__setattr__(self, "high_corner", _triple(self.high_corner, "high_corner"))
        if self.global_num_cell is not None:
            object.__setattr__(
                self, "global_num_cell", _triple(self.global_num_cell, "global_num_cell")
            )
        if self.edges is not None:
            edges = tuple(tuple(e) for e in _triple(self.edges, "edges"))
            object.__setattr__(self, "edges", edges)

        if self.kind == "uniform":
            if self.cell_size is not None and self.global_num_cell is not None:
                raise ValidationError(
                    "uniform mesh takes cell_size or global_num_cell, not both"
                )
            if self.cell_size is not None and self.cell_size <= 0:
                raise ValidationError(f"cell_size must be positive, got {self.cell_size}")
        elif self.edges is None:
            raise ValidationError("non_uniform mesh needs edges")

    @property
    def mesh_kind(self) -> MeshKind:
        return MESH_KINDS[self.kind]

    @property
    def scalar_type(self) -> type:
        return resolve_scalar_type(self.precision)

    @property
    def resolved_cell_size(self) -> float | None:
        """Cell size to build with; DEFAULT_CELL_SIZE when no sizing is given."""
        if self.cell_size is None and self.global_num_cell is None:
            return DEFAULT_CELL_SIZE
        return self.cell_size


@dataclass(frozen=True)
class RuntimeParams:
    """Runtime: backend (auto, cuda, vulkan, cpu), debug."""
    backend: str = "auto"
    debug: bool = False

    def __post_init__(self) -> None:
        if self.backend not in BACKENDS:
            raise ValidationError(f"backend must be one of {BACKENDS}, got {self.backend!r}")


def _to_plain(value: Any) -> Any:
    """Convert tuples to lists for YAML output."""
    if isinstance(value, (tuple, list)):
        return [_to_plain(v) for v in value]
    return value


@dataclass(frozen=True)
class GlobalMeshConfig:
    """Complete global mesh configuration."""

    mesh: MeshParams = field(default_factory=MeshParams)
    runtime: RuntimeParams = field(default_factory=RuntimeParams)

    def to_dict(self) -> dict[str, Any]:
        """Convert to nested dictionary of plain Python types."""
        return {
            "mesh": {k: _to_plain(v) for k, v in asdict(self.mesh).items()},
            "runtime": asdict(self.runtime),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "GlobalMeshConfig":
        """Create from nested dictionary."""
        param_classes = {
            "mesh": MeshParams,
            "runtime": RuntimeParams,
        }
        unknown = set(data) - set(param_classes)
        if unknown:
            raise ValidationError(f"Unknown parameter group(s): {sorted(unknown)}")
        kwargs = {}
        for key, params in data.items():
            if not isinstance(params, dict):
                raise ValidationError(f"Group '{key}' must be a mapping, got {type(params)}")
            try:
                kwargs[key] = param_classes[key](**params)
            except TypeError as e:
                raise ValidationError(f"Invalid '{key}' parameters: {e}") from e
        return cls(**kwargs)

    def with_updates(self, **kwargs: Any) -> "GlobalMeshConfig":
        """Create new config with updates."""
        current = self.to_dict()
        for key, value in kwargs.items():
            if key not in current:
                raise ValidationError(f"Unknown parameter group: {key}")
            if isinstance(value, dict):
                current[key].update(value)
            else:
                current[key] = asdict(value)
        return self.from_dict(current)
