"""Scalar type definitions for GridMesh.

Mesh coordinates are stored in single or double precision. The Taichi dtype
is the configuration knob (it also sets the default float type of the Taichi
runtime), while the mesh classes compute in the matching NumPy scalar type so
that round-off tolerances follow the chosen precision:

    ti.f32 <-> np.float32  (~7 significant digits, eps ~ 1.2e-7)
    ti.f64 <-> np.float64  (~16 significant digits, eps ~ 2.2e-16)
"""

from typing import Any

import numpy as np
import taichi as ti

# Default floating-point type for mesh coordinates
DTYPE = ti.f64

# Round-off allowance, in units of machine epsilon, for uniform mesh checks
TOLERANCE_FACTOR: int = 100

_STRING_TYPES = {
    "f32": np.float32,
    "float32": np.float32,
    "single": np.float32,
    "f64": np.float64,
    "float64": np.float64,
    "double": np.float64,
}


def resolve_scalar_type(dtype: Any = None) -> type:
    """Map a Taichi dtype, NumPy dtype or precision string to a NumPy scalar type.

    Args:
        dtype: ti.f32/ti.f64, np.float32/np.float64, "f32"/"f64", or None
            for the package default (DTYPE)

    Returns:
        np.float32 or np.float64

    Raises:
        ValueError: If the type is not a supported floating-point type
    """
    if dtype is None:
        dtype = DTYPE
    if isinstance(dtype, str):
        key = dtype.lower()
        if key not in _STRING_TYPES:
            raise ValueError(
                f"Unknown precision '{dtype}'. Available: {sorted(_STRING_TYPES)}"
            )
        return _STRING_TYPES[key]
    if isinstance(dtype, (type, np.dtype)):
        scalar_type = np.dtype(dtype).type
    elif dtype == ti.f32:
        scalar_type = np.float32
    elif dtype == ti.f64:
        scalar_type = np.float64
    else:
        raise ValueError(f"Unsupported scalar type: {dtype!r}")
    if scalar_type not in (np.float32, np.float64):
        raise ValueError(f"Scalar type must be float32 or float64, got {dtype!r}")
    return scalar_type


def to_taichi_dtype(scalar_type: Any) -> Any:
    """Get the Taichi dtype matching a scalar type."""
    scalar_type = resolve_scalar_type(scalar_type)
    return ti.f32 if scalar_type is np.float32 else ti.f64


def machine_epsilon(scalar_type: Any = None) -> np.floating:
    """Machine epsilon of the scalar type, as a value of that type."""
    scalar_type = resolve_scalar_type(scalar_type)
    return np.finfo(scalar_type).eps


def mesh_tolerance(scalar_type: Any = None) -> np.floating:
    """Absolute round-off tolerance used by uniform mesh validation."""
    scalar_type = resolve_scalar_type(scalar_type)
    return scalar_type(TOLERANCE_FACTOR) * machine_epsilon(scalar_type)
