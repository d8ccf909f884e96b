"""Tests for scalar type resolution and tolerances."""

import numpy as np
import pytest
import taichi as ti

from gridmesh.core.dtypes import (
    DTYPE,
    TOLERANCE_FACTOR,
    machine_epsilon,
    mesh_tolerance,
    resolve_scalar_type,
    to_taichi_dtype,
)


class TestResolveScalarType:
    """Tests for resolve_scalar_type."""

    def test_default_is_dtype(self):
        """None resolves to the package default."""
        assert DTYPE == ti.f64
        assert resolve_scalar_type(None) is np.float64

    def test_taichi_dtypes(self):
        """Taichi float types map to NumPy scalar types."""
        assert resolve_scalar_type(ti.f32) is np.float32
        assert resolve_scalar_type(ti.f64) is np.float64

    def test_numpy_dtypes(self):
        """NumPy types and dtype objects are accepted."""
        assert resolve_scalar_type(np.float32) is np.float32
        assert resolve_scalar_type(np.dtype("float64")) is np.float64

    @pytest.mark.parametrize(
        "name,expected",
        [("f32", np.float32), ("float32", np.float32), ("F64", np.float64), ("double", np.float64)],
    )
    def test_strings(self, name, expected):
        """Precision strings are case-insensitive."""
        assert resolve_scalar_type(name) is expected

    def test_unknown_string(self):
        """Unknown precision strings are rejected."""
        with pytest.raises(ValueError, match="Unknown precision"):
            resolve_scalar_type("f16")

    def test_integer_type_rejected(self):
        """Only floating-point scalar types are allowed."""
        with pytest.raises(ValueError, match="float32 or float64"):
            resolve_scalar_type(np.int32)

    def test_unsupported_object(self):
        """Arbitrary objects are rejected."""
        with pytest.raises(ValueError):
            resolve_scalar_type(3.5)


class TestTolerance:
    """Tests for epsilon and tolerance helpers."""

    def test_to_taichi_dtype(self):
        """Scalar types map back to Taichi dtypes."""
        assert to_taichi_dtype(np.float32) == ti.f32
        assert to_taichi_dtype("f64") == ti.f64

    def test_machine_epsilon(self):
        """Epsilon matches np.finfo for each type."""
        assert machine_epsilon(np.float32) == np.finfo(np.float32).eps
        assert machine_epsilon(np.float64) == np.finfo(np.float64).eps

    def test_tolerance_scales_with_epsilon(self):
        """Tolerance is 100 machine epsilons in the scalar type."""
        assert TOLERANCE_FACTOR == 100
        tol32 = mesh_tolerance(np.float32)
        tol64 = mesh_tolerance(np.float64)
        assert tol32.dtype == np.float32
        assert tol32 == np.float32(100) * np.finfo(np.float32).eps
        assert tol64 == 100 * np.finfo(np.float64).eps
        assert tol32 > tol64
