"""Pytest fixtures and test utilities for GridMesh."""

import numpy as np
import pytest

from gridmesh.config import init_taichi

SCALAR_TYPES = [np.float32, np.float64]


@pytest.fixture(scope="session", autouse=True)
def taichi_init():
    """Initialize Taichi once per test session with CPU backend."""
    init_taichi(backend="cpu", debug=True)
    yield


@pytest.fixture(params=SCALAR_TYPES, ids=["f32", "f64"])
def scalar_type(request):
    """Both supported scalar types."""
    return request.param


@pytest.fixture
def cube_corners():
    """Corners of the [0, 10]^3 domain."""
    return (0.0, 0.0, 0.0), (10.0, 10.0, 10.0)


@pytest.fixture
def graded_edges():
    """Edges of a small non-uniform mesh: 3 x 2 x 1 cells."""
    return [0.0, 1.0, 3.0, 6.0], [0.0, 2.0, 4.0], [0.0, 5.0]


@pytest.fixture
def near_one():
    """Build 1 + ulps * eps in a given scalar type."""
    return make_near_one


def make_near_one(scalar_type, ulps: int):
    """1 + ulps * eps, exactly representable in scalar_type."""
    eps = np.finfo(scalar_type).eps
    return scalar_type(1.0) + scalar_type(ulps) * eps
