"""
Taichi configuration and initialization.

Backend selection, highest precedence first:
    1. An explicit backend (RuntimeParams.backend, or --backend on the CLI)
    2. GRIDMESH_BACKEND: 'cuda', 'vulkan', 'cpu', or 'auto' (default)
    3. Auto-detection: CUDA if nvidia-smi lists a GPU, else CPU

'auto' at either of the first two levels defers to the next one.

Environment variables:
    GRIDMESH_BACKEND: see above
    GRIDMESH_DEBUG: '1' to enable debug mode when no debug flag is given
"""

import logging
import os
import subprocess

import taichi as ti

from gridmesh.core.dtypes import DTYPE

logger = logging.getLogger(__name__)

_ARCHS = {"cuda": ti.cuda, "vulkan": ti.vulkan, "cpu": ti.cpu}


def detect_backend() -> str:
    """Return 'cuda' if nvidia-smi reports a GPU, otherwise 'cpu'."""
    try:
        result = subprocess.run(
            ["nvidia-smi", "-L"], capture_output=True, text=True, timeout=5
        )
    except (FileNotFoundError, subprocess.TimeoutExpired):
        return "cpu"
    if result.returncode == 0 and "GPU" in result.stdout:
        return "cuda"
    return "cpu"


def get_backend(preferred: str | None = None) -> str:
    """Resolve the Taichi backend name.

    Args:
        preferred: Backend requested by configuration; None or 'auto'
            falls through to GRIDMESH_BACKEND, then auto-detection

    Returns:
        One of 'cuda', 'vulkan', 'cpu'

    Raises:
        ValueError: If preferred or GRIDMESH_BACKEND names an unknown backend
    """
    if preferred is not None:
        preferred = preferred.lower()
        if preferred in _ARCHS:
            return preferred
        if preferred != "auto":
            raise ValueError(f"Unknown backend: {preferred}")

    env = os.environ.get("GRIDMESH_BACKEND", "auto").lower()
    if env in _ARCHS:
        return env
    if env != "auto":
        raise ValueError(f"Invalid GRIDMESH_BACKEND: {env}")

    return detect_backend()


def init_taichi(backend: str | None = None, debug: bool | None = None) -> str:
    """Initialize Taichi and return the backend it was initialized with.

    Args:
        backend: Preferred backend (see get_backend)
        debug: Taichi debug mode; None reads GRIDMESH_DEBUG
    """
    backend = get_backend(backend)
    if debug is None:
        debug = os.environ.get("GRIDMESH_DEBUG", "0") == "1"

    ti.init(arch=_ARCHS[backend], default_fp=DTYPE, debug=debug, offline_cache=True)
    logger.debug("Initialized Taichi: backend=%s, debug=%s", backend, debug)
    return backend
