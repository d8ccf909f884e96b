"""Mesh summaries for logging and reports."""

from typing import Any

import numpy as np

from gridmesh.core.geometry import NUM_SPACE_DIM
from gridmesh.mesh import GlobalMesh, MeshKind


def mesh_summary(mesh: GlobalMesh) -> dict[str, Any]:
    """Collect the geometry of a mesh into a plain dictionary.

    Args:
        mesh: Any mesh implementing the GlobalMesh protocol

    Returns:
        Dictionary with kind, dtype, corners, extents, per-dimension and
        total cell counts, plus cell_size (uniform) or min/max cell widths
        (non-uniform)
    """
    dims = range(NUM_SPACE_DIM)
    num_cell = [mesh.global_num_cell(d) for d in dims]
    summary = {
        "kind": mesh.kind.name.lower(),
        "dtype": np.dtype(mesh.scalar_type).name,
        "low_corner": [float(mesh.low_corner(d)) for d in dims],
        "high_corner": [float(mesh.high_corner(d)) for d in dims],
        "extent": [float(mesh.extent(d)) for d in dims],
        "num_cell": num_cell,
        "total_cells": int(np.prod(num_cell)),
    }
    if mesh.kind == MeshKind.UNIFORM:
        summary["cell_size"] = float(mesh.uniform_cell_size())
    elif mesh.kind == MeshKind.NON_UNIFORM:
        widths = [np.diff(mesh.non_uniform_edge(d)) for d in dims]
        summary["min_cell_width"] = [float(w.min()) for w in widths]
        summary["max_cell_width"] = [float(w.max()) for w in widths]
    return summary


def format_summary(summary: dict[str, Any]) -> str:
    """Render a mesh summary as aligned text lines."""
    width = max(len(key) for key in summary)
    return "\n".join(f"{key:<{width}} : {value}" for key, value in summary.items())
