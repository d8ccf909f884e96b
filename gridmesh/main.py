"""CLI entry point for GridMesh.

Builds the global mesh described by a YAML configuration and prints its
summary.
"""

import argparse
import sys

from gridmesh.config import init_taichi
from gridmesh.diagnostics import format_summary, mesh_summary
from gridmesh.errors import MeshConstructionError
from gridmesh.params import (
    BACKENDS,
    ValidationError,
    build_global_mesh,
    load_config_with_overrides,
)
from gridmesh.params.taichi_params import create_taichi_mesh_params


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="GridMesh global mesh builder")
    parser.add_argument("--config", type=str, help="Path to YAML configuration file")
    parser.add_argument(
        "--precision", choices=["f32", "f64"], help="Scalar precision. Overrides config."
    )
    parser.add_argument(
        "--taichi", action="store_true", help="Also load the mesh into Taichi fields"
    )
    parser.add_argument(
        "--backend",
        choices=BACKENDS,
        help="Taichi backend for --taichi. Overrides config and GRIDMESH_BACKEND.",
    )
    args = parser.parse_args(argv)

    overrides = {}
    if args.precision:
        overrides["mesh"] = {"precision": args.precision}
    if args.backend:
        overrides["runtime"] = {"backend": args.backend}

    try:
        if args.config:
            print(f"Loading config from {args.config}")
        config = load_config_with_overrides(args.config, overrides)
        mesh = build_global_mesh(config)
    except (FileNotFoundError, ValidationError, MeshConstructionError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(format_summary(mesh_summary(mesh)))

    if args.taichi:
        try:
            backend = init_taichi(config.runtime.backend, config.runtime.debug)
        except ValueError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1
        params = create_taichi_mesh_params(mesh)
        print(f"Loaded mesh into Taichi fields ({backend}): {params.to_dict()['num_cell']}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
