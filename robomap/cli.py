"""Command-line entry point for exporting editor scenes as occupancy grids."""

from __future__ import annotations

import argparse
import dataclasses
import json
import sys
from collections import Counter
from pathlib import Path

from loguru import logger

from robomap.common.errors import ValidationError
from robomap.common.logging import configure_logging
from robomap.export.writer import generate_occupancy_grid, write_occupancy_grid
from robomap.nav.scene import load_scene


def _handle_export(args: argparse.Namespace) -> int:
    try:
        scene = load_scene(args.scene)
    except (RuntimeError, ValidationError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    map_info = scene.map_info
    if args.name:
        map_info = dataclasses.replace(map_info, name=args.name)

    artifacts = generate_occupancy_grid(map_info, scene.objects)
    paths = write_occupancy_grid(artifacts, args.out_dir)
    logger.success("Exported '{}' to {}", map_info.name, Path(args.out_dir))
    print(
        json.dumps(
            {
                "files": [str(p) for p in paths],
                "grid_width": artifacts.grid_width,
                "grid_height": artifacts.grid_height,
                "occupied_cells": artifacts.grid.occupied_count,
            },
            indent=2,
        )
    )
    return 0


def _handle_info(args: argparse.Namespace) -> int:
    try:
        scene = load_scene(args.scene)
    except (RuntimeError, ValidationError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    info = scene.map_info
    counts = Counter(obj.type for obj in scene.objects)
    print(
        json.dumps(
            {
                "name": info.name,
                "resolution": info.resolution,
                "origin": list(info.origin),
                "grid_width": info.grid_width,
                "grid_height": info.grid_height,
                "objects": dict(sorted(counts.items())),
                "occupying_objects": sum(1 for obj in scene.objects if obj.is_occupying),
            },
            indent=2,
        )
    )
    return 0


def _configure_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="robomap",
        description="Rasterize map editor scenes into occupancy grids (PGM/YAML/NPY).",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="cmd")

    p = subparsers.add_parser("export", help="Write {name}.pgm, {name}.yaml, {name}_planner.npy")
    p.add_argument("scene", type=Path, help="Scene document (.json/.yaml) from the map editor")
    p.add_argument("--out-dir", type=Path, default=Path("."), help="Output directory")
    p.add_argument("--name", default=None, help="Override the map name used for file names")

    p = subparsers.add_parser("info", help="Show grid size and object counts of a scene")
    p.add_argument("scene", type=Path, help="Scene document (.json/.yaml) from the map editor")
    return parser


def cli_main(argv: list[str] | None = None) -> int:
    parser = _configure_parser()
    args = parser.parse_args(argv)
    configure_logging(verbose=args.verbose)

    handlers = {
        "export": _handle_export,
        "info": _handle_info,
    }
    handler = handlers.get(args.cmd)
    if handler is None:
        parser.print_help()
        return 2
    return handler(args)


def main() -> None:  # pragma: no cover - thin wrapper
    raise SystemExit(cli_main())


if __name__ == "__main__":  # pragma: no cover
    main()


__all__ = ["cli_main", "main"]
