"""Occupancy grid export: rasterize once, encode three artifacts, write them.

Artifacts, in delivery order:

- ``{name}.pgm``: grayscale image, top-left origin (0 occupied, 254 free)
- ``{name}.yaml``: map_server metadata referencing the image
- ``{name}_planner.npy``: uint8 array, bottom-left origin (1 occupied, 0 free)
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from loguru import logger

from robomap.export.map_yaml import encode_map_yaml
from robomap.export.npy import encode_planner_npy
from robomap.export.pgm import encode_pgm
from robomap.nav.occupancy_grid import OccupancyGrid, rasterize

if TYPE_CHECKING:
    from robomap.nav.scene import MapInfo, MapObject


@dataclass(frozen=True)
class OccupancyGridArtifacts:
    """Encoded outputs of one export, plus the grid they were made from."""

    map_name: str
    grid: OccupancyGrid
    pgm: bytes
    yaml: str
    planner_npy: bytes

    @property
    def grid_width(self) -> int:
        return self.grid.width

    @property
    def grid_height(self) -> int:
        return self.grid.height

    def files(self) -> list[tuple[str, bytes]]:
        """Ordered ``(filename, payload)`` deliveries."""
        return [
            (f"{self.map_name}.pgm", self.pgm),
            (f"{self.map_name}.yaml", self.yaml.encode("utf-8")),
            (f"{self.map_name}_planner.npy", self.planner_npy),
        ]


def generate_occupancy_grid(
    map_info: MapInfo, objects: Iterable[MapObject]
) -> OccupancyGridArtifacts:
    """Rasterize a scene and encode all export artifacts from the same grid."""
    grid = rasterize(map_info, objects)
    return OccupancyGridArtifacts(
        map_name=map_info.name,
        grid=grid,
        pgm=encode_pgm(grid.cells, grid.width, grid.height),
        yaml=encode_map_yaml(map_info, grid.width, grid.height),
        planner_npy=encode_planner_npy(grid.cells, grid.width, grid.height),
    )


def write_occupancy_grid(artifacts: OccupancyGridArtifacts, out_dir: str | Path) -> list[Path]:
    """Write the artifacts into ``out_dir`` (created if missing).

    Returns:
        list[Path]: Written paths in delivery order
    """
    out_dir = Path(out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)

    written = []
    for filename, payload in artifacts.files():
        path = out_dir / filename
        path.write_bytes(payload)
        logger.info("Wrote {} ({} bytes)", path, len(payload))
        written.append(path)
    return written
