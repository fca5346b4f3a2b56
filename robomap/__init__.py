"""RoboMap occupancy grid export: vector map scenes to PGM/YAML/NPY grids."""

from robomap.export.writer import (
    OccupancyGridArtifacts,
    generate_occupancy_grid,
    write_occupancy_grid,
)
from robomap.nav.occupancy_grid import OccupancyGrid, rasterize
from robomap.nav.scene import MapInfo, MapObject, Scene, load_scene

__all__ = [
    "MapInfo",
    "MapObject",
    "OccupancyGrid",
    "OccupancyGridArtifacts",
    "Scene",
    "generate_occupancy_grid",
    "load_scene",
    "rasterize",
    "write_occupancy_grid",
]
