"""Occupancy grid rasterization of editor scenes.

This module turns the editor's vector scene into a discrete occupancy grid:

1. Allocate a ``grid_height x grid_width`` uint8 grid filled with ``FREE``
2. Skip objects whose type is ``robot`` or ``landmark``
3. Narrow each remaining shape to the cells inside its bounding box
4. Mark every cell whose center lies inside the shape as ``OCCUPIED``

Marking is monotonic: a cell, once occupied, is never freed within one call,
so duplicates and object order do not change the result.

Architecture:
- OccupancyGrid: Owned cell buffer plus its dimensions
- rasterize_shape: Burn one shape into an existing grid
- rasterize: One-shot scene -> grid transform

Example Usage:
```python
from robomap.nav.occupancy_grid import rasterize
from robomap.nav.scene import MapInfo, MapObject
from robomap.nav.shapes import CircleShape

info = MapInfo(name="lab", resolution=0.05, width=10, height=10)
objects = [MapObject(id="c1", shape=CircleShape(center=(5.0, 5.0), radius=1.0))]
grid = rasterize(info, objects)
print(grid.occupied_count)
```
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import numpy as np
from loguru import logger

from robomap.nav import occupancy_grid_utils as grid_utils
from robomap.nav.geometry import bounds_of, points_inside

if TYPE_CHECKING:
    from robomap.nav.scene import MapInfo, MapObject
    from robomap.nav.shapes import Shape

# Cell values (map_server trinary convention)
FREE = 254
OCCUPIED = 0
# Reserved for unknown space; the rasterizer never produces it.
UNKNOWN = 205


@dataclass
class OccupancyGrid:
    """Occupancy grid with bottom-left origin.

    ``cells[row, col]`` covers world X column ``col`` and world Y row ``row``;
    the row-major flat index ``row * width + col`` therefore grows with world Y.

    Attributes:
        width: Number of columns
        height: Number of rows
        cells: uint8 array shaped [height, width]
    """

    width: int
    height: int
    cells: np.ndarray = field(repr=False, default=None)

    def __post_init__(self):
        """Validate dimensions and allocate a free grid when no cells are given."""
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"grid dimensions must be > 0, got {self.width}x{self.height}")
        if self.cells is None:
            self.cells = np.full((self.height, self.width), FREE, dtype=np.uint8)
        elif self.cells.shape != (self.height, self.width):
            raise ValueError(
                f"cells shape {self.cells.shape} does not match ({self.height}, {self.width})"
            )
        elif self.cells.dtype != np.uint8:
            raise ValueError(f"cells must be uint8, got {self.cells.dtype}")

    @classmethod
    def for_map(cls, map_info: MapInfo) -> OccupancyGrid:
        """Allocate an all-free grid sized for ``map_info``."""
        return cls(width=map_info.grid_width, height=map_info.grid_height)

    @property
    def flat(self) -> np.ndarray:
        """Row-major 1D view, index ``row * width + col``."""
        return self.cells.reshape(-1)

    @property
    def occupied_count(self) -> int:
        return int(np.count_nonzero(self.cells == OCCUPIED))

    def is_occupied(self, col: int, row: int) -> bool:
        """Occupancy of a cell; indices outside the grid read as free."""
        if not (0 <= col < self.width and 0 <= row < self.height):
            return False
        return bool(self.cells[row, col] == OCCUPIED)

    def mark_occupied(self, col: int, row: int) -> None:
        """Occupy one cell; out-of-range indices are ignored."""
        if 0 <= col < self.width and 0 <= row < self.height:
            self.cells[row, col] = OCCUPIED


def rasterize_shape(shape: Shape, grid: OccupancyGrid, map_info: MapInfo) -> int:
    """Rasterize a shape into the occupancy grid.

    Args:
        shape: Shape in world coordinates
        grid: Grid to modify, sized for ``map_info``
        map_info: Origin and resolution of the grid

    Returns:
        int: Number of cells whose center lies inside the shape (already
        occupied cells included)

    Modifies:
        grid: Sets covered cells to ``OCCUPIED``; never frees a cell
    """
    bounds = bounds_of(shape)
    if bounds is None:
        return 0

    cell_range = grid_utils.bounds_to_cell_range(bounds, map_info)
    if cell_range is None:
        logger.log("TRACE", f"Shape {shape} outside grid bounds, skipping")
        return 0

    col_min, col_max, row_min, row_max = cell_range
    mesh_x, mesh_y = grid_utils.cell_centers(cell_range, map_info)
    inside_mask = points_inside(shape, mesh_x, mesh_y)
    if not inside_mask.any():
        return 0

    subgrid = grid.cells[row_min : row_max + 1, col_min : col_max + 1]
    subgrid[inside_mask] = OCCUPIED
    return int(np.count_nonzero(inside_mask))


def rasterize(map_info: MapInfo, objects: Iterable[MapObject]) -> OccupancyGrid:
    """Rasterize the editor's objects into a fresh occupancy grid.

    Args:
        map_info: Map extent, resolution and origin
        objects: Scene objects in any order

    Returns:
        OccupancyGrid: Grid with ``OCCUPIED`` cells for every non-excluded
        object and ``FREE`` elsewhere

    Performance:
        O(sum of bounding-box cell counts); each box is tested vectorized
    """
    grid = OccupancyGrid.for_map(map_info)

    rasterized = 0
    skipped = 0
    for obj in objects:
        if not obj.is_occupying:
            logger.debug(f"Skipping {obj.type} '{obj.id}' (not an occupancy source)")
            skipped += 1
            continue
        if bounds_of(obj.shape) is None:
            logger.debug(f"Skipping '{obj.id}': unsupported shape {obj.shape.kind!r}")
            skipped += 1
            continue
        rasterize_shape(obj.shape, grid, map_info)
        rasterized += 1

    logger.debug(
        f"Rasterized {rasterized} objects ({skipped} skipped) into "
        f"{grid.width}x{grid.height} grid, {grid.occupied_count} cells occupied"
    )
    return grid
