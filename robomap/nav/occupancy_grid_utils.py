"""Utility functions for occupancy grid operations.

This module provides the coordinate plumbing for rasterization:
1. Coordinate transformations (world -> grid index, grid index -> cell center)
2. Bounding box to clipped cell range conversion
3. Cell-center coordinate arrays for vectorized containment tests

Grid convention: bottom-left origin. Row ``r`` covers world Y in
``[origin_y + r*res, origin_y + (r+1)*res)``, so rows grow upward.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from robomap.common.types import Bounds2D, CellRange
    from robomap.nav.scene import MapInfo


def world_to_grid_indices(world_x: float, world_y: float, map_info: MapInfo) -> tuple[int, int]:
    """Convert world coordinates to (unclamped) grid indices.

    Args:
        world_x: X coordinate in world frame
        world_y: Y coordinate in world frame
        map_info: Map metadata (origin and resolution)

    Returns:
        Tuple of (col, row) grid indices; may lie outside the grid

    Example:
        >>> info = MapInfo(resolution=0.1, width=10.0, height=10.0)
        >>> world_to_grid_indices(5.05, 2.0, info)
        (50, 20)
    """
    col = math.floor((world_x - map_info.origin[0]) / map_info.resolution)
    row = math.floor((world_y - map_info.origin[1]) / map_info.resolution)
    return col, row


def grid_indices_to_world(col: int, row: int, map_info: MapInfo) -> tuple[float, float]:
    """World coordinates of the center of cell (col, row)."""
    world_x = map_info.origin[0] + (col + 0.5) * map_info.resolution
    world_y = map_info.origin[1] + (row + 0.5) * map_info.resolution
    return world_x, world_y


def is_within_grid(col: int, row: int, map_info: MapInfo) -> bool:
    """Check if grid indices address an existing cell."""
    return 0 <= col < map_info.grid_width and 0 <= row < map_info.grid_height


def bounds_to_cell_range(bounds: Bounds2D, map_info: MapInfo) -> CellRange | None:
    """Convert a world bounding box to an inclusive, clipped cell range.

    Args:
        bounds: ``(min_x, max_x, min_y, max_y)`` in world frame
        map_info: Map metadata

    Returns:
        CellRange | None: ``(col_min, col_max, row_min, row_max)`` clipped to
        the grid, or ``None`` if the box misses the grid entirely
    """
    min_x, max_x, min_y, max_y = bounds
    col_min, row_min = world_to_grid_indices(min_x, min_y, map_info)
    col_max, row_max = world_to_grid_indices(max_x, max_y, map_info)

    col_min = max(col_min, 0)
    row_min = max(row_min, 0)
    col_max = min(col_max, map_info.grid_width - 1)
    row_max = min(row_max, map_info.grid_height - 1)

    if col_min > col_max or row_min > row_max:
        return None
    return col_min, col_max, row_min, row_max


def cell_centers(cell_range: CellRange, map_info: MapInfo) -> tuple[np.ndarray, np.ndarray]:
    """World coordinates of every cell center in a cell range.

    Returns:
        Tuple of (mesh_x, mesh_y) arrays shaped [rows, cols]
    """
    col_min, col_max, row_min, row_max = cell_range
    cols = np.arange(col_min, col_max + 1)
    rows = np.arange(row_min, row_max + 1)
    xv = map_info.origin[0] + (cols + 0.5) * map_info.resolution
    yv = map_info.origin[1] + (rows + 0.5) * map_info.resolution
    return np.meshgrid(xv, yv)
