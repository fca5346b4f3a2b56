"""RGBA preview of an occupancy grid for on-screen display."""

from __future__ import annotations

import numpy as np

from robomap.nav.occupancy_grid import OccupancyGrid


def grid_preview_rgba(grid: OccupancyGrid) -> np.ndarray:
    """Gray-level RGBA image of the grid in storage order (no flip).

    Returns:
        np.ndarray: uint8 array [height, width, 4]; cell value ``v`` becomes
        ``(v, v, v, 255)``
    """
    rgba = np.empty((grid.height, grid.width, 4), dtype=np.uint8)
    rgba[..., :3] = grid.cells[..., np.newaxis]
    rgba[..., 3] = 255
    return rgba
