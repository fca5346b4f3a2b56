"""
Module specifying types used in robomap
"""

# Geometry types
Vec2D = tuple[float, float]
"""Type alias for a 2D vector represented as a tuple of two floats"""

Polygon2D = tuple[Vec2D, ...]
"""Type alias for an ordered vertex tuple ``((x1, y1), (x2, y2), ...)``."""

Bounds2D = tuple[float, float, float, float]
"""
Type alias for an axis-aligned bounding box in world coordinates
`(min_x, max_x, min_y, max_y)`
"""

CellRange = tuple[int, int, int, int]
"""Inclusive grid index range `(col_min, col_max, row_min, row_max)`."""
