"""Point containment and bounding boxes for editor shapes.

Functions:
- points_inside: Vectorized containment mask over arrays of world points
- is_point_inside: Single point containment test
- bounds_of: Axis-aligned bounding box used to limit rasterization work

Containment rules:
- Circle: Euclidean distance to the center <= radius
- Rectangle: point rotated into the local frame by ``-rotation``, then
  ``|x| <= width/2`` and ``|y| <= height/2``
- Polygon/triangle: even-odd ray casting, crossing counted when
  ``x < x_intersection`` (strict)
- Unsupported shapes contain nothing
"""

from __future__ import annotations

import math

import numpy as np

from robomap.common.types import Bounds2D, Vec2D
from robomap.nav.shapes import (
    CircleShape,
    PolygonShape,
    RectangleShape,
    Shape,
)


def _rotation_terms(rotation: float) -> tuple[float, float]:
    angle = -(rotation or 0.0)
    return math.cos(angle), math.sin(angle)


def _points_in_circle(shape: CircleShape, xs: np.ndarray, ys: np.ndarray) -> np.ndarray:
    dx = xs - shape.center[0]
    dy = ys - shape.center[1]
    return np.sqrt(dx * dx + dy * dy) <= shape.radius


def _points_in_rectangle(shape: RectangleShape, xs: np.ndarray, ys: np.ndarray) -> np.ndarray:
    cos, sin = _rotation_terms(shape.rotation)
    dx = xs - shape.center[0]
    dy = ys - shape.center[1]
    rot_x = dx * cos - dy * sin
    rot_y = dx * sin + dy * cos
    return (np.abs(rot_x) <= shape.width / 2) & (np.abs(rot_y) <= shape.height / 2)


def _points_in_polygon(shape: PolygonShape, xs: np.ndarray, ys: np.ndarray) -> np.ndarray:
    """Even-odd rule over every edge ``(vertices[i], vertices[i - 1])``."""
    inside = np.zeros(np.broadcast(xs, ys).shape, dtype=bool)
    vertices = shape.vertices
    j = len(vertices) - 1
    # Horizontal edges never straddle the ray, so their division is masked out.
    with np.errstate(divide="ignore", invalid="ignore"):
        for i in range(len(vertices)):
            xi, yi = vertices[i]
            xj, yj = vertices[j]
            straddles = (yi > ys) != (yj > ys)
            x_cross = (xj - xi) * (ys - yi) / (yj - yi) + xi
            inside ^= straddles & (xs < x_cross)
            j = i
    return inside


def points_inside(shape: Shape, xs: np.ndarray, ys: np.ndarray) -> np.ndarray:
    """Return a boolean mask of world points inside ``shape``.

    Args:
        shape: Shape variant to test against
        xs: World X coordinates (any shape, broadcast with ``ys``)
        ys: World Y coordinates

    Returns:
        np.ndarray: Boolean mask with the broadcast shape of ``xs`` and ``ys``
    """
    xs = np.asarray(xs, dtype=float)
    ys = np.asarray(ys, dtype=float)
    if isinstance(shape, CircleShape):
        return _points_in_circle(shape, xs, ys)
    if isinstance(shape, RectangleShape):
        return _points_in_rectangle(shape, xs, ys)
    if isinstance(shape, PolygonShape):
        return _points_in_polygon(shape, xs, ys)
    # UnsupportedShape and anything else
    return np.zeros(np.broadcast(xs, ys).shape, dtype=bool)


def is_point_inside(point: Vec2D, shape: Shape) -> bool:
    """Check whether a world point lies inside a shape.

    Example:
        >>> is_point_inside((1.0, 0.0), CircleShape(center=(0.0, 0.0), radius=1.0))
        True
    """
    x, y = point
    return bool(points_inside(shape, np.array([x], dtype=float), np.array([y], dtype=float))[0])


def rectangle_corners(shape: RectangleShape) -> list[Vec2D]:
    """World corners of a rectangle, using the same rotation as containment."""
    half_w = shape.width / 2
    half_h = shape.height / 2
    cos, sin = _rotation_terms(shape.rotation)
    corners = [(-half_w, -half_h), (half_w, -half_h), (half_w, half_h), (-half_w, half_h)]
    return [
        (shape.center[0] + x * cos - y * sin, shape.center[1] + x * sin + y * cos)
        for x, y in corners
    ]


def bounds_of(shape: Shape) -> Bounds2D | None:
    """Axis-aligned bounding box of a shape.

    The box only narrows the rasterization search region; containment is
    always decided by ``points_inside``.

    Returns:
        Bounds2D | None: ``(min_x, max_x, min_y, max_y)``, or ``None`` for
        unsupported shapes
    """
    if isinstance(shape, CircleShape):
        cx, cy = shape.center
        r = shape.radius
        return cx - r, cx + r, cy - r, cy + r
    if isinstance(shape, RectangleShape):
        points = rectangle_corners(shape)
    elif isinstance(shape, PolygonShape):
        points = list(shape.vertices)
    else:
        return None

    xs = [p[0] for p in points]
    ys = [p[1] for p in points]
    return min(xs), max(xs), min(ys), max(ys)
