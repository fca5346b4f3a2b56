"""Shape variants drawn in the map editor.

A shape is one of:

- ``CircleShape``: center and radius
- ``RectangleShape``: center, width, height and rotation (radians)
- ``PolygonShape``: ordered vertices; ``kind`` is ``"polygon"`` or ``"triangle"``
- ``UnsupportedShape``: any other tag coming from a scene document

``UnsupportedShape`` keeps the editor's tolerance for unknown tags: such a
shape contains no point and contributes no occupancy.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Union

from robomap.common.errors import ValidationError
from robomap.common.types import Polygon2D, Vec2D

POLYGON_KINDS = ("polygon", "triangle")


def _as_point(value: Any, what: str) -> Vec2D:
    try:
        x, y = value
        point = (float(x), float(y))
    except (TypeError, ValueError) as e:
        raise ValidationError(f"{what} must be a pair of numbers, got {value!r}") from e
    if not all(math.isfinite(c) for c in point):
        raise ValidationError(f"{what} must be finite, got {value!r}")
    return point


def _as_positive(value: Any, what: str) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError) as e:
        raise ValidationError(f"{what} must be a number, got {value!r}") from e
    if not math.isfinite(number) or number <= 0:
        raise ValidationError(f"{what} must be > 0, got {value!r}")
    return number


@dataclass(frozen=True)
class CircleShape:
    """Circle with inclusive boundary."""

    center: Vec2D
    radius: float
    kind: str = field(default="circle", init=False)

    def __post_init__(self):
        object.__setattr__(self, "center", _as_point(self.center, "circle center"))
        object.__setattr__(self, "radius", _as_positive(self.radius, "circle radius"))


@dataclass(frozen=True)
class RectangleShape:
    """Rectangle rotated about its center.

    Attributes:
        center: World position of the rectangle center
        width: Extent along the local X axis
        height: Extent along the local Y axis
        rotation: Rotation in radians. The containment test and the corner
            transform both rotate by ``-rotation``, matching the editor's
            screen-space angle convention.
    """

    center: Vec2D
    width: float
    height: float
    rotation: float = 0.0
    kind: str = field(default="rectangle", init=False)

    def __post_init__(self):
        object.__setattr__(self, "center", _as_point(self.center, "rectangle center"))
        object.__setattr__(self, "width", _as_positive(self.width, "rectangle width"))
        object.__setattr__(self, "height", _as_positive(self.height, "rectangle height"))
        try:
            rotation = float(self.rotation or 0.0)
        except (TypeError, ValueError) as e:
            raise ValidationError(f"rectangle rotation must be a number: {e}") from e
        if not math.isfinite(rotation):
            raise ValidationError(f"rectangle rotation must be finite, got {self.rotation!r}")
        object.__setattr__(self, "rotation", rotation)


@dataclass(frozen=True)
class PolygonShape:
    """Polygon or triangle filled with the even-odd rule.

    ``center`` is informational (usually the centroid); only ``vertices``
    decide containment. Self-intersecting vertex lists are not rejected.
    """

    vertices: Polygon2D
    center: Vec2D | None = None
    kind: str = "polygon"

    def __post_init__(self):
        if self.kind not in POLYGON_KINDS:
            raise ValidationError(f"polygon kind must be one of {POLYGON_KINDS}, got {self.kind}")
        try:
            vertices = tuple(
                _as_point(v, f"{self.kind} vertex {i}") for i, v in enumerate(self.vertices)
            )
        except TypeError as e:
            raise ValidationError(f"{self.kind} vertices must be a sequence: {e}") from e
        if len(vertices) < 3:
            raise ValidationError(f"{self.kind} needs at least 3 vertices, got {len(vertices)}")
        object.__setattr__(self, "vertices", vertices)
        if self.center is None:
            xs, ys = zip(*vertices)
            object.__setattr__(self, "center", (sum(xs) / len(xs), sum(ys) / len(ys)))
        else:
            object.__setattr__(self, "center", _as_point(self.center, f"{self.kind} center"))


@dataclass(frozen=True)
class UnsupportedShape:
    """Shape tag the rasterizer does not know; never occupies anything."""

    kind: str
    raw: Mapping[str, Any] = field(default_factory=dict, compare=False)


Shape = Union[CircleShape, RectangleShape, PolygonShape, UnsupportedShape]


def shape_from_dict(data: Mapping[str, Any]) -> Shape:
    """Build a shape from its scene-document mapping.

    Args:
        data: Mapping with a ``type`` tag and the variant's fields

    Returns:
        Shape: The matching variant, or ``UnsupportedShape`` for unknown tags

    Raises:
        ValidationError: If a known variant is missing fields or has invalid values
    """
    if not isinstance(data, Mapping):
        raise ValidationError(f"shape must be a mapping, got {type(data).__name__}")

    kind = str(data.get("type", ""))
    if kind == "circle":
        return CircleShape(center=data.get("center"), radius=data.get("radius"))
    if kind == "rectangle":
        return RectangleShape(
            center=data.get("center"),
            width=data.get("width"),
            height=data.get("height"),
            rotation=data.get("rotation", 0.0),
        )
    if kind in POLYGON_KINDS:
        return PolygonShape(
            vertices=data.get("vertices", ()),
            center=data.get("center"),
            kind=kind,
        )
    return UnsupportedShape(kind=kind, raw=dict(data))
