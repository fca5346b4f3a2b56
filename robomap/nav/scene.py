"""Map metadata and scene objects handed over by the map editor.

The editor exports a scene document::

    {
        "map_info": {"name": "lab", "resolution": 0.05, "width": 10, "height": 10,
                     "origin": [0, 0], "originPosition": "bottom-left"},
        "objects": [
            {"id": "circle_1", "name": "circle_1", "type": "obstacle",
             "shape": {"type": "circle", "center": [2.0, 3.0], "radius": 0.5},
             "properties": {"color": "#f97316", "material": "default"}},
            ...
        ]
    }

``load_scene`` reads such documents from JSON or YAML files. Nothing here
writes scenes back; the editor owns that.
"""

from __future__ import annotations

import json
import math
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml
from loguru import logger
from shapely.geometry import Polygon as _ShapelyPolygon

from robomap.common.errors import ValidationError, raise_fatal_with_remedy, warn_soft_degrade
from robomap.common.types import Vec2D
from robomap.nav.shapes import PolygonShape, Shape, UnsupportedShape, shape_from_dict

# Object types that never contribute occupancy.
EXCLUDED_OBJECT_TYPES = frozenset({"robot", "landmark"})

DEFAULT_MAP_NAME = "New_Map"
DEFAULT_RESOLUTION = 0.05
DEFAULT_MAP_SIZE = 10.0

ORIGIN_POSITIONS = ("bottom-left", "center", "top-left", "top-right", "bottom-right", "custom")


def origin_for_position(position: str, width: float, height: float) -> Vec2D | None:
    """Resolve an origin preset to the world coordinate of cell (0, 0).

    Args:
        position: One of ``ORIGIN_POSITIONS``
        width: Map width in meters
        height: Map height in meters

    Returns:
        Vec2D | None: Origin offset, or ``None`` for ``"custom"`` (caller keeps
        its explicit origin)

    Raises:
        ValidationError: If the preset name is unknown
    """
    if position == "bottom-left":
        return (0.0, 0.0)
    if position == "center":
        return (-width / 2, -height / 2)
    if position == "top-left":
        return (0.0, -height)
    if position == "top-right":
        return (-width, -height)
    if position == "bottom-right":
        return (-width, 0.0)
    if position == "custom":
        return None
    raise ValidationError(f"origin position must be one of {ORIGIN_POSITIONS}, got {position!r}")


def _finite_number(value: Any, what: str) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError) as e:
        raise ValidationError(f"{what} must be a number, got {value!r}") from e
    if not math.isfinite(number):
        raise ValidationError(f"{what} must be finite, got {value!r}")
    return number


def _keep_number(value: Any) -> int | float:
    if isinstance(value, int) and not isinstance(value, bool):
        return int(value)
    return float(value)


@dataclass(frozen=True)
class MapInfo:
    """Physical extent and discretization of the map.

    Attributes:
        name: Map name, used for output file names only
        resolution: Meters per grid cell edge
        width: Map width in meters
        height: Map height in meters
        origin: World coordinate of the corner of grid cell (0, 0),
            bottom-left convention (Y grows upward)
        origin_position: Editor preset the origin came from

    Invariants:
        - resolution > 0
        - width > 0
        - height > 0
        - origin holds two finite numbers

    Numbers keep the type they were given with (``int`` stays ``int``) so
    the metadata document prints them the way the editor typed them.
    """

    name: str = DEFAULT_MAP_NAME
    resolution: float = DEFAULT_RESOLUTION
    width: float = DEFAULT_MAP_SIZE
    height: float = DEFAULT_MAP_SIZE
    origin: Vec2D = (0, 0)
    origin_position: str = "bottom-left"

    def __post_init__(self):
        """Validate map parameters."""
        for attr in ("resolution", "width", "height"):
            value = getattr(self, attr)
            if isinstance(value, bool) or _finite_number(value, attr) <= 0:
                raise ValidationError(f"{attr} must be > 0, got {value!r}")
            object.__setattr__(self, attr, _keep_number(value))
        try:
            ox, oy = self.origin
        except (TypeError, ValueError) as e:
            raise ValidationError(f"origin must be [x, y], got {self.origin!r}") from e
        _finite_number(ox, "origin x")
        _finite_number(oy, "origin y")
        object.__setattr__(self, "origin", (_keep_number(ox), _keep_number(oy)))
        if self.origin_position not in ORIGIN_POSITIONS:
            raise ValidationError(
                f"origin_position must be one of {ORIGIN_POSITIONS}, got {self.origin_position!r}"
            )
        object.__setattr__(self, "name", str(self.name))

    @property
    def grid_width(self) -> int:
        """Number of cells in width direction (columns)."""
        return math.ceil(self.width / self.resolution)

    @property
    def grid_height(self) -> int:
        """Number of cells in height direction (rows)."""
        return math.ceil(self.height / self.resolution)


@dataclass(frozen=True)
class MapObject:
    """One drawn object: an obstacle, wall, zone, robot, landmark, door..."""

    id: str
    shape: Shape
    name: str = ""
    type: str = "obstacle"
    properties: Mapping[str, Any] = field(default_factory=dict, compare=False)
    pose: Mapping[str, Any] | None = field(default=None, compare=False)
    goal: Mapping[str, Any] | None = field(default=None, compare=False)

    @property
    def is_occupying(self) -> bool:
        """Whether the object is burned into the occupancy grid."""
        return self.type not in EXCLUDED_OBJECT_TYPES


@dataclass(frozen=True)
class Scene:
    """Map metadata together with the ordered object list."""

    map_info: MapInfo
    objects: tuple[MapObject, ...] = ()


def map_info_from_dict(data: Mapping[str, Any] | None) -> MapInfo:
    """Build ``MapInfo`` from the editor's ``map_info`` block.

    Missing keys fall back to the editor's new-map defaults. An explicit
    ``origin`` wins over ``originPosition``; without one the preset decides.
    """
    if data is None:
        data = {}
    elif not isinstance(data, Mapping):
        raise ValidationError(f"map_info must be a mapping, got {type(data).__name__}")
    width = data.get("width", DEFAULT_MAP_SIZE)
    height = data.get("height", DEFAULT_MAP_SIZE)
    position = data.get("originPosition", data.get("origin_position", "bottom-left"))

    origin = data.get("origin")
    if origin is None:
        origin = origin_for_position(
            position, _finite_number(width, "width"), _finite_number(height, "height")
        )
        if origin is None:
            raise ValidationError("originPosition 'custom' requires an explicit origin")

    return MapInfo(
        name=data.get("name", DEFAULT_MAP_NAME),
        resolution=data.get("resolution", DEFAULT_RESOLUTION),
        width=width,
        height=height,
        origin=origin,
        origin_position=position,
    )


def _check_polygon_simple(obj: MapObject) -> None:
    """Warn about self-intersecting polygons; they are still filled even-odd."""
    if not isinstance(obj.shape, PolygonShape):
        return
    if not _ShapelyPolygon(obj.shape.vertices).is_valid:
        warn_soft_degrade(
            f"object '{obj.id}'",
            f"{obj.shape.kind} vertices self-intersect",
            "filling with the even-odd rule",
        )


def map_object_from_dict(data: Mapping[str, Any], index: int = 0) -> MapObject:
    """Build a ``MapObject`` from one entry of the editor's object list."""
    if not isinstance(data, Mapping):
        raise ValidationError(f"object {index} must be a mapping, got {type(data).__name__}")
    if "shape" not in data:
        raise ValidationError(f"object {index} has no shape")

    obj_id = str(data.get("id", f"object_{index}"))
    try:
        shape = shape_from_dict(data["shape"])
    except ValidationError as e:
        raise ValidationError(f"object '{obj_id}': {e}") from e

    properties = data.get("properties") or {}
    if not isinstance(properties, Mapping):
        raise ValidationError(
            f"object '{obj_id}': properties must be a mapping, got {type(properties).__name__}"
        )

    obj = MapObject(
        id=obj_id,
        shape=shape,
        name=str(data.get("name", obj_id)),
        type=str(data.get("type", "obstacle")),
        properties=dict(properties),
        pose=data.get("pose"),
        goal=data.get("goal"),
    )
    if isinstance(shape, UnsupportedShape) and obj.is_occupying:
        warn_soft_degrade(
            f"object '{obj.id}'",
            f"unsupported shape type {shape.kind!r}",
            "object contributes no occupancy",
        )
    _check_polygon_simple(obj)
    return obj


def scene_from_dict(data: Mapping[str, Any]) -> Scene:
    """Convert a parsed scene document into a ``Scene``.

    Raises:
        ValidationError: If map metadata or any known shape is malformed
    """
    if not isinstance(data, Mapping):
        raise ValidationError(f"scene document must be a mapping, got {type(data).__name__}")
    map_info = map_info_from_dict(data.get("map_info"))
    raw_objects = data.get("objects") or []
    if not isinstance(raw_objects, list):
        raise ValidationError("scene 'objects' must be a list")
    objects = tuple(map_object_from_dict(o, i) for i, o in enumerate(raw_objects))
    logger.debug(
        "Scene '{}' loaded: {} objects, grid {}x{}",
        map_info.name,
        len(objects),
        map_info.grid_width,
        map_info.grid_height,
    )
    return Scene(map_info=map_info, objects=objects)


def _load_document(path: Path) -> Any:
    text = path.read_text(encoding="utf-8")
    suffix = path.suffix.lower()
    if suffix == ".json":
        return json.loads(text)
    return yaml.safe_load(text)


def load_scene(path: str | Path) -> Scene:
    """Load a scene document (``.json``, ``.yaml`` or ``.yml``).

    Raises:
        RuntimeError: If the file is missing, unreadable or has another suffix
        ValidationError: If its content is malformed
    """
    path = Path(path)
    if not path.exists():
        raise_fatal_with_remedy(
            f"Scene file not found: {path}",
            "Export the map from the editor as JSON and pass its path.",
        )
    if path.suffix.lower() not in (".json", ".yaml", ".yml"):
        raise_fatal_with_remedy(
            f"Unsupported scene file extension '{path.suffix}': {path}",
            "Use a .json, .yaml or .yml scene document.",
        )
    try:
        data = _load_document(path)
    except (json.JSONDecodeError, yaml.YAMLError, UnicodeDecodeError) as e:
        raise_fatal_with_remedy(
            f"Invalid scene document {path}: {e}",
            "Re-export the scene from the editor or fix the syntax error.",
        )
    return scene_from_dict(data)
