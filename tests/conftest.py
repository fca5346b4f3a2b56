"""Shared pytest fixtures: scene building blocks and loguru capture."""

from __future__ import annotations

import json
import sys
from typing import TYPE_CHECKING

import pytest
from loguru import logger

from robomap.nav.scene import MapInfo, MapObject
from robomap.nav.shapes import CircleShape, PolygonShape, RectangleShape

if TYPE_CHECKING:
    from collections.abc import Generator


@pytest.fixture(autouse=True)
def reset_loguru() -> Generator[None, None, None]:
    """Restore the default loguru sink after tests that reconfigure logging."""
    yield
    logger.remove()
    logger.add(sys.stderr)


@pytest.fixture
def log_messages() -> Generator[list[str], None, None]:
    """Collect formatted loguru messages emitted during the test."""
    messages: list[str] = []
    handler_id = logger.add(
        lambda msg: messages.append(str(msg)), level="DEBUG", format="{level} {message}"
    )
    yield messages
    logger.remove(handler_id)


@pytest.fixture
def unit_map_info():
    """4x4m map with 1m cells (4x4 grid), origin at the world origin."""
    return MapInfo(name="unit", resolution=1.0, width=4.0, height=4.0, origin=(0.0, 0.0))


@pytest.fixture
def editor_map_info():
    """Editor default: 10x10m at 0.05m resolution (200x200 grid)."""
    return MapInfo(name="New_Map", resolution=0.05, width=10, height=10, origin=(0, 0))


@pytest.fixture
def mixed_objects():
    """Obstacle circle, wall rectangle, zone triangle, plus a robot and a landmark."""
    return [
        MapObject(id="c1", name="circle_1", type="obstacle", shape=CircleShape((1.0, 1.0), 0.8)),
        MapObject(
            id="w1",
            name="wall_1",
            type="wall",
            shape=RectangleShape((3.0, 2.0), width=0.6, height=3.0, rotation=0.0),
        ),
        MapObject(
            id="t1",
            name="triangle_1",
            type="zone",
            shape=PolygonShape(((0.0, 3.0), (2.0, 3.0), (1.0, 4.0)), kind="triangle"),
        ),
        MapObject(id="r1", name="robot_1", type="robot", shape=CircleShape((2.0, 2.0), 1.5)),
        MapObject(id="l1", name="landmark_1", type="landmark", shape=CircleShape((0.5, 2.5), 0.5)),
    ]


@pytest.fixture
def scene_document():
    """Scene document as exported by the map editor."""
    return {
        "map_info": {
            "name": "lab",
            "resolution": 0.5,
            "width": 4,
            "height": 3,
            "origin": [0, 0],
            "originPosition": "bottom-left",
        },
        "objects": [
            {
                "id": "circle_1700000000000",
                "name": "circle_1",
                "type": "obstacle",
                "shape": {"type": "circle", "center": [1.0, 1.0], "radius": 0.5},
                "properties": {"color": "#f97316", "material": "default"},
            },
            {
                "id": "rectangle_1700000000001",
                "name": "rectangle_1",
                "type": "wall",
                "shape": {"type": "rectangle", "center": [3.0, 1.5], "width": 1.0, "height": 0.6},
                "properties": {"color": "#f97316", "material": "default"},
            },
            {
                "id": "robot_1700000000002",
                "name": "robot_1",
                "type": "robot",
                "shape": {"type": "circle", "center": [2.0, 2.0], "radius": 0.6},
                "properties": {},
                "pose": {"x": 2.0, "y": 2.0, "theta": 0.0},
                "goal": {"x": 3.5, "y": 2.5},
            },
        ],
    }


@pytest.fixture
def scene_file(tmp_path, scene_document):
    """Scene document written to a JSON file."""
    path = tmp_path / "lab.json"
    path.write_text(json.dumps(scene_document, indent=2), encoding="utf-8")
    return path
