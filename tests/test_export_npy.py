"""NumPy .npy container encoding (raw and planner flavors)."""

import io
import struct

import numpy as np
import pytest

from robomap.export.npy import (
    NPY_MAGIC,
    encode_npy,
    encode_planner_npy,
    encode_raw_npy,
    npy_header,
    to_planner_values,
)
from robomap.nav.occupancy_grid import FREE, OCCUPIED, UNKNOWN, OccupancyGrid


def _header_text(data: bytes) -> str:
    (length,) = struct.unpack("<H", data[8:10])
    return data[10 : 10 + length].decode("latin1")


def test_preamble_layout():
    """Magic, version 1.0, little-endian length, then the dict header."""
    data = npy_header(200, 200)
    assert data[:6] == b"\x93NUMPY" == NPY_MAGIC
    assert data[6:8] == b"\x01\x00"
    (length,) = struct.unpack("<H", data[8:10])
    assert len(data) == 10 + length
    header = _header_text(data)
    assert header.startswith("{'descr': '<u1', 'fortran_order': False, 'shape': (200, 200), }")
    assert header.endswith("\n")
    assert header.rstrip("\n").strip().endswith("}")


@pytest.mark.parametrize(("width", "height"), [(1, 1), (200, 200), (7, 3), (12345, 9), (40, 1000)])
def test_preamble_is_64_byte_aligned(width, height):
    """Magic + version + length field + header is a multiple of 64 bytes."""
    assert len(npy_header(width, height)) % 64 == 0


def test_shape_is_height_by_width():
    """Shape is stored as (rows, cols)."""
    assert "'shape': (3, 7)" in _header_text(npy_header(7, 3))


def test_numpy_reads_raw_container():
    """numpy.load reads the container back with dtype uint8 and the right shape."""
    cells = np.arange(21, dtype=np.uint8).reshape(3, 7)
    loaded = np.load(io.BytesIO(encode_npy(cells, 7, 3)))
    assert loaded.dtype == np.uint8
    assert loaded.shape == (3, 7)
    assert np.array_equal(loaded, cells)


def test_raw_flavor_keeps_values():
    """Raw flavor stores 0/254 unchanged."""
    grid = OccupancyGrid(width=2, height=2)
    grid.mark_occupied(0, 0)
    loaded = np.load(io.BytesIO(encode_raw_npy(grid.cells, 2, 2)))
    assert loaded.tolist() == [[OCCUPIED, FREE], [FREE, FREE]]


def test_planner_values_remap():
    """Occupied -> 1, free -> 0, anything else -> 0."""
    cells = np.array([[OCCUPIED, FREE, UNKNOWN, 17]], dtype=np.uint8)
    assert to_planner_values(cells, 4, 1).tolist() == [[1, 0, 0, 0]]


def test_planner_flavor_keeps_bottom_left_orientation(editor_map_info):
    """Cell (0, 0) stays at array index 0 with value 1; no flip."""
    grid = OccupancyGrid.for_map(editor_map_info)
    grid.flat[0] = OCCUPIED
    data = encode_planner_npy(grid.flat, grid.width, grid.height)
    assert "'shape': (200, 200)" in _header_text(data)
    loaded = np.load(io.BytesIO(data))
    assert loaded.shape == (200, 200)
    assert loaded.reshape(-1)[0] == 1
    assert int(loaded.sum()) == 1
    assert set(np.unique(loaded).tolist()) == {0, 1}


def test_payload_follows_preamble():
    """The raw row-major bytes follow the aligned preamble directly."""
    cells = np.array([[0, 254, 254], [254, 254, 0]], dtype=np.uint8)
    data = encode_npy(cells, 3, 2)
    preamble = npy_header(3, 2)
    assert data[: len(preamble)] == preamble
    assert data[len(preamble) :] == bytes([0, 254, 254, 254, 254, 0])


def test_size_mismatch_is_a_caller_error():
    """Buffers that do not hold width*height cells are rejected."""
    with pytest.raises(ValueError):
        encode_planner_npy(np.zeros(10, dtype=np.uint8), 3, 3)
