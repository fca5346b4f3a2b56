"""Binary PGM encoding with vertical flip."""

import numpy as np
import pytest

from robomap.export.pgm import encode_pgm, pgm_header
from robomap.nav.occupancy_grid import FREE, OCCUPIED, OccupancyGrid, rasterize


def _split_pgm(data: bytes):
    magic, dims, maxval, pixels = data.split(b"\n", 3)
    width, height = (int(v) for v in dims.split())
    return magic, width, height, int(maxval), pixels


def test_header_for_editor_default_map(editor_map_info):
    """A 10x10m map at 0.05m gives a 200x200 image header."""
    grid = rasterize(editor_map_info, [])
    data = encode_pgm(grid.cells, grid.width, grid.height)
    assert data.startswith(b"P5\n200 200\n255\n")
    assert len(data) == len(b"P5\n200 200\n255\n") + 200 * 200


def test_header_bytes():
    """Header is ASCII, newline terminated, width before height."""
    assert pgm_header(3, 2) == b"P5\n3 2\n255\n"


def test_bottom_left_cell_becomes_bottom_image_row():
    """Grid row 0 (bottom of the world) is the last image row."""
    grid = OccupancyGrid(width=3, height=2)
    grid.flat[0] = OCCUPIED
    magic, width, height, maxval, pixels = _split_pgm(encode_pgm(grid.flat, 3, 2))
    assert (magic, width, height, maxval) == (b"P5", 3, 2, 255)
    assert pixels == bytes([FREE, FREE, FREE, OCCUPIED, FREE, FREE])
    image = np.frombuffer(pixels, dtype=np.uint8).reshape(height, width)
    assert image[height - 1, 0] == OCCUPIED


def test_columns_are_not_mirrored():
    """Only rows are flipped; column order is preserved."""
    cells = np.arange(12, dtype=np.uint8).reshape(3, 4)
    pixels = encode_pgm(cells, 4, 3)[len(pgm_header(4, 3)) :]
    assert pixels == bytes([8, 9, 10, 11, 4, 5, 6, 7, 0, 1, 2, 3])


def test_values_are_not_remapped():
    """Occupied stays 0 and free stays 254 in the image."""
    grid = OccupancyGrid(width=2, height=2)
    grid.mark_occupied(1, 1)
    pixels = encode_pgm(grid.cells, 2, 2)[len(pgm_header(2, 2)) :]
    assert sorted(set(pixels)) == [OCCUPIED, FREE]


def test_flat_and_2d_inputs_agree():
    """Flat row-major buffers and [H, W] arrays encode identically."""
    cells = np.random.default_rng(7).choice([FREE, OCCUPIED], size=(5, 4)).astype(np.uint8)
    assert encode_pgm(cells, 4, 5) == encode_pgm(cells.reshape(-1), 4, 5)
    assert encode_pgm(cells, 4, 5) == encode_pgm(bytes(cells.reshape(-1)), 4, 5)


@pytest.mark.parametrize(("width", "height"), [(4, 4), (2, 2), (0, 3)])
def test_size_mismatch_is_a_caller_error(width, height):
    """Buffers that do not hold width*height cells are rejected."""
    with pytest.raises(ValueError):
        encode_pgm(np.zeros(9, dtype=np.uint8), width, height)
