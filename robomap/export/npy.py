"""NumPy ``.npy`` (format version 1.0) container encoding.

Layout::

    \\x93NUMPY | 0x01 0x00 | uint16 LE header length | header dict | raw bytes

The header dict names ``'<u1'``, C order and shape ``(height, width)``. It is
padded with spaces and ends with a newline so the preamble length is a
multiple of 64 bytes. ``numpy.lib.format`` would write ``'|u1'`` for bytes,
while planners reading these files expect ``'<u1'``, hence the hand-built
header.

Two flavors share the container:
- raw: grid values as-is (0 occupied / 254 free)
- planner: 1 occupied / 0 free, same bottom-left row order
"""

from __future__ import annotations

import struct

import numpy as np

NPY_MAGIC = b"\x93NUMPY"
NPY_VERSION = (1, 0)
NPY_ALIGNMENT = 64
NPY_DTYPE = "<u1"

PLANNER_OCCUPIED = 1
PLANNER_FREE = 0


def as_grid_array(grid, width: int, height: int) -> np.ndarray:
    """Check a cell buffer against its declared size and view it as [H, W] uint8.

    Raises:
        ValueError: If dimensions are not positive or the size does not match
    """
    if width <= 0 or height <= 0:
        raise ValueError(f"grid dimensions must be > 0, got {width}x{height}")
    if isinstance(grid, (bytes, bytearray, memoryview)):
        cells = np.frombuffer(grid, dtype=np.uint8)
    else:
        cells = np.asarray(grid)
    if cells.size != width * height:
        raise ValueError(f"grid has {cells.size} cells, expected {width}*{height}={width * height}")
    return cells.astype(np.uint8, copy=False).reshape(height, width)


def npy_header(width: int, height: int, dtype: str = NPY_DTYPE) -> bytes:
    """Magic, version, length field and padded header dict."""
    header = f"{{'descr': '{dtype}', 'fortran_order': False, 'shape': ({height}, {width}), }}"
    preamble = len(NPY_MAGIC) + 2 + 2
    # +1 for the terminating newline
    padding = -(preamble + len(header) + 1) % NPY_ALIGNMENT
    header = header + " " * padding + "\n"
    encoded = header.encode("latin1")
    return NPY_MAGIC + bytes(NPY_VERSION) + struct.pack("<H", len(encoded)) + encoded


def encode_npy(grid, width: int, height: int, dtype: str = NPY_DTYPE) -> bytes:
    """Encode a row-major byte grid as a ``.npy`` container.

    Args:
        grid: Row-major cells, flat (``width*height``) or [height, width]
        width: Number of columns
        height: Number of rows
        dtype: Descriptor written to the header

    Returns:
        bytes: Container whose array has shape ``(height, width)``
    """
    cells = as_grid_array(grid, width, height)
    return npy_header(width, height, dtype) + np.ascontiguousarray(cells).tobytes()


def encode_raw_npy(grid, width: int, height: int) -> bytes:
    """Raw flavor: grid values unchanged. Not part of the default export."""
    return encode_npy(grid, width, height)


def to_planner_values(grid, width: int, height: int) -> np.ndarray:
    """Remap 0 (occupied) -> 1 and everything else -> 0, keeping row order."""
    cells = as_grid_array(grid, width, height)
    return np.where(cells == 0, PLANNER_OCCUPIED, PLANNER_FREE).astype(np.uint8)


def encode_planner_npy(grid, width: int, height: int) -> bytes:
    """Planner flavor: 1 occupied / 0 free, bottom-left origin (no flip)."""
    return encode_npy(to_planner_values(grid, width, height), width, height)
