"""Binary PGM (P5) encoding of occupancy grids.

PGM rows run top to bottom while the grid's row 0 is the bottom world row,
so rows are flipped on the way out. Values are written unchanged.
"""

from __future__ import annotations

import numpy as np

from robomap.export.npy import as_grid_array

PGM_MAXVAL = 255


def pgm_header(width: int, height: int) -> bytes:
    """ASCII header ``P5\\n{width} {height}\\n255\\n``."""
    return f"P5\n{width} {height}\n{PGM_MAXVAL}\n".encode("ascii")


def encode_pgm(grid, width: int, height: int) -> bytes:
    """Encode a bottom-left-origin grid as a binary grayscale PGM image.

    Args:
        grid: Row-major uint8 cells, flat (``width*height``) or [height, width]
        width: Number of columns
        height: Number of rows

    Returns:
        bytes: Header followed by ``width*height`` pixel bytes; image row ``r``
        is grid row ``height - 1 - r``

    Raises:
        ValueError: If the buffer size does not match ``width*height``
    """
    cells = as_grid_array(grid, width, height)
    return pgm_header(width, height) + np.flipud(cells).tobytes()
