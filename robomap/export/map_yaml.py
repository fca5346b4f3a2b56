"""map_server style metadata document for exported occupancy grids."""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from robomap.nav.scene import MapInfo

OCCUPIED_THRESH = 0.65
FREE_THRESH = 0.196
NEGATE = 0

# Number.prototype.toString switches to exponent form outside this range
EXPONENT_BELOW = 1e-6
EXPONENT_FROM = 1e21


def format_number(value) -> str:
    """Shortest round-trip text as a JavaScript number prints.

    Integral values print without ``.0``. Magnitudes below ``1e-6`` or from
    ``1e21`` up switch to exponent form (``1e-7``, ``1.5e+21``).
    """
    value = float(value)
    if value == 0:
        return "0"
    if abs(value) < EXPONENT_BELOW or abs(value) >= EXPONENT_FROM:
        return np.format_float_scientific(value, trim="-", exp_digits=1)
    return np.format_float_positional(value, trim="-")


def encode_map_yaml(map_info: MapInfo, grid_width: int = 0, grid_height: int = 0) -> str:
    """Metadata document pointing at ``{name}.pgm``.

    The grid size is implied by the image, so ``grid_width`` and
    ``grid_height`` do not appear in the document.
    """
    ox, oy = map_info.origin
    return (
        f"image: {map_info.name}.pgm\n"
        f"resolution: {format_number(map_info.resolution)}\n"
        f"origin: [{format_number(ox)}, {format_number(oy)}, 0.0]\n"
        f"negate: {NEGATE}\n"
        f"occupied_thresh: {OCCUPIED_THRESH}\n"
        f"free_thresh: {FREE_THRESH}\n"
    )
