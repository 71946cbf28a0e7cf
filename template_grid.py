"""
Marker colors of the drawable template texture.

Every pixel of the template (the sign placeholder by default) carries a
unique color. The red channel addresses the column and the blue channel the
row, counted from 1 and written so their hex digits never use A-F: reading
the two hex digits as a decimal number gives the position back.
"""

from functools import lru_cache

from color_conversions import Color
from drawable_errors import InputError

# Largest axis whose markers still only use decimal hex digits
MAX_TEMPLATE_SIDE = 99


def _skip_hex_letters(n):
    # 9 -> 15 so that n + 1 reads "10" in hex, 19 -> 31 ("20") and so on
    return n + 6 * ((n + 1) // 10)


def marker_color(i, j):
    """Marker for column i, row j of the template."""
    return Color(_skip_hex_letters(i) + 1, 0, _skip_hex_letters(j) + 1, 1)


@lru_cache(maxsize=None)
def build_template(width, height):
    """
    Return the width x height marker grid, indexed [i][j] (column, row).
    """
    if not 0 < width <= MAX_TEMPLATE_SIDE or not 0 < height <= MAX_TEMPLATE_SIDE:
        raise InputError(
            f"Template size {width}x{height} out of range; both sides must be 1-{MAX_TEMPLATE_SIDE}")
    return tuple(
        tuple(marker_color(i, j) for j in range(height))
        for i in range(width)
    )
