"""
Alternate encoder: one drawable per tile of up to 256x256 pixels.

Rather than recoloring a template with one marker per pixel, the directive
stretches a 2x2 gradient (blended from a game asset) across the tile so
that every pixel ends up with a color encoding its own coordinates, then
replaces those coordinate colors with the image colors.
"""

import logging

from block_encoder import is_ignored, substitute_white
from color_conversions import Color, to_hex
from drawable_errors import InputError
from drawables import Drawable

logger = logging.getLogger(__name__)

MAX_TILE_SIZE = 256

BLEND_REFERENCE = "/items/active/weapons/protectorate/aegisaltpistol/beamend.png"

PREAMBLE = (
    "?setcolor=ffffff?replace;00000000=ffffff;ffffff00=ffffff?setcolor=ffffff"
    "?crop;0;0;2;2"
    "?blendmult=" + BLEND_REFERENCE + ";0;0"
    "?replace;A355C0A5={bottom_left};A355C07B={bottom_right};FFFFFFA5={top_left};FFFFFF7B={top_right}"
    "?scale={scale_width};{scale_height}"
    "?crop;1;1;{crop_width};{crop_height}"
)


def coordinate_marker(x, y):
    """Color the gradient leaves at tile pixel (x, y), as 8 hex digits."""
    return f"{x:02X}01{y:02X}00"


def build_preamble(width, height):
    right = width - 1
    top = height - 1
    return PREAMBLE.format(
        bottom_left=to_hex(Color(0, 1, 0, 0)),
        bottom_right=to_hex(Color(right, 1, 0, 0)),
        top_left=to_hex(Color(0, 1, top, 0)),
        top_right=to_hex(Color(right, 1, top, 0)),
        scale_width=width,
        scale_height=height,
        crop_width=width + 1,
        crop_height=height + 1,
    )


def encode_scale_tile(buffer, tile_col, tile_row, config, tile_size=MAX_TILE_SIZE):
    """Build the drawable for one tile, or None when nothing in it is visible."""
    if not 0 < tile_size <= MAX_TILE_SIZE:
        raise InputError(f"Tile size must be 1-{MAX_TILE_SIZE}, got {tile_size}")
    left = tile_col * tile_size
    top = tile_row * tile_size
    region = buffer.pixels[top:top + tile_size, left:left + tile_size]
    height, width = region.shape[:2]
    if not width or not height:
        return None

    fragments = [build_preamble(width, height), "?replace"]
    emitted = 0
    rows = region.tolist()

    for x in range(width):
        for y in range(height):
            color = Color(*rows[y][x])

            if is_ignored(color, config):
                continue
            # alpha 0 and 1 never make it into the gradient pass
            if color.a <= 1:
                continue
            color = substitute_white(color, config)

            fragments.append(f";{coordinate_marker(x, y)}={to_hex(color)}")
            emitted += 1

    if not emitted:
        return None

    logger.debug("[SCALE] Tile (%d, %d): %dx%d, %d pixels", tile_col, tile_row, width, height, emitted)
    return Drawable("".join(fragments), left, top, config.texture_template)
