"""
Encodes one block of an image as a ?replace directive on the template texture.
"""

from color_conversions import Color, WHITE, to_hex
from drawables import Drawable

# Starbound treats pure white as a sentinel in some directives
NEAR_WHITE = Color(254, 254, 254, 255)


def is_ignored(color, config):
    return config.ignore_color is not None and color == config.ignore_color


def substitute_white(color, config):
    if config.replace_white and color == WHITE:
        return NEAR_WHITE
    return color


def encode_block(buffer, block_col, block_row, template, config):
    """
    Build the drawable for block (block_col, block_row), or None when the
    block has no visible pixels.

    Pixels are visited column by column (i outer, j inner) so the directive
    is deterministic for a given image and config.
    """
    width, height = config.block_width, config.block_height
    left = block_col * width
    top = block_row * height

    # slicing clips to the buffer; pixels past the edge are never emitted
    region = buffer.pixels[top:top + height, left:left + width]

    fragments = ["?replace"]
    contains_pixels = False

    rows = region.tolist()

    for i in range(region.shape[1]):
        for j in range(len(rows)):
            color = Color(*rows[j][i])

            if is_ignored(color, config):
                continue
            if color.a == 0 and not config.replace_blank:
                continue
            color = substitute_white(color, config)

            fragments.append(f";{to_hex(template[i][j])}={to_hex(color)}")

            if color.a > 1:
                contains_pixels = True

    if not contains_pixels:
        return None
    return Drawable("".join(fragments), left, top, config.texture_template)
