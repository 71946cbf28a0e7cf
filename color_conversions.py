"""
Color <-> hex string conversions used by Starbound directives.

Directives accept colors as 3, 4, 6 or 8 hex digits (RGB, RGBA, RRGGBB,
RRGGBBAA). Output is always uppercase and as short as the format allows.
"""

import string
from typing import NamedTuple

from drawable_errors import HexFormatError

HEX_DIGITS = frozenset(string.hexdigits)


class Color(NamedTuple):
    """RGBA color with 8-bit channels."""
    r: int
    g: int
    b: int
    a: int = 255


TRANSPARENT = Color(0, 0, 0, 0)
WHITE = Color(255, 255, 255, 255)


def hex_to_int(hex_string):
    """Parse an unsigned base-16 number"""
    if not hex_string or not HEX_DIGITS.issuperset(hex_string):
        raise HexFormatError(f"Invalid hexadecimal value: {hex_string!r}")
    return int(hex_string, 16)


def parse_hex(rgba):
    """Convert a hex color string to a Color. Blank input gives transparent black."""
    if rgba is None or not rgba.strip():
        return TRANSPARENT

    length = len(rgba)
    if length in (3, 4):
        channels = [hex_to_int(digit) for digit in rgba]
    elif length in (6, 8):
        channels = [hex_to_int(rgba[i:i + 2]) for i in range(0, length, 2)]
    else:
        raise HexFormatError(f"Invalid hex length {length} for {rgba!r}")

    if len(channels) == 3:
        channels.append(255)
    return Color(*channels)


def to_hex(color):
    """
    Convert a Color to its shortest directive form.

    Every channel collapses to one digit when both of its digits match
    (checked per channel, so "12" never collapses). Alpha is left out
    when the color is fully opaque.
    """
    pairs = [f"{channel:02X}" for channel in color]
    opaque = pairs[3] == "FF"
    short = all(pair[0] == pair[1] for pair in pairs)

    if short:
        digits = [pair[0] for pair in pairs]
    else:
        digits = pairs
    if opaque:
        digits = digits[:3]
    return "".join(digits)
