"""
Exceptions raised while generating Starbound drawables.
"""


class DrawableError(Exception):
    """Base class for errors related to drawables and their generation."""


class InputError(DrawableError, ValueError):
    """Bad input: malformed hex color, unreadable image or invalid settings."""


class HexFormatError(InputError):
    """A string is not a valid hexadecimal number or color."""


class StateError(DrawableError, RuntimeError):
    """Generation was requested before an image was loaded."""
