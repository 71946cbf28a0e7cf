"""
Pixel buffers handed to the drawable encoders.

Images are decoded with Pillow and kept as read-only numpy arrays of shape
(height, width, 4), one uint8 per RGBA channel, origin top-left.
"""

import enum
import logging
import os

import numpy as np
from PIL import Image, UnidentifiedImageError

from color_conversions import Color
from drawable_errors import InputError

logger = logging.getLogger(__name__)


class RotateFlip(enum.Enum):
    """Rotation (clockwise quarter turns) followed by an optional horizontal flip."""
    NONE = (0, False)
    ROTATE_90 = (1, False)
    ROTATE_180 = (2, False)
    ROTATE_270 = (3, False)
    FLIP_X = (0, True)
    ROTATE_90_FLIP_X = (1, True)
    FLIP_Y = (2, True)
    ROTATE_270_FLIP_X = (3, True)

    @property
    def quarter_turns(self):
        return self.value[0]

    @property
    def flip_x(self):
        return self.value[1]

    @classmethod
    def from_name(cls, name):
        """Look up a mode by name, e.g. 'flip-y' or 'ROTATE_90'."""
        key = name.strip().upper().replace("-", "_")
        try:
            return cls[key]
        except KeyError:
            raise InputError(f"Unknown rotate/flip mode: {name!r}") from None


class PixelBuffer:
    """Immutable RGBA pixel grid."""

    def __init__(self, pixels):
        array = np.array(pixels)
        if array.dtype != np.uint8:
            if array.size and (array.min() < 0 or array.max() > 255):
                raise InputError("Pixel channels must be in the range 0-255")
            array = array.astype(np.uint8)
        if array.ndim != 3 or array.shape[2] != 4:
            raise InputError(f"Expected an array of shape (height, width, 4), got {array.shape}")
        array.setflags(write=False)
        self._pixels = array

    @classmethod
    def from_image(cls, image):
        """Build a buffer from a Pillow image (any mode)."""
        return cls(np.asarray(image.convert("RGBA")))

    @classmethod
    def blank(cls, width, height, color=Color(0, 0, 0, 0)):
        pixels = np.empty((height, width, 4), dtype=np.uint8)
        pixels[:, :] = tuple(color)
        return cls(pixels)

    @property
    def pixels(self):
        return self._pixels

    @property
    def width(self):
        return self._pixels.shape[1]

    @property
    def height(self):
        return self._pixels.shape[0]

    @property
    def size(self):
        return self.width, self.height

    def contains(self, x, y):
        return 0 <= x < self.width and 0 <= y < self.height

    def pixel(self, x, y):
        """Color at column x, row y."""
        if not self.contains(x, y):
            raise IndexError(f"Pixel ({x}, {y}) outside {self.width}x{self.height} buffer")
        return Color(*(int(channel) for channel in self._pixels[y, x]))

    def to_image(self):
        return Image.fromarray(np.ascontiguousarray(self._pixels))

    def __eq__(self, other):
        if not isinstance(other, PixelBuffer):
            return NotImplemented
        return np.array_equal(self._pixels, other._pixels)

    def __repr__(self):
        return f"PixelBuffer({self.width}x{self.height})"


def load_pixel_buffer(path):
    """Decode an image file into a PixelBuffer"""
    if not os.path.exists(path):
        raise InputError(f"File {path} not found")

    try:
        with Image.open(path) as img:
            buffer = PixelBuffer.from_image(img)
    except (UnidentifiedImageError, OSError) as e:
        raise InputError(f"Error loading image {path}: {e}") from e

    logger.debug("[IMAGE] Loaded %s: %dx%d", path, buffer.width, buffer.height)
    return buffer


def apply_flip_rotate(buffer, mode):
    """Return a rotated/flipped copy of the buffer; the input is left untouched."""
    if isinstance(mode, str):
        mode = RotateFlip.from_name(mode)
    if mode is RotateFlip.NONE:
        return buffer

    pixels = buffer.pixels
    if mode.quarter_turns:
        # np.rot90 turns counter-clockwise for positive k
        pixels = np.rot90(pixels, k=-mode.quarter_turns, axes=(0, 1))
    if mode.flip_x:
        pixels = pixels[:, ::-1]
    return PixelBuffer(pixels)
