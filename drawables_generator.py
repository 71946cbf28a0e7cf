"""
Starbound Drawables Generator

Splits an image into template-sized blocks (32x8 sign placeholders by
default) and turns every block into a Drawable whose directives recolor
the template into that part of the image.
"""

from __future__ import annotations

import dataclasses
import logging
import math
import os
from dataclasses import dataclass
from typing import Optional

from block_encoder import encode_block
from color_conversions import Color, parse_hex
from drawable_errors import InputError, StateError
from drawables import DEFAULT_TEXTURE, DrawablesOutput
from pixel_buffer import PixelBuffer, RotateFlip, apply_flip_rotate, load_pixel_buffer
from scale_encoder import MAX_TILE_SIZE, encode_scale_tile
from template_grid import build_template

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GeneratorConfig:
    """Settings for one generate call."""

    ignore_color: Optional[Color] = None
    offset_x: int = 0
    offset_y: int = 0
    replace_blank: bool = False
    replace_white: bool = False
    texture_template: str = DEFAULT_TEXTURE
    block_width: int = 32
    block_height: int = 8
    rotate_flip: RotateFlip = RotateFlip.NONE

    def __post_init__(self):
        if isinstance(self.ignore_color, str):
            object.__setattr__(self, "ignore_color", parse_hex(self.ignore_color))
        elif self.ignore_color is not None:
            object.__setattr__(self, "ignore_color", Color(*self.ignore_color))
        if isinstance(self.rotate_flip, str):
            object.__setattr__(self, "rotate_flip", RotateFlip.from_name(self.rotate_flip))
        if self.block_width <= 0 or self.block_height <= 0:
            raise InputError(f"Block size must be positive, got {self.block_width}x{self.block_height}")
        if not self.texture_template or not self.texture_template.strip():
            raise InputError("A drawable texture is required")

    def replace(self, **changes):
        return dataclasses.replace(self, **changes)


def _grid_size(width, height, cell_width, cell_height):
    return math.ceil(width / cell_width), math.ceil(height / cell_height)


def generate(buffer, config=None, image_path=None):
    """Generate template drawables for a pixel buffer."""
    if buffer is None:
        raise StateError("No image available to generate drawables for.")
    config = config or GeneratorConfig()

    template = build_template(config.block_width, config.block_height)
    image = apply_flip_rotate(buffer, config.rotate_flip)
    columns, rows = _grid_size(image.width, image.height, config.block_width, config.block_height)

    logger.debug("[GENERATOR] Encoding %dx%d image as %dx%d blocks of %dx%d",
                 image.width, image.height, columns, rows, config.block_width, config.block_height)

    drawables = [
        [encode_block(image, column, row, template, config) for row in range(rows)]
        for column in range(columns)
    ]

    output = DrawablesOutput(drawables, buffer.width, buffer.height,
                             config.offset_x, config.offset_y, image_path)
    logger.info("[GENERATOR] Generated %d drawables (%dx%d grid)", output.count(), columns, rows)
    return output


def generate_scaled(buffer, config=None, image_path=None):
    """Generate gradient-scaled drawables, one per tile of up to 256x256 pixels."""
    if buffer is None:
        raise StateError("No image available to generate drawables for.")
    config = config or GeneratorConfig()

    image = apply_flip_rotate(buffer, config.rotate_flip)
    columns, rows = _grid_size(image.width, image.height, MAX_TILE_SIZE, MAX_TILE_SIZE)

    logger.debug("[SCALE] Encoding %dx%d image as %dx%d tiles", image.width, image.height, columns, rows)

    drawables = [
        [encode_scale_tile(image, column, row, config) for row in range(rows)]
        for column in range(columns)
    ]

    output = DrawablesOutput(drawables, buffer.width, buffer.height,
                             config.offset_x, config.offset_y, image_path)
    logger.info("[SCALE] Generated %d drawables (%dx%d grid)", output.count(), columns, rows)
    return output


class DrawablesGenerator:
    """
    Holds the image to generate drawables for.

    The image can be swapped or cleared between calls; settings are passed
    to each generate call as a GeneratorConfig.
    """

    def __init__(self, image=None):
        self._image = None
        self.image_path = None
        if image is not None:
            self.set_image(image)

    @property
    def image(self):
        return self._image

    def set_image(self, image):
        """Load an image from a file path, or use a PixelBuffer / Pillow image directly."""
        if isinstance(image, PixelBuffer):
            self._image = image
            self.image_path = None
        elif isinstance(image, (str, os.PathLike)):
            path = os.fspath(image)
            self._image = load_pixel_buffer(path)
            self.image_path = path
        elif hasattr(image, "convert"):
            self._image = PixelBuffer.from_image(image)
            self.image_path = None
        else:
            raise InputError(f"Unsupported image source: {type(image).__name__}")

    def clear_image(self):
        self._image = None
        self.image_path = None

    def generate(self, config=None):
        if self._image is None:
            raise StateError("Attempted to generate drawables without an image. Please provide an image.")
        return generate(self._image, config, self.image_path)

    def generate_scaled(self, config=None):
        if self._image is None:
            raise StateError("Attempted to generate drawables without an image. Please provide an image.")
        return generate_scaled(self._image, config, self.image_path)
