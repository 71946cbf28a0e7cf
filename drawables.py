"""
Drawable results: positioned texture + directive units and the grid holding them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

DEFAULT_TEXTURE = "/objects/outpost/customsign/signplaceholder.png"

# Game pixels per world block
BLOCK_PIXELS = 8


def to_block_units(pixels):
    return round(pixels / BLOCK_PIXELS, 3)


@dataclass(frozen=True)
class Drawable:
    """A texture with directives, positioned in game pixels."""

    directives: str
    x: int = 0
    y: int = 0
    texture: str = DEFAULT_TEXTURE

    @property
    def result_image(self):
        return self.texture + self.directives

    @property
    def block_x(self):
        return to_block_units(self.x)

    @property
    def block_y(self):
        return to_block_units(self.y)


@dataclass(frozen=True)
class DrawablesOutput:
    """
    Generated drawables for one image.

    ``drawables`` is indexed ``[column][row]``; cells without visible pixels
    hold ``None``. Width and height describe the source image before any
    rotation or flip.
    """

    drawables: tuple[tuple[Optional[Drawable], ...], ...]
    image_width: int
    image_height: int
    offset_x: int = 0
    offset_y: int = 0
    image_path: Optional[str] = field(default=None)

    def __post_init__(self):
        # freeze nested lists handed in by callers
        grid = tuple(tuple(column) for column in self.drawables)
        object.__setattr__(self, "drawables", grid)

    @property
    def shape(self):
        columns = len(self.drawables)
        rows = len(self.drawables[0]) if columns else 0
        return columns, rows

    def __getitem__(self, position):
        column, row = position
        return self.drawables[column][row]

    def __iter__(self):
        for column in self.drawables:
            for drawable in column:
                if drawable is not None:
                    yield drawable

    def count(self):
        return sum(1 for _ in self)

    def to_dict(self):
        """Export in the layout of an object's "drawables" parameter."""
        offset_x = to_block_units(self.offset_x)
        offset_y = to_block_units(self.offset_y)
        return {
            "imagePath": self.image_path,
            "imageWidth": self.image_width,
            "imageHeight": self.image_height,
            "drawables": [
                {
                    "image": drawable.result_image,
                    "position": [
                        round(drawable.block_x + offset_x, 3),
                        round(drawable.block_y + offset_y, 3),
                    ],
                }
                for drawable in self
            ],
        }
