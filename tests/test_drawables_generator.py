#!/usr/bin/env python3

from __future__ import annotations

import tempfile
import unittest
from pathlib import Path

import numpy as np
from PIL import Image

from color_conversions import Color, parse_hex
from drawable_errors import InputError, StateError
from drawables import DEFAULT_TEXTURE
from drawables_generator import DrawablesGenerator, GeneratorConfig, generate
from pixel_buffer import PixelBuffer, RotateFlip


def gradient_image(width=32, height=8):
    """Pixel (x, y) is colored (x + 1, 0, y + 1), like the template markers."""
    pixels = np.zeros((height, width, 4), dtype=np.uint8)
    for x in range(width):
        for y in range(height):
            pixels[y, x] = (min(x + 1, 255), 0, y + 1 if y + 1 < 256 else 0, 255)
    return PixelBuffer(pixels)


def replace_pairs(directives):
    assert directives.startswith("?replace;")
    return [fragment.split("=") for fragment in directives[len("?replace;"):].split(";")]


class GenerateTests(unittest.TestCase):
    def test_single_block_markers_match_pixels(self) -> None:
        output = generate(gradient_image(32, 8))
        self.assertEqual(output.shape, (1, 1))
        drawable = output[0, 0]
        self.assertIsNotNone(drawable)

        pairs = replace_pairs(drawable.directives)
        self.assertEqual(len(pairs), 32 * 8)
        for marker, color_hex in pairs:
            color = parse_hex(color_hex)
            self.assertEqual(int(marker[0:2]), color.r, msg=marker)
            self.assertEqual(int(marker[4:6]), color.b, msg=marker)

    def test_every_block_maps_to_its_own_pixels(self) -> None:
        output = generate(gradient_image(64, 16))
        self.assertEqual(output.shape, (2, 2))
        for column in range(2):
            for row in range(2):
                drawable = output[column, row]
                self.assertEqual((drawable.x, drawable.y), (column * 32, row * 8))
                for marker, color_hex in replace_pairs(drawable.directives):
                    color = parse_hex(color_hex)
                    self.assertEqual(int(marker[0:2]), (color.r - 1) % 32 + 1)
                    self.assertEqual(int(marker[4:6]), (color.b - 1) % 8 + 1)

    def test_output_layout(self) -> None:
        config = GeneratorConfig(offset_x=5, offset_y=3)
        output = generate(gradient_image(64, 8), config)

        self.assertEqual(output.image_width, 64)
        self.assertEqual(output.image_height, 8)
        self.assertEqual(output.shape, (2, 1))
        self.assertEqual((output.offset_x, output.offset_y), (5, 3))

        first, second = output[0, 0], output[1, 0]
        self.assertEqual(first.texture, DEFAULT_TEXTURE)
        self.assertEqual(first.texture, second.texture)
        self.assertEqual(first.result_image, first.texture + first.directives)
        self.assertNotEqual(first.result_image, second.result_image)

        self.assertEqual((first.x, first.y), (0, 0))
        self.assertEqual((second.x, second.y), (32, 0))
        self.assertEqual(first.block_x, 0)
        self.assertEqual(second.block_x, 4)
        self.assertEqual(first.block_y, second.block_y)

    def test_partial_grid_rounds_up(self) -> None:
        output = generate(PixelBuffer.blank(33, 9, Color(1, 2, 3)))
        self.assertEqual(output.shape, (2, 2))
        self.assertEqual(output.count(), 4)
        self.assertEqual(output[1, 1].directives, "?replace;01000101=010203")

    def test_transparent_blocks_are_absent(self) -> None:
        pixels = np.zeros((8, 64, 4), dtype=np.uint8)
        pixels[:, 32:] = (255, 0, 0, 255)
        output = generate(PixelBuffer(pixels))
        self.assertIsNone(output[0, 0])
        self.assertIsNotNone(output[1, 0])
        self.assertEqual(list(output), [output[1, 0]])

    def test_empty_image(self) -> None:
        output = generate(PixelBuffer.blank(0, 0))
        self.assertEqual(output.shape, (0, 0))
        self.assertEqual(output.count(), 0)

    def test_custom_block_size(self) -> None:
        config = GeneratorConfig(block_width=16, block_height=16)
        output = generate(gradient_image(32, 32), config)
        self.assertEqual(output.shape, (2, 2))
        self.assertEqual(output[1, 1].x, 16)
        self.assertEqual(output[1, 1].y, 16)
        self.assertEqual(output[1, 1].block_y, 2)

    def test_rotation_keeps_source_dimensions(self) -> None:
        source = gradient_image(32, 8)
        before = source.pixels.copy()
        output = generate(source, GeneratorConfig(rotate_flip=RotateFlip.ROTATE_90))
        self.assertEqual(output.shape, (1, 4))
        self.assertEqual((output.image_width, output.image_height), (32, 8))
        np.testing.assert_array_equal(source.pixels, before)

    def test_flip_y(self) -> None:
        red = (255, 0, 0, 255)
        source = PixelBuffer([[red], [(0, 0, 0, 0)]])
        self.assertEqual(generate(source)[0, 0].directives, "?replace;01000101=F00")
        flipped = generate(source, GeneratorConfig(rotate_flip="flip-y"))
        self.assertEqual(flipped[0, 0].directives, "?replace;01000201=F00")

    def test_output_is_immutable(self) -> None:
        output = generate(gradient_image(32, 8))
        with self.assertRaises(AttributeError):
            output.image_width = 1
        with self.assertRaises(TypeError):
            output.drawables[0][0] = None

    def test_missing_buffer_is_a_state_error(self) -> None:
        with self.assertRaises(StateError):
            generate(None)


class GeneratorConfigTests(unittest.TestCase):
    def test_defaults(self) -> None:
        config = GeneratorConfig()
        self.assertIsNone(config.ignore_color)
        self.assertEqual((config.block_width, config.block_height), (32, 8))
        self.assertEqual(config.texture_template, DEFAULT_TEXTURE)
        self.assertIs(config.rotate_flip, RotateFlip.NONE)
        self.assertFalse(config.replace_blank)
        self.assertFalse(config.replace_white)

    def test_ignore_color_accepts_hex(self) -> None:
        self.assertEqual(GeneratorConfig(ignore_color="0000FF").ignore_color, Color(0, 0, 255, 255))
        self.assertEqual(GeneratorConfig(ignore_color=(0, 0, 255)).ignore_color, Color(0, 0, 255, 255))

    def test_invalid_values_fail(self) -> None:
        with self.assertRaises(InputError):
            GeneratorConfig(block_width=0)
        with self.assertRaises(InputError):
            GeneratorConfig(texture_template=" ")
        with self.assertRaises(InputError):
            GeneratorConfig(rotate_flip="sideways")
        with self.assertRaises(InputError):
            GeneratorConfig(ignore_color="12345")

    def test_oversized_template_fails_on_generate(self) -> None:
        with self.assertRaises(InputError):
            generate(gradient_image(), GeneratorConfig(block_width=100))

    def test_replace_returns_a_copy(self) -> None:
        config = GeneratorConfig()
        changed = config.replace(offset_x=4)
        self.assertEqual(config.offset_x, 0)
        self.assertEqual(changed.offset_x, 4)


class DrawablesGeneratorTests(unittest.TestCase):
    def test_generate_without_image_fails(self) -> None:
        generator = DrawablesGenerator()
        with self.assertRaises(StateError):
            generator.generate()
        with self.assertRaises(StateError):
            generator.generate_scaled()

    def test_generate_after_clear_fails(self) -> None:
        generator = DrawablesGenerator(gradient_image())
        self.assertEqual(generator.generate().count(), 1)
        generator.clear_image()
        self.assertIsNone(generator.image)
        with self.assertRaises(StateError):
            generator.generate()

    def test_image_from_file(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            path = Path(td) / "gradient.png"
            gradient_image(64, 8).to_image().save(path)

            generator = DrawablesGenerator(path)
            output = generator.generate(GeneratorConfig(ignore_color=Color(0, 0, 255)))

        self.assertEqual(generator.image_path, str(path))
        self.assertEqual(output.image_path, str(path))
        self.assertEqual(output.shape, (2, 1))
        self.assertEqual(output[0, 0].directives, generate(gradient_image(64, 8))[0, 0].directives)

    def test_image_from_pillow(self) -> None:
        image = Image.new("RGB", (10, 4), (255, 0, 0))
        output = DrawablesGenerator(image).generate()
        self.assertEqual(output.shape, (1, 1))
        self.assertIsNone(output.image_path)
        self.assertEqual(output.count(), 1)

    def test_missing_file_is_an_input_error(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            with self.assertRaises(InputError):
                DrawablesGenerator(str(Path(td) / "missing.png"))

    def test_unsupported_source_fails(self) -> None:
        with self.assertRaises(InputError):
            DrawablesGenerator(42)

    def test_options_do_not_break_generation(self) -> None:
        generator = DrawablesGenerator(gradient_image(128, 32))
        config = GeneratorConfig(ignore_color=Color(0, 0, 255), offset_x=5, offset_y=3)
        self.assertEqual(generator.generate(config).shape, (4, 4))

        config = config.replace(replace_blank=True, replace_white=True)
        self.assertEqual(generator.generate(config).count(), 16)

        config = config.replace(rotate_flip=RotateFlip.FLIP_X)
        self.assertEqual(generator.generate(config).shape, (4, 4))


if __name__ == "__main__":
    unittest.main()
