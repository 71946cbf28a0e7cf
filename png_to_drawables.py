#!/usr/bin/env python3
"""
PNG to Starbound Drawables Converter

Converts an image into Starbound drawables: sign placeholder textures with
?replace directives that, placed side by side, reproduce the image in game.
"""

import argparse
import json
import sys

from color_conversions import parse_hex
from drawable_errors import DrawableError
from drawables import DEFAULT_TEXTURE
from drawables_generator import DrawablesGenerator, GeneratorConfig
from pixel_buffer import RotateFlip

ROTATE_FLIP_CHOICES = [mode.name.lower().replace("_", "-") for mode in RotateFlip]


def build_parser():
    parser = argparse.ArgumentParser(description='Convert an image to Starbound drawables')
    parser.add_argument('input_png', help='Input image file path')
    parser.add_argument('-o', '--output',
                        help='Write the drawables as JSON to this file (default: print them)')
    parser.add_argument('--scale', action='store_true',
                        help='Use the gradient scale method (one drawable per 256x256 tile)')
    parser.add_argument('--ignore', metavar='HEX',
                        help='Color to leave out, e.g. FF00FF')
    parser.add_argument('--offset-x', type=int, default=0, help='Horizontal offset in game pixels')
    parser.add_argument('--offset-y', type=int, default=0, help='Vertical offset in game pixels')
    parser.add_argument('--replace-blank', action='store_true',
                        help='Also replace fully transparent pixels')
    parser.add_argument('--replace-white', action='store_true',
                        help='Replace pure white with FEFEFE')
    parser.add_argument('--rotate-flip', choices=ROTATE_FLIP_CHOICES, default='none',
                        help='Rotate/flip the image first (flip-y is often needed)')
    parser.add_argument('--texture', default=DEFAULT_TEXTURE,
                        help='Template texture asset path')
    parser.add_argument('--block-width', type=int, default=32, help='Template width in pixels')
    parser.add_argument('--block-height', type=int, default=8, help='Template height in pixels')
    return parser


def config_from_args(args):
    """Map command line arguments onto a GeneratorConfig"""
    return GeneratorConfig(
        ignore_color=parse_hex(args.ignore) if args.ignore else None,
        offset_x=args.offset_x,
        offset_y=args.offset_y,
        replace_blank=args.replace_blank,
        replace_white=args.replace_white,
        texture_template=args.texture,
        block_width=args.block_width,
        block_height=args.block_height,
        rotate_flip=RotateFlip.from_name(args.rotate_flip),
    )


def main(argv=None):
    args = build_parser().parse_args(argv)

    try:
        config = config_from_args(args)
        generator = DrawablesGenerator(args.input_png)
        print(f"Image size: {generator.image.width}x{generator.image.height}")

        if args.scale:
            output = generator.generate_scaled(config)
        else:
            output = generator.generate(config)
    except DrawableError as e:
        print(f"Error: {e}")
        return 1

    columns, rows = output.shape
    print(f"Generated {output.count()} drawables ({columns}x{rows} grid)")

    content = json.dumps(output.to_dict(), indent=2)
    if args.output:
        with open(args.output, 'w') as f:
            f.write(content)
        print(f"Drawables written to {args.output}")
    else:
        print("=" * 80)
        print(content)
        print("=" * 80)

    return 0


if __name__ == "__main__":
    sys.exit(main())
