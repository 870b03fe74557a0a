#!/usr/bin/env python
"""
nutsprite CLI - Convert animated GIFs into 64-color Squirrel sprite assets

Usage:
    python main.py <input_gif> [options]

Examples:
    python main.py                              # convert.gif -> data.nut
    python main.py torch.gif -o torch.nut       # Explicit paths
    python main.py torch.gif --inspect          # Show palette reduction only
"""

import argparse
import logging
import sys


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Convert animated GIFs into 64-color Squirrel sprite assets",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Output Format:
  PALETTE <- [r0, g0, b0, r1, g1, b1, ...]   up to 64 colors
  DATA <- @"ABAB..."                          one symbol per pixel, all frames
  FRAME_COUNT <- 1                            number of frames

Examples:
  %(prog)s                                    # convert.gif -> data.nut
  %(prog)s torch.gif -o torch.nut
  %(prog)s torch.gif --max-colors 32 -v       # Log every color merge
  %(prog)s torch.gif --inspect                # Analysis only, no output
  %(prog)s -c sprite.yaml                     # Settings from YAML
  %(prog)s --save-config sprite.yaml          # Write current settings
        """
    )

    parser.add_argument(
        'input',
        type=str,
        nargs='?',
        default=None,
        help='Input GIF (default: convert.gif, or input_path from --config)'
    )

    parser.add_argument(
        '-o', '--output',
        type=str,
        default=None,
        help='Output path (default: data.nut, or output_path from --config)'
    )

    parser.add_argument(
        '-c', '--config',
        type=str,
        default=None,
        help='YAML config file; command line options override it'
    )

    parser.add_argument(
        '-m', '--max-colors',
        type=int,
        default=None,
        help='Palette size after quantization, 1-64 (default: 64)'
    )

    parser.add_argument(
        '--no-frame-count',
        action='store_true',
        help='Omit the FRAME_COUNT line'
    )

    parser.add_argument(
        '--inspect',
        action='store_true',
        help='Show palette reduction and frame info without writing output'
    )

    parser.add_argument(
        '--save-config',
        type=str,
        default=None,
        metavar='PATH',
        help='Write the effective settings to a YAML file and exit'
    )

    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Log every color merge and show tracebacks on errors'
    )

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    from nutsprite.core import (
        ConvertConfig, ConversionError, load_config, save_config, apply_args,
    )

    try:
        config = load_config(args.config) if args.config else ConvertConfig()
        config = apply_args(config, args)
    except ConversionError as e:
        print(f"Error: {e}")
        sys.exit(1)

    logging.basicConfig(
        level=config.log_level_value,
        format='%(levelname)s %(name)s: %(message)s',
    )

    if args.save_config:
        path = save_config(config, args.save_config)
        print(f"Saved config: {path}")
        sys.exit(0)

    from nutsprite import inspect_gif
    from nutsprite.core import convert_file

    if args.inspect:
        try:
            info = inspect_gif(config.input_path, max_colors=config.max_colors)
        except ConversionError as e:
            print(f"Error: {e}")
            sys.exit(1)

        print(f"Inspecting: {config.input_path}\n")
        print(f"Size: {info['width']}x{info['height']}")
        print(f"Frames: {info['frames']}")
        if info['local_palettes']:
            print(f"Local palettes: {info['local_palettes']} (not supported, conversion will fail)")
        print(f"Palette: {info['source_colors']} -> {info['colors']} colors")
        if info['merges']:
            print(f"\nMerges ({len(info['merges'])}):")
            for m in info['merges']:
                print(f"  {m['removed']:>3} -> {m['kept']:<3} distance {m['distance']:.2f}  result {m['result']}")
        if args.verbose:
            print("\nRemap:")
            for src, dst in info['remap'].items():
                print(f"  {src:>3} -> {dst}")
        return

    print(f"Converting: {config.input_path}")

    try:
        result = convert_file(config.input_path, config.output_path, config)
    except ConversionError as e:
        print(f"Error: {e}")
        if args.verbose:
            import traceback
            traceback.print_exc()
        sys.exit(1)

    print(f"Palette: {result.palette.source_size} -> {len(result.palette.colors)} colors")
    print(f"Frames: {result.frame_count} ({result.pixel_count} pixels)")
    print(f"Output: {result.output_path}")
    print("Done!")


if __name__ == '__main__':
    main()
