"""
nutsprite - Convert animated GIFs into 64-color Squirrel sprite assets
"""

from .core import (
    Color, RemapTable, QuantizedPalette, quantize_palette,
    IndexRemapper, AssetEncoder, GifDecoder, AssetExporter,
    ConvertConfig, ConversionResult, ConversionError,
    convert_source, convert_file,
)

__version__ = "0.1.0"
__all__ = [
    'Color',
    'RemapTable',
    'QuantizedPalette',
    'quantize_palette',
    'IndexRemapper',
    'AssetEncoder',
    'GifDecoder',
    'AssetExporter',
    'ConvertConfig',
    'ConversionResult',
    'ConversionError',
    'convert_source',
    'convert_file',
    'convert',
    'inspect_gif',
]


def convert(
    input_path: str,
    output_path: str = None,
    max_colors: int = 64,
    include_frame_count: bool = True,
) -> ConversionResult:
    """
    Convert a GIF into a Squirrel asset file.

    Args:
        input_path: Path to the animated GIF
        output_path: Output path (defaults to <input stem>.nut beside the input)
        max_colors: Palette size after quantization (1-64)
        include_frame_count: Emit the FRAME_COUNT line

    Returns:
        ConversionResult with the text and the written path
    """
    from pathlib import Path

    if output_path is None:
        stem_path = Path(input_path)
        output_path = stem_path.parent / f"{stem_path.stem}.nut"

    config = ConvertConfig.from_dict({
        'input_path': str(input_path),
        'output_path': str(output_path),
        'max_colors': max_colors,
        'include_frame_count': include_frame_count,
    })

    return convert_file(input_path, output_path, config)


def inspect_gif(input_path: str, max_colors: int = 64) -> dict:
    """
    Report what a conversion would do, without writing anything.

    Returns:
        Dictionary with palette sizes, merges, remap table and frame info
    """
    with GifDecoder(input_path) as decoder:
        quantized = quantize_palette(decoder.global_palette(), max_colors=max_colors)
        layout = decoder.layout

    return {
        'width': layout.width,
        'height': layout.height,
        'frames': layout.frame_count,
        'local_palettes': sum(1 for p in layout.local_palettes if p),
        'source_colors': quantized.source_size,
        'colors': len(quantized.colors),
        'merges': [
            {
                'kept': m.surviving,
                'removed': m.removed,
                'distance': m.distance,
                'result': m.result.as_tuple(),
            }
            for m in quantized.merges
        ],
        'remap': quantized.remap.as_dict(),
    }
