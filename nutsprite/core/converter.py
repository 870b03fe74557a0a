"""
Converter - Runs a frame source through quantize, remap and encode
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import numpy as np

from .config import ConvertConfig
from .decoder import GifDecoder
from .encoder import AssetEncoder
from .errors import SourceError, UnsupportedFeatureError
from .exporter import AssetExporter
from .quantizer import MAX_PALETTE_COLORS, QuantizedPalette, quantize_palette
from .remapper import IndexRemapper

logger = logging.getLogger(__name__)


@dataclass
class ConversionResult:
    """Finished asset text plus what went into it"""
    text: str
    frame_count: int
    pixel_count: int
    palette: QuantizedPalette
    output_path: Optional[Path] = None


def convert_source(
    source,
    max_colors: int = MAX_PALETTE_COLORS,
    include_frame_count: bool = True,
) -> ConversionResult:
    """
    Convert any frame source into asset text. Nothing is written.

    The source needs global_palette() -> bytes and frames() -> iterable of
    DecodedFrame. Frames are consumed once, in order.
    """
    quantized = quantize_palette(source.global_palette(), max_colors=max_colors)
    remapper = IndexRemapper(quantized.remap)
    encoder = AssetEncoder(quantized.colors, include_frame_count=include_frame_count)

    for index, frame in enumerate(source.frames()):
        if frame.local_palette:
            raise UnsupportedFeatureError(
                f"Frame {index} has a local palette; local palettes are not supported"
            )

        pixels = np.asarray(frame.pixels)
        expected = frame.width * frame.height
        if pixels.size != expected:
            raise SourceError(
                f"Frame {index} has {pixels.size} pixels, "
                f"expected {frame.width}x{frame.height}={expected}"
            )

        encoder.add_frame(remapper.translate_frame(pixels))

    logger.debug("Encoded %d frames, %d pixels", encoder.frame_count, encoder.pixel_count)

    return ConversionResult(
        text=encoder.finish(),
        frame_count=encoder.frame_count,
        pixel_count=encoder.pixel_count,
        palette=quantized,
    )


def convert_file(
    input_path,
    output_path,
    config: Optional[ConvertConfig] = None,
) -> ConversionResult:
    """
    Decode a GIF, convert it and write the asset atomically.

    Every check runs before the write, so a failed run leaves no output.
    """
    config = config or ConvertConfig()

    with GifDecoder(input_path) as decoder:
        result = convert_source(
            decoder,
            max_colors=config.max_colors,
            include_frame_count=config.include_frame_count,
        )

    result.output_path = AssetExporter.to_text(result.text, output_path)
    return result
