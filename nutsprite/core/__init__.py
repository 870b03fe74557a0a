"""
nutsprite - Core conversion pipeline
"""

from .color import Color, palette_from_bytes, palette_to_bytes
from .quantizer import (
    MAX_PALETTE_COLORS,
    RemapTable, Merge, QuantizedPalette,
    find_closest_pair, merge_step, quantize_palette,
)
from .remapper import IndexRemapper
from .encoder import (
    SYMBOLS, MAX_PALETTE_VALUES,
    encode_symbol, encode_indices, format_palette_literal,
    AssetEncoder,
)
from .decoder import DecodedFrame, GifLayout, GifDecoder, scan_color_tables
from .exporter import AssetExporter
from .config import ConvertConfig, load_config, save_config, apply_args
from .converter import ConversionResult, convert_source, convert_file
from .errors import (
    ConversionError, SourceError, UnsupportedFeatureError,
    PaletteLookupError, IndexRangeError, SinkError, ConfigError,
)

__all__ = [
    # Color model
    'Color', 'palette_from_bytes', 'palette_to_bytes',
    # Quantizer
    'MAX_PALETTE_COLORS',
    'RemapTable', 'Merge', 'QuantizedPalette',
    'find_closest_pair', 'merge_step', 'quantize_palette',
    # Remapper
    'IndexRemapper',
    # Encoder
    'SYMBOLS', 'MAX_PALETTE_VALUES',
    'encode_symbol', 'encode_indices', 'format_palette_literal',
    'AssetEncoder',
    # Decoder
    'DecodedFrame', 'GifLayout', 'GifDecoder', 'scan_color_tables',
    # Exporter
    'AssetExporter',
    # Config
    'ConvertConfig', 'load_config', 'save_config', 'apply_args',
    # Pipeline
    'ConversionResult', 'convert_source', 'convert_file',
    # Errors
    'ConversionError', 'SourceError', 'UnsupportedFeatureError',
    'PaletteLookupError', 'IndexRangeError', 'SinkError', 'ConfigError',
]
