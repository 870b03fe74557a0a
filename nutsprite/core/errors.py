"""
Conversion Errors - Every failure the converter reports

All of them are fatal for a run: nothing is retried and no partial output
is written.
"""


class ConversionError(Exception):
    """Base class for all converter failures"""


class SourceError(ConversionError):
    """The input image cannot be opened, decoded or is malformed"""


class UnsupportedFeatureError(ConversionError):
    """The input uses a feature the converter does not handle (local palettes)"""


class PaletteLookupError(ConversionError, LookupError):
    """A pixel references a palette index with no remap entry"""

    def __init__(self, index: int, table_size: int):
        self.index = index
        self.table_size = table_size
        super().__init__(
            f"Palette did not contain entry {index} "
            f"(palette has {table_size} colors)"
        )


class IndexRangeError(ConversionError, ValueError):
    """A quantized index falls outside the encodable symbol range"""

    def __init__(self, index: int, limit: int):
        self.index = index
        self.limit = limit
        super().__init__(
            f"Quantized index {index} is outside [0, {limit}); "
            f"it cannot be encoded"
        )


class SinkError(ConversionError):
    """The encoded asset could not be written"""


class ConfigError(ConversionError, ValueError):
    """Invalid configuration value or unreadable config file"""
