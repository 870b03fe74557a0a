"""
Text Encoder - Serializes a quantized palette and pixel stream to Squirrel

Output document:

    PALETTE <- [r0, g0, b0, r1, g1, b1, ...]
    DATA <- @"<one symbol per pixel>"
    FRAME_COUNT <- <frames>
"""

import string
from typing import List, Sequence

import numpy as np

from .color import Color, palette_to_bytes
from .errors import IndexRangeError
from .quantizer import MAX_PALETTE_COLORS

# Index 0 -> 'A', 63 -> '/'
SYMBOLS = string.ascii_uppercase + string.ascii_lowercase + string.digits + '+/'

# 64 colors x 3 channels
MAX_PALETTE_VALUES = MAX_PALETTE_COLORS * 3

_SYMBOL_TABLE = np.array(list(SYMBOLS))


def encode_symbol(index: int) -> str:
    """Alphabet symbol for one quantized index"""
    index = int(index)
    if not 0 <= index < len(SYMBOLS):
        raise IndexRangeError(index, len(SYMBOLS))
    return SYMBOLS[index]


def encode_indices(indices) -> str:
    """Alphabet symbols for a run of quantized indices, in order"""
    arr = np.asarray(indices, dtype=np.int64).reshape(-1)
    if arr.size == 0:
        return ''
    bad = (arr < 0) | (arr >= len(SYMBOLS))
    if bad.any():
        raise IndexRangeError(int(arr[np.argmax(bad)]), len(SYMBOLS))
    return ''.join(_SYMBOL_TABLE[arr])


def format_palette_literal(colors: Sequence[Color]) -> str:
    """Squirrel array literal of the palette's channel values"""
    values = palette_to_bytes(colors)[:MAX_PALETTE_VALUES]
    return '[' + ', '.join(str(v) for v in values) + ']'


class AssetEncoder:
    """
    Builds the text asset incrementally: palette first, then frame data.

    Example:
        encoder = AssetEncoder(quantized.colors)
        for indices in frames:
            encoder.add_frame(indices)
        text = encoder.finish()
    """

    def __init__(self, palette: Sequence[Color], include_frame_count: bool = True):
        self.palette = list(palette)
        self.include_frame_count = include_frame_count
        self.frame_count = 0
        self.pixel_count = 0
        self._chunks: List[str] = []
        self._finished = False

    def add_frame(self, indices) -> None:
        """Append one frame's quantized indices (row-major)"""
        if self._finished:
            raise RuntimeError("Asset already finished")
        symbols = encode_indices(indices)
        self._chunks.append(symbols)
        self.frame_count += 1
        self.pixel_count += len(symbols)

    def finish(self) -> str:
        """Assemble the final document. Can only be called once."""
        if self._finished:
            raise RuntimeError("Asset already finished")
        self._finished = True

        lines = [
            f"PALETTE <- {format_palette_literal(self.palette)}",
            f'DATA <- @"{"".join(self._chunks)}"',
        ]
        if self.include_frame_count:
            lines.append(f"FRAME_COUNT <- {self.frame_count}")
        self._chunks = []
        return '\n'.join(lines)
