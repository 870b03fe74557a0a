"""
Index Remapper - Translates original pixel indices into quantized ones
"""

import numpy as np

from .errors import IndexRangeError, PaletteLookupError
from .quantizer import MAX_PALETTE_COLORS, RemapTable


class IndexRemapper:
    """
    Applies a RemapTable to pixel data.

    Both failure modes are fatal: an index missing from the table means the
    pixel data and palette disagree, and a target at or above the limit
    cannot be encoded. Neither is clamped.
    """

    def __init__(self, table: RemapTable, limit: int = MAX_PALETTE_COLORS):
        self.table = table
        self.limit = limit

    def translate(self, index: int) -> int:
        """Quantized index for one original palette index"""
        index = int(index)
        if index < 0 or index >= len(self.table):
            raise PaletteLookupError(index, len(self.table))
        target = self.table[index]
        if not 0 <= target < self.limit:
            raise IndexRangeError(target, self.limit)
        return target

    def translate_frame(self, pixels) -> np.ndarray:
        """
        Quantized indices for a whole pixel buffer.

        Multi-dimensional buffers are flattened row-major. The first
        offending index (in buffer order) is reported on failure.
        """
        flat = np.asarray(pixels).reshape(-1).astype(np.int64, copy=False)
        if flat.size == 0:
            return np.zeros(0, dtype=np.int64)

        missing = (flat < 0) | (flat >= len(self.table))
        if missing.any():
            first = int(flat[np.argmax(missing)])
            raise PaletteLookupError(first, len(self.table))

        mapped = self.table.targets[flat]
        out_of_range = (mapped < 0) | (mapped >= self.limit)
        if out_of_range.any():
            raise IndexRangeError(int(mapped[np.argmax(out_of_range)]), self.limit)

        return mapped
