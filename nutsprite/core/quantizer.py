"""
Palette Quantizer - Greedy nearest-pair palette reduction

Reduces a palette (up to 256 colors) to at most 64 by repeatedly merging
the two closest colors, and tracks where every original index ends up.

Algorithm, per step:
1. Find the closest pair (a, b), a < b, scanning row-major so the first
   minimum found wins ties
2. Replace palette[a] with mix(palette[a], palette[b])
3. Remove palette[b]; everything after it shifts down one slot
4. Rebuild the remap table: b -> a, anything above b moves down by one
"""

import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Sequence, Tuple, Union

import numpy as np

from .color import Color, palette_from_bytes, palette_to_array

logger = logging.getLogger(__name__)

MAX_PALETTE_COLORS = 64


# =============================================================================
# Remap Table
# =============================================================================

class RemapTable:
    """
    Immutable mapping from original palette index to quantized index.

    Total over 0..len-1: it is built once from the whole original palette,
    whether or not pixels reference every entry.
    """

    def __init__(self, targets: Iterable[int]):
        arr = np.array(list(targets), dtype=np.int64)
        arr.setflags(write=False)
        self._targets = arr

    @classmethod
    def identity(cls, size: int) -> 'RemapTable':
        return cls(range(size))

    @property
    def targets(self) -> np.ndarray:
        """Read-only array of quantized indices, one per original index"""
        return self._targets

    def merged(self, removed: int, surviving: int) -> 'RemapTable':
        """
        Table after palette[removed] was folded into palette[surviving].

        Entries pointing at the removed slot now point at the survivor,
        entries above it shift down by one. Requires surviving < removed.
        """
        if not surviving < removed:
            raise ValueError(
                f"Surviving index {surviving} must be below removed index {removed}"
            )
        old = self._targets
        new = old.copy()
        new[old == removed] = surviving
        new[old > removed] -= 1
        return RemapTable(new)

    def __len__(self):
        return len(self._targets)

    def __getitem__(self, index: int) -> int:
        return int(self._targets[index])

    def __iter__(self):
        return (int(t) for t in self._targets)

    def __eq__(self, other):
        if not isinstance(other, RemapTable):
            return NotImplemented
        return np.array_equal(self._targets, other._targets)

    def __hash__(self):
        return hash(self._targets.tobytes())

    def __repr__(self):
        return f"RemapTable({list(self)})"

    def as_dict(self) -> dict:
        return {i: t for i, t in enumerate(self)}


# =============================================================================
# Merge Bookkeeping
# =============================================================================

@dataclass(frozen=True)
class Merge:
    """One reduction step"""
    surviving: int
    removed: int
    distance: float
    kept_color: Color
    removed_color: Color
    result: Color


@dataclass
class QuantizedPalette:
    """Reduced palette, remap table and the merges that produced them"""
    colors: List[Color]
    remap: RemapTable
    merges: List[Merge] = field(default_factory=list)
    source_size: int = 0

    def __len__(self):
        return len(self.colors)

    @property
    def merge_count(self) -> int:
        return len(self.merges)


# =============================================================================
# Pair Search
# =============================================================================

def find_closest_pair(colors: Sequence[Color]) -> Tuple[int, int, float]:
    """
    Find the two distinct palette positions with the smallest distance.

    Returns (a, b, distance) with a < b. Ties go to the pair met first
    when iterating a ascending, then b ascending from a + 1. A color is
    never compared against itself.
    """
    n = len(colors)
    if n < 2:
        raise ValueError(f"Need at least two colors to find a pair, got {n}")

    rgb = palette_to_array(colors)
    diff = rgb[:, None, :] - rgb[None, :, :]
    dist = np.sqrt(np.sum(diff ** 2, axis=2))

    # Only the strict upper triangle holds candidate pairs
    dist[np.tril_indices(n)] = np.inf

    # argmin returns the first minimum in row-major order
    flat = int(np.argmin(dist))
    a, b = divmod(flat, n)
    return a, b, float(dist[a, b])


# =============================================================================
# Quantization
# =============================================================================

def merge_step(
    colors: Sequence[Color],
    remap: RemapTable,
) -> Tuple[List[Color], RemapTable, Merge]:
    """Apply one closest-pair merge, returning new palette, table and record"""
    a, b, distance = find_closest_pair(colors)
    kept, removed = colors[a], colors[b]
    mixed = kept.mix(removed)

    new_colors = list(colors)
    new_colors[a] = mixed
    del new_colors[b]

    merge = Merge(
        surviving=a,
        removed=b,
        distance=distance,
        kept_color=kept,
        removed_color=removed,
        result=mixed,
    )
    return new_colors, remap.merged(removed=b, surviving=a), merge


def quantize_palette(
    palette: Union[bytes, bytearray, np.ndarray, Sequence[int], Sequence[Color]],
    max_colors: int = MAX_PALETTE_COLORS,
) -> QuantizedPalette:
    """
    Reduce a palette to at most max_colors entries.

    Args:
        palette: Flat RGB channel bytes or ints, an array of channel values
            (flat or one row per color), or a sequence of Color
        max_colors: Target size, 1-64

    Returns:
        QuantizedPalette with exactly max(0, N - max_colors) merges
    """
    if not 1 <= max_colors <= MAX_PALETTE_COLORS:
        raise ValueError(
            f"max_colors must be between 1 and {MAX_PALETTE_COLORS}, got {max_colors}"
        )

    if isinstance(palette, np.ndarray):
        palette = palette.reshape(-1).tolist()
    if len(palette) and isinstance(palette[0], Color):
        colors = list(palette)
    else:
        colors = palette_from_bytes(palette)

    source_size = len(colors)
    remap = RemapTable.identity(source_size)
    merges: List[Merge] = []

    while len(colors) > max_colors:
        colors, remap, merge = merge_step(colors, remap)
        merges.append(merge)
        logger.debug(
            "Combining colors %s and %s (indexes %d and %d) into %s",
            merge.kept_color, merge.removed_color,
            merge.surviving, merge.removed, merge.result,
        )

    if merges:
        logger.info(
            "Palette simplified from %d to %d colors in %d merges",
            source_size, len(colors), len(merges),
        )
    else:
        logger.debug("Palette has %d colors, no reduction needed", source_size)

    return QuantizedPalette(
        colors=colors,
        remap=remap,
        merges=merges,
        source_size=source_size,
    )
