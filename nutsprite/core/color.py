"""
Color Model - RGB triples and the one color-reduction rule the quantizer uses
"""

from dataclasses import dataclass
from typing import Iterable, List, Sequence, Tuple

import numpy as np


@dataclass(frozen=True)
class Color:
    """Immutable 8-bit RGB color. Equality is exact, there is no ordering."""
    r: int
    g: int
    b: int

    def __post_init__(self):
        for name in ('r', 'g', 'b'):
            value = getattr(self, name)
            if not 0 <= value <= 255:
                raise ValueError(f"Channel {name}={value} is outside 0-255")

    def mix(self, other: 'Color') -> 'Color':
        """
        Blend two colors by halving each channel before summing.

        Each operand is floor-divided first, so odd channels lose their
        remainder: mixing 255 with 0 gives 127, and mixing 255 with 255
        gives 254.
        """
        return Color(
            self.r // 2 + other.r // 2,
            self.g // 2 + other.g // 2,
            self.b // 2 + other.b // 2,
        )

    def distance(self, other: 'Color') -> float:
        """Euclidean distance over all three channels"""
        return float(np.sqrt(
            (float(self.r) - other.r) ** 2
            + (float(self.g) - other.g) ** 2
            + (float(self.b) - other.b) ** 2
        ))

    def as_tuple(self) -> Tuple[int, int, int]:
        return (self.r, self.g, self.b)

    def __str__(self):
        return f"({self.r}, {self.g}, {self.b})"


def palette_from_bytes(data: Iterable[int]) -> List[Color]:
    """Build a palette from flat RGB channel bytes"""
    raw = bytes(data)
    if len(raw) % 3:
        raise ValueError(
            f"Palette data length must be a multiple of 3, got {len(raw)}"
        )
    return [Color(raw[i], raw[i + 1], raw[i + 2]) for i in range(0, len(raw), 3)]


def palette_to_bytes(colors: Sequence[Color]) -> bytes:
    """Flatten a palette back into RGB channel bytes"""
    return bytes(channel for color in colors for channel in color.as_tuple())


def palette_to_array(colors: Sequence[Color]) -> np.ndarray:
    """Nx3 float64 array of the palette, for vectorized distance math"""
    if not colors:
        return np.zeros((0, 3), dtype=np.float64)
    return np.array([c.as_tuple() for c in colors], dtype=np.float64)
