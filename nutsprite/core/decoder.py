"""
GIF Decoder - Reads palette-indexed frames from animated GIFs

Pixels come from Pillow. Color tables come from a light walk over the GIF
block structure, since Pillow does not say which frames carry their own
local color table.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import BinaryIO, Iterator, List, Optional, Tuple

import numpy as np
from PIL import GifImagePlugin, Image, ImageSequence, UnidentifiedImageError

from .errors import SourceError

logger = logging.getLogger(__name__)

GIF_SIGNATURES = (b'GIF87a', b'GIF89a')

EXTENSION_INTRODUCER = 0x21
IMAGE_SEPARATOR = 0x2C
TRAILER = 0x3B


@dataclass
class DecodedFrame:
    """One frame's pixel indices into the global palette"""
    width: int
    height: int
    pixels: np.ndarray  # row-major palette indices
    local_palette: Optional[bytes] = None

    @property
    def has_local_palette(self) -> bool:
        return bool(self.local_palette)


@dataclass
class GifLayout:
    """Color tables and screen size found in a GIF's block structure"""
    width: int
    height: int
    global_palette: bytes = b''
    local_palettes: List[Optional[bytes]] = field(default_factory=list)

    @property
    def frame_count(self) -> int:
        return len(self.local_palettes)


# =============================================================================
# Block Scanner
# =============================================================================

def _read(fp: BinaryIO, n: int) -> bytes:
    data = fp.read(n)
    if len(data) < n:
        raise EOFError(f"Unexpected end of GIF data reading {n} bytes")
    return data


def _color_table_size(packed: int) -> int:
    return 3 * (2 ** ((packed & 0x07) + 1))


def _skip_sub_blocks(fp: BinaryIO) -> None:
    while True:
        size = _read(fp, 1)[0]
        if size == 0:
            return
        _read(fp, size)


def scan_color_tables(fp: BinaryIO) -> GifLayout:
    """
    Walk a GIF stream and collect its color tables.

    Image data is skipped, not decompressed. A stream that ends without a
    trailer stops the scan at the last complete frame.
    """
    try:
        header = _read(fp, 13)
    except EOFError as e:
        raise SourceError("GIF header is truncated") from e

    if header[:6] not in GIF_SIGNATURES:
        raise SourceError("Not a GIF file (missing GIF87a/GIF89a signature)")

    width = header[6] | (header[7] << 8)
    height = header[8] | (header[9] << 8)
    packed = header[10]

    layout = GifLayout(width=width, height=height)

    try:
        if packed & 0x80:
            layout.global_palette = _read(fp, _color_table_size(packed))

        while True:
            block = fp.read(1)
            if not block or block[0] == TRAILER:
                break

            if block[0] == EXTENSION_INTRODUCER:
                _read(fp, 1)  # label
                _skip_sub_blocks(fp)
            elif block[0] == IMAGE_SEPARATOR:
                descriptor = _read(fp, 9)
                flags = descriptor[8]
                local = _read(fp, _color_table_size(flags)) if flags & 0x80 else None
                _read(fp, 1)  # LZW minimum code size
                _skip_sub_blocks(fp)
                layout.local_palettes.append(local)
            else:
                raise SourceError(f"Unknown GIF block 0x{block[0]:02X}")
    except EOFError:
        logger.warning("GIF data ends early; keeping %d complete frames", layout.frame_count)

    return layout


# =============================================================================
# Decoder
# =============================================================================

class GifDecoder:
    """
    Frame source backed by Pillow.

    Example:
        with GifDecoder('convert.gif') as decoder:
            palette = decoder.global_palette()
            for frame in decoder.frames():
                ...
    """

    SUPPORTED_FORMATS = {'.gif'}

    def __init__(self, path):
        self.path = Path(path)
        self._image: Optional[Image.Image] = None
        self._layout: Optional[GifLayout] = None
        self._consumed = False

    def __enter__(self) -> 'GifDecoder':
        self.open()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def open(self) -> None:
        """Open the file and scan its color tables"""
        if not self.path.exists():
            raise SourceError(f"File not found: {self.path}")

        suffix = self.path.suffix.lower()
        if suffix not in self.SUPPORTED_FORMATS:
            logger.debug("Unexpected suffix %r, trying to decode as GIF anyway", suffix)

        try:
            with open(self.path, 'rb') as f:
                self._layout = scan_color_tables(f)
            self._image = Image.open(self.path)
        except (OSError, UnidentifiedImageError) as e:
            raise SourceError(f"Could not decode {self.path}: {e}") from e

        if self._image.format != 'GIF':
            self.close()
            raise SourceError(f"{self.path} is not a GIF image")

        logger.debug(
            "Opened %s: %dx%d, %d frames, %d global colors",
            self.path, self._layout.width, self._layout.height,
            self._layout.frame_count, len(self._layout.global_palette) // 3,
        )

    def close(self) -> None:
        if self._image is not None:
            self._image.close()
            self._image = None

    @property
    def layout(self) -> GifLayout:
        if self._layout is None:
            raise RuntimeError("Decoder is not open")
        return self._layout

    @property
    def size(self) -> Tuple[int, int]:
        return (self.layout.width, self.layout.height)

    def global_palette(self) -> bytes:
        """Raw global color table, flat RGB triples"""
        return self.layout.global_palette

    def frames(self) -> Iterator[DecodedFrame]:
        """
        Yield frames in file order. Single pass: a second call raises.

        Frames stay palette-indexed as long as they share the global
        palette, so each one is the composited canvas in global indices.
        """
        if self._image is None:
            raise RuntimeError("Decoder is not open")
        if self._consumed:
            raise RuntimeError("Frames can only be read once")
        self._consumed = True

        local_palettes = self.layout.local_palettes
        previous_strategy = GifImagePlugin.LOADING_STRATEGY
        GifImagePlugin.LOADING_STRATEGY = (
            GifImagePlugin.LoadingStrategy.RGB_AFTER_DIFFERENT_PALETTE_ONLY
        )
        try:
            for index, frame in enumerate(ImageSequence.Iterator(self._image)):
                local = local_palettes[index] if index < len(local_palettes) else None
                yield self._to_decoded(frame, index, local)
        except (OSError, EOFError) as e:
            raise SourceError(f"Could not decode frame of {self.path}: {e}") from e
        finally:
            GifImagePlugin.LOADING_STRATEGY = previous_strategy

    @staticmethod
    def _to_decoded(frame: Image.Image, index: int, local: Optional[bytes]) -> DecodedFrame:
        if local:
            # Pixel data is meaningless without the local table; the caller rejects it
            return DecodedFrame(
                width=frame.width,
                height=frame.height,
                pixels=np.zeros(frame.width * frame.height, dtype=np.uint8),
                local_palette=local,
            )

        if frame.mode not in ('P', 'L'):
            raise SourceError(f"Frame {index} is not palette-indexed (mode {frame.mode})")

        pixels = np.array(frame, dtype=np.uint8).reshape(-1)
        return DecodedFrame(width=frame.width, height=frame.height, pixels=pixels)
