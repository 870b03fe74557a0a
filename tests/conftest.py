import struct

import numpy as np
import pytest

from nutsprite.core import DecodedFrame

# LZW data for a single pixel with min code size 2: clear, index, end
PIXEL_DATA = {
    0: b'\x02\x02\x44\x01\x00',
    1: b'\x02\x02\x4c\x01\x00',
}


class FakeSource:
    """In-memory frame source with the decoder's interface"""

    def __init__(self, palette, frames):
        self._palette = bytes(palette)
        self._frames = list(frames)
        self.frames_read = 0

    def global_palette(self):
        return self._palette

    def frames(self):
        for frame in self._frames:
            self.frames_read += 1
            yield frame


def make_frame(indices, width=None, height=1, local_palette=None):
    indices = np.array(indices, dtype=np.uint8)
    width = len(indices) if width is None else width
    return DecodedFrame(width=width, height=height, pixels=indices, local_palette=local_palette)


def build_gif(global_table=b'', frames=(), width=1, height=1, trailer=True):
    """
    Assemble GIF bytes by hand.

    Each frame is (pixel_index, local_table or None) with an optional
    third item naming its transparent index, and covers a 1x1 image at
    the origin.
    """
    def table_flags(table):
        if not table:
            return 0
        entries = len(table) // 3
        return 0x80 | (entries.bit_length() - 2)

    out = bytearray(b'GIF89a')
    out += struct.pack('<HHBBB', width, height, table_flags(global_table), 0, 0)
    out += global_table
    for pixel, local, *transparent in frames:
        if transparent:
            out += b'\x21\xf9\x04\x01\x00\x00' + bytes([transparent[0]]) + b'\x00'
        out += b'\x2c' + struct.pack('<HHHHB', 0, 0, 1, 1, table_flags(local))
        if local:
            out += local
        out += PIXEL_DATA[pixel]
    if trailer:
        out += b'\x3b'
    return bytes(out)


@pytest.fixture
def two_color_palette():
    return bytes([0, 0, 0, 255, 255, 255])


@pytest.fixture
def gif_path(tmp_path, two_color_palette):
    """Two 1x1 frames sharing the global palette: pixel 0, then pixel 1"""
    path = tmp_path / 'blink.gif'
    path.write_bytes(build_gif(two_color_palette, frames=[(0, None), (1, None)]))
    return path


@pytest.fixture
def local_palette_gif_path(tmp_path, two_color_palette):
    """Second frame carries its own color table"""
    path = tmp_path / 'local.gif'
    local = bytes([255, 0, 0, 0, 0, 255])
    path.write_bytes(build_gif(two_color_palette, frames=[(0, None), (1, local)]))
    return path
