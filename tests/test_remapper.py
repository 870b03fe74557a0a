import numpy as np
import pytest

from nutsprite.core import (
    IndexRangeError,
    IndexRemapper,
    PaletteLookupError,
    RemapTable,
)


def test_translate_follows_the_table():
    remapper = IndexRemapper(RemapTable([0, 0, 1, 2]))
    assert [remapper.translate(i) for i in range(4)] == [0, 0, 1, 2]


def test_translate_frame_flattens_row_major():
    remapper = IndexRemapper(RemapTable([3, 2, 1, 0]))
    pixels = np.array([[0, 1], [2, 3]], dtype=np.uint8)
    assert remapper.translate_frame(pixels).tolist() == [3, 2, 1, 0]


def test_translate_frame_of_empty_buffer():
    remapper = IndexRemapper(RemapTable([0]))
    assert remapper.translate_frame(np.zeros(0, dtype=np.uint8)).size == 0


def test_unknown_index_is_a_lookup_error():
    remapper = IndexRemapper(RemapTable.identity(2))
    with pytest.raises(PaletteLookupError) as info:
        remapper.translate(2)
    assert info.value.index == 2
    assert isinstance(info.value, LookupError)

    with pytest.raises(PaletteLookupError):
        remapper.translate(-1)


def test_frame_reports_first_unknown_index():
    remapper = IndexRemapper(RemapTable.identity(2))
    with pytest.raises(PaletteLookupError) as info:
        remapper.translate_frame(np.array([0, 1, 7, 9], dtype=np.uint8))
    assert info.value.index == 7


def test_empty_table_rejects_every_pixel():
    remapper = IndexRemapper(RemapTable([]))
    with pytest.raises(PaletteLookupError):
        remapper.translate_frame(np.array([0], dtype=np.uint8))


def test_target_beyond_alphabet_is_a_range_error_not_clamped():
    remapper = IndexRemapper(RemapTable([0, 64]))
    assert remapper.translate(0) == 0
    with pytest.raises(IndexRangeError) as info:
        remapper.translate(1)
    assert info.value.index == 64

    with pytest.raises(IndexRangeError):
        remapper.translate_frame(np.array([0, 1], dtype=np.uint8))


def test_custom_limit():
    remapper = IndexRemapper(RemapTable([0, 1, 2]), limit=2)
    with pytest.raises(IndexRangeError):
        remapper.translate_frame([2])
