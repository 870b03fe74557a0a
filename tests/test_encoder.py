import pytest

from nutsprite.core import (
    SYMBOLS,
    AssetEncoder,
    Color,
    IndexRangeError,
    encode_indices,
    encode_symbol,
    format_palette_literal,
)


def test_alphabet_layout():
    assert len(SYMBOLS) == 64
    assert SYMBOLS[:26] == 'ABCDEFGHIJKLMNOPQRSTUVWXYZ'
    assert SYMBOLS[26:52] == 'abcdefghijklmnopqrstuvwxyz'
    assert SYMBOLS[52:62] == '0123456789'
    assert SYMBOLS[62:] == '+/'


def test_symbol_endpoints_and_injectivity():
    assert encode_symbol(0) == 'A'
    assert encode_symbol(63) == '/'
    assert len({encode_symbol(i) for i in range(64)}) == 64


def test_out_of_range_symbol():
    with pytest.raises(IndexRangeError):
        encode_symbol(64)
    with pytest.raises(IndexRangeError):
        encode_indices([0, 1, 64])


def test_encode_indices():
    assert encode_indices([0, 1, 0, 1]) == 'ABAB'
    assert encode_indices([]) == ''
    assert encode_indices(range(64)) == SYMBOLS


def test_palette_literal():
    colors = [Color(0, 0, 0), Color(255, 255, 255)]
    assert format_palette_literal(colors) == '[0, 0, 0, 255, 255, 255]'
    assert format_palette_literal([]) == '[]'


def test_palette_literal_is_capped_at_64_colors():
    colors = [Color(i, i, i) for i in range(70)]
    values = format_palette_literal(colors)[1:-1].split(', ')
    assert len(values) == 192
    assert values[-1] == '63'


def test_document_grammar():
    encoder = AssetEncoder([Color(0, 0, 0), Color(255, 255, 255)])
    encoder.add_frame([0, 1])
    encoder.add_frame([1, 0])
    assert encoder.finish() == (
        'PALETTE <- [0, 0, 0, 255, 255, 255]\n'
        'DATA <- @"ABBA"\n'
        'FRAME_COUNT <- 2'
    )
    assert encoder.frame_count == 2
    assert encoder.pixel_count == 4


def test_frame_count_line_is_optional():
    encoder = AssetEncoder([Color(1, 2, 3)], include_frame_count=False)
    encoder.add_frame([0])
    assert encoder.finish() == 'PALETTE <- [1, 2, 3]\nDATA <- @"A"'


def test_zero_frames_and_empty_frames():
    encoder = AssetEncoder([])
    encoder.add_frame([])
    assert encoder.finish() == 'PALETTE <- []\nDATA <- @""\nFRAME_COUNT <- 1'


def test_finish_only_once():
    encoder = AssetEncoder([Color(0, 0, 0)])
    encoder.finish()
    with pytest.raises(RuntimeError):
        encoder.finish()
    with pytest.raises(RuntimeError):
        encoder.add_frame([0])
