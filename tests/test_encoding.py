"""
Tests for the SP 800-185 encodings (left_encode, right_encode,
encode_string, bytepad).
"""
import pytest

from e521.encoding import as_bytes, bytepad, encode_string, left_encode, right_encode


@pytest.mark.parametrize("x,expected", [
    (0, b"\x01\x00"),
    (1, b"\x01\x01"),
    (136, b"\x01\x88"),
    (255, b"\x01\xff"),
    (256, b"\x02\x01\x00"),
    (1061246, b"\x03\x10\x31\x7e"),
])
def test_left_encode(x, expected):
    assert left_encode(x) == expected


@pytest.mark.parametrize("x,expected", [
    (0, b"\x00\x01"),
    (255, b"\xff\x01"),
    (256, b"\x01\x00\x02"),
])
def test_right_encode(x, expected):
    assert right_encode(x) == expected


def test_encoding_of_largest_value():
    x = (1 << 2040) - 1
    assert left_encode(x) == b"\xff" + b"\xff" * 255
    assert right_encode(x) == b"\xff" * 255 + b"\xff"


@pytest.mark.parametrize("x", [-1, 1 << 2040])
def test_encode_out_of_range(x):
    with pytest.raises(ValueError):
        left_encode(x)
    with pytest.raises(ValueError):
        right_encode(x)


def test_encode_string():
    assert encode_string(b"") == b"\x01\x00"
    assert encode_string(b"KMAC") == b"\x01\x20KMAC"
    assert encode_string("Email Signature") == b"\x01\x78Email Signature"
    # 40 bytes = 320 bits needs two length bytes
    assert encode_string(bytes(40))[:3] == b"\x02\x01\x40"


def test_bytepad_aligns_to_width():
    out = bytepad(b"\x01\x02", 8)
    assert out == b"\x01\x08\x01\x02\x00\x00\x00\x00"
    assert len(bytepad(bytes(134), 136)) == 136
    assert len(bytepad(bytes(135), 136)) == 272


@pytest.mark.parametrize("w", [0, -1])
def test_bytepad_rejects_non_positive_width(w):
    with pytest.raises(ValueError):
        bytepad(b"abc", w)


def test_as_bytes():
    assert as_bytes("SKE") == b"SKE"
    assert as_bytes(bytearray(b"\x00\x01")) == b"\x00\x01"
    assert as_bytes("é") == b"\xc3\xa9"
