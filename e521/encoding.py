"""
NIST SP 800-185 string encodings.

left_encode / right_encode turn an integer into a self-delimiting byte
string, encode_string prefixes a byte string with its bit length, and bytepad
aligns a string to a multiple of the sponge rate. All of them work on whole
bytes only.
"""
from typing import Union

# Encoded integers must fit in 255 bytes
_MAX_ENCODABLE: int = 1 << 2040


def as_bytes(value: Union[bytes, bytearray, str]) -> bytes:
    """Return value as bytes, encoding text as UTF-8."""
    if isinstance(value, str):
        return value.encode('utf-8')
    return bytes(value)


def _minimal_bytes(x: int) -> bytes:
    if x < 0 or x >= _MAX_ENCODABLE:
        raise ValueError("value out of range for NIST encoding: 0 <= x < 2^2040")
    # Zero still takes one byte
    n = max(1, (x.bit_length() + 7) // 8)
    return x.to_bytes(n, 'big')


def left_encode(x: int) -> bytes:
    """Encode x as len(x) || x, parseable from the front.

    left_encode(0) == b'\\x01\\x00'
    """
    body = _minimal_bytes(x)
    return bytes([len(body)]) + body


def right_encode(x: int) -> bytes:
    """Encode x as x || len(x), parseable from the back.

    right_encode(0) == b'\\x00\\x01'
    """
    body = _minimal_bytes(x)
    return body + bytes([len(body)])


def encode_string(s: Union[bytes, str]) -> bytes:
    """Prefix s with the left_encode of its length in bits."""
    s = as_bytes(s)
    return left_encode(8 * len(s)) + s


def bytepad(x: bytes, w: int) -> bytes:
    """Prepend left_encode(w) to x and zero-fill to a multiple of w bytes."""
    if w <= 0:
        raise ValueError("bytepad width must be positive, got %d" % w)
    z = left_encode(w) + bytes(x)
    return z + bytes(-len(z) % w)
