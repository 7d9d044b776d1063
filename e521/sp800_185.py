"""
cSHAKE256 and KMACXOF256 from NIST SP 800-185, on top of the keccak sponge.

Both come in two flavours: one-shot functions taking an output length in
bits, and streaming objects with the same update/read/digest interface as
keccak.Shake256.
"""
from typing import Union

from e521.encoding import as_bytes, bytepad, encode_string, right_encode
from e521.keccak import RATE_BYTES, SHAKE_SUFFIX, KeccakSponge, append_suffix, shake256, sponge

# Domain suffix bits (00) of cSHAKE; the first pad bit follows right after
CSHAKE_SUFFIX: int = 0x04

KMAC_NAME: bytes = b"KMAC"

Text = Union[bytes, str]


def _cshake_prefix(function_name: bytes, customization: bytes) -> bytes:
    return bytepad(encode_string(function_name) + encode_string(customization), RATE_BYTES)


def _kmac_key_block(key: bytes) -> bytes:
    return bytepad(encode_string(key), RATE_BYTES)


def cshake256(data: bytes, bit_length: int, function_name: Text = b"", customization: Text = b"") -> bytes:
    """cSHAKE256(X, L, N, S).

    With both N and S empty this is plain SHAKE256.
    """
    n = as_bytes(function_name)
    s = as_bytes(customization)
    if not n and not s:
        return shake256(data, bit_length)
    return sponge(append_suffix(_cshake_prefix(n, s) + bytes(data), CSHAKE_SUFFIX), bit_length)


def kmacxof256(key: Text, data: bytes, bit_length: int, customization: Text = b"") -> bytes:
    """KMACXOF256(K, X, L, S).

    right_encode(0) at the end of the input marks the arbitrary-length
    (XOF) variant of KMAC.
    """
    x = _kmac_key_block(as_bytes(key)) + bytes(data) + right_encode(0)
    return cshake256(x, bit_length, KMAC_NAME, customization)


class CShake256(KeccakSponge):
    """Streaming cSHAKE256 with function name N and customization S."""

    name = "cshake_256"

    def __init__(self, function_name: Text = b"", customization: Text = b"") -> None:
        n = as_bytes(function_name)
        s = as_bytes(customization)
        if not n and not s:
            super().__init__(SHAKE_SUFFIX)
        else:
            super().__init__(CSHAKE_SUFFIX)
            self.update(_cshake_prefix(n, s))


class KmacXof256(CShake256):
    """Streaming KMACXOF256 keyed with key and customization S.

      mac = KmacXof256(b"key", "My Tagged Application").update(b"msg").digest(64)
    """

    name = "kmacxof_256"

    def __init__(self, key: Text, customization: Text = b"") -> None:
        super().__init__(KMAC_NAME, customization)
        self.update(_kmac_key_block(as_bytes(key)))

    def _finalize_input(self) -> None:
        self.update(right_encode(0))
