"""
Passphrase-based primitives built on KMACXOF256: hashing, MACs and
authenticated symmetric encryption.

Symmetric cryptogram layout:

    z (64 bytes random salt) || c (len(m) bytes) || t (64 bytes tag)
"""
import logging
import secrets
from typing import NamedTuple, Tuple, Union

from cryptography.hazmat.primitives import constant_time

from e521.encoding import as_bytes
from e521.exceptions import AuthenticationError, CryptogramFormatError
from e521.sp800_185 import kmacxof256

logger = logging.getLogger(__name__)

Passphrase = Union[bytes, str]

SALT_BYTES: int = 64
TAG_BYTES: int = 64
KEY_BYTES: int = 64


class Decryption(NamedTuple):
    """Outcome of a decryption: the recovered bytes and whether the tag matched.

    When valid is False, message holds whatever the keystream produced and
    must not be trusted. unwrap() turns a failure into AuthenticationError.
    """

    message: bytes
    valid: bool

    def unwrap(self) -> bytes:
        if not self.valid:
            raise AuthenticationError("authentication tag mismatch")
        return self.message


class SymmetricCryptogram(NamedTuple):
    z: bytes
    c: bytes
    t: bytes

    def to_bytes(self) -> bytes:
        return self.z + self.c + self.t

    @classmethod
    def from_bytes(cls, data: bytes) -> "SymmetricCryptogram":
        if len(data) < SALT_BYTES + TAG_BYTES:
            raise CryptogramFormatError(
                "symmetric cryptogram needs at least %d bytes, got %d" % (SALT_BYTES + TAG_BYTES, len(data)))
        return cls(bytes(data[:SALT_BYTES]), bytes(data[SALT_BYTES:len(data) - TAG_BYTES]),
                   bytes(data[len(data) - TAG_BYTES:]))


def xor_bytes(a: bytes, b: bytes) -> bytes:
    if len(a) != len(b):
        raise ValueError("cannot xor %d bytes with %d bytes" % (len(a), len(b)))
    return bytes(i ^ j for i, j in zip(a, b))


def split_keys(key_material: bytes) -> Tuple[bytes, bytes]:
    """Split 128 bytes of KMAC output into (ke, ka)."""
    return key_material[:KEY_BYTES], key_material[KEY_BYTES:2 * KEY_BYTES]


def seal(ke: bytes, ka: bytes, m: bytes, cipher_label: bytes, tag_label: bytes) -> Tuple[bytes, bytes]:
    """Encrypt m under ke and tag it under ka; returns (c, t)."""
    c = xor_bytes(kmacxof256(ke, b"", 8 * len(m), cipher_label), m)
    t = kmacxof256(ka, m, 8 * TAG_BYTES, tag_label)
    return c, t


def open_sealed(ke: bytes, ka: bytes, c: bytes, t: bytes, cipher_label: bytes, tag_label: bytes) -> Decryption:
    """Inverse of seal(); the tag comparison is constant time."""
    m = xor_bytes(kmacxof256(ke, b"", 8 * len(c), cipher_label), c)
    t_prime = kmacxof256(ka, m, 8 * TAG_BYTES, tag_label)
    return Decryption(m, constant_time.bytes_eq(t, t_prime))


def compute_hash(m: bytes) -> bytes:
    """64-byte cryptographic hash of m: KMACXOF256("", m, 512, "D")."""
    return kmacxof256(b"", m, 512, b"D")


def compute_mac(passphrase: Passphrase, m: bytes) -> bytes:
    """64-byte authentication tag of m under passphrase: KMACXOF256(pw, m, 512, "T")."""
    return kmacxof256(as_bytes(passphrase), m, 512, b"T")


def _session_keys(z: bytes, passphrase: Passphrase) -> Tuple[bytes, bytes]:
    return split_keys(kmacxof256(z + as_bytes(passphrase), b"", 1024, b"S"))


def symmetric_encrypt(passphrase: Passphrase, m: bytes) -> bytes:
    """Encrypt m under passphrase; returns z || c || t."""
    z = secrets.token_bytes(SALT_BYTES)
    ke, ka = _session_keys(z, passphrase)
    c, t = seal(ke, ka, bytes(m), b"SKE", b"SKA")
    logger.debug("symmetric encrypt: %d byte message", len(m))
    return SymmetricCryptogram(z, c, t).to_bytes()


def symmetric_decrypt(passphrase: Passphrase, cryptogram: bytes) -> Decryption:
    """Decrypt z || c || t under passphrase.

    Raises CryptogramFormatError when the input cannot hold z and t.
    """
    z, c, t = SymmetricCryptogram.from_bytes(cryptogram)
    ke, ka = _session_keys(z, passphrase)
    result = open_sealed(ke, ka, c, t, b"SKE", b"SKA")
    if not result.valid:
        logger.warning("symmetric decrypt: authentication tag mismatch")
    return result
