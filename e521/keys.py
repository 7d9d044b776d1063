"""
Deterministic E-521 key pairs derived from a passphrase.

    s = 4 * int(KMACXOF256(pw, "", 512, "K"))
    V = s * G

Multiplying by the cofactor 4 puts s*G in the prime-order subgroup.
"""
import logging
from typing import NamedTuple

from e521.curve import COFACTOR, COORDINATE_BYTES, E521, G, coordinate_bytes
from e521.encoding import as_bytes
from e521.exceptions import DecodingError
from e521.sp800_185 import kmacxof256
from e521.symmetric import Passphrase, symmetric_decrypt, symmetric_encrypt

logger = logging.getLogger(__name__)


def private_scalar(passphrase: Passphrase) -> int:
    """The private scalar s for passphrase; always a multiple of 4."""
    digest = kmacxof256(as_bytes(passphrase), b"", 512, b"K")
    return COFACTOR * int.from_bytes(digest, 'big')


class KeyPair(NamedTuple):
    """Private scalar and public point V = scalar * G."""

    scalar: int
    public_key: E521

    @classmethod
    def from_scalar(cls, scalar: int) -> "KeyPair":
        return cls(scalar, G * scalar)

    @classmethod
    def from_passphrase(cls, passphrase: Passphrase) -> "KeyPair":
        pair = cls.from_scalar(private_scalar(passphrase))
        logger.debug("derived key pair with public x %s...", pair.public_key.x_bytes()[:4].hex())
        return pair

    def public_bytes(self) -> bytes:
        return self.public_key.to_bytes()

    def __repr__(self) -> str:
        # Keep the scalar out of logs and tracebacks
        return "KeyPair(public_key=%r)" % (self.public_key,)


def derive_key_pair(passphrase: Passphrase) -> KeyPair:
    return KeyPair.from_passphrase(passphrase)


def export_private_key(key_pair: KeyPair, passphrase: Passphrase) -> bytes:
    """Encrypt the private scalar under passphrase as a symmetric cryptogram."""
    return symmetric_encrypt(passphrase, coordinate_bytes(key_pair.scalar))


def import_private_key(cryptogram: bytes, passphrase: Passphrase) -> KeyPair:
    """Recover a key pair written by export_private_key().

    Raises AuthenticationError for a wrong passphrase or a tampered file.
    """
    raw = symmetric_decrypt(passphrase, cryptogram).unwrap()
    if len(raw) != COORDINATE_BYTES:
        raise DecodingError("private key must be %d bytes, got %d" % (COORDINATE_BYTES, len(raw)))
    return KeyPair.from_scalar(int.from_bytes(raw, 'big'))
