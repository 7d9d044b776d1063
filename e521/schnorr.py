"""
Schnorr signatures over E-521 with deterministic nonces.

Sign m under passphrase pw:
    s = 4 * int(KMACXOF256(pw, "", 512, "K"))
    k = 4 * int(KMACXOF256(str(s), m, 512, "N"))
    U = k*G
    h = int(KMACXOF256(U_x, m, 512, "T"))
    z = (k - h*s) mod R

Verify (h, z) against V:
    U = z*G + h*V;  accept iff int(KMACXOF256(U_x, m, 512, "T")) == h

h is used unscaled on both sides.
"""
import logging
from typing import NamedTuple, Union

from e521.curve import COFACTOR, COORDINATE_BYTES, E521, G, R, coordinate_bytes
from e521.exceptions import SignatureFormatError
from e521.keys import private_scalar
from e521.sp800_185 import kmacxof256
from e521.symmetric import Passphrase

logger = logging.getLogger(__name__)

SIGNATURE_BYTES: int = 2 * COORDINATE_BYTES


class Signature(NamedTuple):
    h: int
    z: int

    def to_bytes(self) -> bytes:
        """h || z as two 66-byte big-endian integers."""
        return coordinate_bytes(self.h) + coordinate_bytes(self.z)

    @classmethod
    def from_bytes(cls, data: bytes) -> "Signature":
        if len(data) != SIGNATURE_BYTES:
            raise SignatureFormatError("signature must be %d bytes, got %d" % (SIGNATURE_BYTES, len(data)))
        return cls(int.from_bytes(data[:COORDINATE_BYTES], 'big'), int.from_bytes(data[COORDINATE_BYTES:], 'big'))

    @classmethod
    def parse(cls, text: Union[bytes, str]) -> "Signature":
        """Parse the "h z" decimal text form produced by str().

        Accepts the raw bytes of a signature file as well.
        """
        if isinstance(text, (bytes, bytearray)):
            try:
                text = text.decode('ascii')
            except UnicodeDecodeError as e:
                raise SignatureFormatError("signature text must be ASCII") from e
        parts = text.split()
        if len(parts) != 2:
            raise SignatureFormatError("expected two decimal integers, got %d fields" % len(parts))
        try:
            h, z = (int(p, 10) for p in parts)
        except ValueError as e:
            raise SignatureFormatError("signature fields must be decimal integers") from e
        if not 0 <= h < 1 << 512 or not 0 <= z < R:
            raise SignatureFormatError("signature fields out of range: need 0 <= h < 2^512 and 0 <= z < R")
        return cls(h, z)

    def __str__(self) -> str:
        return "%d %d" % (self.h, self.z)


def _challenge(u: E521, m: bytes) -> int:
    return int.from_bytes(kmacxof256(u.x_bytes(), m, 512, b"T"), 'big')


def sign_with_scalar(m: bytes, s: int) -> Signature:
    k = COFACTOR * int.from_bytes(kmacxof256(str(s).encode('ascii'), m, 512, b"N"), 'big')
    u = G * k
    h = _challenge(u, m)
    z = (k - h * s) % R
    return Signature(h, z)


def sign(m: bytes, passphrase: Passphrase) -> Signature:
    """Sign m with the key pair derived from passphrase."""
    return sign_with_scalar(bytes(m), private_scalar(passphrase))


def verify(signature: Signature, m: bytes, public_key: E521) -> bool:
    """True iff signature is valid for m under public_key. Never raises on mismatch."""
    h, z = signature
    u = G * z + public_key * h
    valid = _challenge(u, bytes(m)) == h
    logger.debug("signature verification %s", "passed" if valid else "failed")
    return valid
