"""
ECDHIES-style public-key encryption over E-521.

Encrypt m under public key V:
    k = 4 * random(512);  W = k*V;  Z = k*G
    (ke || ka) = KMACXOF256(W_x, "", 1024, "P")
    c = KMACXOF256(ke, "", |m|, "PKE") xor m
    t = KMACXOF256(ka, m, 512, "PKA")

Cryptogram layout: Z (132 bytes) || c (len(m) bytes) || t (64 bytes)
"""
import logging
import secrets
from typing import NamedTuple, Tuple, Union

from e521.curve import COFACTOR, E521, G, POINT_BYTES
from e521.exceptions import CryptogramFormatError
from e521.keys import KeyPair, private_scalar
from e521.sp800_185 import kmacxof256
from e521.symmetric import TAG_BYTES, Decryption, Passphrase, open_sealed, seal, split_keys

logger = logging.getLogger(__name__)


class EcCryptogram(NamedTuple):
    Z: E521
    c: bytes
    t: bytes

    def to_bytes(self) -> bytes:
        return self.Z.to_bytes() + self.c + self.t

    @classmethod
    def from_bytes(cls, data: bytes) -> "EcCryptogram":
        """Parse Z || c || t; raises CryptogramFormatError or PointDecodingError."""
        if len(data) < POINT_BYTES + TAG_BYTES:
            raise CryptogramFormatError(
                "elliptic cryptogram needs at least %d bytes, got %d" % (POINT_BYTES + TAG_BYTES, len(data)))
        z = E521.from_bytes(bytes(data[:POINT_BYTES]))
        return cls(z, bytes(data[POINT_BYTES:len(data) - TAG_BYTES]), bytes(data[len(data) - TAG_BYTES:]))


def _shared_keys(w: E521) -> Tuple[bytes, bytes]:
    return split_keys(kmacxof256(w.x_bytes(), b"", 1024, b"P"))


def asymmetric_encrypt(m: bytes, public_key: E521) -> bytes:
    """Encrypt m under the public point public_key."""
    k = COFACTOR * int.from_bytes(secrets.token_bytes(64), 'big')
    w = public_key * k
    z = G * k
    ke, ka = _shared_keys(w)
    c, t = seal(ke, ka, bytes(m), b"PKE", b"PKA")
    logger.debug("asymmetric encrypt: %d byte message", len(m))
    return EcCryptogram(z, c, t).to_bytes()


def decrypt_with_scalar(scalar: int, cryptogram: bytes) -> Decryption:
    """Decrypt Z || c || t with the private scalar s (W = s*Z)."""
    z, c, t = EcCryptogram.from_bytes(cryptogram)
    ke, ka = _shared_keys(z * scalar)
    result = open_sealed(ke, ka, c, t, b"PKE", b"PKA")
    if not result.valid:
        logger.warning("asymmetric decrypt: authentication tag mismatch")
    return result


def asymmetric_decrypt(passphrase: Union[Passphrase, KeyPair], cryptogram: bytes) -> Decryption:
    """Decrypt Z || c || t with the key pair derived from passphrase.

    An already derived KeyPair is accepted in place of the passphrase.
    """
    if isinstance(passphrase, KeyPair):
        return decrypt_with_scalar(passphrase.scalar, cryptogram)
    return decrypt_with_scalar(private_scalar(passphrase), cryptogram)
