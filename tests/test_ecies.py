"""
ECDHIES-style encryption under E-521 public keys.
"""
import pytest

from e521.curve import E521, G
from e521.ecies import EcCryptogram, asymmetric_decrypt, asymmetric_encrypt, decrypt_with_scalar
from e521.exceptions import AuthenticationError, CryptogramFormatError, PointDecodingError
from e521.keys import derive_key_pair

PW = "recipient passphrase"


@pytest.fixture(scope="module")
def pair():
    return derive_key_pair(PW)


@pytest.mark.parametrize("m", [b"", b"attack at dawn", bytes(range(200))])
def test_round_trip(pair, m):
    cryptogram = asymmetric_encrypt(m, pair.public_key)
    assert len(cryptogram) == 132 + len(m) + 64
    assert asymmetric_decrypt(PW, cryptogram) == (m, True)


def test_decrypt_with_key_pair_or_scalar(pair):
    cryptogram = asymmetric_encrypt(b"hello", pair.public_key)
    assert asymmetric_decrypt(pair, cryptogram).unwrap() == b"hello"
    assert decrypt_with_scalar(pair.scalar, cryptogram).unwrap() == b"hello"


def test_ephemeral_point_is_on_curve(pair):
    parsed = EcCryptogram.from_bytes(asymmetric_encrypt(b"x", pair.public_key))
    assert parsed.Z.is_on_curve()
    assert parsed.Z != G


def test_wrong_passphrase(pair):
    cryptogram = asymmetric_encrypt(b"for your eyes only", pair.public_key)
    result = asymmetric_decrypt("not the passphrase", cryptogram)
    assert result.valid is False
    with pytest.raises(AuthenticationError):
        result.unwrap()


def test_tampered_ciphertext(pair):
    cryptogram = bytearray(asymmetric_encrypt(b"for your eyes only", pair.public_key))
    cryptogram[140] ^= 0x80
    assert asymmetric_decrypt(pair, bytes(cryptogram)).valid is False


def test_short_cryptogram(pair):
    with pytest.raises(CryptogramFormatError):
        asymmetric_decrypt(pair, bytes(195))


def test_bad_ephemeral_point(pair):
    bogus = E521(5, 1).to_bytes() + b"abc" + bytes(64)
    with pytest.raises(PointDecodingError):
        asymmetric_decrypt(pair, bogus)
