"""
Passphrase key derivation and private key export.
"""
import pytest

from e521.curve import G
from e521.exceptions import AuthenticationError
from e521.keys import KeyPair, derive_key_pair, export_private_key, import_private_key, private_scalar
from e521.sp800_185 import kmacxof256

PW = "correct horse battery staple"


@pytest.fixture(scope="module")
def pair():
    return derive_key_pair(PW)


def test_scalar_definition():
    s = private_scalar(PW)
    assert s == 4 * int.from_bytes(kmacxof256(PW.encode(), b"", 512, b"K"), "big")
    assert s % 4 == 0


def test_key_pair(pair):
    assert pair.scalar == private_scalar(PW)
    assert pair.public_key == G * pair.scalar
    assert pair.public_key.is_on_curve()
    assert not pair.public_key.is_identity()


def test_derivation_is_deterministic(pair):
    assert derive_key_pair(PW.encode()) == pair


def test_different_passphrases_differ(pair):
    assert private_scalar("another passphrase") != pair.scalar


def test_repr_hides_scalar(pair):
    assert str(pair.scalar) not in repr(pair)


def test_public_bytes(pair):
    assert pair.public_bytes() == pair.public_key.to_bytes()
    assert len(pair.public_bytes()) == 132


def test_private_key_export_round_trip(pair):
    blob = export_private_key(pair, "file password")
    assert len(blob) == 64 + 66 + 64
    assert import_private_key(blob, "file password") == pair


def test_private_key_import_wrong_passphrase(pair):
    blob = export_private_key(pair, "file password")
    with pytest.raises(AuthenticationError):
        import_private_key(blob, "guess")


def test_from_scalar(pair):
    assert KeyPair.from_scalar(pair.scalar) == pair
