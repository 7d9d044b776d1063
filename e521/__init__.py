"""E-521 public-key toolkit on a pure-Python Keccak / KMACXOF256 core."""
from e521.curve import E521, G, P, R
from e521.ecies import asymmetric_decrypt, asymmetric_encrypt
from e521.exceptions import (AuthenticationError, CryptogramFormatError, DecodingError, E521Error,
                             PointDecodingError, PointNotFoundError, SignatureFormatError)
from e521.keccak import Shake256, shake256, sponge
from e521.keys import KeyPair, derive_key_pair, export_private_key, import_private_key
from e521.schnorr import Signature, sign, verify
from e521.sp800_185 import CShake256, KmacXof256, cshake256, kmacxof256
from e521.symmetric import Decryption, compute_hash, compute_mac, symmetric_decrypt, symmetric_encrypt

__version__ = "0.1.0"
