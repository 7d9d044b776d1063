"""
e521 - command line front end for the E-521 / KMACXOF256 toolkit.

Usage:
  e521 hash FILE
  e521 mac FILE
  e521 encrypt FILE --out OUT
  e521 decrypt FILE --out OUT
  e521 keygen --out PUBFILE [--private-out FILE]
  e521 ec-encrypt FILE --public-key PUBFILE --out OUT
  e521 ec-decrypt FILE --out OUT [--private-key FILE]
  e521 sign FILE --out SIGFILE
  e521 verify FILE SIGFILE --public-key PUBFILE

Passphrases come from --passphrase, then $E521_PASSPHRASE, then a prompt.
Binary files are read and written as upper-case hex text unless
E521_OUTPUT_ENCODING=raw.

Exit codes: 0=OK, 1=authentication/verification failure, 2=usage/error.
"""
from __future__ import annotations

import argparse
import getpass
import logging
import os
import sys
from pathlib import Path

from e521 import __version__
from e521.config import Settings, load_settings
from e521.curve import E521
from e521.ecies import asymmetric_decrypt, asymmetric_encrypt
from e521.exceptions import AuthenticationError, DecodingError, E521Error
from e521.keys import KeyPair, export_private_key, import_private_key
from e521.schnorr import Signature, sign, verify
from e521.symmetric import compute_hash, compute_mac, symmetric_decrypt, symmetric_encrypt

logger = logging.getLogger("e521.cli")

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_ERROR = 2


# ---------------- helpers ----------------

def _passphrase(args: argparse.Namespace, settings: Settings, prompt: str = "Passphrase: ") -> str:
    if args.passphrase is not None:
        return args.passphrase
    env = os.environ.get(settings.passphrase_env)
    if env is not None:
        return env
    return getpass.getpass(prompt)


def _read_blob(path: str, settings: Settings) -> bytes:
    """Read a binary artifact written by _write_blob under the same settings."""
    data = Path(path).read_bytes()
    if settings.output_encoding == "raw":
        return data
    try:
        return bytes.fromhex(data.decode('ascii'))
    except (UnicodeDecodeError, ValueError) as e:
        raise DecodingError("%s is not a hex file" % path) from e


def _write_blob(path: str, data: bytes, settings: Settings) -> None:
    if settings.output_encoding == "raw":
        Path(path).write_bytes(data)
    else:
        Path(path).write_text(data.hex().upper() + "\n", encoding='ascii')


# ---------------- commands ----------------

def _cmd_hash(args, settings) -> int:
    print(compute_hash(Path(args.infile).read_bytes()).hex().upper())
    return EXIT_OK


def _cmd_mac(args, settings) -> int:
    pw = _passphrase(args, settings)
    print(compute_mac(pw, Path(args.infile).read_bytes()).hex().upper())
    return EXIT_OK


def _cmd_encrypt(args, settings) -> int:
    pw = _passphrase(args, settings)
    _write_blob(args.out, symmetric_encrypt(pw, Path(args.infile).read_bytes()), settings)
    return EXIT_OK


def _cmd_decrypt(args, settings) -> int:
    pw = _passphrase(args, settings)
    result = symmetric_decrypt(pw, _read_blob(args.infile, settings))
    if not result.valid:
        print("error: authentication failed, wrong passphrase or corrupted cryptogram", file=sys.stderr)
        return EXIT_FAILED
    Path(args.out).write_bytes(result.message)
    return EXIT_OK


def _cmd_keygen(args, settings) -> int:
    pw = _passphrase(args, settings)
    pair = KeyPair.from_passphrase(pw)
    _write_blob(args.out, pair.public_bytes(), settings)
    if args.private_out:
        _write_blob(args.private_out, export_private_key(pair, pw), settings)
    return EXIT_OK


def _cmd_ec_encrypt(args, settings) -> int:
    public_key = E521.from_bytes(_read_blob(args.public_key, settings))
    _write_blob(args.out, asymmetric_encrypt(Path(args.infile).read_bytes(), public_key), settings)
    return EXIT_OK


def _cmd_ec_decrypt(args, settings) -> int:
    pw = _passphrase(args, settings)
    key = import_private_key(_read_blob(args.private_key, settings), pw) if args.private_key else pw
    result = asymmetric_decrypt(key, _read_blob(args.infile, settings))
    if not result.valid:
        print("error: authentication failed, wrong passphrase or corrupted cryptogram", file=sys.stderr)
        return EXIT_FAILED
    Path(args.out).write_bytes(result.message)
    return EXIT_OK


def _cmd_sign(args, settings) -> int:
    pw = _passphrase(args, settings)
    signature = sign(Path(args.infile).read_bytes(), pw)
    Path(args.out).write_text(str(signature) + "\n", encoding='ascii')
    return EXIT_OK


def _cmd_verify(args, settings) -> int:
    public_key = E521.from_bytes(_read_blob(args.public_key, settings))
    signature = Signature.parse(Path(args.sigfile).read_bytes())
    if verify(signature, Path(args.infile).read_bytes(), public_key):
        print("signature OK")
        return EXIT_OK
    print("signature INVALID")
    return EXIT_FAILED


def _build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="e521",
        description="KMACXOF256 hashing/encryption and E-521 ECDHIES/Schnorr toolkit",
    )
    ap.add_argument("--version", action="version", version="%(prog)s " + __version__)
    ap.add_argument("--passphrase", dest="passphrase", default=None,
                    help="Passphrase (unsafe on shared shells; prefer $E521_PASSPHRASE or the prompt)")
    ap.add_argument("-v", "--verbose", action="store_true", help="Log at DEBUG level")

    sub = ap.add_subparsers(dest="cmd", required=True)

    p = sub.add_parser("hash", help="Print the KMACXOF256 hash of a file")
    p.add_argument("infile")
    p.set_defaults(func=_cmd_hash)

    p = sub.add_parser("mac", help="Print the MAC of a file under a passphrase")
    p.add_argument("infile")
    p.set_defaults(func=_cmd_mac)

    p = sub.add_parser("encrypt", help="Encrypt a file symmetrically under a passphrase")
    p.add_argument("infile")
    p.add_argument("--out", required=True)
    p.set_defaults(func=_cmd_encrypt)

    p = sub.add_parser("decrypt", help="Decrypt a symmetric cryptogram")
    p.add_argument("infile")
    p.add_argument("--out", required=True)
    p.set_defaults(func=_cmd_decrypt)

    p = sub.add_parser("keygen", help="Derive a key pair and write the public key")
    p.add_argument("--out", required=True, help="Public key output file")
    p.add_argument("--private-out", default=None, help="Also write the private key, encrypted under the passphrase")
    p.set_defaults(func=_cmd_keygen)

    p = sub.add_parser("ec-encrypt", help="Encrypt a file under a public key")
    p.add_argument("infile")
    p.add_argument("--public-key", required=True)
    p.add_argument("--out", required=True)
    p.set_defaults(func=_cmd_ec_encrypt)

    p = sub.add_parser("ec-decrypt", help="Decrypt an elliptic cryptogram")
    p.add_argument("infile")
    p.add_argument("--private-key", default=None, help="Encrypted private key file from keygen --private-out")
    p.add_argument("--out", required=True)
    p.set_defaults(func=_cmd_ec_decrypt)

    p = sub.add_parser("sign", help="Sign a file")
    p.add_argument("infile")
    p.add_argument("--out", required=True, help="Signature output file")
    p.set_defaults(func=_cmd_sign)

    p = sub.add_parser("verify", help="Verify a file against a signature file")
    p.add_argument("infile")
    p.add_argument("sigfile")
    p.add_argument("--public-key", required=True)
    p.set_defaults(func=_cmd_verify)
    return ap


def main(argv: list[str] | None = None) -> int:
    ap = _build_parser()
    args = ap.parse_args(argv)
    try:
        settings = load_settings()
    except ValueError as e:
        print("error: %s" % e, file=sys.stderr)
        return EXIT_ERROR
    logging.basicConfig(level="DEBUG" if args.verbose else settings.log_level,
                        format="%(levelname)s %(name)s: %(message)s")
    try:
        return args.func(args, settings)
    except AuthenticationError as e:
        print("error: %s" % e, file=sys.stderr)
        return EXIT_FAILED
    except (OSError, E521Error) as e:
        logger.debug("command %s failed", args.cmd, exc_info=True)
        print("error: %s" % e, file=sys.stderr)
        return EXIT_ERROR


if __name__ == "__main__":
    sys.exit(main())
