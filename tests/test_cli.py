"""
End-to-end runs of the e521 command line front end on temporary files.
"""
import pytest

from e521.cli import EXIT_ERROR, EXIT_FAILED, EXIT_OK, main
from e521.symmetric import compute_hash

PW = "cli passphrase"


@pytest.fixture(autouse=True)
def _env(monkeypatch):
    monkeypatch.setenv("E521_PASSPHRASE", PW)
    monkeypatch.delenv("E521_OUTPUT_ENCODING", raising=False)
    monkeypatch.delenv("E521_LOG_LEVEL", raising=False)


@pytest.fixture
def message(tmp_path):
    path = tmp_path / "message.txt"
    path.write_bytes(b"The quick brown fox\n")
    return path


def test_hash(message, capsys):
    assert main(["hash", str(message)]) == EXIT_OK
    assert capsys.readouterr().out.strip() == compute_hash(message.read_bytes()).hex().upper()


def test_symmetric_round_trip(message, tmp_path):
    enc = tmp_path / "message.enc"
    dec = tmp_path / "message.dec"
    assert main(["encrypt", str(message), "--out", str(enc)]) == EXIT_OK
    # hex text by default
    bytes.fromhex(enc.read_text())
    assert main(["decrypt", str(enc), "--out", str(dec)]) == EXIT_OK
    assert dec.read_bytes() == message.read_bytes()


def test_symmetric_wrong_passphrase(message, tmp_path):
    enc = tmp_path / "message.enc"
    assert main(["encrypt", str(message), "--out", str(enc)]) == EXIT_OK
    out = tmp_path / "out"
    assert main(["--passphrase", "wrong", "decrypt", str(enc), "--out", str(out)]) == EXIT_FAILED
    assert not out.exists()


def test_raw_output_encoding(message, tmp_path, monkeypatch):
    monkeypatch.setenv("E521_OUTPUT_ENCODING", "raw")
    enc = tmp_path / "message.bin"
    dec = tmp_path / "message.dec"
    assert main(["encrypt", str(message), "--out", str(enc)]) == EXIT_OK
    assert len(enc.read_bytes()) == 128 + len(message.read_bytes())
    assert main(["decrypt", str(enc), "--out", str(dec)]) == EXIT_OK
    assert dec.read_bytes() == message.read_bytes()


def test_elliptic_workflow(message, tmp_path, capsys):
    pub = tmp_path / "key.pub"
    priv = tmp_path / "key.priv"
    enc = tmp_path / "message.ec"
    dec = tmp_path / "message.dec"
    sig = tmp_path / "message.sig"

    assert main(["keygen", "--out", str(pub), "--private-out", str(priv)]) == EXIT_OK
    assert len(bytes.fromhex(pub.read_text())) == 132

    assert main(["ec-encrypt", str(message), "--public-key", str(pub), "--out", str(enc)]) == EXIT_OK
    assert main(["ec-decrypt", str(enc), "--out", str(dec)]) == EXIT_OK
    assert dec.read_bytes() == message.read_bytes()
    dec.unlink()
    assert main(["ec-decrypt", str(enc), "--private-key", str(priv), "--out", str(dec)]) == EXIT_OK
    assert dec.read_bytes() == message.read_bytes()

    assert main(["sign", str(message), "--out", str(sig)]) == EXIT_OK
    assert main(["verify", str(message), str(sig), "--public-key", str(pub)]) == EXIT_OK
    assert "signature OK" in capsys.readouterr().out

    message.write_bytes(b"tampered")
    assert main(["verify", str(message), str(sig), "--public-key", str(pub)]) == EXIT_FAILED


def test_wrong_private_key_passphrase(message, tmp_path):
    pub = tmp_path / "key.pub"
    priv = tmp_path / "key.priv"
    enc = tmp_path / "message.ec"
    assert main(["keygen", "--out", str(pub), "--private-out", str(priv)]) == EXIT_OK
    assert main(["ec-encrypt", str(message), "--public-key", str(pub), "--out", str(enc)]) == EXIT_OK
    assert main(["--passphrase", "nope", "ec-decrypt", str(enc), "--private-key", str(priv),
                 "--out", str(tmp_path / "x")]) == EXIT_FAILED


def test_missing_file(tmp_path, capsys):
    assert main(["hash", str(tmp_path / "absent")]) == EXIT_ERROR
    assert "error" in capsys.readouterr().err


def test_bad_public_key(message, tmp_path):
    pub = tmp_path / "bad.pub"
    pub.write_text("00" * 10)
    assert main(["ec-encrypt", str(message), "--public-key", str(pub),
                 "--out", str(tmp_path / "x")]) == EXIT_ERROR


def test_usage_error():
    with pytest.raises(SystemExit) as exc:
        main([])
    assert exc.value.code == 2


def test_non_ascii_signature_file(message, tmp_path, capsys):
    pub = tmp_path / "key.pub"
    sig = tmp_path / "message.sig"
    assert main(["keygen", "--out", str(pub)]) == EXIT_OK
    sig.write_bytes(b"\xff\xfe 12")
    assert main(["verify", str(message), str(sig), "--public-key", str(pub)]) == EXIT_ERROR
    assert "ASCII" in capsys.readouterr().err


def test_non_hex_input_in_hex_mode(tmp_path, capsys):
    enc = tmp_path / "message.enc"
    enc.write_bytes(b"\x00\x01 not hex at all")
    assert main(["decrypt", str(enc), "--out", str(tmp_path / "x")]) == EXIT_ERROR
    assert "not a hex file" in capsys.readouterr().err


def test_inputs_follow_output_encoding(message, tmp_path, monkeypatch):
    hex_pub = tmp_path / "key.hex"
    raw_pub = tmp_path / "key.bin"
    assert main(["keygen", "--out", str(hex_pub)]) == EXIT_OK
    monkeypatch.setenv("E521_OUTPUT_ENCODING", "raw")
    assert main(["keygen", "--out", str(raw_pub)]) == EXIT_OK

    # raw mode takes hex text at face value
    assert main(["ec-encrypt", str(message), "--public-key", str(hex_pub),
                 "--out", str(tmp_path / "x")]) == EXIT_ERROR
    assert main(["ec-encrypt", str(message), "--public-key", str(raw_pub),
                 "--out", str(tmp_path / "x")]) == EXIT_OK

    monkeypatch.setenv("E521_OUTPUT_ENCODING", "hex")
    assert main(["ec-encrypt", str(message), "--public-key", str(raw_pub),
                 "--out", str(tmp_path / "y")]) == EXIT_ERROR
