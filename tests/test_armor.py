#!/usr/bin/env python3
"""
Tests for signature armoring.
"""

import base64

import pytest

from sshfilesig.armor import ARMOR_LINE_WIDTH, armor, dearmor
from sshfilesig.errors import ArmorError
from sshfilesig.keys import parse_private_key
from sshfilesig.wire import WrappedSig, uint32


def make_armored(ed25519_key, namespace="file"):
    signer = parse_private_key(ed25519_key)
    return armor(signer.sign(b"data"), signer.public_key(), namespace=namespace)


def test_armor_framing(ed25519_key):
    """Armor matches ssh-keygen framing and line width."""
    armored = make_armored(ed25519_key).decode("ascii")
    lines = armored.splitlines()

    assert lines[0] == "-----BEGIN SSH SIGNATURE-----"
    assert lines[-1] == "-----END SSH SIGNATURE-----"
    assert armored.endswith("\n")
    assert all(len(line) <= ARMOR_LINE_WIDTH for line in lines[1:-1])
    assert all(len(line) == ARMOR_LINE_WIDTH for line in lines[1:-2])

    raw = base64.b64decode("".join(lines[1:-1]))
    assert raw.startswith(b"SSHSIG\x00\x00\x00\x01")


def test_dearmor_fields(ed25519_key):
    """Dearmoring returns the envelope fields."""
    signer = parse_private_key(ed25519_key)
    sig = signer.sign(b"data")

    wrapped = dearmor(armor(sig, signer.public_key(), namespace="git", hash_algorithm="sha256"))

    assert wrapped.magic_header == b"SSHSIG"
    assert wrapped.version == 1
    assert wrapped.public_key == signer.public_key().marshal()
    assert wrapped.namespace == "git"
    assert wrapped.reserved == ""
    assert wrapped.hash_algorithm == "sha256"
    assert wrapped.signature == sig.marshal()


def test_dearmor_accepts_str_and_crlf(ed25519_key):
    """Whitespace and line endings inside the armor are ignored."""
    armored = make_armored(ed25519_key).decode("ascii")

    assert dearmor(armored) == dearmor(armored.replace("\n", "\r\n"))


@pytest.mark.parametrize("text,message", [
    ("", "BEGIN"),
    ("-----BEGIN SSH SIGNATURE-----\nAAAA\n", "END"),
    ("-----BEGIN SSH SIGNATURE-----\n!!!!\n-----END SSH SIGNATURE-----\n", "base64"),
    ("-----BEGIN SSH SIGNATURE-----\nAAAA\n-----END SSH SIGNATURE-----\n", "Malformed"),
])
def test_dearmor_malformed(text, message):
    """Broken armor raises ArmorError."""
    with pytest.raises(ArmorError, match=message):
        dearmor(text)


def test_dearmor_bad_version(ed25519_key):
    """Only version 1 signatures are understood."""
    wrapped = dearmor(make_armored(ed25519_key))
    raw = wrapped.marshal()
    raw = raw[:6] + uint32(2) + raw[10:]
    text = (
        "-----BEGIN SSH SIGNATURE-----\n"
        + base64.b64encode(raw).decode("ascii")
        + "\n-----END SSH SIGNATURE-----\n"
    )

    with pytest.raises(ArmorError, match="version"):
        dearmor(text)


def test_dearmor_trailing_bytes(ed25519_key):
    """Extra bytes after the signature are rejected."""
    raw = dearmor(make_armored(ed25519_key)).marshal() + b"\x00"
    text = (
        "-----BEGIN SSH SIGNATURE-----\n"
        + base64.b64encode(raw).decode("ascii")
        + "\n-----END SSH SIGNATURE-----\n"
    )

    with pytest.raises(ArmorError, match="Trailing"):
        dearmor(text)


def test_wrapped_sig_round_trip(ed25519_key):
    """Marshalled envelopes decode to the same value."""
    wrapped = dearmor(make_armored(ed25519_key))
    assert WrappedSig.unmarshal(wrapped.marshal()) == wrapped


if __name__ == "__main__":
    pytest.main([__file__])
