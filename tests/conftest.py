"""
Shared fixtures: freshly generated keys of each supported type.
"""

import pytest

from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import dsa

from sshfilesig.keys import generate_private_key


@pytest.fixture(scope="session")
def ed25519_key():
    return generate_private_key("ed25519")


@pytest.fixture(scope="session")
def rsa_key():
    return generate_private_key("rsa", 2048)


@pytest.fixture(scope="session")
def ecdsa_key():
    return generate_private_key("ecdsa", 256)


@pytest.fixture(scope="session")
def dsa_key():
    """A DSA key in PEM form: parses, but has no algorithm selection."""
    key = dsa.generate_private_key(key_size=1024)
    return key.private_bytes(
        serialization.Encoding.PEM,
        serialization.PrivateFormat.PKCS8,
        serialization.NoEncryption(),
    ).decode("ascii")


@pytest.fixture(params=["ed25519_key", "rsa_key", "ecdsa_key"])
def any_key(request):
    return request.getfixturevalue(request.param)
