#!/usr/bin/env python3
"""
Key types, signature algorithm identifiers and the hash registry.
"""

import hashlib
from types import MappingProxyType
from typing import Callable, Mapping


KEY_ALGO_RSA = "ssh-rsa"
KEY_ALGO_DSA = "ssh-dss"
KEY_ALGO_ED25519 = "ssh-ed25519"
KEY_ALGO_ECDSA256 = "ecdsa-sha2-nistp256"
KEY_ALGO_ECDSA384 = "ecdsa-sha2-nistp384"
KEY_ALGO_ECDSA521 = "ecdsa-sha2-nistp521"

KEY_ALGO_RSA_SHA256 = "rsa-sha2-256"
KEY_ALGO_RSA_SHA512 = "rsa-sha2-512"

# Empty means "whatever the key signs with by default".
DEFAULT_ALGORITHM = ""

# Signature algorithms each key type may produce.
SIGNATURE_ALGORITHMS_FOR_KEY: Mapping[str, frozenset] = MappingProxyType({
    KEY_ALGO_RSA: frozenset({KEY_ALGO_RSA, KEY_ALGO_RSA_SHA256, KEY_ALGO_RSA_SHA512}),
    KEY_ALGO_DSA: frozenset({KEY_ALGO_DSA}),
    KEY_ALGO_ED25519: frozenset({KEY_ALGO_ED25519}),
    KEY_ALGO_ECDSA256: frozenset({KEY_ALGO_ECDSA256}),
    KEY_ALGO_ECDSA384: frozenset({KEY_ALGO_ECDSA384}),
    KEY_ALGO_ECDSA521: frozenset({KEY_ALGO_ECDSA521}),
})

HASH_ALGORITHMS: Mapping[str, Callable] = MappingProxyType({
    "sha256": hashlib.sha256,
    "sha512": hashlib.sha512,
})


def select_signature_algorithm(key_type: str) -> str:
    """
    Pick the signature algorithm to request for a key type.

    SSHSIG does not allow ssh-rsa (SHA-1) signatures, so RSA keys sign
    with rsa-sha2-512. Every other key type uses its natural algorithm.
    """
    if key_type == KEY_ALGO_RSA:
        return KEY_ALGO_RSA_SHA512
    return DEFAULT_ALGORITHM


def hash_function(name: str):
    """Return a new hash object for a recognized algorithm name."""
    try:
        return HASH_ALGORITHMS[name]()
    except KeyError:
        raise ValueError(f"Unsupported hash algorithm: {name}") from None
