#!/usr/bin/env python3
"""
SSH signature (SSHSIG) creation.

There are two ways to sign here and they are not interchangeable:

- sign() hashes the message with SHA-512, wraps the digest in the
  SSHSIG message structure and signs that. This is what ssh-keygen
  -Y verify expects.
- SSHSigner.sign_message() signs the raw message bytes directly with
  the key's default algorithm, for callers that only need a generic
  signer.
"""

import io
import logging
from typing import BinaryIO, Optional, Union

from .algorithms import hash_function, select_signature_algorithm
from .armor import armor
from .errors import UnsupportedKeyError
from .keys import AlgorithmSigner, PublicKey, Signature, parse_private_key
from .wire import DEFAULT_HASH_ALGORITHM, NAMESPACE, wrap_message


logger = logging.getLogger(__name__)

READ_CHUNK_SIZE = 65536

Message = Union[bytes, BinaryIO]


def _as_reader(message: Message) -> BinaryIO:
    if isinstance(message, (bytes, bytearray, memoryview)):
        return io.BytesIO(bytes(message))
    return message


def digest_message(message: Message, hash_algorithm: str = DEFAULT_HASH_ALGORITHM) -> bytes:
    """Hash a message source to completion. Read errors propagate."""
    reader = _as_reader(message)
    h = hash_function(hash_algorithm)
    total = 0
    while chunk := reader.read(READ_CHUNK_SIZE):
        h.update(chunk)
        total += len(chunk)
    logger.debug("Hashed %d bytes with %s", total, hash_algorithm)
    return h.digest()


def sign_with_signer(signer: AlgorithmSigner, message: Message) -> Signature:
    """
    Produce the raw SSHSIG signature for a message.

    Args:
        signer: Signer able to sign with an explicit algorithm
        message: Message bytes or a binary file-like object; it is read
            to the end exactly once

    Returns:
        Signature over the wrapped SHA-512 digest, not yet armored
    """
    digest = digest_message(message)
    to_sign = wrap_message(digest, NAMESPACE, DEFAULT_HASH_ALGORITHM)

    key_type = signer.public_key().type()
    algorithm = select_signature_algorithm(key_type)
    logger.debug("Signing with %s key, algorithm %r", key_type, algorithm or "default")

    return signer.sign_with_algorithm(to_sign, algorithm)


class SSHSigner:
    """Generic signer interface backed by an SSH key."""

    def __init__(self, signer: AlgorithmSigner):
        if not isinstance(signer, AlgorithmSigner):
            raise UnsupportedKeyError(
                f"{signer.public_key().type()} keys do not support algorithm selection"
            )
        self._signer = signer

    @classmethod
    def from_private_key(
        cls,
        private_key: Union[str, bytes],
        passphrase: Optional[Union[str, bytes]] = None,
    ) -> "SSHSigner":
        return cls(parse_private_key(private_key, passphrase))

    def public_key(self) -> PublicKey:
        return self._signer.public_key()

    def sign_message(self, message: Message, **opts) -> bytes:
        """
        Sign the raw message and return it armored.

        The message is signed as-is with the key's default algorithm,
        without the SSHSIG digest wrapper. Options are accepted for
        interface compatibility and ignored.
        """
        data = _as_reader(message).read()
        sig = self._signer.sign(data)
        return armor(sig, self._signer.public_key())


def sign(
    private_key: Union[str, bytes],
    data: Message,
    passphrase: Optional[Union[str, bytes]] = None,
) -> bytes:
    """
    Sign data with an SSH private key.

    Args:
        private_key: OpenSSH or PEM private key text
        data: Message bytes or a binary file-like object
        passphrase: Passphrase for an encrypted key

    Returns:
        Armored SSH signature in namespace "file"

    Raises:
        KeyParseError: if the key cannot be parsed
        UnsupportedKeyError: if the key cannot sign with an explicit algorithm
    """
    signer = parse_private_key(private_key, passphrase)
    if not isinstance(signer, AlgorithmSigner):
        raise UnsupportedKeyError(
            f"{signer.public_key().type()} keys do not support algorithm selection"
        )

    sig = sign_with_signer(signer, data)
    return armor(sig, signer.public_key())
