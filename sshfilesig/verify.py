#!/usr/bin/env python3
"""
SSH signature (SSHSIG) verification.
"""

import logging
from typing import Optional, Union

from .algorithms import HASH_ALGORITHMS, KEY_ALGO_RSA
from .armor import dearmor
from .errors import KeyParseError, VerificationError
from .keys import PublicKey, Signature
from .signer import Message, digest_message
from .wire import NAMESPACE, wrap_message


logger = logging.getLogger(__name__)


def verify(
    armored: Union[str, bytes],
    message: Message,
    namespace: str = NAMESPACE,
    public_key: Optional[PublicKey] = None,
) -> PublicKey:
    """
    Verify an armored SSH signature over a message.

    Args:
        armored: Armored signature
        message: Message bytes or a binary file-like object
        namespace: Namespace the signature must have been made for
        public_key: If given, the signature must be from this key

    Returns:
        The public key embedded in the signature

    Raises:
        ArmorError: if the signature cannot be parsed
        VerificationError: if the signature is not valid for the message
    """
    wrapped = dearmor(armored)

    if wrapped.namespace != namespace:
        raise VerificationError(
            f"Namespace mismatch: expected {namespace!r}, got {wrapped.namespace!r}"
        )
    if wrapped.hash_algorithm not in HASH_ALGORITHMS:
        raise VerificationError(f"Unsupported hash algorithm: {wrapped.hash_algorithm}")

    try:
        signer_key = PublicKey.from_wire(wrapped.public_key)
    except KeyParseError as e:
        raise VerificationError(f"Invalid public key in signature: {e}") from e

    if public_key is not None and public_key != signer_key:
        raise VerificationError(
            f"Signed by {signer_key.fingerprint()}, expected {public_key.fingerprint()}"
        )

    try:
        sig = Signature.unmarshal(wrapped.signature)
    except (ValueError, UnicodeError) as e:
        raise VerificationError(f"Malformed signature: {e}") from e

    # PROTOCOL.sshsig: ssh-rsa (SHA-1) signatures are not accepted.
    if sig.format == KEY_ALGO_RSA:
        raise VerificationError("ssh-rsa signatures are not allowed, use rsa-sha2-512")

    digest = digest_message(message, wrapped.hash_algorithm)
    signer_key.verify(wrap_message(digest, wrapped.namespace, wrapped.hash_algorithm), sig)

    logger.debug("Good %r signature with %s key %s",
                 wrapped.namespace, signer_key.type(), signer_key.fingerprint())
    return signer_key
