#!/usr/bin/env python3
"""
Armoring of SSHSIG signatures.

Produces and parses the same framing as ssh-keygen -Y sign:

    -----BEGIN SSH SIGNATURE-----
    U1NIU0lHAAAAAQAAADMAAAALc3NoLWVkMjU1MTkAAAAg...
    -----END SSH SIGNATURE-----
"""

import base64
import binascii
from typing import Union

from .errors import ArmorError
from .keys import PublicKey, Signature
from .wire import DEFAULT_HASH_ALGORITHM, NAMESPACE, WrappedSig


SIG_VERSION = 1
ARMOR_LINE_WIDTH = 70
BEGIN_MARKER = "-----BEGIN SSH SIGNATURE-----"
END_MARKER = "-----END SSH SIGNATURE-----"


def armor(
    signature: Signature,
    public_key: PublicKey,
    namespace: str = NAMESPACE,
    hash_algorithm: str = DEFAULT_HASH_ALGORITHM,
) -> bytes:
    """
    Wrap a raw signature into an armored SSHSIG blob.

    Args:
        signature: Raw signature from the private key operation
        public_key: Public key of the signer
        namespace: Namespace the message was signed under
        hash_algorithm: Digest algorithm used on the message

    Returns:
        Armored signature bytes, newline terminated
    """
    wrapped = WrappedSig(
        version=SIG_VERSION,
        public_key=public_key.marshal(),
        namespace=namespace,
        hash_algorithm=hash_algorithm,
        signature=signature.marshal(),
    )
    encoded = base64.b64encode(wrapped.marshal()).decode("ascii")

    lines = [BEGIN_MARKER]
    for i in range(0, len(encoded), ARMOR_LINE_WIDTH):
        lines.append(encoded[i:i + ARMOR_LINE_WIDTH])
    lines.append(END_MARKER)
    return ("\n".join(lines) + "\n").encode("ascii")


def dearmor(data: Union[str, bytes]) -> WrappedSig:
    """
    Parse an armored SSHSIG blob.

    Raises:
        ArmorError: on bad framing, encoding, magic or version
    """
    if isinstance(data, bytes):
        try:
            data = data.decode("ascii")
        except UnicodeDecodeError as e:
            raise ArmorError(f"Signature is not ASCII: {e}") from e

    text = data.strip()
    if not text.startswith(BEGIN_MARKER):
        raise ArmorError("Missing BEGIN SSH SIGNATURE marker")
    if not text.endswith(END_MARKER):
        raise ArmorError("Missing END SSH SIGNATURE marker")

    body = "".join(text[len(BEGIN_MARKER):-len(END_MARKER)].split())
    try:
        raw = base64.b64decode(body, validate=True)
    except binascii.Error as e:
        raise ArmorError(f"Invalid base64 in signature: {e}") from e

    try:
        wrapped = WrappedSig.unmarshal(raw)
    except (ValueError, UnicodeError) as e:
        raise ArmorError(f"Malformed signature: {e}") from e

    if wrapped.version != SIG_VERSION:
        raise ArmorError(f"Unsupported signature version: {wrapped.version}")
    return wrapped
