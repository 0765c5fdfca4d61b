"""sshfilesig library."""

from .algorithms import (
    HASH_ALGORITHMS,
    select_signature_algorithm,
    hash_function,
)

from .wire import (
    MessageWrapper,
    WrappedSig,
    wrap_message,
)

from .keys import (
    PublicKey,
    Signature,
    Signer,
    AlgorithmSigner,
    parse_private_key,
    generate_private_key,
)

from .armor import armor, dearmor

from .signer import (
    SSHSigner,
    sign,
    sign_with_signer,
)

from .verify import verify

from .errors import (
    SSHSigError,
    KeyParseError,
    UnsupportedKeyError,
    SigningError,
    ArmorError,
    VerificationError,
)

__version__ = "0.1.0"
__all__ = [
    "HASH_ALGORITHMS",
    "select_signature_algorithm",
    "hash_function",
    "MessageWrapper",
    "WrappedSig",
    "wrap_message",
    "PublicKey",
    "Signature",
    "Signer",
    "AlgorithmSigner",
    "parse_private_key",
    "generate_private_key",
    "armor",
    "dearmor",
    "SSHSigner",
    "sign",
    "sign_with_signer",
    "verify",
    "SSHSigError",
    "KeyParseError",
    "UnsupportedKeyError",
    "SigningError",
    "ArmorError",
    "VerificationError",
]
