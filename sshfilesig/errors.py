#!/usr/bin/env python3
"""
Exceptions raised by sshfilesig.
"""

from typing import List, Optional


class SSHSigError(Exception):
    """Base exception for sshfilesig errors.

    Args:
        message: Error description.
        errors: Optional list of detailed error messages.
    """

    errors: Optional[List[str]]

    def __init__(self, message: str, errors: Optional[List[str]] = None):
        super().__init__(message)
        self.errors = errors

    def __str__(self) -> str:
        s = super().__str__()
        if self.errors:
            s = '%s: (%s)' % (s, ', '.join(self.errors))
        return s


class KeyParseError(SSHSigError):
    """Private or public key material could not be parsed."""


class UnsupportedKeyError(SSHSigError):
    """Key parsed, but cannot sign with an explicitly chosen algorithm."""


class SigningError(SSHSigError):
    """The private key operation was refused."""


class ArmorError(SSHSigError):
    """Armored signature is malformed."""


class VerificationError(SSHSigError):
    """Signature does not verify."""
