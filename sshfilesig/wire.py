#!/usr/bin/env python3
"""
SSH wire encoding (RFC 4251 section 5) and the SSHSIG structures.

See PROTOCOL.sshsig in openssh-portable for the layouts of the signed
message wrapper and the signature blob.
"""

import struct
from dataclasses import dataclass
from typing import Union


MAGIC_HEADER = b"SSHSIG"
NAMESPACE = "file"
DEFAULT_HASH_ALGORITHM = "sha512"


def uint32(value: int) -> bytes:
    return struct.pack(">I", value)


def string(value: Union[str, bytes]) -> bytes:
    """Encode a length-prefixed string. Text is encoded as UTF-8."""
    if isinstance(value, str):
        value = value.encode("utf-8")
    return uint32(len(value)) + value


def mpint(value: int) -> bytes:
    """Encode a non-negative multiple precision integer."""
    if value < 0:
        raise ValueError("negative mpint not supported")
    if value == 0:
        return string(b"")
    # An extra byte keeps the sign bit clear when the top bit is set.
    return string(value.to_bytes((value.bit_length() + 8) // 8, "big"))


class WireReader:
    """Sequential reader over SSH wire format data.

    Every getter raises ValueError when the buffer is too short.
    """

    def __init__(self, data: bytes):
        self.data = bytes(data)
        self.offset = 0

    def get_bytes(self, n: int) -> bytes:
        if self.offset + n > len(self.data):
            raise ValueError(
                f"Truncated data: need {n} bytes, have {len(self.data) - self.offset}"
            )
        chunk = self.data[self.offset:self.offset + n]
        self.offset += n
        return chunk

    def get_uint32(self) -> int:
        return struct.unpack(">I", self.get_bytes(4))[0]

    def get_binary(self) -> bytes:
        return self.get_bytes(self.get_uint32())

    def get_text(self) -> str:
        return self.get_binary().decode("utf-8")

    def get_mpint(self) -> int:
        return int.from_bytes(self.get_binary(), "big", signed=True)

    def remainder(self) -> bytes:
        return self.data[self.offset:]

    def at_end(self) -> bool:
        return self.offset == len(self.data)


@dataclass(frozen=True)
class MessageWrapper:
    """The structure whose encoding is actually signed."""
    namespace: str
    hash_algorithm: str
    hash: bytes
    reserved: str = ""

    def marshal(self) -> bytes:
        # Field order is fixed by the format.
        return (
            string(self.namespace)
            + string(self.reserved)
            + string(self.hash_algorithm)
            + string(self.hash)
        )

    @classmethod
    def unmarshal(cls, data: bytes) -> "MessageWrapper":
        """Decode a wrapper, with or without the leading magic header."""
        if data.startswith(MAGIC_HEADER):
            data = data[len(MAGIC_HEADER):]
        reader = WireReader(data)
        namespace = reader.get_text()
        reserved = reader.get_text()
        hash_algorithm = reader.get_text()
        digest = reader.get_binary()
        if not reader.at_end():
            raise ValueError("Trailing data after message wrapper")
        return cls(
            namespace=namespace,
            hash_algorithm=hash_algorithm,
            hash=digest,
            reserved=reserved,
        )


@dataclass(frozen=True)
class WrappedSig:
    """The SSHSIG signature blob that gets armored."""
    version: int
    public_key: bytes
    namespace: str
    hash_algorithm: str
    signature: bytes
    reserved: str = ""
    magic_header: bytes = MAGIC_HEADER

    def marshal(self) -> bytes:
        return (
            self.magic_header
            + uint32(self.version)
            + string(self.public_key)
            + string(self.namespace)
            + string(self.reserved)
            + string(self.hash_algorithm)
            + string(self.signature)
        )

    @classmethod
    def unmarshal(cls, data: bytes) -> "WrappedSig":
        reader = WireReader(data)
        magic = reader.get_bytes(len(MAGIC_HEADER))
        if magic != MAGIC_HEADER:
            raise ValueError(f"Bad magic header: {magic!r}")
        sig = cls(
            version=reader.get_uint32(),
            public_key=reader.get_binary(),
            namespace=reader.get_text(),
            reserved=reader.get_text(),
            hash_algorithm=reader.get_text(),
            signature=reader.get_binary(),
            magic_header=magic,
        )
        if not reader.at_end():
            raise ValueError("Trailing data after signature")
        return sig


def wrap_message(
    digest: bytes,
    namespace: str = NAMESPACE,
    hash_algorithm: str = DEFAULT_HASH_ALGORITHM,
) -> bytes:
    """
    Build the to-be-signed bytes for a message digest.

    Args:
        digest: Raw digest of the full message (not hex encoded)
        namespace: Signature namespace
        hash_algorithm: Name of the digest algorithm that produced digest

    Returns:
        b"SSHSIG" followed by the encoded MessageWrapper
    """
    wrapper = MessageWrapper(
        namespace=namespace,
        hash_algorithm=hash_algorithm,
        hash=digest,
    )
    return MAGIC_HEADER + wrapper.marshal()
