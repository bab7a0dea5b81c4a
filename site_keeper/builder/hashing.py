# site_keeper/builder/hashing.py
"""
Content digest helpers.

:class:`HashingWriter` forwards every chunk to a hash accumulator and to each
sink, so the recorded digest covers exactly the bytes that were persisted.
"""
from __future__ import annotations

import base64
import hashlib
from typing import BinaryIO

DIGEST_ALGORITHM = "sha512"


def encode_digest(digest: bytes) -> str:
    return base64.b64encode(digest).decode("ascii")


def content_digest(data: bytes) -> str:
    """Base64 encoded digest of *data*, as stored in the manifest."""
    return encode_digest(hashlib.new(DIGEST_ALGORITHM, data).digest())


class HashingWriter:
    """File-like writer that hashes while writing to any number of binary sinks."""

    def __init__(self, *sinks: BinaryIO) -> None:
        self._hash = hashlib.new(DIGEST_ALGORITHM)
        self._sinks = sinks
        self.written = 0

    def write(self, chunk: bytes) -> int:
        self._hash.update(chunk)
        for sink in self._sinks:
            sink.write(chunk)
        self.written += len(chunk)
        return len(chunk)

    def digest(self) -> bytes:
        return self._hash.digest()

    def b64digest(self) -> str:
        return encode_digest(self.digest())
