"""
escrow_vm.runtime.hash_api — deterministic hashing wrappers for the runtime.

Goals
-----
- Strictly bytes-in, bytes-out (no implicit text/encoding).
- Keccak-256 exactly as Ethereum uses it (pre-standard padding), provided by
  PyCryptodome; SHA3-256 from hashlib.

Provided APIs
-------------
- keccak256(data) -> bytes
- sha3_256(data) -> bytes
- keccak256_hex(...), sha3_256_hex(...)
- hash_concat_keccak256(*chunks) -> bytes
- Keccak256(): streaming hasher
"""

from __future__ import annotations

import hashlib
from typing import Iterable

from Crypto.Hash import keccak as _keccak

from escrow_vm.errors import VmError

KECCAK_EMPTY = bytes.fromhex("c5d2460186f7233c927e7db2dcc703c0e500b653ca82273b7bfad8045d85a470")


def _ensure_bytes(buf: object, name: str) -> bytes:
    if isinstance(buf, (bytes, bytearray, memoryview)):
        return bytes(buf)
    raise VmError(f"{name} must be bytes-like (got {type(buf).__name__})", code="hash_invalid")


def _new_keccak256():
    return _keccak.new(digest_bits=256)


def keccak256(data: bytes | bytearray | memoryview) -> bytes:
    """Keccak-256 (pre-SHA3) as used by Ethereum."""
    h = _new_keccak256()
    h.update(_ensure_bytes(data, "data"))
    return h.digest()


def sha3_256(data: bytes | bytearray | memoryview) -> bytes:
    return hashlib.sha3_256(_ensure_bytes(data, "data")).digest()


def keccak256_hex(data: bytes | bytearray | memoryview) -> str:
    return "0x" + keccak256(data).hex()


def sha3_256_hex(data: bytes | bytearray | memoryview) -> str:
    return "0x" + sha3_256(data).hex()


def _hash_concat(chunks: Iterable[bytes | bytearray | memoryview], h) -> bytes:
    for i, c in enumerate(chunks):
        h.update(_ensure_bytes(c, f"chunk[{i}]"))
    return h.digest()


def hash_concat_keccak256(*chunks: bytes | bytearray | memoryview) -> bytes:
    return _hash_concat(chunks, _new_keccak256())


class Keccak256:
    """Streaming Keccak-256 with one-shot finalisation."""

    __slots__ = ("_h", "_finalized")

    def __init__(self) -> None:
        self._h = _new_keccak256()
        self._finalized = False

    def update(self, chunk: bytes | bytearray | memoryview) -> "Keccak256":
        if self._finalized:
            raise VmError("hasher already finalized", code="hash_invalid")
        self._h.update(_ensure_bytes(chunk, "chunk"))
        return self

    def digest(self) -> bytes:
        self._finalized = True
        return self._h.digest()

    def hexdigest(self) -> str:
        return self.digest().hex()


__all__ = [
    "KECCAK_EMPTY",
    "keccak256",
    "sha3_256",
    "keccak256_hex",
    "sha3_256_hex",
    "hash_concat_keccak256",
    "Keccak256",
]
