# -*- coding: utf-8 -*-
"""
Typed storage slots on top of the raw byte store.

- u256 values are 32-byte big-endian; an absent key reads as 0
- addresses are 20 raw bytes; an absent key reads as the zero address
- append-only address lists keep their length at ``prefix + b"#"`` and item
  ``i`` at ``prefix + u256(i)``
"""
from __future__ import annotations

from typing import List

from escrow_vm.stdlib import abi, storage

_LEN_SUFFIX = b"#"


def u256_bytes(n: int) -> bytes:
    return int(n).to_bytes(32, "big")


def get_u256(key: bytes) -> int:
    return storage.get_int(key)


def set_u256(key: bytes, n: int) -> None:
    storage.set_int(key, n)


def get_address(key: bytes) -> bytes:
    v = storage.get(key)
    return v if v else abi.ZERO_ADDRESS


def set_address(key: bytes, addr: bytes) -> None:
    storage.set(key, bytes(addr))


def list_len(prefix: bytes) -> int:
    return get_u256(prefix + _LEN_SUFFIX)


def list_append(prefix: bytes, item: bytes) -> int:
    """Append `item`; returns its index."""
    n = list_len(prefix)
    storage.set(prefix + u256_bytes(n), bytes(item))
    set_u256(prefix + _LEN_SUFFIX, n + 1)
    return n


def list_all(prefix: bytes) -> List[bytes]:
    return [storage.get(prefix + u256_bytes(i)) or b"" for i in range(list_len(prefix))]


__all__ = [
    "u256_bytes",
    "get_u256",
    "set_u256",
    "get_address",
    "set_address",
    "list_len",
    "list_append",
    "list_all",
]
