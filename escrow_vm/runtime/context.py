"""
escrow_vm.runtime.context — the call frame seen by executing contract code.

Contract functions take no implicit environment argument; instead they read
the caller and their own address from the active frame, much like ``msg.sender``
and ``address(this)``. The engine activates itself for the duration of a
top-level transaction and pushes one :class:`Frame` per nested call.

Design notes
------------
- Addresses are 20 raw bytes.
- Hex strings (with or without "0x") are accepted by helpers and normalized to
  bytes.
- Only one chain can be active at a time; execution is single-threaded.
"""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterator, Optional, Union

from escrow_vm.errors import VmError

if TYPE_CHECKING:  # pragma: no cover
    from escrow_vm.runtime.engine import Chain


class ContextError(VmError):
    """No active chain or frame, or an un-coercible value."""

    def __init__(self, message: str) -> None:
        super().__init__(message, code="context")


def _strip_0x(s: str) -> str:
    return s[2:] if s.startswith(("0x", "0X")) else s


def to_bytes(value: Union[bytes, bytearray, memoryview, str]) -> bytes:
    """
    Coerce `value` to bytes.
    - If str, interpret as hex (with or without '0x'); odd-length hex is rejected.
    - If a bytes-like object, copy to immutable bytes.
    """
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value)
    if isinstance(value, str):
        h = _strip_0x(value.strip())
        if len(h) % 2 != 0:
            raise ContextError(f"hex string must have even length, got {len(h)}")
        try:
            return bytes.fromhex(h)
        except ValueError as e:
            raise ContextError(f"invalid hex string: {value!r}") from e
    raise ContextError(f"cannot convert type {type(value).__name__} to bytes")


def to_hex(b: Union[bytes, bytearray, memoryview]) -> str:
    """Encode bytes as 0x-prefixed lowercase hex."""
    return "0x" + bytes(b).hex()


@dataclass(frozen=True)
class Frame:
    """
    One active call.

    address:  the contract whose code is running (storage scope)
    caller:   the immediate caller (an EOA or another contract)
    origin:   the externally owned account that started the transaction
    code_id:  dotted module path of the running code
    """

    address: bytes
    caller: bytes
    origin: bytes
    code_id: str


_ACTIVE: Optional["Chain"] = None


@contextmanager
def activate(chain: "Chain") -> Iterator["Chain"]:
    global _ACTIVE
    if _ACTIVE is not None and _ACTIVE is not chain:
        raise ContextError("another chain is already executing")
    prev = _ACTIVE
    _ACTIVE = chain
    try:
        yield chain
    finally:
        _ACTIVE = prev


def active_chain() -> "Chain":
    if _ACTIVE is None:
        raise ContextError("no transaction is executing")
    return _ACTIVE


def current_frame() -> Frame:
    return active_chain().current_frame()


__all__ = [
    "ContextError",
    "Frame",
    "activate",
    "active_chain",
    "current_frame",
    "to_bytes",
    "to_hex",
]
