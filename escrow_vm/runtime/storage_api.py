"""
escrow_vm.runtime.storage_api — contract-facing key/value storage.

Every call is scoped to the address of the executing frame, so two instances
of the same contract code never see each other's keys. Reads and writes go
through the chain's journal and are discarded with the frame on failure.

Public API (re-exported by escrow_vm.stdlib.storage)
----------------------------------------------------
- get(key: bytes) -> Optional[bytes]
- set(key: bytes, value: bytes) -> None
- delete(key: bytes) -> None
- exists(key: bytes) -> bool
- get_int(key: bytes) -> int                     # big-endian, unsigned; 0 when unset
- set_int(key: bytes, value: int) -> None        # 32-byte big-endian, unsigned

Length caps come from escrow_vm.config.
"""

from __future__ import annotations

from typing import Any, Optional, Tuple

from escrow_vm.errors import VmError
from escrow_vm.runtime.context import active_chain

_U256_MAX = (1 << 256) - 1


def _scope() -> Tuple[Any, bytes]:
    chain = active_chain()
    return chain, chain.current_frame().address


def _check_key(chain: Any, key: Any) -> bytes:
    if not isinstance(key, (bytes, bytearray)):
        raise VmError("storage key must be bytes", code="storage_invalid")
    if len(key) == 0:
        raise VmError("storage key must be non-empty", code="storage_invalid")
    cap = chain.config.max_storage_key_bytes
    if len(key) > cap:
        raise VmError(f"storage key too long (>{cap} bytes)", code="storage_invalid", context={"len": len(key)})
    return bytes(key)


def _check_value(chain: Any, value: Any) -> bytes:
    if isinstance(value, int) and not isinstance(value, bool) and not chain.config.strict_mode:
        value = _int_to_bytes(value)
    if not isinstance(value, (bytes, bytearray)):
        raise VmError("storage value must be bytes", code="storage_invalid")
    cap = chain.config.max_storage_value_bytes
    if len(value) > cap:
        raise VmError(f"storage value too large (>{cap} bytes)", code="storage_invalid", context={"len": len(value)})
    return bytes(value)


def _int_to_bytes(value: int) -> bytes:
    if not isinstance(value, int) or value < 0 or value > _U256_MAX:
        raise VmError("storage int must be a u256", code="storage_invalid")
    return value.to_bytes(32, "big")


def get(key: bytes) -> Optional[bytes]:
    """Return the value for `key`, or None if not set."""
    chain, addr = _scope()
    return chain.journal.storage_get(addr, _check_key(chain, key))


def set(key: bytes, value: bytes) -> None:  # noqa: A001 - mirrors the stdlib surface
    chain, addr = _scope()
    chain.journal.storage_set(addr, _check_key(chain, key), _check_value(chain, value))


def delete(key: bytes) -> None:
    chain, addr = _scope()
    chain.journal.storage_delete(addr, _check_key(chain, key))


def exists(key: bytes) -> bool:
    return get(key) is not None


def get_int(key: bytes) -> int:
    raw = get(key)
    return int.from_bytes(raw, "big") if raw else 0


def set_int(key: bytes, value: int) -> None:
    set(key, _int_to_bytes(value))


__all__ = ["get", "set", "delete", "exists", "get_int", "set_int"]
