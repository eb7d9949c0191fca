# -*- coding: utf-8 -*-
"""
escrow_contracts.stdlib.access.ownable
======================================

Minimal, deterministic **Ownable** helper.

- read the current owner (`get_owner`)
- set the owner once at construction (`init_owner`)
- check that a caller is the owner (`require_owner`)
- transfer ownership to a new account (`transfer_ownership`)

Conventions
-----------
- Addresses are 20-byte `bytes`; the zero address is never a valid owner.
- The owner is stored under `OWNER_KEY = b"access:owner"`.
- Events:
    - "OwnershipTransferred" args: {"previous": bytes, "new": bytes}

Typical usage
-------------
    from escrow_contracts.stdlib.access import ownable

    def init(owner: bytes) -> None:
        ownable.init_owner(owner)

    def admin_only() -> None:
        ownable.require_owner(context.caller())
"""
from __future__ import annotations

from typing import Final

from escrow_vm.stdlib import abi, events, storage

from . import OWNER_KEY

ERR_NOT_OWNER: Final[bytes] = b"ACCESS:NOT_OWNER"
ERR_ZERO_OWNER: Final[bytes] = b"ACCESS:ZERO_OWNER"
ERR_ALREADY_INIT: Final[bytes] = b"ACCESS:ALREADY_INITIALIZED"

EVT_OWNERSHIP_TRANSFERRED: Final[bytes] = b"OwnershipTransferred"

__all__ = [
    "OWNER_KEY",
    "get_owner",
    "init_owner",
    "require_owner",
    "transfer_ownership",
]


def get_owner() -> bytes:
    """Current owner, or the zero address before `init_owner`."""
    v = storage.get(OWNER_KEY)
    return v if v else abi.ZERO_ADDRESS


def init_owner(owner: bytes) -> None:
    """Set the initial owner. Reverts if an owner is already set or `owner` is zero."""
    if storage.get(OWNER_KEY):
        abi.revert(ERR_ALREADY_INIT)
    abi.require(not abi.is_zero_address(owner), ERR_ZERO_OWNER, code=abi.INVALID_ARGUMENT)
    storage.set(OWNER_KEY, owner)
    events.emit(EVT_OWNERSHIP_TRANSFERRED, {b"previous": abi.ZERO_ADDRESS, b"new": owner})


def require_owner(caller: bytes) -> None:
    owner = storage.get(OWNER_KEY)
    if not owner or owner != caller:
        abi.revert(ERR_NOT_OWNER)


def transfer_ownership(caller: bytes, new_owner: bytes) -> None:
    """
    Owner-only: hand the contract to `new_owner` (must be non-zero).

    Emits:
        - "OwnershipTransferred" with {"previous": <old>, "new": <new_owner>}
    """
    require_owner(caller)
    abi.require(not abi.is_zero_address(new_owner), ERR_ZERO_OWNER, code=abi.INVALID_ARGUMENT)
    previous = get_owner()
    storage.set(OWNER_KEY, new_owner)
    events.emit(EVT_OWNERSHIP_TRANSFERRED, {b"previous": previous, b"new": new_owner})
