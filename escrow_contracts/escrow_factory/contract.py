# -*- coding: utf-8 -*-
"""
Escrow factory
==============

Deploys payment escrows at addresses that can be computed before deployment,
and keeps a two-way registry between merchants and their escrows.

Addressing
----------
Each merchant id (32 bytes) has a counter that starts at 0 and grows by one per
deployment. Deployment ``n`` for a merchant uses

    salt = keccak256(merchant_id || u256(n))

and the escrow lands at the create2 address of (factory, salt, escrow code,
constructor args). The constructor args are
``(merchant_address, token_address, platform, default_owner)``, with platform
and default owner read from the factory at deployment time. A prediction is
therefore only valid until the next deployment for the same merchant or the
next change of platform/default owner.

State & storage layout
----------------------
    "fac:platform"            -> platform address handed to new escrows
    "fac:default_owner"       -> owner handed to new escrows
    "fac:ctr:" + id           -> u256 deployment counter
    "fac:list:" + id          -> append-only list of escrow addresses (see utils.slots)
    "fac:mid:" + escrow       -> merchant id that owns ``escrow``
    "access:owner", "control:paused"

Only deploy_escrow() is blocked by pause.

Error codes (revert messages)
-----------------------------
- b"FACTORY:ZERO_ADDRESS"     (invalid_argument)
- b"FACTORY:BAD_MERCHANT_ID"  (invalid_argument)
- b"FACTORY:UNKNOWN_ESCROW"   (not_found)
- b"FACTORY:DEPLOY_FAILED"    (deployment)

Events
------
- b"MerchantRegistered"       {merchant_id}                       first deployment only
- b"EscrowDeployed"           {merchant_id, escrow, counter, token}
- b"PlatformAddressChanged"   {old, new}
- b"DefaultOwnerChanged"      {old, new}
- b"Paused" / b"Unpaused"     {account}
"""
from __future__ import annotations

from typing import Final, List

from escrow_contracts.payment_escrow import CODE_ID as ESCROW_CODE
from escrow_contracts.stdlib.access import ownable
from escrow_contracts.stdlib.control import pausable
from escrow_contracts.stdlib.utils import slots
from escrow_vm.stdlib import abi, calls, context, events, hash, storage

INIT_TYPES = ("address", "address")

K_PLATFORM: Final[bytes] = b"fac:platform"
K_DEFAULT_OWNER: Final[bytes] = b"fac:default_owner"
_P_COUNTER: Final[bytes] = b"fac:ctr:"
_P_LIST: Final[bytes] = b"fac:list:"
_P_MERCHANT_OF: Final[bytes] = b"fac:mid:"

ERR_ZERO_ADDRESS: Final[bytes] = b"FACTORY:ZERO_ADDRESS"
ERR_BAD_MERCHANT_ID: Final[bytes] = b"FACTORY:BAD_MERCHANT_ID"
ERR_UNKNOWN_ESCROW: Final[bytes] = b"FACTORY:UNKNOWN_ESCROW"
ERR_DEPLOY_FAILED: Final[bytes] = b"FACTORY:DEPLOY_FAILED"

EVT_MERCHANT_REGISTERED: Final[bytes] = b"MerchantRegistered"
EVT_ESCROW_DEPLOYED: Final[bytes] = b"EscrowDeployed"
EVT_PLATFORM_CHANGED: Final[bytes] = b"PlatformAddressChanged"
EVT_DEFAULT_OWNER_CHANGED: Final[bytes] = b"DefaultOwnerChanged"


def _require_addr(addr: bytes) -> None:
    if not isinstance(addr, (bytes, bytearray)) or len(addr) != 20 or abi.is_zero_address(addr):
        abi.revert(ERR_ZERO_ADDRESS, code=abi.INVALID_ARGUMENT)


def _require_merchant_id(merchant_id: bytes) -> None:
    if not isinstance(merchant_id, (bytes, bytearray)) or len(merchant_id) != 32:
        abi.revert(ERR_BAD_MERCHANT_ID, code=abi.INVALID_ARGUMENT)


def _salt(merchant_id: bytes, counter: int) -> bytes:
    return hash.keccak256(abi.encode_packed(("bytes32", "uint256"), (merchant_id, counter)))


def _escrow_args(merchant_address: bytes, token_address: bytes) -> tuple:
    return (merchant_address, token_address, get_platform_address(), get_default_owner())


def init(platform: bytes, default_owner: bytes) -> None:
    _require_addr(platform)
    _require_addr(default_owner)
    slots.set_address(K_PLATFORM, platform)
    slots.set_address(K_DEFAULT_OWNER, default_owner)
    ownable.init_owner(context.caller())


# ---------------------------------------------------------------------------
# Deployment
# ---------------------------------------------------------------------------


def deploy_escrow(merchant_id: bytes, merchant_address: bytes, token_address: bytes) -> bytes:
    ownable.require_owner(context.caller())
    pausable.require_not_paused()
    _require_merchant_id(merchant_id)
    _require_addr(merchant_address)
    _require_addr(token_address)

    counter = get_merchant_counter(merchant_id)
    slots.set_u256(_P_COUNTER + merchant_id, counter + 1)

    escrow = calls.create2(ESCROW_CODE, _escrow_args(merchant_address, token_address), _salt(merchant_id, counter))
    if abi.is_zero_address(escrow):
        abi.revert(ERR_DEPLOY_FAILED, code=abi.DEPLOYMENT, context={"counter": counter})

    index = slots.list_append(_P_LIST + merchant_id, escrow)
    storage.set(_P_MERCHANT_OF + escrow, merchant_id)

    if index == 0:
        events.emit(EVT_MERCHANT_REGISTERED, {b"merchant_id": merchant_id})
    events.emit(
        EVT_ESCROW_DEPLOYED,
        {b"merchant_id": merchant_id, b"escrow": escrow, b"counter": counter, b"token": token_address},
    )
    return escrow


def predict_escrow_address(merchant_id: bytes, merchant_address: bytes, token_address: bytes) -> bytes:
    """Address the next deploy_escrow() with these arguments would produce under the current settings."""
    _require_merchant_id(merchant_id)
    counter = get_merchant_counter(merchant_id)
    return calls.compute_create2_address(
        ESCROW_CODE,
        _escrow_args(merchant_address, token_address),
        _salt(merchant_id, counter),
    )


# ---------------------------------------------------------------------------
# Registry views
# ---------------------------------------------------------------------------


def get_escrows_for_merchant(merchant_id: bytes) -> List[bytes]:
    return slots.list_all(_P_LIST + merchant_id)


def get_merchant_for_escrow(escrow: bytes) -> bytes:
    merchant_id = storage.get(_P_MERCHANT_OF + bytes(escrow))
    if not merchant_id:
        abi.revert(ERR_UNKNOWN_ESCROW, code=abi.NOT_FOUND)
    return merchant_id


def get_merchant_escrow_count(merchant_id: bytes) -> int:
    return slots.list_len(_P_LIST + merchant_id)


def get_merchant_counter(merchant_id: bytes) -> int:
    return slots.get_u256(_P_COUNTER + merchant_id)


def merchant_exists(merchant_id: bytes) -> bool:
    return get_merchant_escrow_count(merchant_id) > 0


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------


def get_platform_address() -> bytes:
    return slots.get_address(K_PLATFORM)


def set_platform_address(addr: bytes) -> None:
    ownable.require_owner(context.caller())
    _require_addr(addr)
    old = get_platform_address()
    slots.set_address(K_PLATFORM, addr)
    events.emit(EVT_PLATFORM_CHANGED, {b"old": old, b"new": addr})


def get_default_owner() -> bytes:
    return slots.get_address(K_DEFAULT_OWNER)


def set_default_owner(addr: bytes) -> None:
    ownable.require_owner(context.caller())
    _require_addr(addr)
    old = get_default_owner()
    slots.set_address(K_DEFAULT_OWNER, addr)
    events.emit(EVT_DEFAULT_OWNER_CHANGED, {b"old": old, b"new": addr})


def pause() -> None:
    pausable.pause(context.caller())


def unpause() -> None:
    pausable.unpause(context.caller())


def paused() -> bool:
    return pausable.is_paused()


def owner() -> bytes:
    return ownable.get_owner()


def transfer_ownership(new_owner: bytes) -> None:
    ownable.transfer_ownership(context.caller(), new_owner)


__all__ = [
    "deploy_escrow",
    "predict_escrow_address",
    "get_escrows_for_merchant",
    "get_merchant_for_escrow",
    "get_merchant_escrow_count",
    "get_merchant_counter",
    "merchant_exists",
    "get_platform_address",
    "set_platform_address",
    "get_default_owner",
    "set_default_owner",
    "pause",
    "unpause",
    "paused",
    "owner",
    "transfer_ownership",
]
