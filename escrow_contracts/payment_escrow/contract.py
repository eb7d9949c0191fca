# -*- coding: utf-8 -*-
"""
Payment escrow
==============

Holds a balance of one fungible token and pays it out in a single fixed split:
``fee`` basis points to the platform, the rest to the merchant. Anyone may
trigger a payout; only the owner changes configuration.

    platform_amount = floor(balance * fee / 10_000)
    merchant_amount = balance - platform_amount

Rounding always favours the merchant and the whole balance leaves the escrow.

State & storage layout
----------------------
    "esc:merchant"  -> merchant payout address (20 bytes)
    "esc:platform"  -> platform payout address (20 bytes)
    "esc:token"     -> token contract address (20 bytes)
    "esc:fee"       -> fee in basis points (u256, 0..5000)
    "access:owner"  -> owner (see stdlib.access.ownable)
    "control:*"     -> paused flag and re-entry latch (see stdlib.control)

Lifecycle
---------
Active <-> Paused via pause()/unpause(). While paused, distribute() and
set_fee() revert; address setters and every getter keep working.

Error codes (revert messages)
-----------------------------
- b"ESCROW:ZERO_ADDRESS"      (invalid_argument)
- b"ESCROW:FEE_TOO_HIGH"      (invalid_argument)
- b"ESCROW:NO_BALANCE"        (precondition)
- b"ESCROW:TRANSFER_FAILED"   (precondition; token returned False or failed)
- b"ACCESS:NOT_OWNER", b"CONTROL:PAUSED", b"CONTROL:NOT_PAUSED", b"CONTROL:REENTRANT"

Events
------
- b"FeeChanged"               {old, new}
- b"MerchantAddressChanged"   {old, new}
- b"PlatformAddressChanged"   {old, new}
- b"FundsDistributed"         {merchant_amount, platform_amount}
- b"Paused" / b"Unpaused"     {account}
- b"OwnershipTransferred"     {previous, new}
"""
from __future__ import annotations

from typing import Final, Tuple

from escrow_contracts.stdlib.access import ownable
from escrow_contracts.stdlib.control import pausable, reentrancy
from escrow_contracts.stdlib.math.safe_uint import split_bps
from escrow_contracts.stdlib.utils import slots
from escrow_vm.stdlib import abi, calls, context, events

INIT_TYPES = ("address", "address", "address", "address")

MAX_FEE_BPS: Final[int] = 5000
DEFAULT_FEE_BPS: Final[int] = 250

K_MERCHANT: Final[bytes] = b"esc:merchant"
K_PLATFORM: Final[bytes] = b"esc:platform"
K_TOKEN: Final[bytes] = b"esc:token"
K_FEE: Final[bytes] = b"esc:fee"

ERR_ZERO_ADDRESS: Final[bytes] = b"ESCROW:ZERO_ADDRESS"
ERR_FEE_TOO_HIGH: Final[bytes] = b"ESCROW:FEE_TOO_HIGH"
ERR_NO_BALANCE: Final[bytes] = b"ESCROW:NO_BALANCE"
ERR_TRANSFER_FAILED: Final[bytes] = b"ESCROW:TRANSFER_FAILED"

EVT_FEE_CHANGED: Final[bytes] = b"FeeChanged"
EVT_MERCHANT_CHANGED: Final[bytes] = b"MerchantAddressChanged"
EVT_PLATFORM_CHANGED: Final[bytes] = b"PlatformAddressChanged"
EVT_DISTRIBUTED: Final[bytes] = b"FundsDistributed"


def _require_addr(addr: bytes) -> None:
    if not isinstance(addr, (bytes, bytearray)) or len(addr) != 20 or abi.is_zero_address(addr):
        abi.revert(ERR_ZERO_ADDRESS, code=abi.INVALID_ARGUMENT)


def _only_owner() -> None:
    ownable.require_owner(context.caller())


def _safe_transfer(token: bytes, to: bytes, amount: int) -> None:
    ok, ret = calls.try_call(token, "transfer", to, amount)
    if not ok:
        abi.revert(ERR_TRANSFER_FAILED, context={"to": "0x" + to.hex(), "cause": ret.to_dict()})
    if ret is not True:
        abi.revert(ERR_TRANSFER_FAILED, context={"to": "0x" + to.hex(), "returned": repr(ret)})


def init(merchant: bytes, token: bytes, platform: bytes, owner: bytes) -> None:
    _require_addr(merchant)
    _require_addr(token)
    _require_addr(platform)
    _require_addr(owner)
    slots.set_address(K_MERCHANT, merchant)
    slots.set_address(K_TOKEN, token)
    slots.set_address(K_PLATFORM, platform)
    slots.set_u256(K_FEE, DEFAULT_FEE_BPS)
    ownable.init_owner(owner)


# ---------------------------------------------------------------------------
# Fee
# ---------------------------------------------------------------------------


def get_fee() -> int:
    return slots.get_u256(K_FEE)


def set_fee(bps: int) -> None:
    _only_owner()
    pausable.require_not_paused()
    if isinstance(bps, bool) or not isinstance(bps, int) or not 0 <= bps <= MAX_FEE_BPS:
        abi.revert(ERR_FEE_TOO_HIGH, code=abi.INVALID_ARGUMENT, context={"bps": bps})
    old = get_fee()
    slots.set_u256(K_FEE, bps)
    events.emit(EVT_FEE_CHANGED, {b"old": old, b"new": bps})


# ---------------------------------------------------------------------------
# Payout addresses
# ---------------------------------------------------------------------------


def get_merchant_address() -> bytes:
    return slots.get_address(K_MERCHANT)


def set_merchant_address(addr: bytes) -> None:
    _only_owner()
    _require_addr(addr)
    old = get_merchant_address()
    slots.set_address(K_MERCHANT, addr)
    events.emit(EVT_MERCHANT_CHANGED, {b"old": old, b"new": addr})


def get_platform_address() -> bytes:
    return slots.get_address(K_PLATFORM)


def set_platform_address(addr: bytes) -> None:
    _only_owner()
    _require_addr(addr)
    old = get_platform_address()
    slots.set_address(K_PLATFORM, addr)
    events.emit(EVT_PLATFORM_CHANGED, {b"old": old, b"new": addr})


def get_token() -> bytes:
    return slots.get_address(K_TOKEN)


# ---------------------------------------------------------------------------
# Distribution
# ---------------------------------------------------------------------------


def distribute() -> Tuple[int, int]:
    """
    Pay out the whole token balance; returns ``(merchant_amount, platform_amount)``.

    The platform share is transferred first. A zero share is skipped rather
    than sent as an empty transfer.
    """
    pausable.require_not_paused()
    with reentrancy.non_reentrant(b"distribute"):
        token = get_token()
        balance = calls.call(token, "balance_of", context.self_address())
        abi.require(balance > 0, ERR_NO_BALANCE)

        merchant_amount, platform_amount = split_bps(balance, get_fee())
        if platform_amount > 0:
            _safe_transfer(token, get_platform_address(), platform_amount)
        if merchant_amount > 0:
            _safe_transfer(token, get_merchant_address(), merchant_amount)

        events.emit(
            EVT_DISTRIBUTED,
            {b"merchant_amount": merchant_amount, b"platform_amount": platform_amount},
        )
    return merchant_amount, platform_amount


# ---------------------------------------------------------------------------
# Pause & ownership
# ---------------------------------------------------------------------------


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
    "get_fee",
    "set_fee",
    "get_merchant_address",
    "set_merchant_address",
    "get_platform_address",
    "set_platform_address",
    "get_token",
    "distribute",
    "pause",
    "unpause",
    "paused",
    "owner",
    "transfer_ownership",
]
