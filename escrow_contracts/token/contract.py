# -*- coding: utf-8 -*-
"""
Fungible token (ERC-20 style)
=============================

Deterministic, float-free, storage-backed token. Callers are taken from the
active frame, so a contract holding tokens moves them by calling ``transfer``
itself.

Events
------
- b"Transfer" { b"from": bytes, b"to": bytes, b"value": int }
- b"Approval" { b"owner": bytes, b"spender": bytes, b"value": int }

Public interface
----------------
init(name: str, symbol: str, decimals: int, holder: bytes, supply: int)
name() -> str, symbol() -> str, decimals() -> int, total_supply() -> int
balance_of(addr) -> int, allowance(owner, spender) -> int
transfer(to, amount) -> bool
approve(spender, amount) -> bool
transfer_from(owner, to, amount) -> bool
mint(to, amount) -> bool            (owner only)
owner() -> bytes

Amounts are in [0, 2**256 - 1]; moving more than a balance or allowance
reverts with ``TOKEN:INSUFFICIENT_BALANCE`` / ``TOKEN:ALLOWANCE_LOW``.
"""

from __future__ import annotations

from typing import Final

from escrow_contracts.stdlib.access import ownable
from escrow_contracts.stdlib.math.safe_uint import require_u256, u256_add, u256_sub
from escrow_contracts.stdlib.utils import slots
from escrow_vm.stdlib import abi, context, events, storage

INIT_TYPES = ("string", "string", "uint8", "address", "uint256")

K_NAME: Final[bytes] = b"tok:meta:name"
K_SYMBOL: Final[bytes] = b"tok:meta:symbol"
K_DECIMALS: Final[bytes] = b"tok:meta:dec"
K_TOTAL: Final[bytes] = b"tok:meta:total"
_P_BAL: Final[bytes] = b"tok:bal:"
_P_ALLOW: Final[bytes] = b"tok:allow:"

EVT_TRANSFER: Final[bytes] = b"Transfer"
EVT_APPROVAL: Final[bytes] = b"Approval"


def _require_address(addr: bytes) -> None:
    if not isinstance(addr, (bytes, bytearray)) or len(addr) != 20 or abi.is_zero_address(addr):
        abi.revert(b"TOKEN:BAD_ADDRESS", code=abi.INVALID_ARGUMENT)


def _key_balance(addr: bytes) -> bytes:
    return _P_BAL + bytes(addr)


def _key_allow(owner: bytes, spender: bytes) -> bytes:
    return _P_ALLOW + bytes(owner) + bytes(spender)


def _move(src: bytes, dst: bytes, amount: int) -> None:
    src_bal = slots.get_u256(_key_balance(src))
    if src_bal < amount:
        abi.revert(b"TOKEN:INSUFFICIENT_BALANCE")
    slots.set_u256(_key_balance(src), u256_sub(src_bal, amount))
    slots.set_u256(_key_balance(dst), u256_add(slots.get_u256(_key_balance(dst)), amount))
    events.emit(EVT_TRANSFER, {b"from": src, b"to": dst, b"value": amount})


def _mint_to(to: bytes, amount: int) -> None:
    slots.set_u256(K_TOTAL, u256_add(slots.get_u256(K_TOTAL), amount))
    slots.set_u256(_key_balance(to), u256_add(slots.get_u256(_key_balance(to)), amount))
    events.emit(EVT_TRANSFER, {b"from": abi.ZERO_ADDRESS, b"to": to, b"value": amount})


def init(name: str, symbol: str, decimals: int, holder: bytes, supply: int) -> None:
    abi.require(0 < len(name) <= 64 and 0 < len(symbol) <= 16, b"TOKEN:BAD_METADATA", code=abi.INVALID_ARGUMENT)
    abi.require(0 <= decimals <= 36, b"TOKEN:BAD_DECIMALS", code=abi.INVALID_ARGUMENT)
    _require_address(holder)
    require_u256(supply)

    storage.set(K_NAME, name.encode("utf-8"))
    storage.set(K_SYMBOL, symbol.encode("utf-8"))
    slots.set_u256(K_DECIMALS, decimals)
    ownable.init_owner(context.caller())
    if supply > 0:
        _mint_to(holder, supply)


def name() -> str:
    return (storage.get(K_NAME) or b"").decode("utf-8")


def symbol() -> str:
    return (storage.get(K_SYMBOL) or b"").decode("utf-8")


def decimals() -> int:
    return slots.get_u256(K_DECIMALS)


def total_supply() -> int:
    return slots.get_u256(K_TOTAL)


def balance_of(addr: bytes) -> int:
    return slots.get_u256(_key_balance(addr))


def allowance(owner: bytes, spender: bytes) -> int:
    return slots.get_u256(_key_allow(owner, spender))


def owner() -> bytes:
    return ownable.get_owner()


def transfer(to: bytes, amount: int) -> bool:
    _require_address(to)
    require_u256(amount)
    _move(context.caller(), to, amount)
    return True


def approve(spender: bytes, amount: int) -> bool:
    _require_address(spender)
    require_u256(amount)
    caller = context.caller()
    slots.set_u256(_key_allow(caller, spender), amount)
    events.emit(EVT_APPROVAL, {b"owner": caller, b"spender": spender, b"value": amount})
    return True


def transfer_from(owner: bytes, to: bytes, amount: int) -> bool:
    _require_address(owner)
    _require_address(to)
    require_u256(amount)
    spender = context.caller()
    allowed = slots.get_u256(_key_allow(owner, spender))
    if allowed < amount:
        abi.revert(b"TOKEN:ALLOWANCE_LOW")
    slots.set_u256(_key_allow(owner, spender), allowed - amount)
    _move(owner, to, amount)
    return True


def mint(to: bytes, amount: int) -> bool:
    ownable.require_owner(context.caller())
    _require_address(to)
    require_u256(amount)
    _mint_to(to, amount)
    return True


__all__ = [
    "name",
    "symbol",
    "decimals",
    "total_supply",
    "balance_of",
    "allowance",
    "owner",
    "transfer",
    "approve",
    "transfer_from",
    "mint",
]
