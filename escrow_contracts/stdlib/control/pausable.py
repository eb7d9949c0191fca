# -*- coding: utf-8 -*-
"""
Global pause switch.

Only the owner (``access.ownable``) may change the flag, and a change must be a
real transition: pausing a paused contract or unpausing a running one reverts.

Emitted events:
  * ``Paused``   : {"account": bytes}
  * ``Unpaused`` : {"account": bytes}
"""
from __future__ import annotations

from typing import Final

from escrow_vm.stdlib import abi, events, storage

from ..access import ownable

PAUSED_KEY: Final[bytes] = b"control:paused"

ERR_PAUSED: Final[bytes] = b"CONTROL:PAUSED"
ERR_NOT_PAUSED: Final[bytes] = b"CONTROL:NOT_PAUSED"

EVT_PAUSED: Final[bytes] = b"Paused"
EVT_UNPAUSED: Final[bytes] = b"Unpaused"

__all__ = [
    "PAUSED_KEY",
    "is_paused",
    "require_not_paused",
    "require_paused",
    "pause",
    "unpause",
]


def is_paused() -> bool:
    return storage.get(PAUSED_KEY) == b"\x01"


def require_not_paused() -> None:
    if is_paused():
        abi.revert(ERR_PAUSED)


def require_paused() -> None:
    if not is_paused():
        abi.revert(ERR_NOT_PAUSED)


def pause(caller: bytes) -> None:
    ownable.require_owner(caller)
    require_not_paused()
    storage.set(PAUSED_KEY, b"\x01")
    events.emit(EVT_PAUSED, {b"account": caller})


def unpause(caller: bytes) -> None:
    ownable.require_owner(caller)
    require_paused()
    storage.delete(PAUSED_KEY)
    events.emit(EVT_UNPAUSED, {b"account": caller})
