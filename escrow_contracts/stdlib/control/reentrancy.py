# -*- coding: utf-8 -*-
"""
Re-entry latch.

    with reentrancy.non_reentrant(b"distribute"):
        ...  # calls into untrusted contracts

The latch lives in the guarding contract's storage, so it is per instance and
visible to a nested call that comes back into the same contract. It is cleared
on every exit path; on a failing exit the whole frame is rolled back anyway.
"""
from __future__ import annotations

from contextlib import contextmanager
from typing import Final, Iterator

from escrow_vm.stdlib import abi, storage

_REENT_PREFIX: Final[bytes] = b"control:reent:"

ERR_REENTRANT: Final[bytes] = b"CONTROL:REENTRANT"

__all__ = ["guard_enter", "guard_exit", "non_reentrant", "is_entered"]


def _key(scope: bytes) -> bytes:
    return _REENT_PREFIX + scope


def is_entered(scope: bytes = b"global") -> bool:
    return storage.get(_key(scope)) == b"\x01"


def guard_enter(scope: bytes = b"global") -> None:
    if is_entered(scope):
        abi.revert(ERR_REENTRANT)
    storage.set(_key(scope), b"\x01")


def guard_exit(scope: bytes = b"global") -> None:
    storage.delete(_key(scope))


@contextmanager
def non_reentrant(scope: bytes = b"global") -> Iterator[None]:
    guard_enter(scope)
    try:
        yield
    finally:
        guard_exit(scope)
