"""
escrow_vm.stdlib
================

Contract-facing standard library surface.

Contracts do:

    from escrow_vm.stdlib import abi, calls, context, events, hash, storage

Exports
-------
- storage  : get/set/delete/exists, get_int/set_int (scoped to the executing contract)
- events   : emit(name: bytes, args: dict)
- hash     : keccak256(b), sha3_256(b)
- abi      : revert(...), require(...), ZERO_ADDRESS, encode/encode_packed
- context  : caller(), self_address(), origin()
- calls    : call/try_call into other contracts, create2 and address prediction
"""

from __future__ import annotations

from . import abi, calls, context, events, hash, storage

__all__ = ("abi", "calls", "context", "events", "hash", "storage")
