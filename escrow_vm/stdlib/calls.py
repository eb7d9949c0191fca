"""
Calls from one contract into another, and contract creation.

``call`` lets a failure of the callee abort the caller too. ``try_call``
contains it: the callee's writes and events are discarded and the caller gets
``(False, error)`` back to decide for itself.
"""

from __future__ import annotations

from typing import Any, Sequence, Tuple

from escrow_vm.runtime.context import active_chain, current_frame


def call(to: bytes, method: str, *args: Any) -> Any:
    return active_chain().call_from_frame(to, method, args)


def try_call(to: bytes, method: str, *args: Any) -> Tuple[bool, Any]:
    return active_chain().try_call_from_frame(to, method, args)


def create2(code_id: str, args: Sequence[Any], salt: bytes) -> bytes:
    """Deploy ``code_id`` at its deterministic address; returns the zero address on failure."""
    return active_chain().create2_from_frame(code_id, args, salt)


def compute_create2_address(code_id: str, args: Sequence[Any], salt: bytes, deployer: bytes | None = None) -> bytes:
    """Address ``create2`` would produce for the same inputs (deployer defaults to the running contract)."""
    if deployer is None:
        deployer = current_frame().address
    return active_chain().predict_create2(deployer, code_id, args, salt)


__all__ = ["call", "try_call", "create2", "compute_create2_address"]
