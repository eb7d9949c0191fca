from __future__ import annotations

from typing import Any, Mapping, NoReturn, Optional

from escrow_vm.errors import PRECONDITION, Revert

ZERO_ADDRESS = b"\x00" * 20


def revert(reason: bytes, *, code: str = PRECONDITION, context: Optional[Mapping[str, Any]] = None) -> NoReturn:
    """Abort the current call; every write since the frame began is discarded."""
    raise Revert(reason, code=code, context=context)


def require(
    condition: bool,
    reason: bytes = b"REQUIRE_FAILED",
    *,
    code: str = PRECONDITION,
    context: Optional[Mapping[str, Any]] = None,
) -> None:
    """
    Assertion helper for contracts.

        abi.require(bps <= MAX_FEE_BPS, b"ESCROW:FEE_TOO_HIGH", code=INVALID_ARGUMENT)
        abi.require(balance > 0, b"ESCROW:NO_BALANCE")
    """
    if condition:
        return
    revert(reason, code=code, context=context)


def is_zero_address(addr: Any) -> bool:
    return not isinstance(addr, (bytes, bytearray)) or bytes(addr) == ZERO_ADDRESS


__all__ = ["revert", "require", "is_zero_address", "ZERO_ADDRESS"]
