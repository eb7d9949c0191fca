# -*- coding: utf-8 -*-
"""
escrow_contracts.stdlib.math.safe_uint
======================================

Checked unsigned-integer helpers.

- **U256**-oriented arithmetic that never uses Python floats.
- Checked variants revert via ``abi.revert(b"...")`` on overflow, underflow,
  out-of-range input or division by zero.
- Basis-point helpers round **down**; ``split_bps`` hands the remainder of the
  rounding to the non-fee side so both parts always sum to the input.
"""

from __future__ import annotations

from typing import Final, Tuple

from escrow_vm.stdlib import abi

U256_MAX: Final[int] = (1 << 256) - 1
BPS_DENOMINATOR: Final[int] = 10_000

ERR_OOB: Final[bytes] = b"UINT:OOB"
ERR_OVER: Final[bytes] = b"UINT:OVERFLOW"
ERR_UNDER: Final[bytes] = b"UINT:UNDERFLOW"
ERR_DIV0: Final[bytes] = b"UINT:DIV0"
ERR_BPS: Final[bytes] = b"UINT:BPS_RANGE"


def require_u256(*xs: int) -> None:
    """Revert if any argument is not an int in [0, U256_MAX]."""
    for x in xs:
        if isinstance(x, bool) or not isinstance(x, int) or x < 0 or x > U256_MAX:
            abi.revert(ERR_OOB, code=abi.INVALID_ARGUMENT)


def u256_add(x: int, y: int) -> int:
    require_u256(x, y)
    z = x + y
    if z > U256_MAX:
        abi.revert(ERR_OVER)
    return z


def u256_sub(x: int, y: int) -> int:
    require_u256(x, y)
    if y > x:
        abi.revert(ERR_UNDER)
    return x - y


def u256_mul_div_down(x: int, y: int, d: int) -> int:
    """floor(x*y/d); the intermediate product may exceed U256, the result cannot."""
    require_u256(x, y, d)
    if d == 0:
        abi.revert(ERR_DIV0)
    z = (x * y) // d
    if z > U256_MAX:
        abi.revert(ERR_OVER)
    return z


def apply_bps(amount: int, bps: int) -> int:
    """floor(amount * bps / 10_000) with bps in [0, 10_000]."""
    if isinstance(bps, bool) or not isinstance(bps, int) or not 0 <= bps <= BPS_DENOMINATOR:
        abi.revert(ERR_BPS, code=abi.INVALID_ARGUMENT)
    return u256_mul_div_down(amount, bps, BPS_DENOMINATOR)


def split_bps(amount: int, bps: int) -> Tuple[int, int]:
    """
    Split `amount` into ``(rest, fee)`` where ``fee = apply_bps(amount, bps)``.

        >>> split_bps(1001, 250)
        (976, 25)
    """
    fee = apply_bps(amount, bps)
    return amount - fee, fee


__all__ = [
    "U256_MAX",
    "BPS_DENOMINATOR",
    "require_u256",
    "u256_add",
    "u256_sub",
    "u256_mul_div_down",
    "apply_bps",
    "split_bps",
]
