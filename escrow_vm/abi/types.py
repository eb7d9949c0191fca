"""
ABI type definitions and validation for constructor arguments and hash preimages.

The surface mirrors the handful of types contracts here actually exchange:
  - int / uint (bounded width; canonical default = 256 bits)
  - bytesN (fixed, 1..32) and dynamic bytes / string
  - bool
  - address (20 raw bytes; "0x"-prefixed hex accepted on input)

Utilities here *only* coerce/validate Python values; the on-wire encoding is
implemented in escrow_vm.abi.encoding.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

__all__ = [
    "ABITypeError",
    "ValidationError",
    "ADDRESS_LEN",
    "normalize_hex",
    "coerce_bool",
    "coerce_int",
    "coerce_uint",
    "coerce_bytes",
    "coerce_address",
    "IntType",
    "UIntType",
    "BytesType",
    "StringType",
    "BoolType",
    "AddressType",
    "parse_type",
]

ADDRESS_LEN = 20


class ABITypeError(TypeError):
    """Raised when an ABI type spec is malformed or unsupported."""


class ValidationError(ValueError):
    """Raised when a Python value does not conform to an ABI type."""


# ──────────────────────────────────────────────────────────────────────────────
# Scalar coercion helpers
# ──────────────────────────────────────────────────────────────────────────────


def normalize_hex(s: str) -> bytes:
    """Convert a 0x-prefixed hex string to bytes, accepting even-length only."""
    if not isinstance(s, str) or not s.startswith("0x"):
        raise ValidationError("expected 0x-prefixed hex string")
    hex_part = s[2:]
    if len(hex_part) % 2 != 0:
        raise ValidationError("hex string must have an even number of digits")
    try:
        return bytes.fromhex(hex_part)
    except ValueError as e:
        raise ValidationError(f"invalid hex: {e}") from e


def coerce_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if value in (0, 1):
        return bool(value)
    raise ValidationError("bool must be True/False")


def coerce_int(value: Any, *, bits: int = 256, signed: bool = True) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError("int must be a Python int")
    if bits <= 0 or bits > 256:
        raise ABITypeError("bits must be in 1..256")
    min_v = -(1 << (bits - 1)) if signed else 0
    max_v = (1 << (bits - 1)) - 1 if signed else (1 << bits) - 1
    if value < min_v or value > max_v:
        kind = "int" if signed else "uint"
        raise ValidationError(f"{kind}{bits} out of range [{min_v}, {max_v}]")
    return int(value)


def coerce_uint(value: Any, *, bits: int = 256) -> int:
    return coerce_int(value, bits=bits, signed=False)


def coerce_bytes(
    value: Any,
    *,
    fixed_len: Optional[int] = None,
    max_len: Optional[int] = None,
) -> bytes:
    """Accept bytes or 0x-hex; enforce optional fixed or max length (in bytes)."""
    if isinstance(value, bytes):
        b = value
    elif isinstance(value, (bytearray, memoryview)):
        b = bytes(value)
    elif isinstance(value, str) and value.startswith("0x"):
        b = normalize_hex(value)
    else:
        raise ValidationError("bytes must be bytes, bytearray, or 0x-hex string")
    if fixed_len is not None and len(b) != fixed_len:
        raise ValidationError(f"bytes length must be exactly {fixed_len}, got {len(b)}")
    if max_len is not None and len(b) > max_len:
        raise ValidationError(f"bytes too long (max {max_len}, got {len(b)})")
    return b


def coerce_address(value: Any) -> bytes:
    """Accept 20 raw bytes or a 0x-prefixed 40-digit hex string."""
    try:
        return coerce_bytes(value, fixed_len=ADDRESS_LEN)
    except ValidationError as e:
        raise ValidationError(f"invalid address: {e}") from e


# ──────────────────────────────────────────────────────────────────────────────
# Type specs
# ──────────────────────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class IntType:
    bits: int = 256
    signed: bool = True
    dynamic = False

    def validate(self, value: Any) -> int:
        return coerce_int(value, bits=self.bits, signed=self.signed)

    @property
    def name(self) -> str:
        return f"{'int' if self.signed else 'uint'}{self.bits}"


@dataclass(frozen=True)
class UIntType:
    bits: int = 256
    dynamic = False

    def validate(self, value: Any) -> int:
        return coerce_uint(value, bits=self.bits)

    @property
    def name(self) -> str:
        return f"uint{self.bits}"


@dataclass(frozen=True)
class BytesType:
    fixed_len: Optional[int] = None

    def __post_init__(self) -> None:
        if self.fixed_len is not None and not 1 <= self.fixed_len <= 32:
            raise ABITypeError("bytesN length must be in 1..32")

    @property
    def dynamic(self) -> bool:
        return self.fixed_len is None

    def validate(self, value: Any) -> bytes:
        return coerce_bytes(value, fixed_len=self.fixed_len)

    @property
    def name(self) -> str:
        if self.fixed_len is not None:
            return f"bytes{self.fixed_len}"
        return "bytes"


@dataclass(frozen=True)
class StringType:
    dynamic = True

    def validate(self, value: Any) -> bytes:
        if isinstance(value, str):
            return value.encode("utf-8")
        raise ValidationError("string must be a Python str")

    @property
    def name(self) -> str:
        return "string"


@dataclass(frozen=True)
class BoolType:
    dynamic = False

    def validate(self, value: Any) -> bool:
        return coerce_bool(value)

    @property
    def name(self) -> str:
        return "bool"


@dataclass(frozen=True)
class AddressType:
    dynamic = False

    def validate(self, value: Any) -> bytes:
        return coerce_address(value)

    @property
    def name(self) -> str:
        return "address"


# ──────────────────────────────────────────────────────────────────────────────
# Parser for textual type specs (e.g., "uint256", "bytes32", "address", "bool")
# ──────────────────────────────────────────────────────────────────────────────


def parse_type(spec: str) -> Any:
    """
    Parse a textual type spec into a type object with a .validate() method.
    Supported forms:
      - "int", "intN" where N ∈ {8,16,…,256}
      - "uint", "uintN"
      - "bool", "address", "string"
      - "bytes" (dynamic)
      - "bytesN" where 1 ≤ N ≤ 32 (fixed-length)
    """
    if not isinstance(spec, str) or not spec:
        raise ABITypeError("type spec must be a non-empty string")

    s = spec.strip().lower()

    if s == "bool":
        return BoolType()
    if s == "address":
        return AddressType()
    if s == "string":
        return StringType()

    if s == "int":
        return IntType(bits=256, signed=True)
    if s == "uint":
        return UIntType(bits=256)

    if s.startswith("int"):
        return IntType(bits=_parse_bits(s[3:]), signed=True)
    if s.startswith("uint"):
        return UIntType(bits=_parse_bits(s[4:]))

    if s == "bytes":
        return BytesType(fixed_len=None)
    if s.startswith("bytes"):
        try:
            n = int(s[5:])
        except ValueError as e:
            raise ABITypeError("invalid bytesN length") from e
        return BytesType(fixed_len=n)

    raise ABITypeError(f"unsupported type spec: {spec!r}")


def _parse_bits(raw: str) -> int:
    try:
        bits = int(raw)
    except ValueError as e:
        raise ABITypeError("invalid integer bit width") from e
    if bits % 8 != 0 or not 8 <= bits <= 256:
        raise ABITypeError(f"integer bit width must be a multiple of 8 in 8..256, got {bits}")
    return bits
