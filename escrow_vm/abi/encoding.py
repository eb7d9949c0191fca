"""
Word-aligned ABI encoding (Ethereum-compatible head/tail layout).

Static types occupy one 32-byte word in the head:

- uintN / intN:   big-endian, two's complement for negatives
- bool:           0 or 1
- address:        20 bytes, left-padded with zeros
- bytesN:         N bytes, right-padded with zeros

Dynamic types (bytes, string) put an offset word in the head; the tail holds
a length word followed by the data right-padded to a multiple of 32.

    encode_args(("address", "uint256"), (addr, 7))

This is what constructor arguments look like when appended to contract code,
so the deterministic creation address depends on the exact bytes produced here.
"""

from __future__ import annotations

from typing import Any, Sequence, Union

from .types import (
    ABITypeError,
    AddressType,
    BoolType,
    BytesType,
    IntType,
    StringType,
    UIntType,
    ValidationError,
    parse_type,
)

__all__ = [
    "WORD",
    "encode_uint_word",
    "encode_int_word",
    "encode_value",
    "encode_args",
    "encode_packed",
]

WORD = 32

TypeSpec = Union[str, IntType, UIntType, BytesType, StringType, BoolType, AddressType]


def _pad_right(b: bytes) -> bytes:
    rem = len(b) % WORD
    return b if rem == 0 else b + b"\x00" * (WORD - rem)


def encode_uint_word(value: int) -> bytes:
    return UIntType(256).validate(value).to_bytes(WORD, "big")


def encode_int_word(value: int, *, bits: int = 256) -> bytes:
    v = IntType(bits=bits).validate(value)
    return v.to_bytes(WORD, "big", signed=True)


def _resolve(typ: TypeSpec) -> Any:
    return parse_type(typ) if isinstance(typ, str) else typ


def _encode_static(value: Any, typ: Any) -> bytes:
    if isinstance(typ, BoolType):
        return encode_uint_word(1 if typ.validate(value) else 0)
    if isinstance(typ, UIntType):
        return typ.validate(value).to_bytes(WORD, "big")
    if isinstance(typ, IntType):
        return encode_int_word(value, bits=typ.bits)
    if isinstance(typ, AddressType):
        return typ.validate(value).rjust(WORD, b"\x00")
    if isinstance(typ, BytesType) and typ.fixed_len is not None:
        return typ.validate(value).ljust(WORD, b"\x00")
    raise ABITypeError(f"not a static ABI type: {typ!r}")


def _encode_dynamic(value: Any, typ: Any) -> bytes:
    raw = typ.validate(value)
    return encode_uint_word(len(raw)) + _pad_right(raw)


def encode_value(value: Any, typ: TypeSpec) -> bytes:
    """
    Encode a single value according to the given ABI type (string or object).
    Dynamic values are encoded as a one-element tuple so the result is self-contained.
    """
    return encode_args((typ,), (value,))


def encode_args(types: Sequence[TypeSpec], values: Sequence[Any]) -> bytes:
    """
    Encode a sequence of arguments as head || tail.

    Raises:
        ABITypeError or ValidationError on mismatch or invalid values.
    """
    if len(types) != len(values):
        raise ValidationError(f"arity mismatch: {len(types)} types vs {len(values)} values")
    resolved = [_resolve(t) for t in types]

    head = bytearray()
    tail = bytearray()
    head_size = WORD * len(resolved)
    for typ, value in zip(resolved, values):
        if typ.dynamic:
            head += encode_uint_word(head_size + len(tail))
            tail += _encode_dynamic(value, typ)
        else:
            head += _encode_static(value, typ)
    return bytes(head + tail)


def encode_packed(types: Sequence[TypeSpec], values: Sequence[Any]) -> bytes:
    """
    Tightly packed encoding (no padding, no offsets), as used for hash preimages.

    uintN/intN take N/8 bytes, address 20, bool 1, bytesN N, bytes/string raw.
    """
    if len(types) != len(values):
        raise ValidationError(f"arity mismatch: {len(types)} types vs {len(values)} values")
    out = bytearray()
    for typ, value in zip((_resolve(t) for t in types), values):
        if isinstance(typ, BoolType):
            out += b"\x01" if typ.validate(value) else b"\x00"
        elif isinstance(typ, UIntType):
            out += typ.validate(value).to_bytes(typ.bits // 8, "big")
        elif isinstance(typ, IntType):
            out += typ.validate(value).to_bytes(typ.bits // 8, "big", signed=True)
        else:
            out += typ.validate(value)
    return bytes(out)
