"""ABI helpers: type parsing/coercion and word-aligned encoding."""

from .encoding import WORD, encode_args, encode_packed, encode_uint_word, encode_value
from .types import ABITypeError, ValidationError, coerce_address, coerce_bytes, coerce_uint, parse_type

__all__ = [
    "WORD",
    "encode_args",
    "encode_packed",
    "encode_uint_word",
    "encode_value",
    "ABITypeError",
    "ValidationError",
    "coerce_address",
    "coerce_bytes",
    "coerce_uint",
    "parse_type",
]
