from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

from escrow_vm.errors import VmError

MAX_EVENT_NAME_BYTES = 64
MAX_KEY_LEN = 64
MAX_BYTES_LEN = 4096
MAX_INT_BITS = 256

# Keys must be identifier-like: letters/underscore, then letters/digits/underscore.
_KEY_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")

ArgValue = Any  # bytes | bool | int


@dataclass(frozen=True)
class Event:
    """An emitted event, tagged with the address of the contract that emitted it."""

    address: bytes
    name: bytes
    args: Dict[str, ArgValue]

    def __getitem__(self, key: str) -> ArgValue:
        return self.args[key]


def _invalid(message: str, **context: Any) -> VmError:
    return VmError(message, code="event_invalid", context=context)


def _check_name(name: Any) -> bytes:
    if not isinstance(name, (bytes, bytearray)):
        raise _invalid("event name must be bytes", where="name_type")
    b = bytes(name)
    if not b:
        raise _invalid("event name must be non-empty", where="name_empty")
    if len(b) > MAX_EVENT_NAME_BYTES:
        raise _invalid("event name too long", where="name_length", len=len(b))
    return b


def _check_key(key: Any) -> str:
    if isinstance(key, (bytes, bytearray)):
        try:
            key = bytes(key).decode("ascii")
        except UnicodeDecodeError:
            raise _invalid("event key must be ascii", where="key_encoding") from None
    if not isinstance(key, str):
        raise _invalid("event key must be str or bytes", where="key_type")
    if not key or len(key) > MAX_KEY_LEN:
        raise _invalid("event key length out of range", where="key_length", len=len(key))
    if not _KEY_RE.match(key):
        raise _invalid("event key has invalid characters", where="key_grammar", key=key)
    return key


def _check_value(value: Any, *, strict: bool) -> ArgValue:
    if isinstance(value, (bytes, bytearray)):
        b = bytes(value)
        if len(b) > MAX_BYTES_LEN:
            raise _invalid("event bytes arg too long", where="value_bytes_length", len=len(b))
        return b

    # bool is a subclass of int, so check it before int.
    if isinstance(value, bool):
        return value

    if isinstance(value, int):
        if value.bit_length() > MAX_INT_BITS:
            raise _invalid("event int arg out of range", where="value_int_bits", bits=value.bit_length())
        return int(value)

    if not strict and isinstance(value, str):
        return _check_value(value.encode("utf-8"), strict=True)

    raise _invalid("unsupported event arg type", where="value_type", py_type=type(value).__name__)


def build_event(address: bytes, name: bytes, args: Optional[Mapping[Any, Any]], *, strict: bool = True) -> Event:
    """Validate ``name``/``args`` and build an :class:`Event` for ``address``."""
    bname = _check_name(name)
    if args is None:
        args = {}
    if not isinstance(args, Mapping):
        raise _invalid("event args must be a mapping", where="args_type")
    checked: Dict[str, ArgValue] = {}
    for raw_k, raw_v in args.items():
        checked[_check_key(raw_k)] = _check_value(raw_v, strict=strict)
    return Event(address=bytes(address), name=bname, args=checked)


def to_canonical(ev: Event) -> Dict[str, Any]:
    """
    JSON-friendly form used in receipts and logs:

        {"address": "0x…", "name": "FundsDistributed", "args": {"k": v, …}}

    bytes args become 0x-hex; ints and bools pass through.
    """
    args: Dict[str, Any] = {}
    for k, v in ev.args.items():
        args[k] = "0x" + v.hex() if isinstance(v, bytes) else v
    return {
        "address": "0x" + ev.address.hex(),
        "name": ev.name.decode("utf-8", "replace"),
        "args": args,
    }


__all__ = [
    "Event",
    "build_event",
    "to_canonical",
    "MAX_EVENT_NAME_BYTES",
    "MAX_KEY_LEN",
    "MAX_BYTES_LEN",
    "MAX_INT_BITS",
]
