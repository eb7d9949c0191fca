"""
escrow_vm.runtime.create2 — deterministic contract addresses.

Two derivations, both pure:

    create:   keccak256(deployer || u256(nonce))[12:]
    create2:  keccak256(0xff || deployer || salt || keccak256(init_code))[12:]

``init_code`` is the contract source followed by its ABI-encoded constructor
arguments, so a create2 address commits to the deployer, the salt, the code and
every constructor argument. The same helpers serve address prediction and the
creation itself.
"""

from __future__ import annotations

from typing import Any, Sequence

from escrow_vm.abi.encoding import encode_args, encode_uint_word
from escrow_vm.abi.types import ADDRESS_LEN
from escrow_vm.errors import VmError
from escrow_vm.runtime.hash_api import hash_concat_keccak256, keccak256

CREATE2_PREFIX = b"\xff"
SALT_LEN = 32


def _check(buf: bytes, size: int, name: str) -> bytes:
    if not isinstance(buf, (bytes, bytearray)) or len(buf) != size:
        raise VmError(f"{name} must be {size} bytes", code="address_invalid", context={"len": len(buf or b"")})
    return bytes(buf)


def init_code(source: bytes, init_types: Sequence[str], args: Sequence[Any]) -> bytes:
    return bytes(source) + encode_args(tuple(init_types), tuple(args))


def init_code_hash(source: bytes, init_types: Sequence[str], args: Sequence[Any]) -> bytes:
    return keccak256(init_code(source, init_types, args))


def compute_create2_address(deployer: bytes, salt: bytes, code_hash: bytes) -> bytes:
    """Address for ``deployer`` creating code whose init-code hash is ``code_hash`` under ``salt``."""
    deployer = _check(deployer, ADDRESS_LEN, "deployer")
    salt = _check(salt, SALT_LEN, "salt")
    code_hash = _check(code_hash, 32, "init code hash")
    return hash_concat_keccak256(CREATE2_PREFIX, deployer, salt, code_hash)[12:]


def compute_create_address(deployer: bytes, nonce: int) -> bytes:
    deployer = _check(deployer, ADDRESS_LEN, "deployer")
    return hash_concat_keccak256(deployer, encode_uint_word(nonce))[12:]


__all__ = [
    "init_code",
    "init_code_hash",
    "compute_create2_address",
    "compute_create_address",
]
