"""Hashing for contracts (bytes in, bytes out)."""

from escrow_vm.runtime.hash_api import hash_concat_keccak256, keccak256, sha3_256

__all__ = ["keccak256", "sha3_256", "hash_concat_keccak256"]
