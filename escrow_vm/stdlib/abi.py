"""Reverts, assertions and argument encoding for contracts."""

from escrow_vm.abi.encoding import encode_args as encode
from escrow_vm.abi.encoding import encode_packed
from escrow_vm.errors import DEPLOYMENT, INVALID_ARGUMENT, NOT_FOUND, PRECONDITION
from escrow_vm.runtime.abi import ZERO_ADDRESS, is_zero_address, require, revert

__all__ = [
    "revert",
    "require",
    "is_zero_address",
    "ZERO_ADDRESS",
    "encode",
    "encode_packed",
    "INVALID_ARGUMENT",
    "NOT_FOUND",
    "PRECONDITION",
    "DEPLOYMENT",
]
