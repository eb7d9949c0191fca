"""
escrow_contracts.stdlib
=======================

Reusable building blocks for contracts running on escrow_vm:

- access.ownable        single-owner gate
- control.pausable      contract-wide pause switch
- control.reentrancy    re-entry latch
- math.safe_uint        checked u256 arithmetic and basis-point splits
- utils.slots           typed storage slots and append-only lists

Helpers are stateless; everything they keep lives in the calling contract's
storage under the key prefixes documented in each module.
"""
