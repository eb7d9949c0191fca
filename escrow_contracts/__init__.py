"""
escrow_contracts — contracts for merchant payment escrows on escrow_vm.

Code ids (pass to ``Chain.deploy``):

- ESCROW_CODE   payment escrow (fee split between merchant and platform)
- FACTORY_CODE  deterministic escrow deployer and merchant registry
- TOKEN_CODE    ERC-20 style token
"""

from escrow_contracts.escrow_factory import CODE_ID as FACTORY_CODE
from escrow_contracts.payment_escrow import CODE_ID as ESCROW_CODE

TOKEN_CODE = "escrow_contracts.token.contract"

__all__ = ["ESCROW_CODE", "FACTORY_CODE", "TOKEN_CODE"]
