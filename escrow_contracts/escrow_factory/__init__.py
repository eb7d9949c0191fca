"""Deterministic deployer and registry of per-merchant payment escrows."""

CODE_ID = "escrow_contracts.escrow_factory.contract"

__all__ = ["CODE_ID"]
