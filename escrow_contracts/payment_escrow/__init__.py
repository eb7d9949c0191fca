"""Per-merchant payment escrow: splits its token balance between merchant and platform."""

CODE_ID = "escrow_contracts.payment_escrow.contract"

__all__ = ["CODE_ID"]
