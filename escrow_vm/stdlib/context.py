"""Who is calling, and where the running code lives."""

from escrow_vm.runtime.context import current_frame


def caller() -> bytes:
    """Immediate caller of the running contract."""
    return current_frame().caller


def self_address() -> bytes:
    return current_frame().address


def origin() -> bytes:
    """The externally owned account that signed the transaction."""
    return current_frame().origin


__all__ = ["caller", "self_address", "origin"]
