"""
escrow_vm — a deterministic in-process chain for Python contracts.

This package exposes a small façade:

- Chain: world state + journal + code registry; deploy/transact/view
- Receipt: outcome of a top-level transaction
- VmError / Revert: failure types (see escrow_vm.errors for the taxonomy)
- version(): package version string

Contract code talks to the runtime through escrow_vm.stdlib.
"""

from __future__ import annotations

from escrow_vm.errors import CallError, DeploymentError, Revert, VmError
from escrow_vm.runtime import ZERO_ADDRESS, Chain, CodeRegistry, Event, Receipt
from escrow_vm.version import __version__


def version() -> str:
    """Return the escrow_vm semantic version string."""
    return __version__


__all__ = [
    "__version__",
    "version",
    "Chain",
    "CodeRegistry",
    "Event",
    "Receipt",
    "ZERO_ADDRESS",
    "VmError",
    "Revert",
    "CallError",
    "DeploymentError",
]
