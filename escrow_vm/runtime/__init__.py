"""
escrow_vm.runtime — chain engine, journal, code loader and host APIs.

Contracts never import from here directly; they use :mod:`escrow_vm.stdlib`.
Hosts and tests drive execution through :class:`Chain`.
"""

from escrow_vm.runtime.engine import ZERO_ADDRESS, Chain, Receipt
from escrow_vm.runtime.events_api import Event
from escrow_vm.runtime.loader import CodeRegistry, ContractCode

__all__ = ["Chain", "Receipt", "Event", "CodeRegistry", "ContractCode", "ZERO_ADDRESS"]
