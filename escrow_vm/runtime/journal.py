"""
escrow_vm.runtime.journal — journaling writes with nested checkpoints.

A deterministic, in-memory write journal layered over a :class:`StateDB`.
Every call frame opens a checkpoint; writes go to the top overlay and reads
consult overlays from top → base. ``commit()`` merges the top overlay into its
parent, or into the base state when it is the outermost layer. ``revert()``
discards the top overlay together with the events emitted inside it.

    j = Journal(state)
    j.begin()
    j.storage_set(addr, b"k", b"v")
    j.emit(Event(...))
    j.commit()            # storage and events now live in ``state``

Writes outside any checkpoint are rejected; committed state only changes
through ``commit()``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from escrow_vm.errors import VmError
from escrow_vm.runtime.events_api import Event
from escrow_vm.runtime.state import Account, StateDB


@dataclass
class _Overlay:
    """
    A single journal layer.

    - `accounts`: copies of Account objects modified/created in this layer.
    - `storage`: staged storage changes. `None` means deletion for that key.
    - `events`: events emitted while this layer was on top.
    """

    accounts: Dict[bytes, Account] = field(default_factory=dict)
    storage: Dict[bytes, Dict[bytes, Optional[bytes]]] = field(default_factory=dict)
    events: List[Event] = field(default_factory=list)

    def merge_from(self, child: "_Overlay") -> None:
        self.accounts.update(child.accounts)
        for addr, changes in child.storage.items():
            self.storage.setdefault(addr, {}).update(changes)
        self.events.extend(child.events)


class Journal:
    def __init__(self, state: StateDB) -> None:
        self._state = state
        self._layers: List[_Overlay] = []

    # ------------------------------------------------------------------ #
    # Checkpointing
    # ------------------------------------------------------------------ #

    def depth(self) -> int:
        return len(self._layers)

    def begin(self) -> int:
        self._layers.append(_Overlay())
        return len(self._layers)

    def commit(self) -> None:
        top = self._pop()
        if self._layers:
            self._layers[-1].merge_from(top)
        else:
            self._apply_to_base(top)

    def revert(self) -> None:
        self._pop()

    def _pop(self) -> _Overlay:
        if not self._layers:
            raise VmError("journal has no open checkpoint", code="journal_state")
        return self._layers.pop()

    def _top(self) -> _Overlay:
        if not self._layers:
            raise VmError("write outside of a checkpoint", code="journal_state")
        return self._layers[-1]

    def _apply_to_base(self, top: _Overlay) -> None:
        self._state.accounts.update(top.accounts)
        for addr, changes in top.storage.items():
            slots = self._state.storage.setdefault(addr, {})
            for key, value in changes.items():
                if value is None:
                    slots.pop(key, None)
                else:
                    slots[key] = value
        self._state.logs.extend(top.events)

    # ------------------------------------------------------------------ #
    # Accounts
    # ------------------------------------------------------------------ #

    def get_account(self, addr: bytes) -> Optional[Account]:
        for layer in reversed(self._layers):
            acc = layer.accounts.get(addr)
            if acc is not None:
                return acc
        return self._state.get_account(addr)

    def put_account(self, addr: bytes, acc: Account) -> Account:
        copy = acc.copy()
        self._top().accounts[addr] = copy
        return copy

    def bump_nonce(self, addr: bytes) -> int:
        """Increment ``addr``'s nonce, creating an EOA record if needed; returns the old nonce."""
        acc = self.get_account(addr) or Account()
        updated = self.put_account(addr, acc)
        old = updated.nonce
        updated.nonce = old + 1
        return old

    # ------------------------------------------------------------------ #
    # Storage
    # ------------------------------------------------------------------ #

    def storage_get(self, addr: bytes, key: bytes) -> Optional[bytes]:
        for layer in reversed(self._layers):
            slots = layer.storage.get(addr)
            if slots is not None and key in slots:
                return slots[key]
        return self._state.storage_get(addr, key)

    def storage_set(self, addr: bytes, key: bytes, value: bytes) -> None:
        self._top().storage.setdefault(addr, {})[key] = bytes(value)

    def storage_delete(self, addr: bytes, key: bytes) -> None:
        self._top().storage.setdefault(addr, {})[key] = None

    # ------------------------------------------------------------------ #
    # Events
    # ------------------------------------------------------------------ #

    def emit(self, event: Event) -> None:
        self._top().events.append(event)

    def pending_events(self) -> List[Event]:
        """Events of every open layer, outermost first."""
        out: List[Event] = []
        for layer in self._layers:
            out.extend(layer.events)
        return out


__all__ = ["Journal"]
