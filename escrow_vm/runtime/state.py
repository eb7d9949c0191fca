"""
escrow_vm.runtime.state — committed world state.

An Account holds:

- nonce:      creation counter (bumped each time the account creates a contract)
- code_id:    dotted module path of the contract code, None for externally owned accounts
- code_hash:  keccak256 of the code source (all-zero for EOAs)

Storage is a flat ``{address: {key: value}}`` map of raw bytes; committed events
are appended to ``logs`` in emission order. Only the journal writes here.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from escrow_vm.runtime.events_api import Event

EMPTY_CODE_HASH: bytes = b"\x00" * 32


@dataclass(slots=True)
class Account:
    nonce: int = 0
    code_id: Optional[str] = None
    code_hash: bytes = EMPTY_CODE_HASH

    @property
    def is_contract(self) -> bool:
        return self.code_id is not None

    def copy(self) -> "Account":
        return Account(nonce=self.nonce, code_id=self.code_id, code_hash=self.code_hash)


@dataclass
class StateDB:
    accounts: Dict[bytes, Account] = field(default_factory=dict)
    storage: Dict[bytes, Dict[bytes, bytes]] = field(default_factory=dict)
    logs: List[Event] = field(default_factory=list)

    def get_account(self, addr: bytes) -> Optional[Account]:
        return self.accounts.get(addr)

    def storage_get(self, addr: bytes, key: bytes) -> Optional[bytes]:
        return self.storage.get(addr, {}).get(key)

    def snapshot_storage(self, addr: bytes) -> Dict[bytes, bytes]:
        return dict(self.storage.get(addr, {}))


__all__ = ["Account", "StateDB", "EMPTY_CODE_HASH"]
