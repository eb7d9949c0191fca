"""
escrow_vm.runtime.engine — the in-process chain that runs contracts.

A :class:`Chain` owns the committed world state, a write journal and a code
registry. Externally owned accounts drive it through three entrypoints:

    chain = Chain()
    alice = chain.account("alice")
    token = chain.deploy(alice, "escrow_contracts.token.contract", "Tok", "TOK", 18, alice, 10**24)
    receipt = chain.transact(alice, token, "transfer", bob, 5)
    chain.view(token, "balance_of", bob)                # -> 5

Execution model
---------------
- Serialised: one top-level transaction at a time, no concurrency.
- Every call and every creation runs in its own journal checkpoint. Success
  merges it into the caller's; failure discards it and re-raises, so a failed
  top-level transaction leaves no trace besides its receipt.
- Contract code sees its environment through :mod:`escrow_vm.stdlib`, which
  resolves the active chain and the current :class:`Frame`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from escrow_vm.config import VMConfig, load_config
from escrow_vm.errors import CallError, DeploymentError, VmError
from escrow_vm.runtime import create2
from escrow_vm.runtime.context import Frame, activate, to_bytes, to_hex
from escrow_vm.runtime.events_api import Event, build_event, to_canonical
from escrow_vm.runtime.hash_api import keccak256
from escrow_vm.runtime.journal import Journal
from escrow_vm.runtime.loader import CodeRegistry
from escrow_vm.runtime.state import Account, StateDB

log = logging.getLogger(__name__)

ZERO_ADDRESS = b"\x00" * 20


@dataclass(frozen=True)
class Receipt:
    ok: bool
    sender: bytes
    to: Optional[bytes]
    method: str
    return_value: Any = None
    events: Tuple[Event, ...] = ()
    error: Optional[BaseException] = None
    created: Optional[bytes] = None

    def events_named(self, name: bytes) -> List[Event]:
        return [e for e in self.events if e.name == name]

    def to_dict(self) -> Dict[str, Any]:
        err = self.error
        return {
            "ok": self.ok,
            "sender": to_hex(self.sender),
            "to": to_hex(self.to) if self.to is not None else None,
            "method": self.method,
            "created": to_hex(self.created) if self.created is not None else None,
            "events": [to_canonical(e) for e in self.events],
            "error": err.to_dict() if isinstance(err, VmError) else (repr(err) if err else None),
        }


class Chain:
    def __init__(self, *, config: Optional[VMConfig] = None, codes: Optional[CodeRegistry] = None) -> None:
        self.config = config or load_config()
        self.codes = codes or CodeRegistry()
        self.state = StateDB()
        self.journal = Journal(self.state)
        self.receipts: List[Receipt] = []
        self._frames: List[Frame] = []
        self._origin: Optional[bytes] = None

    # ------------------------------------------------------------------ #
    # Accounts & inspection
    # ------------------------------------------------------------------ #

    def account(self, label: str) -> bytes:
        """Deterministic externally owned account for ``label``."""
        addr = keccak256(b"account:" + label.encode("utf-8"))[12:]
        self.state.accounts.setdefault(addr, Account())
        return addr

    def code_at(self, addr: bytes) -> Optional[str]:
        acc = self.journal.get_account(to_bytes(addr))
        return acc.code_id if acc is not None else None

    def nonce_of(self, addr: bytes) -> int:
        acc = self.journal.get_account(to_bytes(addr))
        return acc.nonce if acc is not None else 0

    def storage_of(self, addr: bytes) -> Dict[bytes, bytes]:
        return self.state.snapshot_storage(to_bytes(addr))

    def logs(self, *, address: Optional[bytes] = None, name: Optional[bytes] = None) -> List[Event]:
        out = self.state.logs
        if address is not None:
            address = to_bytes(address)
            out = [e for e in out if e.address == address]
        if name is not None:
            out = [e for e in out if e.name == name]
        return list(out)

    def current_frame(self) -> Frame:
        if not self._frames:
            raise CallError("no active call frame", code="no_frame")
        return self._frames[-1]

    # ------------------------------------------------------------------ #
    # Top-level entrypoints
    # ------------------------------------------------------------------ #

    def deploy(self, sender: bytes, code_id: str, *args: Any, salt: Optional[bytes] = None) -> bytes:
        """Create a contract from ``sender``; returns its address."""
        sender = to_bytes(sender)

        def run() -> bytes:
            nonce = self.journal.bump_nonce(sender)
            if salt is None:
                return self._create(sender, code_id, args, nonce=nonce)
            return self._create(sender, code_id, args, salt=to_bytes(salt))

        receipt = self._execute(sender, None, "<create>", run, persist=True)
        return receipt.created

    def transact(self, sender: bytes, to: bytes, method: str, *args: Any) -> Receipt:
        """Run ``to.method(*args)`` as one atomic transaction from ``sender``."""
        sender, to = to_bytes(sender), to_bytes(to)

        def run() -> Any:
            self.journal.bump_nonce(sender)
            return self._call(sender, to, method, args)

        return self._execute(sender, to, method, run, persist=True)

    def view(self, to: bytes, method: str, *args: Any, sender: bytes = ZERO_ADDRESS) -> Any:
        """Run a call and discard every effect; returns the call's value."""
        sender, to = to_bytes(sender), to_bytes(to)
        receipt = self._execute(sender, to, method, lambda: self._call(sender, to, method, args), persist=False)
        return receipt.return_value

    def _execute(
        self,
        sender: bytes,
        to: Optional[bytes],
        method: str,
        run: Callable[[], Any],
        *,
        persist: bool,
    ) -> Receipt:
        if self._frames or self.journal.depth():
            raise CallError("a transaction is already executing", code="nested_transaction")
        self._origin = sender
        self.journal.begin()
        try:
            with activate(self):
                value = run()
        except Exception as exc:
            self.journal.revert()
            if persist:
                self.receipts.append(Receipt(ok=False, sender=sender, to=to, method=method, error=exc))
            log.debug("tx: %s.%s from %s reverted: %s", _fmt(to), method, to_hex(sender), exc)
            raise
        finally:
            self._origin = None

        events = tuple(self.journal.pending_events())
        created = value if to is None else None
        receipt = Receipt(
            ok=True,
            sender=sender,
            to=to,
            method=method,
            return_value=value,
            events=events,
            created=created,
        )
        if persist:
            self.journal.commit()
            self.receipts.append(receipt)
            log.debug("tx: %s.%s from %s ok events=%d", _fmt(to), method, to_hex(sender), len(events))
        else:
            self.journal.revert()
        return receipt

    # ------------------------------------------------------------------ #
    # Frame-relative operations (used by escrow_vm.stdlib)
    # ------------------------------------------------------------------ #

    def call_from_frame(self, to: bytes, method: str, args: Sequence[Any]) -> Any:
        return self._call(self.current_frame().address, to_bytes(to), method, args)

    def try_call_from_frame(self, to: bytes, method: str, args: Sequence[Any]) -> Tuple[bool, Any]:
        try:
            return True, self.call_from_frame(to, method, args)
        except VmError as exc:
            log.debug("call: %s.%s failed inside try_call: %s", _fmt(to), method, exc)
            return False, exc

    def create2_from_frame(self, code_id: str, args: Sequence[Any], salt: bytes) -> bytes:
        """Deterministic creation by the executing contract; ``ZERO_ADDRESS`` on failure."""
        deployer = self.current_frame().address
        self.journal.bump_nonce(deployer)
        try:
            return self._create(deployer, code_id, tuple(args), salt=to_bytes(salt))
        except VmError as exc:
            log.warning("create2: %s from %s failed: %s", code_id, to_hex(deployer), exc)
            return ZERO_ADDRESS

    def predict_create2(self, deployer: bytes, code_id: str, args: Sequence[Any], salt: bytes) -> bytes:
        code = self.codes.load(code_id)
        return create2.compute_create2_address(to_bytes(deployer), to_bytes(salt), code.init_code_hash(tuple(args)))

    def emit(self, name: bytes, args: Any) -> None:
        frame = self.current_frame()
        if len(self.journal.pending_events()) >= self.config.max_events_per_tx:
            raise VmError("too many events in transaction", code="event_limit")
        self.journal.emit(build_event(frame.address, name, args, strict=self.config.strict_mode))

    # ------------------------------------------------------------------ #
    # Internals
    # ------------------------------------------------------------------ #

    def _push(self, frame: Frame) -> None:
        if len(self._frames) >= self.config.max_call_depth:
            raise CallError("call depth exceeded", code="call_depth", context={"depth": len(self._frames)})
        self._frames.append(frame)

    def _call(self, caller: bytes, to: bytes, method: str, args: Sequence[Any]) -> Any:
        acc = self.journal.get_account(to)
        if acc is None or not acc.is_contract:
            raise CallError(f"no contract at {to_hex(to)}", code="no_code", context={"to": to_hex(to)})
        fn = self.codes.load(acc.code_id).entrypoint(method)

        self._push(Frame(address=to, caller=caller, origin=self._origin or caller, code_id=acc.code_id))
        self.journal.begin()
        try:
            result = fn(*args)
        except Exception:
            self.journal.revert()
            raise
        else:
            self.journal.commit()
            return result
        finally:
            self._frames.pop()

    def _create(
        self,
        deployer: bytes,
        code_id: str,
        args: Sequence[Any],
        *,
        salt: Optional[bytes] = None,
        nonce: int = 0,
    ) -> bytes:
        code = self.codes.load(code_id)
        if salt is not None:
            addr = create2.compute_create2_address(deployer, salt, code.init_code_hash(args))
        else:
            code.init_code(args)
            addr = create2.compute_create_address(deployer, nonce)

        existing = self.journal.get_account(addr)
        if existing is not None and (existing.is_contract or existing.nonce):
            raise DeploymentError("address already in use", context={"address": to_hex(addr), "code_id": code_id})

        self._push(Frame(address=addr, caller=deployer, origin=self._origin or deployer, code_id=code_id))
        self.journal.begin()
        try:
            self.journal.put_account(addr, Account(code_id=code_id, code_hash=code.code_hash))
            ctor = code.constructor()
            if ctor is not None:
                ctor(*args)
        except VmError as exc:
            self.journal.revert()
            raise DeploymentError(
                f"constructor of {code_id} failed: {exc}",
                context={"address": to_hex(addr), "cause": exc.to_dict()},
            ) from exc
        except Exception:
            self.journal.revert()
            raise
        else:
            self.journal.commit()
        finally:
            self._frames.pop()

        log.debug("create: %s at %s by %s", code_id, to_hex(addr), to_hex(deployer))
        return addr


def _fmt(addr: Optional[bytes]) -> str:
    return to_hex(addr) if addr is not None else "<create>"


__all__ = ["Chain", "Receipt", "ZERO_ADDRESS"]
