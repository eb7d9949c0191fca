# -*- coding: utf-8 -*-
"""
escrow_contracts.tests.conftest
===============================

Pytest fixtures for the escrow, factory and token contracts.

- A fresh :class:`escrow_vm.Chain` per test, with named accounts.
- A deployed token holding the whole supply in ``deployer``'s account.
- A factory (owned by ``deployer``) and one escrow deployed through it.
- Inline misbehaving tokens for failure-path tests:
    * ``tests.lying_token``      transfer() moves funds but answers False for blocked recipients
    * ``tests.reverting_token``  transfer() reverts for blocked recipients
    * ``tests.reentrant_token``  transfer() calls back into a target's distribute()

Usage (inside a test file):
    def test_payout(chain, accounts, token, escrow, fund):
        fund(escrow, 1001)
        chain.transact(accounts["stranger"], escrow, "distribute")
"""
from __future__ import annotations

from typing import Any, Callable, Dict, List, Optional

import pytest

from escrow_contracts import ESCROW_CODE, FACTORY_CODE, TOKEN_CODE
from escrow_vm import Chain
from escrow_vm.runtime.hash_api import keccak256
from escrow_vm.tests.inline import register_inline

TOKEN_SUPPLY = 10**30

_MOCK_TOKEN_BASE = '''
from escrow_vm.stdlib import abi, calls, context, events, storage


def _bal(addr):
    return b"bal:" + addr


def mint(to, amount):
    storage.set_int(_bal(to), storage.get_int(_bal(to)) + amount)


def balance_of(addr):
    return storage.get_int(_bal(addr))


def block(addr):
    storage.set(b"blocked:" + addr, b"\\x01")


def _move(to, amount):
    src = context.caller()
    bal = storage.get_int(_bal(src))
    abi.require(bal >= amount, b"MOCK:BALANCE")
    storage.set_int(_bal(src), bal - amount)
    storage.set_int(_bal(to), storage.get_int(_bal(to)) + amount)
    events.emit(b"Transfer", {b"from": src, b"to": to, b"value": amount})


def _blocked(addr):
    return storage.get(b"blocked:" + addr) == b"\\x01"
'''

LYING_TOKEN_SOURCE = _MOCK_TOKEN_BASE + '''

def transfer(to, amount):
    _move(to, amount)
    return not _blocked(to)


__all__ = ["mint", "balance_of", "block", "transfer"]
'''

REVERTING_TOKEN_SOURCE = _MOCK_TOKEN_BASE + '''

def transfer(to, amount):
    abi.require(not _blocked(to), b"MOCK:BLOCKED")
    _move(to, amount)
    return True


__all__ = ["mint", "balance_of", "block", "transfer"]
'''

REENTRANT_TOKEN_SOURCE = _MOCK_TOKEN_BASE + '''

def arm(target):
    storage.set(b"target", target)


def last_reentry():
    return storage.get(b"reentry")


def transfer(to, amount):
    _move(to, amount)
    target = storage.get(b"target")
    if target:
        storage.delete(b"target")
        ok, err = calls.try_call(target, "distribute")
        storage.set(b"reentry", b"OK" if ok else err.reason)
    return True


__all__ = ["mint", "balance_of", "block", "arm", "last_reentry", "transfer"]
'''

MOCK_TOKENS = {
    "tests.lying_token": LYING_TOKEN_SOURCE,
    "tests.reverting_token": REVERTING_TOKEN_SOURCE,
    "tests.reentrant_token": REENTRANT_TOKEN_SOURCE,
}


def merchant_id(tag: str) -> bytes:
    """Stable 32-byte merchant id from a tag."""
    return keccak256(b"merchant:" + tag.encode("utf-8"))


@pytest.fixture
def chain() -> Chain:
    c = Chain()
    for code_id, source in MOCK_TOKENS.items():
        register_inline(c, code_id, source)
    return c


@pytest.fixture
def accounts(chain: Chain) -> Dict[str, bytes]:
    """
    deployer  owns the factory and the token supply
    admin     default owner handed to new escrows
    merchant  merchant payout address
    platform  platform payout address
    stranger  unprivileged caller
    """
    names = ("deployer", "admin", "merchant", "platform", "stranger", "other")
    return {n: chain.account(n) for n in names}


@pytest.fixture
def token(chain: Chain, accounts: Dict[str, bytes]) -> bytes:
    return chain.deploy(accounts["deployer"], TOKEN_CODE, "Test Token", "TST", 18, accounts["deployer"], TOKEN_SUPPLY)


@pytest.fixture
def factory(chain: Chain, accounts: Dict[str, bytes]) -> bytes:
    return chain.deploy(accounts["deployer"], FACTORY_CODE, accounts["platform"], accounts["admin"])


@pytest.fixture
def mid() -> bytes:
    return merchant_id("acme")


@pytest.fixture
def escrow(chain: Chain, accounts: Dict[str, bytes], factory: bytes, token: bytes, mid: bytes) -> bytes:
    receipt = chain.transact(accounts["deployer"], factory, "deploy_escrow", mid, accounts["merchant"], token)
    return receipt.return_value


@pytest.fixture
def direct_escrow(chain: Chain, accounts: Dict[str, bytes]) -> Callable[[bytes], bytes]:
    """Deploy an escrow for ``token`` straight from ``deployer`` (no factory)."""

    def _deploy(token: bytes, *, owner: Optional[bytes] = None) -> bytes:
        return chain.deploy(
            accounts["deployer"],
            ESCROW_CODE,
            accounts["merchant"],
            token,
            accounts["platform"],
            owner or accounts["admin"],
        )

    return _deploy


@pytest.fixture
def mock_token(chain: Chain, accounts: Dict[str, bytes]) -> Callable[[str], bytes]:
    def _deploy(kind: str) -> bytes:
        return chain.deploy(accounts["deployer"], f"tests.{kind}_token")

    return _deploy


@pytest.fixture
def fund(chain: Chain, accounts: Dict[str, bytes], token: bytes) -> Callable[[bytes, int], None]:
    def _fund(to: bytes, amount: int) -> None:
        chain.transact(accounts["deployer"], token, "transfer", to, amount)

    return _fund


@pytest.fixture
def balance(chain: Chain) -> Callable[[bytes, bytes], int]:
    def _balance(token: bytes, who: bytes) -> int:
        return chain.view(token, "balance_of", who)

    return _balance


def event_names(events: List[Any]) -> List[bytes]:
    return [e.name for e in events]


def pytest_assertrepr_compare(op: str, left: Any, right: Any) -> Optional[List[str]]:
    if isinstance(left, (bytes, bytearray)) and isinstance(right, (bytes, bytearray)) and op == "==":
        return [
            "bytes differ:",
            f" left: 0x{bytes(left).hex()}",
            f"right: 0x{bytes(right).hex()}",
        ]
    return None
