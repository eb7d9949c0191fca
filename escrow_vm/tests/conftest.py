from __future__ import annotations

import pytest

from escrow_vm import Chain

from .inline import register_inline

COUNTER_SOURCE = '''
from escrow_vm.stdlib import abi, calls, context, events, storage

INIT_TYPES = ("uint256",)


def init(start):
    abi.require(start < 1000, b"COUNTER:START_TOO_BIG", code=abi.INVALID_ARGUMENT)
    storage.set_int(b"count", start)


def get():
    return storage.get_int(b"count")


def inc(by):
    n = storage.get_int(b"count") + by
    storage.set_int(b"count", n)
    events.emit(b"Inc", {b"by": by, b"caller": context.caller()})
    return n


def inc_then_fail(by):
    inc(by)
    abi.revert(b"COUNTER:BOOM")


def whoami():
    return context.caller(), context.origin(), context.self_address()


def poke(other, by):
    return calls.call(other, "inc", by)


def poke_softly(other):
    ok, err = calls.try_call(other, "inc_then_fail", 1)
    storage.set_int(b"soft", 1 if ok else 2)
    return ok, err.reason


def recurse(depth):
    if depth == 0:
        return 0
    return calls.call(context.self_address(), "recurse", depth - 1) + 1


def spawn(start, salt):
    return calls.create2("tests.counter", (start,), salt)


def predict(start, salt):
    return calls.compute_create2_address("tests.counter", (start,), salt)


def _hidden():
    return "not exported"


__all__ = [
    "get",
    "inc",
    "inc_then_fail",
    "whoami",
    "poke",
    "poke_softly",
    "recurse",
    "spawn",
    "predict",
]
'''


@pytest.fixture
def chain() -> Chain:
    c = Chain()
    register_inline(c, "tests.counter", COUNTER_SOURCE)
    return c


@pytest.fixture
def alice(chain: Chain) -> bytes:
    return chain.account("alice")


@pytest.fixture
def bob(chain: Chain) -> bytes:
    return chain.account("bob")


@pytest.fixture
def counter(chain: Chain, alice: bytes) -> bytes:
    return chain.deploy(alice, "tests.counter", 10)
