from __future__ import annotations

import pytest

from escrow_vm import Chain, VmError
from escrow_vm.config import load_config
from escrow_vm.runtime.context import ContextError
from escrow_vm.runtime import storage_api

from .inline import register_inline

STORE_SOURCE = '''
from escrow_vm.stdlib import events, storage


def put(key, value):
    storage.set(key, value)


def put_int(key, value):
    storage.set_int(key, value)


def read(key):
    return storage.get(key), storage.exists(key), storage.get_int(key)


def drop(key):
    storage.delete(key)


def shout(name, args):
    events.emit(name, args)


def shout_many(n):
    for i in range(n):
        events.emit(b"Tick", {b"i": i})


__all__ = ["put", "put_int", "read", "drop", "shout", "shout_many"]
'''


def _setup(cfg=None):
    chain = Chain(config=cfg)
    register_inline(chain, "tests.store", STORE_SOURCE)
    alice = chain.account("alice")
    return chain, alice, chain.deploy(alice, "tests.store")


def test_storage_is_scoped_per_instance():
    chain, alice, a = _setup()
    b = chain.deploy(alice, "tests.store")
    chain.transact(alice, a, "put", b"k", b"from-a")
    assert chain.view(a, "read", b"k") == (b"from-a", True, int.from_bytes(b"from-a", "big"))
    assert chain.view(b, "read", b"k") == (None, False, 0)
    chain.transact(alice, a, "drop", b"k")
    assert chain.storage_of(a) == {}


def test_int_slots_are_32_bytes():
    chain, alice, a = _setup()
    chain.transact(alice, a, "put_int", b"n", 258)
    assert chain.storage_of(a)[b"n"] == (258).to_bytes(32, "big")
    with pytest.raises(VmError):
        chain.transact(alice, a, "put_int", b"n", -1)


@pytest.mark.parametrize(
    "key, value",
    [
        ("text-key", b"v"),
        (b"", b"v"),
        (b"k" * 129, b"v"),
        (b"k", "not-bytes"),
    ],
)
def test_storage_validation(key, value):
    chain, alice, a = _setup()
    with pytest.raises(VmError) as exc:
        chain.transact(alice, a, "put", key, value)
    assert exc.value.code == "storage_invalid"


def test_lenient_mode_accepts_int_values():
    chain, alice, a = _setup(load_config().with_overrides(strict_mode=False))
    chain.transact(alice, a, "put", b"k", 7)
    assert chain.storage_of(a)[b"k"] == (7).to_bytes(32, "big")


@pytest.mark.parametrize(
    "name, args",
    [
        ("Named", {}),
        (b"", {}),
        (b"E", {"bad-key": 1}),
        (b"E", {"k": 1.5}),
        (b"E", {"k": 1 << 300}),
        (b"E", [("k", 1)]),
    ],
)
def test_event_validation(name, args):
    chain, alice, a = _setup()
    with pytest.raises(VmError) as exc:
        chain.transact(alice, a, "shout", name, args)
    assert exc.value.code == "event_invalid"


def test_event_cap_per_transaction():
    chain, alice, a = _setup(load_config().with_overrides(max_events_per_tx=3))
    assert len(chain.transact(alice, a, "shout_many", 3).events) == 3
    with pytest.raises(VmError) as exc:
        chain.transact(alice, a, "shout_many", 4)
    assert exc.value.code == "event_limit"


def test_storage_api_needs_an_active_transaction():
    with pytest.raises(ContextError):
        storage_api.get(b"k")
