from __future__ import annotations

import pytest

from escrow_contracts import TOKEN_CODE
from escrow_vm import DeploymentError, Revert

from .conftest import TOKEN_SUPPLY


def test_metadata_and_supply(chain, accounts, token):
    assert chain.view(token, "name") == "Test Token"
    assert chain.view(token, "symbol") == "TST"
    assert chain.view(token, "decimals") == 18
    assert chain.view(token, "total_supply") == TOKEN_SUPPLY
    assert chain.view(token, "balance_of", accounts["deployer"]) == TOKEN_SUPPLY
    assert chain.view(token, "owner") == accounts["deployer"]


def test_transfer(chain, accounts, token, balance):
    receipt = chain.transact(accounts["deployer"], token, "transfer", accounts["merchant"], 1234)
    assert receipt.return_value is True
    (ev,) = receipt.events_named(b"Transfer")
    assert ev.args == {"from": accounts["deployer"], "to": accounts["merchant"], "value": 1234}
    assert balance(token, accounts["merchant"]) == 1234
    assert balance(token, accounts["deployer"]) == TOKEN_SUPPLY - 1234


def test_transfer_more_than_balance_reverts(chain, accounts, token, balance):
    with pytest.raises(Revert) as exc:
        chain.transact(accounts["stranger"], token, "transfer", accounts["merchant"], 1)
    assert exc.value.reason == b"TOKEN:INSUFFICIENT_BALANCE"
    assert balance(token, accounts["merchant"]) == 0


def test_transfer_to_zero_address_reverts(chain, accounts, token):
    with pytest.raises(Revert) as exc:
        chain.transact(accounts["deployer"], token, "transfer", b"\x00" * 20, 1)
    assert exc.value.code == "invalid_argument"


def test_approve_and_transfer_from(chain, accounts, token, balance):
    chain.transact(accounts["deployer"], token, "approve", accounts["stranger"], 100)
    assert chain.view(token, "allowance", accounts["deployer"], accounts["stranger"]) == 100

    chain.transact(accounts["stranger"], token, "transfer_from", accounts["deployer"], accounts["other"], 60)
    assert balance(token, accounts["other"]) == 60
    assert chain.view(token, "allowance", accounts["deployer"], accounts["stranger"]) == 40

    with pytest.raises(Revert) as exc:
        chain.transact(accounts["stranger"], token, "transfer_from", accounts["deployer"], accounts["other"], 41)
    assert exc.value.reason == b"TOKEN:ALLOWANCE_LOW"
    assert chain.view(token, "allowance", accounts["deployer"], accounts["stranger"]) == 40


def test_mint_is_owner_only(chain, accounts, token, balance):
    chain.transact(accounts["deployer"], token, "mint", accounts["merchant"], 5)
    assert balance(token, accounts["merchant"]) == 5
    assert chain.view(token, "total_supply") == TOKEN_SUPPLY + 5

    with pytest.raises(Revert) as exc:
        chain.transact(accounts["stranger"], token, "mint", accounts["stranger"], 5)
    assert exc.value.reason == b"ACCESS:NOT_OWNER"


def test_bad_metadata_rejected(chain, accounts):
    with pytest.raises(DeploymentError):
        chain.deploy(accounts["deployer"], TOKEN_CODE, "", "X", 18, accounts["deployer"], 1)
