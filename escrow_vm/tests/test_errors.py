from __future__ import annotations

import pytest

from escrow_vm import errors
from escrow_vm.errors import DeploymentError, Revert


def test_module_documents_failure_model():
    assert errors.__doc__ and "Revert" in errors.__doc__


def test_revert_carries_reason_and_code():
    err = Revert(b"ESCROW:NO_BALANCE", context={"balance": 0})
    assert str(err) == "ESCROW:NO_BALANCE"
    assert err.code == errors.PRECONDITION
    assert err.to_dict()["reason"] == "0x" + b"ESCROW:NO_BALANCE".hex()


def test_revert_rejects_unknown_code():
    with pytest.raises(ValueError):
        Revert(b"X", code="teapot")


def test_deployment_error_code():
    assert DeploymentError("taken").code == errors.DEPLOYMENT
