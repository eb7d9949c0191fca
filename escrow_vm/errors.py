"""
Error types raised by the escrow_vm runtime and by contract code.

Every failure is fatal to the enclosing call: the engine discards the call's
journal layer before the error leaves it. Contract-level failures are
:class:`Revert` instances carrying the raw reason bytes (``b"ESCROW:NO_BALANCE"``)
and one of the taxonomy codes below.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Final, Mapping

# Failure taxonomy shared by all contracts.
INVALID_ARGUMENT: Final[str] = "invalid_argument"
NOT_FOUND: Final[str] = "not_found"
PRECONDITION: Final[str] = "precondition"
DEPLOYMENT: Final[str] = "deployment"

ERROR_KINDS: Final[frozenset] = frozenset({INVALID_ARGUMENT, NOT_FOUND, PRECONDITION, DEPLOYMENT})


@dataclass
class VmError(Exception):
    """
    Structured error used throughout the runtime.

        VmError("simple message")
        VmError("message", code="some_code", context={...})

    Attributes:
        code: short machine-readable code string
        message: human-readable message
        context: optional extra fields for debugging
    """

    code: str
    message: str
    context: Dict[str, Any]

    def __init__(self, message: str = "", *, code: str = "vm_error", context: Mapping[str, Any] | None = None) -> None:
        super().__init__(message)
        object.__setattr__(self, "code", str(code))
        object.__setattr__(self, "message", str(message))
        object.__setattr__(self, "context", dict(context or {}))

    def __str__(self) -> str:
        return self.message

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "context": dict(self.context),
        }


class Revert(VmError):
    """Raised by contract code to abort the current call."""

    reason: bytes

    def __init__(self, reason: bytes, *, code: str = PRECONDITION, context: Mapping[str, Any] | None = None) -> None:
        if isinstance(reason, str):
            reason = reason.encode("utf-8")
        if code not in ERROR_KINDS:
            raise ValueError(f"unknown revert code: {code!r}")
        super().__init__(bytes(reason).decode("utf-8", "replace"), code=code, context=context)
        object.__setattr__(self, "reason", bytes(reason))

    def to_dict(self) -> Dict[str, Any]:
        out = super().to_dict()
        out["reason"] = "0x" + self.reason.hex()
        return out


class CallError(VmError):
    """Engine-level call failure: no code at the target, unknown method, depth exceeded."""


class DeploymentError(VmError):
    """Contract creation failed: address collision or constructor failure."""

    def __init__(self, message: str, *, context: Mapping[str, Any] | None = None) -> None:
        super().__init__(message, code=DEPLOYMENT, context=context)


__all__ = [
    "VmError",
    "Revert",
    "CallError",
    "DeploymentError",
    "INVALID_ARGUMENT",
    "NOT_FOUND",
    "PRECONDITION",
    "DEPLOYMENT",
    "ERROR_KINDS",
]
