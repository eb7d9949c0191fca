"""
escrow_vm.runtime.loader — resolve contract code by id.

A contract is an ordinary Python module:

    INIT_TYPES = ("address", "address")     # constructor argument types
    __all__ = ["get_fee", "set_fee", ...]   # callable entrypoints

    def init(a, b): ...                     # constructor (optional)
    def get_fee(): ...

Its *code id* is the dotted module path; its *code bytes* are the module
source, which is what the code hash and create2 init code commit to. Modules
are stateless: all contract state lives in storage under the instance address.

Modules built elsewhere (tests build them from inline sources) are added with
:meth:`CodeRegistry.register`.
"""

from __future__ import annotations

import importlib
import logging
import types
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, Sequence, Tuple

from escrow_vm.errors import CallError, VmError
from escrow_vm.runtime import create2
from escrow_vm.runtime.hash_api import keccak256

log = logging.getLogger(__name__)

INIT_NAME = "init"


@dataclass(frozen=True)
class ContractCode:
    code_id: str
    module: types.ModuleType
    source: bytes

    @property
    def code_hash(self) -> bytes:
        return keccak256(self.source)

    @property
    def init_types(self) -> Tuple[str, ...]:
        return tuple(getattr(self.module, "INIT_TYPES", ()))

    @property
    def exports(self) -> Tuple[str, ...]:
        return tuple(getattr(self.module, "__all__", ()))

    def constructor(self) -> Callable[..., Any] | None:
        return getattr(self.module, INIT_NAME, None)

    def entrypoint(self, method: str) -> Callable[..., Any]:
        if method == INIT_NAME or method not in self.exports:
            raise CallError(
                f"unknown method {method!r} on {self.code_id}",
                code="unknown_method",
                context={"code_id": self.code_id, "method": method},
            )
        fn = getattr(self.module, method, None)
        if not callable(fn):
            raise CallError(f"{self.code_id}.{method} is not callable", code="unknown_method")
        return fn

    def init_code(self, args: Sequence[Any]) -> bytes:
        self._check_arity(args)
        return create2.init_code(self.source, self.init_types, args)

    def init_code_hash(self, args: Sequence[Any]) -> bytes:
        return keccak256(self.init_code(args))

    def _check_arity(self, args: Sequence[Any]) -> None:
        if len(args) != len(self.init_types):
            raise VmError(
                f"{self.code_id} constructor takes {len(self.init_types)} args, got {len(args)}",
                code="bad_arguments",
            )


class CodeRegistry:
    def __init__(self) -> None:
        self._codes: Dict[str, ContractCode] = {}

    def __contains__(self, code_id: str) -> bool:
        return code_id in self._codes

    def load(self, code_id: str) -> ContractCode:
        """Resolve ``code_id`` (a dotted module path), importing it on first use."""
        code = self._codes.get(code_id)
        if code is not None:
            return code
        try:
            module = importlib.import_module(code_id)
        except ImportError as e:
            raise VmError(f"cannot load contract code {code_id!r}: {e}", code="code_not_found") from e
        path = getattr(module, "__file__", None)
        if not path:
            raise VmError(f"contract module {code_id!r} has no source file", code="code_not_found")
        code = ContractCode(code_id=code_id, module=module, source=Path(path).read_bytes())
        self._codes[code_id] = code
        log.debug("loader: loaded %s hash=%s", code_id, code.code_hash.hex()[:16])
        return code

    def register(self, code: ContractCode) -> ContractCode:
        """Register an already built module under its code id."""
        if code.code_id in self._codes:
            raise VmError(f"code id already registered: {code.code_id!r}", code="code_conflict")
        self._codes[code.code_id] = code
        log.debug("loader: registered %s hash=%s", code.code_id, code.code_hash.hex()[:16])
        return code


__all__ = ["ContractCode", "CodeRegistry", "INIT_NAME"]
