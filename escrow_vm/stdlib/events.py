"""Event emission for contracts. Events are dropped if the emitting call fails."""

from __future__ import annotations

from typing import Any, Mapping, Optional

from escrow_vm.runtime.context import active_chain


def emit(name: bytes, args: Optional[Mapping[Any, Any]] = None) -> None:
    active_chain().emit(name, args or {})


__all__ = ["emit"]
