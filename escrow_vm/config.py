"""
escrow_vm.config — runtime limits and feature flags for the chain engine.

Configuration precedence:
  1) Environment variables (ESCROW_VM_*)
  2) Hardcoded safe defaults below

Key env vars (case-insensitive where boolean):
  - ESCROW_VM_STRICT                 (bool)   default: true
  - ESCROW_VM_MAX_CALL_DEPTH         (int)    default: 64
  - ESCROW_VM_MAX_STORAGE_KEY_BYTES  (int)    default: 128
  - ESCROW_VM_MAX_STORAGE_VAL_BYTES  (int)    default: 131_072   (128 KiB)
  - ESCROW_VM_MAX_EVENTS_PER_TX      (int)    default: 1024

Usage:
    from escrow_vm.config import load_config
    CFG = load_config()
    if CFG.strict_mode: ...
"""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from functools import lru_cache
from typing import Any, Dict

_TRUE = ("1", "true", "t", "yes", "y", "on")


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in _TRUE


def _env_int(name: str, default: int, *, min_v: int, max_v: int) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        v = int(raw, 0)
    except ValueError:
        return default
    if v < min_v:
        return min_v
    if v > max_v:
        return max_v
    return v


@dataclass(frozen=True)
class VMConfig:
    # Reject storage values that are not bytes and event args of unknown types
    strict_mode: bool

    max_call_depth: int
    max_storage_key_bytes: int
    max_storage_value_bytes: int
    max_events_per_tx: int

    def with_overrides(self, **changes: Any) -> "VMConfig":
        return replace(self, **changes)

    def as_dict(self) -> Dict[str, Any]:
        return {
            "strict_mode": self.strict_mode,
            "max_call_depth": self.max_call_depth,
            "max_storage_key_bytes": self.max_storage_key_bytes,
            "max_storage_value_bytes": self.max_storage_value_bytes,
            "max_events_per_tx": self.max_events_per_tx,
        }


@lru_cache(maxsize=1)
def load_config() -> VMConfig:
    """
    Build and cache a VMConfig from environment + safe defaults.
    """
    return VMConfig(
        strict_mode=_env_bool("ESCROW_VM_STRICT", True),
        max_call_depth=_env_int("ESCROW_VM_MAX_CALL_DEPTH", 64, min_v=4, max_v=1024),
        max_storage_key_bytes=_env_int("ESCROW_VM_MAX_STORAGE_KEY_BYTES", 128, min_v=32, max_v=1024),
        max_storage_value_bytes=_env_int(
            "ESCROW_VM_MAX_STORAGE_VAL_BYTES", 131_072, min_v=32, max_v=1_048_576
        ),
        max_events_per_tx=_env_int("ESCROW_VM_MAX_EVENTS_PER_TX", 1024, min_v=1, max_v=10_000),
    )


__all__ = ["VMConfig", "load_config"]
