"""Access-control helpers. ``OWNER_KEY`` is the storage key of the single owner."""

from __future__ import annotations

from typing import Final

OWNER_KEY: Final[bytes] = b"access:owner"

__all__ = ["OWNER_KEY"]
