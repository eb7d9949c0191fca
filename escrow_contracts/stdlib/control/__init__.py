# -*- coding: utf-8 -*-
"""
escrow_contracts.stdlib.control
===============================

Execution-control helpers:

- pausable:    a single contract-wide paused flag, toggled by the owner
- reentrancy:  a storage latch that rejects nested entry into guarded code

Storage keys
------------
- b"control:paused"          -> b"\\x01" when paused, absent otherwise
- b"control:reent:" + scope  -> b"\\x01" while a guarded section runs

Error codes
-----------
- b"CONTROL:PAUSED"      (operation blocked, or pause() while already paused)
- b"CONTROL:NOT_PAUSED"  (unpause() while not paused)
- b"CONTROL:REENTRANT"   (guarded section entered twice)
"""

from __future__ import annotations

from . import pausable, reentrancy

__all__ = ["pausable", "reentrancy"]
