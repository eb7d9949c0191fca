# -*- coding: utf-8 -*-
"""
tests.property package bootstrap.

Registers the Hypothesis profiles used by the property suites and picks one:
HYPOTHESIS_PROFILE if set, otherwise "ci" when a CI env var is truthy and
"dev" locally.

Environment knobs:
- HYPOTHESIS_PROFILE=dev|ci|fast
- CI=true (auto-pick the 'ci' profile if HYPOTHESIS_PROFILE not set)

Per-test overrides go through @settings(...) on that test.
"""
from __future__ import annotations

import os
from typing import Final, Tuple

from hypothesis import HealthCheck, Verbosity, settings
from hypothesis import strategies as st


def _hc(*items: HealthCheck) -> Tuple[HealthCheck, ...]:
    return items


# Deadlines are off: chain-backed examples run a whole transaction each.
settings.register_profile(
    "dev",
    settings(
        max_examples=100,
        deadline=None,
        suppress_health_check=_hc(HealthCheck.too_slow),
        verbosity=Verbosity.normal,
    ),
)

settings.register_profile(
    "ci",
    settings(
        max_examples=200,
        deadline=None,
        suppress_health_check=_hc(HealthCheck.too_slow),
        verbosity=Verbosity.verbose,
        derandomize=True,
    ),
)

settings.register_profile(
    "fast",
    settings(
        max_examples=25,
        deadline=None,
        suppress_health_check=_hc(HealthCheck.too_slow),
    ),
)


def _env_truthy(name: str) -> bool:
    v = os.getenv(name)
    return (v or "").lower() not in ("", "0", "false", "no", "off")


_active: Final[str] = os.getenv("HYPOTHESIS_PROFILE") or ("ci" if _env_truthy("CI") else "dev")
settings.load_profile(_active)


def active_profile() -> str:
    """Return the name of the active Hypothesis profile."""
    return _active


def addresses():
    """Non-zero 20-byte addresses."""
    return st.binary(min_size=20, max_size=20).filter(lambda b: any(b))


def merchant_ids():
    return st.binary(min_size=32, max_size=32)


__all__ = ["active_profile", "addresses", "merchant_ids"]
