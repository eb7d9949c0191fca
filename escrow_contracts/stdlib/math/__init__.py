"""Integer-only arithmetic helpers (see ``safe_uint``)."""

from .safe_uint import BPS_DENOMINATOR, U256_MAX

__all__ = ["BPS_DENOMINATOR", "U256_MAX"]
