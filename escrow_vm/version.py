"""escrow_vm.version — package version from installed metadata."""

from __future__ import annotations

from importlib import metadata as importlib_metadata

# Bump when contract storage layout or address derivation changes.
BASE_VERSION = "0.1.0"

DIST_NAME = "merchant-escrow"


def resolve_version(dist_name: str = DIST_NAME) -> str:
    """Installed distribution version, or ``BASE_VERSION`` when running from a source tree."""
    try:
        return importlib_metadata.version(dist_name)
    except importlib_metadata.PackageNotFoundError:
        return BASE_VERSION


__version__ = resolve_version()

__all__ = ["__version__", "BASE_VERSION", "DIST_NAME", "resolve_version"]
