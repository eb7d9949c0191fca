"""Key/value storage of the executing contract."""

from escrow_vm.runtime.storage_api import delete, exists, get, get_int, set, set_int

__all__ = ["get", "set", "delete", "exists", "get_int", "set_int"]
