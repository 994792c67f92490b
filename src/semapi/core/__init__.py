"""Lock coordination primitives."""

from .errors import (
    AlreadyLocked,
    LockedByOther,
    LockError,
    NotLocked,
    OwnerMismatch,
    SemapiError,
    StoreUnavailable,
    UnlockError,
    ValidationError,
)
from .lock_manager import LockManager
from .models import LockRecord, LockStatus
from .store import InMemoryLockStore, LockStore

__all__ = [
    "AlreadyLocked",
    "InMemoryLockStore",
    "LockError",
    "LockManager",
    "LockRecord",
    "LockStatus",
    "LockStore",
    "LockedByOther",
    "NotLocked",
    "OwnerMismatch",
    "SemapiError",
    "StoreUnavailable",
    "UnlockError",
    "ValidationError",
]
