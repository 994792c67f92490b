"""Abstract interface for the lock store plus an in-memory implementation."""

from __future__ import annotations

import abc
import datetime as dt
import time
from typing import Callable, Dict, Optional, Tuple

from .models import ttl_to_millis


class LockStore(abc.ABC):
    """Atomic primitives the lock manager relies on.

    Implementations must make each primitive a single atomic operation on the
    backing store. The lock manager adds no serialization of its own.
    """

    @abc.abstractmethod
    async def create_if_absent(self, key: str, value: str, ttl: dt.timedelta) -> bool:  # pragma: no cover - interface
        """Store ``value`` under ``key`` with expiry ``ttl`` unless the key exists."""
        raise NotImplementedError

    @abc.abstractmethod
    async def read(self, key: str) -> Optional[str]:  # pragma: no cover - interface
        """Return the current value of ``key`` or None when absent or expired."""
        raise NotImplementedError

    @abc.abstractmethod
    async def delete_if_matches(self, key: str, expected: str) -> bool:  # pragma: no cover - interface
        """Delete ``key`` only if it still holds ``expected``."""
        raise NotImplementedError

    async def ping(self) -> bool:
        return True

    async def close(self) -> None:
        """Release any underlying connections."""


class InMemoryLockStore(LockStore):
    """Single-process store for tests and local development.

    None of the primitives await between checking and writing, so each one runs
    to completion on the event loop without interleaving.
    """

    def __init__(self, *, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._entries: Dict[str, Tuple[str, float]] = {}

    def _live(self, key: str) -> Optional[str]:
        entry = self._entries.get(key)
        if entry is None:
            return None
        value, expires_at = entry
        if self._clock() >= expires_at:
            del self._entries[key]
            return None
        return value

    async def create_if_absent(self, key: str, value: str, ttl: dt.timedelta) -> bool:
        if self._live(key) is not None:
            return False
        self._entries[key] = (value, self._clock() + ttl_to_millis(ttl) / 1000.0)
        return True

    async def read(self, key: str) -> Optional[str]:
        return self._live(key)

    async def delete_if_matches(self, key: str, expected: str) -> bool:
        if self._live(key) != expected:
            return False
        del self._entries[key]
        return True

    async def close(self) -> None:
        self._entries.clear()
