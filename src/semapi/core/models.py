"""Data models shared across the lock service."""

from __future__ import annotations

import datetime as dt
from typing import Optional

from pydantic import BaseModel, Field


class LockRecord(BaseModel):
    """A lock held on a target by a single owner."""

    target: str
    owner: str
    ttl: dt.timedelta
    acquired_at: dt.datetime = Field(default_factory=lambda: dt.datetime.now(dt.timezone.utc))

    @property
    def expires_at(self) -> dt.datetime:
        return self.acquired_at + self.ttl

    @property
    def ttl_ms(self) -> int:
        return ttl_to_millis(self.ttl)


class LockStatus(BaseModel):
    """Observed state of a target in the store."""

    target: str
    locked: bool
    owner: Optional[str] = None


def ttl_to_millis(ttl: dt.timedelta) -> int:
    """Convert a TTL to the store's millisecond expiry, truncating sub-millisecond parts."""
    return ttl // dt.timedelta(milliseconds=1)
