"""Lock acquisition and release against a shared store."""

from __future__ import annotations

import datetime as dt
from typing import Optional

from semapi.core.errors import AlreadyLocked, LockedByOther, NotLocked, OwnerMismatch
from semapi.core.models import LockRecord, LockStatus
from semapi.core.store import LockStore
from semapi.core.validation import validate_owner_params, validate_ttl
from semapi.services.audit_logger import AuditLogger
from semapi.utils.logging import get_logger


class LockManager:
    """Implements the lock/unlock protocol on top of a :class:`LockStore`.

    The manager keeps no state between calls. Every decision is derived from
    the store, so any number of service instances can share one store.

    Both conflict errors name the *requesting* owner rather than the holder;
    clients match on those messages, so keep them as they are.
    """

    def __init__(self, store: LockStore, *, audit_logger: Optional[AuditLogger] = None) -> None:
        self._store = store
        self._audit = audit_logger
        self.logger = get_logger("LockManager")

    async def acquire_lock(self, target: str, owner: str, ttl: dt.timedelta) -> LockRecord:
        target, owner = validate_owner_params(target, owner)
        validate_ttl(ttl)

        if await self._store.create_if_absent(target, owner, ttl):
            record = LockRecord(target=target, owner=owner, ttl=ttl)
            self.logger.info("%s locked by %s until %s", target, owner, record.expires_at.isoformat())
            await self._record("lock.acquired", record.target, record.owner, {"ttl_ms": record.ttl_ms})
            return record

        current = await self._store.read(target)
        if current == owner:
            self.logger.info("%s already locked by %s", target, owner)
            raise AlreadyLocked(target)
        self.logger.info("%s lock rejected for %s (held by %s)", target, owner, current)
        raise LockedByOther(target, owner)

    async def release_lock(self, target: str, owner: str) -> None:
        target, owner = validate_owner_params(target, owner)

        current = await self._store.read(target)
        if current is None:
            raise NotLocked(target)
        if current != owner:
            self.logger.info("%s release rejected for %s (held by %s)", target, owner, current)
            raise OwnerMismatch(target, owner)
        if not await self._store.delete_if_matches(target, owner):
            # expired or replaced between read and delete
            raise NotLocked(target)

        self.logger.info("%s released by %s", target, owner)
        await self._record("lock.released", target, owner)

    async def get_lock(self, target: str) -> Optional[str]:
        """Return the current owner of ``target`` or None."""
        return await self._store.read(target)

    async def status(self, target: str) -> LockStatus:
        owner = await self.get_lock(target)
        return LockStatus(target=target, locked=owner is not None, owner=owner)

    async def _record(self, event: str, target: str, owner: str, payload: Optional[dict] = None) -> None:
        if self._audit is None:
            return
        try:
            await self._audit.log(event=event, target=target, owner=owner, payload=payload)
        except OSError as exc:
            self.logger.warning("Audit log write failed for %s: %s", target, exc)
