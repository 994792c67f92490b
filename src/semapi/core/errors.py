"""Exception taxonomy for lock coordination."""

from __future__ import annotations


class SemapiError(Exception):
    """Base class for all errors raised by the lock service."""


class ValidationError(SemapiError):
    """Inbound lock/unlock parameters are malformed."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(message)
        self.field = field
        self.message = message


class StoreUnavailable(SemapiError):
    """The backing store could not be reached or answered with an error."""


class LockError(SemapiError):
    """A lock could not be acquired."""

    def __init__(self, target: str, owner: str | None = None) -> None:
        self.target = target
        self.owner = owner
        super().__init__(self.render())

    def render(self) -> str:  # pragma: no cover - overridden
        raise NotImplementedError


class AlreadyLocked(LockError):
    def __init__(self, target: str) -> None:
        super().__init__(target)

    def render(self) -> str:
        return f"{self.target} is already locked."


class LockedByOther(LockError):
    # owner is the requesting owner, not the holder
    def render(self) -> str:
        return f"{self.target} is locked by {self.owner}."


class UnlockError(SemapiError):
    """A lock could not be released."""

    def __init__(self, target: str, owner: str | None = None) -> None:
        self.target = target
        self.owner = owner
        super().__init__(self.render())

    def render(self) -> str:  # pragma: no cover - overridden
        raise NotImplementedError


class NotLocked(UnlockError):
    def __init__(self, target: str) -> None:
        super().__init__(target)

    def render(self) -> str:
        return f"{self.target} haven't locked"


class OwnerMismatch(UnlockError):
    def render(self) -> str:
        return f"{self.target} don't release lock, because lock owner isn't {self.owner}"
