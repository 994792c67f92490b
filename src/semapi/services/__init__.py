"""Supporting services used by the lock manager."""

from .audit_logger import AuditLogger

__all__ = ["AuditLogger"]
