"""Mini README: Error hierarchy shared by every Angkringan component.

Structure:
    * PosError - common base so interfaces can catch everything we raise.
    * ValidationError - rejected input (bad menu field, empty cart, short cash).
    * NotFoundError - operation on a menu item that does not exist.
    * SyncError - storage or remote backend I/O failure.

Validation and lookup errors subclass the matching built-in exceptions so
callers that already handle ``ValueError``/``LookupError`` keep working.
"""

from __future__ import annotations


class PosError(Exception):
    """Base class for all errors raised by the till."""


class ValidationError(PosError, ValueError):
    """Raised when a request is rejected before any state changes."""


class NotFoundError(PosError, LookupError):
    """Raised when a referenced catalog item is unknown."""


class SyncError(PosError):
    """Raised when persistence or cloud sync fails."""


__all__ = ["NotFoundError", "PosError", "SyncError", "ValidationError"]
