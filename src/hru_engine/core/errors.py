"""HRU engine error-code hierarchy.

Every rejected engine operation corresponds to a concrete exception class
carrying a stable error code.

Hierarchy
---------
::

    HRUError
    +-- ValidationError   (HRU-E1xx)
    |   +-- InvalidRight      (HRU-E100)
    +-- LookupFailure     (HRU-E2xx)
        +-- UnknownSubject    (HRU-E200)
        +-- UnknownObject     (HRU-E201)

Usage
-----
By default the engine does not raise these; it converts them into a
failed :class:`~hru_engine.core.types.AccessResult`.  With
``HRUConfig(raise_on_error=True)`` they propagate to the caller::

    try:
        state.grant_access("alice", "file1", "fly")
    except ValidationError:
        ...

A revoke that finds nothing to remove is *not* an error; it is reported
as ``AccessStatus.NOT_FOUND``.
"""
from __future__ import annotations

from typing import Any

from hru_engine.core.types import AccessStatus

# ---------------------------------------------------------------------------
# Base
# ---------------------------------------------------------------------------

class HRUError(Exception):
    """Base exception for all HRU engine errors.

    Attributes
    ----------
    code : str
        Error code, e.g. ``"HRU-E100"``.
    status : AccessStatus
        The result status this error is reported as.
    message : str
        Human-readable description.
    details : dict[str, Any]
        Machine-readable context specific to the error instance.
    resolution : str
        Suggested action for the caller.
    """

    code: str = "HRU-E000"
    status: AccessStatus | None = None
    message: str = "Unknown HRU engine error"
    resolution: str = ""

    def __init__(
        self,
        message: str | None = None,
        *,
        details: dict[str, Any] | None = None,
        resolution: str | None = None,
    ) -> None:
        self.details: dict[str, Any] = details or {}
        if message is not None:
            self.message = message
        if resolution is not None:
            self.resolution = resolution
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Serialise the error to a plain ``{"error": {...}}`` payload."""
        payload: dict[str, Any] = {
            "code": self.code,
            "message": self.message,
        }
        if self.details:
            payload["detail"] = self.details
        if self.resolution:
            payload["resolution"] = self.resolution
        return {"error": payload}

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r})"


# ===================================================================
# Category base classes
# ===================================================================

class ValidationError(HRUError):
    """HRU-E1xx -- Rejected input tokens."""

    code = "HRU-E1XX"


class LookupFailure(HRUError):
    """HRU-E2xx -- References to entities that were never created."""

    code = "HRU-E2XX"


# ===================================================================
# Concrete errors
# ===================================================================

class InvalidRight(ValidationError):
    """HRU-E100 -- The right token is not in the vocabulary."""

    code = "HRU-E100"
    status = AccessStatus.INVALID_RIGHT
    message = "Invalid access right"
    resolution = "Use one of: read, write, execute."


class UnknownSubject(LookupFailure):
    """HRU-E200 -- The subject was never added."""

    code = "HRU-E200"
    status = AccessStatus.UNKNOWN_SUBJECT
    message = "Subject does not exist"
    resolution = "Add the subject before granting, revoking or checking rights."


class UnknownObject(LookupFailure):
    """HRU-E201 -- The object was never added."""

    code = "HRU-E201"
    status = AccessStatus.UNKNOWN_OBJECT
    message = "Object does not exist"
    resolution = "Add the object before granting, revoking or checking rights."


# ---------------------------------------------------------------------------
# Lookup helper
# ---------------------------------------------------------------------------

_CODE_MAP: dict[str, type[HRUError]] = {
    cls.code: cls
    for cls in [
        InvalidRight,
        UnknownSubject,
        UnknownObject,
    ]
}


def error_from_code(code: str, message: str | None = None) -> HRUError:
    """Instantiate the correct exception class for an HRU error code.

    Parameters
    ----------
    code:
        An HRU error code such as ``"HRU-E200"``.
    message:
        Optional override for the default error message.

    Raises
    ------
    KeyError
        If *code* is not a recognised HRU error code.
    """
    cls = _CODE_MAP[code]
    return cls(message) if message else cls()
