"""HRU engine shared domain types.

This module defines the value types, enums, and Pydantic models shared
across the engine.  The most commonly used symbols are re-exported from
``hru_engine``.

Key design decisions:
* ``SubjectName`` and ``ObjectName`` are ``NewType`` wrappers around ``str``
  for static type-safety while remaining JSON-serialisable.
* ``Right`` is a ``StrEnum`` so a right compares equal to its canonical
  token and serialises cleanly.
* Results and snapshots are frozen Pydantic **v2** models.
"""
from __future__ import annotations

import enum
from collections.abc import Iterable
from typing import Any, NewType

from pydantic import BaseModel, ConfigDict, Field

# ---------------------------------------------------------------------------
# Value types (NewType wrappers)
# ---------------------------------------------------------------------------

SubjectName = NewType("SubjectName", str)
"""Identifier of an active entity (user or process) that holds rights."""

ObjectName = NewType("ObjectName", str)
"""Identifier of a protected resource.  Independent of subject names."""


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class Right(enum.StrEnum):
    """The fixed rights vocabulary.

    Declaration order is the canonical order used when rights are listed.
    """

    READ = "read"
    WRITE = "write"
    EXECUTE = "execute"

    @property
    def rank(self) -> int:
        """Position of the right in the canonical order."""
        return _RIGHT_ORDER.index(self)


_RIGHT_ORDER: tuple[Right, ...] = tuple(Right)


class AccessStatus(enum.StrEnum):
    """Outcome discriminant of every engine operation.

    Success outcomes:
    * **created** / **exists** -- ``add_subject`` and ``add_object``.
    * **granted** -- ``grant_access``.
    * **revoked** / **not_found** -- ``revoke_access``.  ``not_found`` is
      informational, not a failure.
    * **allowed** / **denied** -- ``check``.

    Failure outcomes: **invalid_right**, **unknown_subject**,
    **unknown_object**.
    """

    CREATED = "created"
    EXISTS = "exists"
    GRANTED = "granted"
    REVOKED = "revoked"
    NOT_FOUND = "not_found"
    ALLOWED = "allowed"
    DENIED = "denied"
    INVALID_RIGHT = "invalid_right"
    UNKNOWN_SUBJECT = "unknown_subject"
    UNKNOWN_OBJECT = "unknown_object"

    @property
    def is_failure(self) -> bool:
        """Return ``True`` for statuses produced by a failed precondition."""
        return self in _FAILURES


_FAILURES = frozenset({
    AccessStatus.INVALID_RIGHT,
    AccessStatus.UNKNOWN_SUBJECT,
    AccessStatus.UNKNOWN_OBJECT,
})


def sort_rights(rights: Iterable[Right]) -> list[Right]:
    """Return *rights* as a list in canonical vocabulary order."""
    return sorted(rights, key=lambda r: r.rank)


# ---------------------------------------------------------------------------
# Pydantic models
# ---------------------------------------------------------------------------

class AccessResult(BaseModel):
    """Discriminated result returned by every engine operation.

    The engine never prints; callers render ``message`` (or their own text
    built from the other fields) however they like.
    """

    model_config = ConfigDict(frozen=True)

    status: AccessStatus
    message: str = ""
    subject: str | None = None
    object: str | None = None
    right: str | None = None
    error: str | None = Field(
        default=None,
        description="Error code (HRU-Exxx) when the status is a failure.",
    )

    @property
    def ok(self) -> bool:
        """``True`` unless a precondition failed."""
        return not self.status.is_failure

    @property
    def allowed(self) -> bool:
        """``True`` only for a successful check that found the right."""
        return self.status is AccessStatus.ALLOWED

    def __bool__(self) -> bool:
        return self.ok


class MatrixSnapshot(BaseModel):
    """Point-in-time copy of the access matrix.

    ``subjects`` and ``objects`` keep insertion order.  ``cells`` is dense:
    every subject maps every object to a (possibly empty) list of rights in
    canonical order.
    """

    model_config = ConfigDict(frozen=True)

    subjects: list[str] = Field(default_factory=list)
    objects: list[str] = Field(default_factory=list)
    cells: dict[str, dict[str, list[Right]]] = Field(default_factory=dict)

    def rights_for(self, subject: str, obj: str) -> list[Right]:
        """Rights held by *subject* over *obj*; empty for unknown pairs."""
        return list(self.cells.get(subject, {}).get(obj, []))

    def to_dict(self) -> dict[str, Any]:
        """Plain JSON-compatible representation."""
        return self.model_dump(mode="json")

    def __len__(self) -> int:
        return len(self.subjects)
