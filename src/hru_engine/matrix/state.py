"""HRU protection state -- the access-matrix engine.

:class:`ProtectionState` owns one access matrix (subject -> object ->
set of rights) and exposes the HRU primitive transitions plus read-only
queries:

* **add_subject** / **add_object** -- grow the matrix, keeping it dense:
  every (subject, object) pair always has a (possibly empty) rights-set.
* **grant_access** / **revoke_access** -- modify one cell.
* **check_access** / **check** -- authorisation query.
* **enumerate** -- consistent point-in-time snapshot for reporting.

Every operation validates before it mutates: a rejected request never
leaves a partial change behind.  Expected misuse (an invalid right, an
unknown subject or object) is reported through the returned
:class:`~hru_engine.core.types.AccessResult`, or raised as the matching
:class:`~hru_engine.core.errors.HRUError` when the engine is configured
with ``raise_on_error=True``.

Mutators hold the exclusive side of a :class:`ReadWriteLock`; queries
hold the shared side.  Instances share nothing.
"""
from __future__ import annotations

import logging

from hru_engine.core.config import HRUConfig
from hru_engine.core.errors import HRUError, InvalidRight, UnknownObject, UnknownSubject
from hru_engine.core.types import (
    AccessResult,
    AccessStatus,
    MatrixSnapshot,
    ObjectName,
    Right,
    SubjectName,
    sort_rights,
)
from hru_engine.matrix.locking import ReadWriteLock
from hru_engine.matrix.rights import parse_right

logger = logging.getLogger(__name__)


class ProtectionState:
    """An HRU access matrix with validated mutators.

    Parameters
    ----------
    config:
        Engine configuration.  Defaults to ``HRUConfig()``.
    """

    def __init__(self, config: HRUConfig | None = None) -> None:
        self._config = config or HRUConfig()
        self._matrix: dict[SubjectName, dict[ObjectName, set[Right]]] = {}
        # Ordered registry of every object ever added, so that an object
        # created before any subject still reaches later subjects.
        self._objects: dict[ObjectName, None] = {}
        self._lock = ReadWriteLock()

    @property
    def config(self) -> HRUConfig:
        return self._config

    # -- Entity creation ----------------------------------------------------

    def add_subject(self, name: str) -> AccessResult:
        """Add a subject with an empty rights-set for every known object.

        Re-adding an existing subject is a no-op reported as
        :attr:`AccessStatus.EXISTS`.

        Raises
        ------
        ValueError
            If *name* is not a non-empty string.
        """
        subject = SubjectName(_require_name(name, "subject"))
        with self._lock.write_locked():
            created = subject not in self._matrix
            if created:
                self._matrix[subject] = {obj: set() for obj in self._objects}

        if created:
            logger.info("[%s] subject %r added", self._config.engine_id, subject)
            return AccessResult(
                status=AccessStatus.CREATED,
                message=f"Subject '{subject}' added.",
                subject=subject,
            )
        logger.debug("[%s] subject %r already exists", self._config.engine_id, subject)
        return AccessResult(
            status=AccessStatus.EXISTS,
            message=f"Subject '{subject}' already exists.",
            subject=subject,
        )

    def add_object(self, name: str) -> AccessResult:
        """Add an object, inserting an empty cell under every subject.

        Re-adding an existing object is a no-op reported as
        :attr:`AccessStatus.EXISTS`.

        Raises
        ------
        ValueError
            If *name* is not a non-empty string.
        """
        obj = ObjectName(_require_name(name, "object"))
        with self._lock.write_locked():
            created = obj not in self._objects
            self._objects.setdefault(obj, None)
            for row in self._matrix.values():
                row.setdefault(obj, set())

        if created:
            logger.info("[%s] object %r added", self._config.engine_id, obj)
            return AccessResult(
                status=AccessStatus.CREATED,
                message=f"Object '{obj}' added.",
                object=obj,
            )
        logger.debug("[%s] object %r already exists", self._config.engine_id, obj)
        return AccessResult(
            status=AccessStatus.EXISTS,
            message=f"Object '{obj}' already exists.",
            object=obj,
        )

    # -- Rights transitions -------------------------------------------------

    def grant_access(self, subject: str, obj: str, right: str | Right) -> AccessResult:
        """Grant *right* to *subject* over *obj*.

        Preconditions are checked in order: the right is valid, the subject
        exists, the object exists.  Granting a right that is already held
        succeeds without changing the cell.
        """
        try:
            parsed = self._parse_right(right)
            with self._lock.write_locked():
                self._cell(subject, obj).add(parsed)
        except HRUError as exc:
            return self._reject(exc, subject, obj, right)

        logger.debug(
            "[%s] granted %s to %r on %r",
            self._config.engine_id, parsed, subject, obj,
        )
        return AccessResult(
            status=AccessStatus.GRANTED,
            message=f"Access '{parsed}' granted to subject '{subject}' on object '{obj}'.",
            subject=subject,
            object=obj,
            right=parsed.value,
        )

    def revoke_access(self, subject: str, obj: str, right: str | Right) -> AccessResult:
        """Remove *right* from *subject* over *obj*.

        Removing a right that is not held is reported as
        :attr:`AccessStatus.NOT_FOUND`; it is not a failure.  Whether
        *right* is validated first depends on
        :attr:`HRUConfig.validate_revoke_right`.
        """
        try:
            if self._config.validate_revoke_right:
                parsed: Right | None = self._parse_right(right)
            else:
                parsed = self._parse_right_or_none(right)
            with self._lock.write_locked():
                cell = self._cell(subject, obj)
                removed = parsed is not None and parsed in cell
                if removed:
                    cell.discard(parsed)
        except HRUError as exc:
            return self._reject(exc, subject, obj, right)

        label = parsed.value if parsed is not None else str(right)
        if removed:
            logger.debug(
                "[%s] revoked %s from %r on %r",
                self._config.engine_id, label, subject, obj,
            )
            return AccessResult(
                status=AccessStatus.REVOKED,
                message=f"Access '{label}' revoked from subject '{subject}' on object '{obj}'.",
                subject=subject,
                object=obj,
                right=label,
            )
        logger.debug(
            "[%s] nothing to revoke: %s for %r on %r",
            self._config.engine_id, label, subject, obj,
        )
        return AccessResult(
            status=AccessStatus.NOT_FOUND,
            message=f"Right '{label}' not found for subject '{subject}' on object '{obj}'.",
            subject=subject,
            object=obj,
            right=label,
        )

    # -- Queries ------------------------------------------------------------

    def check(self, subject: str, obj: str, right: str | Right) -> AccessResult:
        """Authorisation query returning the full result.

        The status is :attr:`AccessStatus.ALLOWED` or
        :attr:`AccessStatus.DENIED` when the query is well-formed, or the
        failure status otherwise.  Never mutates state.
        """
        try:
            parsed = self._parse_right(right)
            with self._lock.read_locked():
                held = parsed in self._cell(subject, obj)
        except HRUError as exc:
            return self._reject(exc, subject, obj, right)

        status = AccessStatus.ALLOWED if held else AccessStatus.DENIED
        logger.debug(
            "[%s] check %s for %r on %r: %s",
            self._config.engine_id, parsed, subject, obj, status,
        )
        return AccessResult(
            status=status,
            message=(
                f"Access '{parsed}' for subject '{subject}' on object '{obj}': "
                f"{'yes' if held else 'no'}."
            ),
            subject=subject,
            object=obj,
            right=parsed.value,
        )

    def check_access(self, subject: str, obj: str, right: str | Right) -> bool:
        """Return ``True`` iff *subject* holds *right* over *obj*.

        Any failed precondition yields ``False`` (or raises, with
        ``raise_on_error=True``).
        """
        return self.check(subject, obj, right).allowed

    def enumerate(self) -> MatrixSnapshot:
        """Return a consistent, detached snapshot of the whole matrix."""
        with self._lock.read_locked():
            objects = list(self._objects)
            cells = {
                subject: {obj: sort_rights(row[obj]) for obj in objects}
                for subject, row in self._matrix.items()
            }
            subjects = list(self._matrix)
        return MatrixSnapshot(subjects=subjects, objects=objects, cells=cells)

    def subjects(self) -> list[SubjectName]:
        """Known subjects in insertion order."""
        with self._lock.read_locked():
            return list(self._matrix)

    def objects(self) -> list[ObjectName]:
        """Known objects in insertion order."""
        with self._lock.read_locked():
            return list(self._objects)

    def has_subject(self, name: str) -> bool:
        with self._lock.read_locked():
            return name in self._matrix

    def has_object(self, name: str) -> bool:
        with self._lock.read_locked():
            return name in self._objects

    def rights(self, subject: str, obj: str) -> frozenset[Right]:
        """Rights held by *subject* over *obj*; empty for unknown pairs."""
        with self._lock.read_locked():
            return frozenset(self._matrix.get(subject, {}).get(obj, ()))

    def __contains__(self, subject: object) -> bool:
        with self._lock.read_locked():
            return subject in self._matrix

    def __len__(self) -> int:
        with self._lock.read_locked():
            return len(self._matrix)

    def __repr__(self) -> str:
        with self._lock.read_locked():
            n_subjects, n_objects = len(self._matrix), len(self._objects)
        return (
            f"ProtectionState(engine_id={self._config.engine_id!r}, "
            f"subjects={n_subjects}, objects={n_objects})"
        )

    # -- Internal helpers ---------------------------------------------------

    def _parse_right(self, right: str | Right) -> Right:
        return parse_right(right, policy=self._config.rights_policy)

    def _parse_right_or_none(self, right: str | Right) -> Right | None:
        try:
            return self._parse_right(right)
        except InvalidRight:
            return None

    def _cell(self, subject: str, obj: str) -> set[Right]:
        """Return the live rights-set for (*subject*, *obj*).

        Caller must hold the lock.
        """
        row = self._matrix.get(SubjectName(subject))
        if row is None:
            raise UnknownSubject(
                f"Subject '{subject}' does not exist.",
                details={"subject": subject},
            )
        cell = row.get(ObjectName(obj))
        if cell is None:
            raise UnknownObject(
                f"Object '{obj}' does not exist.",
                details={"subject": subject, "object": obj},
            )
        return cell

    def _reject(
        self,
        exc: HRUError,
        subject: str,
        obj: str,
        right: object,
    ) -> AccessResult:
        logger.warning(
            "[%s] %s rejected: %s", self._config.engine_id, exc.code, exc.message,
        )
        if self._config.raise_on_error:
            raise exc
        return AccessResult(
            status=exc.status,
            message=exc.message,
            subject=subject,
            object=obj,
            right=str(right) if isinstance(right, str) else repr(right),
            error=exc.code,
        )


def _require_name(value: object, kind: str) -> str:
    if not isinstance(value, str) or not value:
        raise ValueError(f"{kind} name must be a non-empty string, got {value!r}")
    return value
