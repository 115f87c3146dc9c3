"""HRU protection state.

This subpackage holds the access-matrix engine and its supporting pieces:

* **ProtectionState** -- the access matrix with validated HRU primitive
  transitions (create subject, create object, grant, revoke) and the
  authorisation query.
* **parse_right** / **is_valid_right** -- rights-vocabulary validation and
  normalisation.
* **ReadWriteLock** -- shared/exclusive lock guarding the matrix.
"""
from __future__ import annotations

from hru_engine.matrix.locking import ReadWriteLock
from hru_engine.matrix.rights import VALID_RIGHTS, is_valid_right, parse_right
from hru_engine.matrix.state import ProtectionState

__all__ = [
    "VALID_RIGHTS",
    "ProtectionState",
    "ReadWriteLock",
    "is_valid_right",
    "parse_right",
]
