"""HRU Engine -- Harrison-Ruzzo-Ullman protection state.

An in-memory access matrix mapping (subject, object) pairs to sets of
rights, with validated primitive transitions and authorisation queries.

Modules
-------
* Core types, errors and configuration (:mod:`hru_engine.core`)
* Protection-state engine (:mod:`hru_engine.matrix`)
"""
from __future__ import annotations

__version__ = "1.0.0"

from hru_engine.core.config import HRUConfig
from hru_engine.core.errors import (
    HRUError,
    InvalidRight,
    LookupFailure,
    UnknownObject,
    UnknownSubject,
    ValidationError,
)
from hru_engine.core.types import (
    AccessResult,
    AccessStatus,
    MatrixSnapshot,
    ObjectName,
    Right,
    SubjectName,
)
from hru_engine.matrix import (
    VALID_RIGHTS,
    ProtectionState,
    ReadWriteLock,
    is_valid_right,
    parse_right,
)

__all__ = [
    "__version__",
    # Core
    "HRUConfig",
    "AccessResult",
    "AccessStatus",
    "MatrixSnapshot",
    "ObjectName",
    "Right",
    "SubjectName",
    # Errors
    "HRUError",
    "ValidationError",
    "LookupFailure",
    "InvalidRight",
    "UnknownSubject",
    "UnknownObject",
    # Engine
    "VALID_RIGHTS",
    "ProtectionState",
    "ReadWriteLock",
    "is_valid_right",
    "parse_right",
]
