"""Shared fixtures for HRU engine conformance tests.

Provides fresh engines and small builders used across the protection-state
property suites.
"""
from __future__ import annotations

from collections.abc import Iterable

import pytest

from hru_engine.core.config import HRUConfig
from hru_engine.core.types import MatrixSnapshot
from hru_engine.matrix.state import ProtectionState


# ---------------------------------------------------------------------------
# Engine fixtures
# ---------------------------------------------------------------------------
@pytest.fixture()
def engine() -> ProtectionState:
    return ProtectionState(HRUConfig(engine_id="conformance"))


@pytest.fixture()
def strict_engine() -> ProtectionState:
    return ProtectionState(HRUConfig(engine_id="conformance-strict", raise_on_error=True))


@pytest.fixture()
def build():
    """Factory: an engine pre-populated with *subjects* and *objects*."""

    def _build(
        subjects: Iterable[str] = (),
        objects: Iterable[str] = (),
        **config: object,
    ) -> ProtectionState:
        state = ProtectionState(HRUConfig(**config))  # type: ignore[arg-type]
        for subject in subjects:
            state.add_subject(subject)
        for obj in objects:
            state.add_object(obj)
        return state

    return _build


# ---------------------------------------------------------------------------
# Assertion helpers
# ---------------------------------------------------------------------------
def assert_dense(snapshot: MatrixSnapshot) -> None:
    """Every (subject, object) pair has a defined rights list."""
    assert list(snapshot.cells) == snapshot.subjects
    for subject in snapshot.subjects:
        assert list(snapshot.cells[subject]) == snapshot.objects, subject


@pytest.fixture()
def dense():
    return assert_dense
