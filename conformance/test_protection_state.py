"""Protection-state conformance tests.

Verifies the access-matrix properties: density, idempotence, the
grant/revoke inverse, validation before mutation, unknown-entity safety,
the reference scenarios, and consistency under concurrent use.
"""
from __future__ import annotations

import random
import threading

import pytest

from hru_engine.core.errors import InvalidRight, UnknownObject, UnknownSubject
from hru_engine.core.types import AccessStatus, Right
from hru_engine.matrix.state import ProtectionState

# ===================================================================
# Density
# ===================================================================

class TestDensity:
    """Every (subject, object) pair always has a rights-set."""

    def test_MUST_stay_dense_for_interleaved_creation(
        self, engine: ProtectionState, dense
    ) -> None:
        """Any order of add_subject/add_object keeps the matrix dense."""
        rng = random.Random(1234)
        for step in range(200):
            if rng.random() < 0.5:
                engine.add_subject(f"s{rng.randrange(15)}")
            else:
                engine.add_object(f"o{rng.randrange(15)}")
            if step % 20 == 0:
                dense(engine.enumerate())
        snap = engine.enumerate()
        dense(snap)
        for subject in snap.subjects:
            for obj in snap.objects:
                assert engine.check(subject, obj, "read").status is AccessStatus.DENIED

    def test_MUST_include_objects_added_before_subjects(
        self, engine: ProtectionState, dense
    ) -> None:
        engine.add_object("file1")
        engine.add_subject("alice")
        engine.add_object("file2")
        engine.add_subject("bob")
        snap = engine.enumerate()
        dense(snap)
        assert snap.objects == ["file1", "file2"]


# ===================================================================
# Idempotence
# ===================================================================

class TestIdempotence:
    """Re-adding an entity is a no-op."""

    def test_MUST_not_change_matrix_on_second_add_subject(self, build) -> None:
        once = build(["alice"], ["file1"])
        twice = build(["alice", "alice"], ["file1"])
        assert once.enumerate() == twice.enumerate()

    def test_MUST_not_change_matrix_on_second_add_object(self, build) -> None:
        once = build(["alice"], ["file1"])
        twice = build(["alice"], ["file1", "file1"])
        assert once.enumerate() == twice.enumerate()

    def test_MUST_report_exists_without_error(self, engine: ProtectionState) -> None:
        engine.add_subject("alice")
        engine.add_object("file1")
        assert engine.add_subject("alice").status is AccessStatus.EXISTS
        assert engine.add_object("file1").status is AccessStatus.EXISTS


# ===================================================================
# Grant / revoke inverse
# ===================================================================

class TestGrantRevokeInverse:
    """Granting then revoking restores the cell."""

    @pytest.mark.parametrize("right", list(Right))
    def test_MUST_allow_after_grant_and_deny_after_revoke(
        self, build, right: Right
    ) -> None:
        state = build(["alice"], ["file1"])
        before = state.enumerate()
        state.grant_access("alice", "file1", right.value)
        assert state.check_access("alice", "file1", right.value)
        assert state.revoke_access("alice", "file1", right.value).status is AccessStatus.REVOKED
        assert not state.check_access("alice", "file1", right.value)
        assert state.enumerate() == before


# ===================================================================
# Validation precedes mutation
# ===================================================================

class TestValidationBeforeMutation:
    """A rejected request leaves the matrix unchanged."""

    def test_MUST_not_mutate_on_invalid_right(self, build) -> None:
        state = build(["alice"], ["file1"])
        state.grant_access("alice", "file1", "write")
        before = state.enumerate()
        result = state.grant_access("alice", "file1", "bogus")
        assert result.status is AccessStatus.INVALID_RIGHT
        assert state.enumerate() == before
        assert state.enumerate().to_dict() == before.to_dict()

    def test_MUST_raise_without_mutating_when_strict(
        self, strict_engine: ProtectionState
    ) -> None:
        strict_engine.add_subject("alice")
        strict_engine.add_object("file1")
        before = strict_engine.enumerate()
        with pytest.raises(InvalidRight):
            strict_engine.grant_access("alice", "file1", "bogus")
        with pytest.raises(UnknownSubject):
            strict_engine.grant_access("ghost", "file1", "read")
        with pytest.raises(UnknownObject):
            strict_engine.grant_access("alice", "ghost", "read")
        assert strict_engine.enumerate() == before


# ===================================================================
# Unknown-entity safety
# ===================================================================

class TestUnknownEntitySafety:
    """Queries about unknown entities are answered, not raised."""

    def test_MUST_return_false_for_ghost(self, engine: ProtectionState) -> None:
        assert engine.check_access("ghost", "ghost", "read") is False
        result = engine.check("ghost", "ghost", "read")
        assert result.status is AccessStatus.UNKNOWN_SUBJECT
        assert result.error == UnknownSubject.code

    def test_MUST_report_unknown_object(self, build) -> None:
        state = build(["alice"])
        assert state.check("alice", "ghost", "read").status is AccessStatus.UNKNOWN_OBJECT


# ===================================================================
# Reference scenarios
# ===================================================================

class TestScenarios:
    """End-to-end flows."""

    def test_MUST_follow_alice_file1_scenario(self, engine: ProtectionState) -> None:
        assert engine.add_subject("alice").status is AccessStatus.CREATED
        assert engine.add_object("file1").status is AccessStatus.CREATED
        assert engine.grant_access("alice", "file1", "read").status is AccessStatus.GRANTED
        assert engine.check_access("alice", "file1", "read") is True
        assert engine.check_access("alice", "file1", "write") is False
        assert engine.revoke_access("alice", "file1", "read").status is AccessStatus.REVOKED
        assert engine.check_access("alice", "file1", "read") is False

    def test_MUST_give_existing_subject_empty_cell_for_new_object(
        self, engine: ProtectionState
    ) -> None:
        engine.add_subject("bob")
        engine.add_object("file2")
        assert engine.check_access("bob", "file2", "read") is False
        assert engine.check("bob", "file2", "read").status is AccessStatus.DENIED


# ===================================================================
# Concurrency
# ===================================================================

class TestConcurrency:
    """Concurrent mutators and readers keep the matrix consistent."""

    def test_MUST_stay_dense_under_concurrent_writers(
        self, engine: ProtectionState, dense
    ) -> None:
        errors: list[Exception] = []
        start = threading.Barrier(9)

        def add_entities(prefix: str) -> None:
            try:
                start.wait()
                for i in range(50):
                    engine.add_subject(f"{prefix}-s{i}")
                    engine.add_object(f"{prefix}-o{i}")
            except Exception as exc:
                errors.append(exc)

        def read_snapshots() -> None:
            try:
                start.wait()
                for _ in range(50):
                    dense(engine.enumerate())
            except Exception as exc:
                errors.append(exc)

        threads = [
            threading.Thread(target=add_entities, args=(f"w{n}",)) for n in range(6)
        ] + [threading.Thread(target=read_snapshots) for _ in range(3)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join(timeout=30)

        assert errors == []
        snap = engine.enumerate()
        dense(snap)
        assert len(snap.subjects) == 300
        assert len(snap.objects) == 300

    def test_MUST_not_lose_concurrent_grants(self, build) -> None:
        state = build([f"s{i}" for i in range(8)], ["file1"])

        def grant_all(subject: str) -> None:
            for right in Right:
                state.grant_access(subject, "file1", right.value)

        threads = [threading.Thread(target=grant_all, args=(f"s{i}",)) for i in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join(timeout=30)

        for i in range(8):
            assert state.rights(f"s{i}", "file1") == set(Right)
