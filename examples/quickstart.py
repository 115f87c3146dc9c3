#!/usr/bin/env python3
"""HRU engine quickstart.

Demonstrates the core workflow of the protection-state engine:

1. Create an engine instance.
2. Add subjects and objects.
3. Grant a right and check it.
4. Revoke the right and check again.
5. Show how rejected requests are reported.
6. Print the access matrix from a snapshot.

Run:
    python examples/quickstart.py
"""
from __future__ import annotations

import logging

from hru_engine import AccessResult, HRUConfig, ProtectionState


def show(step: str, result: AccessResult) -> None:
    print(f"[{step}] {result.status}: {result.message}")


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    # -- Step 1: Create the engine -------------------------------------------
    state = ProtectionState(HRUConfig(engine_id="quickstart"))
    print(f"[1] Engine created: {state!r}")

    # -- Step 2: Subjects and objects ----------------------------------------
    show("2", state.add_subject("alice"))
    show("2", state.add_object("file1"))
    show("2", state.add_subject("bob"))
    show("2", state.add_object("file2"))

    # -- Step 3: Grant and check ---------------------------------------------
    show("3", state.grant_access("alice", "file1", "read"))
    print(f"[3] alice read file1:  {state.check_access('alice', 'file1', 'read')}")
    print(f"[3] alice write file1: {state.check_access('alice', 'file1', 'write')}")

    # -- Step 4: Revoke and check --------------------------------------------
    show("4", state.revoke_access("alice", "file1", "read"))
    show("4", state.revoke_access("alice", "file1", "read"))
    print(f"[4] alice read file1:  {state.check_access('alice', 'file1', 'read')}")

    # -- Step 5: Rejected requests -------------------------------------------
    show("5", state.grant_access("alice", "file1", "own"))
    show("5", state.grant_access("carol", "file1", "read"))
    show("5", state.check("bob", "file3", "read"))

    # -- Step 6: Access matrix -----------------------------------------------
    state.grant_access("bob", "file2", "Write")
    state.grant_access("bob", "file2", "execute")
    snapshot = state.enumerate()
    print("\n[6] Access matrix:")
    for subject in snapshot.subjects:
        print(f"Subject: {subject}")
        for obj in snapshot.objects:
            rights = ", ".join(snapshot.rights_for(subject, obj)) or "-"
            print(f"  Object: {obj} | Rights: {rights}")


if __name__ == "__main__":
    main()
