#!/usr/bin/env python3
"""Smoke test against a running API server.

Exercises create, list, update and delete through the client data layer
and cleans up after itself.

Usage:
    python -m medialib &
    python scripts/smoke_demo.py [BASE_URL]

Exit codes:
    0: All checks passed
    1: Some checks failed
"""

from __future__ import annotations

import sys
from pathlib import Path

# Add src to path for imports
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT / "src"))

from medialib.client import ClientError, EntryClient  # noqa: E402


def check_create(client: EntryClient) -> int | None:
    """Create a probe entry. Returns its id."""
    try:
        result = client.create_entry({"title": "Smoke Probe", "type": "movie", "budget": 1000})
    except ClientError as e:
        print(f"FAIL: Create failed: {e.kind} {e.detail}")
        return None

    if result.item.budget != "1000" or result.item.type != "MOVIE":
        print(f"FAIL: Created entry not normalized: {result.item}")
        return None
    print(f"OK: Created entry {result.item.id}")
    return result.item.id


def check_listed_first(client: EntryClient, entry_id: int) -> bool:
    """The newest entry heads page 1."""
    try:
        page = client.get_entries(page=1, limit=5)
    except ClientError as e:
        print(f"FAIL: List failed: {e.kind} {e.detail}")
        return False

    if not page.items or page.items[0].id != entry_id:
        print(f"FAIL: Entry {entry_id} is not first on page 1")
        return False
    print(f"OK: Entry {entry_id} first of {page.total}")
    return True


def check_update(client: EntryClient, entry_id: int) -> bool:
    try:
        result = client.update_entry(entry_id, {"notes": "updated"})
    except ClientError as e:
        print(f"FAIL: Update failed: {e.kind} {e.detail}")
        return False

    if result.item.notes != "updated" or result.item.title != "Smoke Probe":
        print(f"FAIL: Update not applied: {result.item}")
        return False
    print("OK: Update applied")
    return True


def check_delete(client: EntryClient, entry_id: int) -> bool:
    try:
        client.delete_entry(entry_id)
    except ClientError as e:
        print(f"FAIL: Delete failed: {e.kind} {e.detail}")
        return False

    try:
        client.delete_entry(entry_id)
    except ClientError as e:
        if e.kind == "not_found":
            print("OK: Deleted, second delete is not_found")
            return True
        print(f"FAIL: Second delete gave {e.kind}")
        return False

    print("FAIL: Second delete succeeded")
    return False


def main() -> int:
    """Run smoke checks."""
    base_url = sys.argv[1] if len(sys.argv) > 1 else None

    print("=" * 60)
    print("Media Library Smoke Test")
    print("=" * 60)

    checks_passed = 0
    checks_failed = 0

    with EntryClient(base_url=base_url) as client:
        print("\n[1/4] Creating entry...")
        entry_id = check_create(client)
        if entry_id is None:
            print("\n" + "=" * 60)
            print("RESULT: create failed, is the server running?")
            print("=" * 60)
            return 1
        checks_passed += 1

        for label, check in (
            ("[2/4] Listing entries...", check_listed_first),
            ("[3/4] Updating entry...", check_update),
            ("[4/4] Deleting entry...", check_delete),
        ):
            print(f"\n{label}")
            if check(client, entry_id):
                checks_passed += 1
            else:
                checks_failed += 1

    print("\n" + "=" * 60)
    if checks_failed == 0:
        print(f"RESULT: ALL PASSED ({checks_passed} checks)")
        print("=" * 60)
        return 0

    print(f"RESULT: {checks_passed} passed, {checks_failed} failed")
    print("=" * 60)
    return 1


if __name__ == "__main__":
    sys.exit(main())
