#!/usr/bin/env python3
"""Seed a demo library.

Usage:
    python scripts/seed_demo.py

This script:
1. Initializes the demo database
2. Inserts a handful of movies and TV shows through the entry service,
   so they pass the same validation as API requests
"""

from __future__ import annotations

import sys
from pathlib import Path

# Add src to path for imports
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT / "src"))

from medialib.core.errors import MediaLibError  # noqa: E402
from medialib.db.session import get_session, init_db  # noqa: E402
from medialib.library import entries  # noqa: E402

# Constants
DEMO_DB_PATH = PROJECT_ROOT / "demo.db"

DEMO_ENTRIES = [
    {
        "title": "Inception",
        "type": "MOVIE",
        "director": "Christopher Nolan",
        "budget": "$160M",
        "location": "Los Angeles, Paris, Tokyo",
        "duration": "148 min",
        "year": 2010,
    },
    {
        "title": "Breaking Bad",
        "type": "TV_SHOW",
        "director": "Vince Gilligan",
        "budget": 3000000,
        "location": "Albuquerque",
        "duration": "49 min/ep",
        "year": "2008",
        "notes": "Five seasons",
    },
    {
        "title": "Spirited Away",
        "type": "MOVIE",
        "director": "Hayao Miyazaki",
        "budget": "19000000",
        "location": "Tokyo",
        "duration": "125 min",
        "year": "2001",
    },
    {
        "title": "The Wire",
        "type": "TV_SHOW",
        "director": "David Simon",
        "location": "Baltimore",
        "year": "2002",
    },
]


def seed_database() -> int:
    """Insert demo entries. Returns the number created."""
    init_db(DEMO_DB_PATH)
    session = get_session(DEMO_DB_PATH)

    created = 0
    try:
        for payload in DEMO_ENTRIES:
            try:
                entry = entries.create_entry(session, payload)
            except MediaLibError as e:
                print(f"  FAILED: {payload['title']} - {e.message} {e.detail}")
                continue
            print(f"  Created entry {entry.id}: {entry.title} ({entry.type})")
            created += 1
    finally:
        session.close()

    return created


def main() -> int:
    """Main entry point."""
    print("=" * 60)
    print("Media Library Demo Seeding Script")
    print("=" * 60)

    print("\nSeeding database...")
    created = seed_database()

    print("\n" + "=" * 60)
    print(f"Seeded {created}/{len(DEMO_ENTRIES)} entries")
    print(f"Database: {DEMO_DB_PATH}")
    print("=" * 60)

    return 0 if created == len(DEMO_ENTRIES) else 1


if __name__ == "__main__":
    sys.exit(main())
