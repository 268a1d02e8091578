#!/usr/bin/env python3
"""Import a JSON export from the old browser-only client.

Usage:
    python scripts/import_entries.py backup.json --user-id 1
"""

import argparse
import json
import os
import sys
from datetime import UTC, datetime

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from interne.database import SessionLocal, init_db
from interne.models.user import User
from interne.services.import_service import import_legacy_entries


def main(argv: list[str] | None = None) -> None:
    """Import the file named on the command line for an existing user."""
    parser = argparse.ArgumentParser(description="Import legacy interne entries")
    parser.add_argument("file", help="Path to the legacy JSON export")
    parser.add_argument("--user-id", type=int, required=True, help="Owner of the imported entries")
    args = parser.parse_args(argv)

    with open(args.file, encoding="utf-8") as f:
        records = json.load(f)

    init_db()
    session = SessionLocal()
    try:
        user = session.query(User).filter(User.id == args.user_id).first()
        if user is None:
            raise SystemExit(f"User with ID '{args.user_id}' not found")

        result = import_legacy_entries(session, user, records, datetime.now(UTC))
        print(f"Imported {result.imported} entries")
        for reason in result.skipped:
            print(f"  skipped {reason}")
    except Exception as e:
        session.rollback()
        print(f"Error importing entries: {e}")
        raise
    finally:
        session.close()


if __name__ == "__main__":
    main()
