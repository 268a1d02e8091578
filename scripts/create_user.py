#!/usr/bin/env python3
"""Create a user and print their invite code.

Usage:
    python scripts/create_user.py "Ada Lovelace" --email ada@example.com

    # Or against another database:
    DATABASE_URL=sqlite:///./data/interne.db python scripts/create_user.py "Ada"
"""

import argparse
import os
import sys

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from interne.database import SessionLocal, init_db
from interne.services.auth import create_user


def main(argv: list[str] | None = None) -> None:
    """Create the user named on the command line."""
    parser = argparse.ArgumentParser(description="Create an interne user")
    parser.add_argument("name", help="Display name")
    parser.add_argument("--email", default=None, help="Optional email address")
    args = parser.parse_args(argv)

    init_db()
    session = SessionLocal()
    try:
        user = create_user(session, args.name, args.email)
        print("Created user:")
        print(f"  ID: {user.id}")
        print(f"  Name: {user.name}")
        print(f"  Invite Code: {user.invite_code}")
    except Exception as e:
        session.rollback()
        print(f"Error creating user: {e}")
        raise
    finally:
        session.close()


if __name__ == "__main__":
    main()
