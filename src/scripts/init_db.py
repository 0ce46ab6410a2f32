#!/usr/bin/env python3
"""Create the calendar SQLite3 database with users, events and request log tables."""

import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from core.config import DB_PATH
from core.database import create_tables, get_connection


def create_database():
    """Create the database and tables if they don't exist."""
    conn = get_connection(DB_PATH)
    try:
        create_tables(conn)
    finally:
        conn.close()
    print(f"Database created successfully at: {DB_PATH}")


if __name__ == "__main__":
    create_database()
