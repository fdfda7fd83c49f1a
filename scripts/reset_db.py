#!/usr/bin/env python3
"""
Script: reset_db.py
Description: Drop all bridge tables/views and re-run the schema.

Use for a fresh deployment: this EMPTIES the database.

Usage:
    python scripts/reset_db.py [--yes] [--dry-run] [--database-url URL]

Requires DATABASE_URL in the environment or .env.
"""

from bridge_backend.db.reset import main

if __name__ == '__main__':
    main()
