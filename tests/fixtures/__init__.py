"""
Sample fixture files and the schema they load into.

This module provides:
- fixture_db: Creates temp SQLite databases with the sample schema
- people.yml, accounts.csv, topics.yml, web_sites/: sample fixture sources
"""

from .fixture_db import FIXTURES_DIR, create_fixture_db, get_fixture_db_path

__all__ = ["FIXTURES_DIR", "create_fixture_db", "get_fixture_db_path"]
