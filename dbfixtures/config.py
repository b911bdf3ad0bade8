"""
Centralized configuration for dbfixtures.

Values that vary by project belong here.
Override via environment variables where marked.
"""

import os
import re

# ============================================================
# Legacy fixture directories
# ============================================================

DEFAULT_FILTER_PATTERN: str = os.environ.get("DBFIXTURES_FILE_FILTER", r"\.ya?ml$")
"""Files in a legacy fixture directory whose name matches this are not fixtures."""

DEFAULT_FILTER_RE: re.Pattern = re.compile(DEFAULT_FILTER_PATTERN)

# ============================================================
# Logging
# ============================================================

LOG_LEVEL: str = os.environ.get("DBFIXTURES_LOG_LEVEL", "INFO")
"""Default log level for the command line loader."""

SUPPRESSED_LOGGERS: tuple[str, ...] = ("dbfixtures.db_opt",)
"""Loggers silenced below ERROR while a load transaction is running."""

# ============================================================
# Store
# ============================================================

POSTGRES_URL_PREFIXES: tuple[str, ...] = ("postgresql://", "postgres://")
"""DBFIXTURES_DB values with these prefixes select the PostgreSQL adapter."""

SEQUENCE_SCHEMA: str = os.environ.get("DBFIXTURES_SEQUENCE_SCHEMA", "public")
"""Schema holding <table>_id_seq sequences on PostgreSQL."""
