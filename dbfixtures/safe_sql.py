"""
Centralized SQL construction with validated identifiers.

All dynamic SQL assembly for fixture loading lives here. Table and column
names are validated against _SAFE_IDENTIFIER_RE before interpolation.

Fixture inserts carry their values as pre-quoted literals (the adapter's
quote()), because the column list of each row is only known after parsing
and multi-line values must survive the legacy newline escape. Lookups by
primary key use parameterized values.
"""

# ruff: noqa: S608
# All identifiers are validated via _validate() before interpolation.

from __future__ import annotations

import re

_SAFE_IDENTIFIER_RE = re.compile(r"^[a-zA-Z_][a-zA-Z0-9_]*$")


def _validate(name: str) -> str:
    """Validate that *name* is a safe SQL identifier.

    Returns the name unchanged if valid; raises ValueError otherwise.
    """
    if not _SAFE_IDENTIFIER_RE.match(name):
        raise ValueError(f"Invalid SQL identifier: {name!r}")
    return name


def validate_identifier(name: str) -> str:
    """Public alias of the identifier check for table and column names."""
    return _validate(name)


def column_list(columns: list[str]) -> str:
    """Render ``a, b, c`` for an INSERT column list."""
    for col in columns:
        _validate(col)
    return ", ".join(columns)


# ────────────────────────────────────────────────────────────
# DML: DELETE, INSERT, SELECT
# ────────────────────────────────────────────────────────────


def delete_all(table: str) -> str:
    """Build an unconditional DELETE with validated table name."""
    return f"DELETE FROM {_validate(table)}"


def insert_literals(table: str, columns: str, values: str) -> str:
    """Build INSERT with a rendered column list and pre-quoted values."""
    return f"INSERT INTO {_validate(table)} ({columns}) VALUES ({values})"


def select_by_key(table: str, key: str, placeholder: str = "?") -> str:
    """Build SELECT * ... WHERE key = ? with validated identifiers."""
    return f"SELECT * FROM {_validate(table)} WHERE {_validate(key)} = {placeholder}"


# ────────────────────────────────────────────────────────────
# PostgreSQL sequences
# ────────────────────────────────────────────────────────────


def setval_max(table: str, schema: str = "public", key: str = "id") -> str:
    """Advance ``<schema>.<table>_<key>_seq`` to the table's current max key."""
    _validate(table)
    _validate(schema)
    _validate(key)
    return (
        f"SELECT setval('{schema}.{table}_{key}_seq', "
        f"(SELECT MAX({key}) FROM {table}), true)"
    )
