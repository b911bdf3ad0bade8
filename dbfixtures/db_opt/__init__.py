"""Store adapters consumed by the fixture loader."""

from dbfixtures.db_opt.db_adapter import (
    DatabaseAdapter,
    PostgreSQLAdapter,
    SQLiteAdapter,
    get_adapter,
    get_default_adapter,
)

__all__ = [
    "DatabaseAdapter",
    "SQLiteAdapter",
    "PostgreSQLAdapter",
    "get_adapter",
    "get_default_adapter",
]
