from __future__ import annotations

import os
from pathlib import Path

APP_ENV_FIXTURES = "DBFIXTURES_PATH"
APP_ENV_DB = "DBFIXTURES_DB"


def project_root() -> Path:
    """
    Working tree the loader runs from.
    Fixture roots are resolved relative to it unless given absolutely.
    """
    return Path.cwd().resolve()


def fixtures_dir() -> Path:
    """
    Default fixture root.

    Resolution order:
    1. DBFIXTURES_PATH env var (explicit override)
    2. <cwd>/tests/fixtures (default)
    """
    if os.environ.get(APP_ENV_FIXTURES):
        return Path(os.environ[APP_ENV_FIXTURES]).expanduser().resolve()
    return project_root() / "tests" / "fixtures"


def database_url() -> str:
    """
    Database the default adapter connects to.

    A postgresql:// URL selects PostgreSQL; anything else is a SQLite path.
    Defaults to an in-memory SQLite database.
    """
    return os.environ.get(APP_ENV_DB, ":memory:")
