"""
Test configuration: repo root on sys.path plus isolation guards.

Tests load fixtures into temp SQLite databases only. The DBFIXTURES_*
environment is cleared for every test so a developer's shell settings
cannot point a test at a real database or fixture tree.
"""

import sys
from pathlib import Path

import pytest

# Add repo root to sys.path so tests can import dbfixtures and tests.fixtures
REPO_ROOT = Path(__file__).parent.parent
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dbfixtures.registry import EntityRegistry  # noqa: E402
from tests.fixtures import FIXTURES_DIR, create_fixture_db, get_fixture_db_path  # noqa: E402


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch):
    """Automatically drop DBFIXTURES_* settings from the environment."""
    for var in (
        "DBFIXTURES_DB",
        "DBFIXTURES_PATH",
        "DBFIXTURES_LOG_LEVEL",
        "DBFIXTURES_FILE_FILTER",
    ):
        monkeypatch.delenv(var, raising=False)


# =============================================================================
# DATABASE
# =============================================================================


@pytest.fixture
def adapter(tmp_path):
    """SQLite adapter on a fresh database with the sample schema."""
    adapter = create_fixture_db(get_fixture_db_path(tmp_path))
    yield adapter
    adapter.close()


@pytest.fixture
def registry(adapter):
    """Registry resolving Person, Account, WebSite and Topic rows as dicts."""
    registry = EntityRegistry()
    for table in ("people", "accounts", "web_sites", "topics"):
        registry.register_table(adapter, table)
    return registry


def fetch_all(adapter, table):
    """All rows of *table* as dicts, ordered by id."""
    return [dict(row) for row in adapter.conn.execute(f"SELECT * FROM {table} ORDER BY id")]


@pytest.fixture
def rows(adapter):
    """Callable returning the rows of a table."""
    return lambda table: fetch_all(adapter, table)


# =============================================================================
# FIXTURE FILES
# =============================================================================


@pytest.fixture
def fixtures_root():
    """The committed sample fixture tree."""
    return FIXTURES_DIR


@pytest.fixture
def fixture_dir(tmp_path):
    """Empty fixture root for tests that write their own sources."""
    root = tmp_path / "fixtures"
    root.mkdir()
    return root


@pytest.fixture
def write_fixture(fixture_dir):
    """Write *content* to *relative* under fixture_dir and return its path."""

    def _write(relative: str, content: str) -> Path:
        path = fixture_dir / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    return _write
