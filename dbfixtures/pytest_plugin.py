"""
pytest integration: load fixtures before each test that asks for them.

Enable in conftest.py and provide a connection:

    pytest_plugins = ["dbfixtures.pytest_plugin"]

    @pytest.fixture
    def dbfixtures_connection():
        with SQLiteAdapter(":memory:") as adapter:
            create_schema(adapter)
            yield adapter

Then mark tests with the tables they need:

    @pytest.mark.fixtures("people", "accounts")
    def test_alice(db_fixtures):
        assert db_fixtures.people["alice"]["name"] == "Alice"
        assert db_fixtures.alice["id"] == 1     # when Person is registered
"""

from types import SimpleNamespace

import pytest

from dbfixtures import paths
from dbfixtures.loader import instantiate_fixtures


def pytest_addoption(parser):
    parser.addini("dbfixtures_path", "root directory of fixture files", default=None)
    parser.addoption(
        "--fixtures-path",
        action="store",
        default=None,
        help="root directory of dbfixtures fixture files",
    )


def pytest_configure(config):
    config.addinivalue_line(
        "markers", "fixtures(*tables): load the named fixture tables before the test"
    )


@pytest.fixture
def dbfixtures_path(request):
    """Fixture root: --fixtures-path, then the ini value, then DBFIXTURES_PATH."""
    return (
        request.config.getoption("--fixtures-path")
        or request.config.getini("dbfixtures_path")
        or str(paths.fixtures_dir())
    )


@pytest.fixture
def dbfixtures_registry():
    """Override to bind live records; no entity types by default."""
    return None


@pytest.fixture
def db_fixtures(request, dbfixtures_connection, dbfixtures_registry, dbfixtures_path):
    """Load the tables named by the test's ``fixtures`` markers."""
    # Outermost first: module, class, then function markers.
    tables: list[str] = []
    for marker in reversed(list(request.node.iter_markers("fixtures"))):
        for table in marker.args:
            if table not in tables:
                tables.append(table)

    namespace = SimpleNamespace()
    if tables:
        instantiate_fixtures(
            namespace,
            dbfixtures_path,
            tables,
            connection=dbfixtures_connection,
            registry=dbfixtures_registry,
        )
    return namespace
