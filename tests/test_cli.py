"""
Tests for the dbfixtures command line.
"""

import json

import pytest

from dbfixtures import cli
from dbfixtures.db_opt.db_adapter import SQLiteAdapter
from tests.fixtures import create_fixture_db


@pytest.fixture(autouse=True)
def quiet_logging(monkeypatch):
    """Keep main() from replacing the root handlers pytest captures with."""
    monkeypatch.setattr(cli, "configure_logging", lambda *args, **kwargs: None)


@pytest.fixture
def db_path(tmp_path):
    path = tmp_path / "cli.db"
    create_fixture_db(path).close()
    return path


class TestLoadCommand:
    """Tests for `dbfixtures load`."""

    def test_load_tables(self, db_path, fixtures_root, capsys):
        code = cli.main(
            ["load", "--db", str(db_path), "--fixtures", str(fixtures_root), "people", "accounts"]
        )
        out = capsys.readouterr().out
        assert code == 0
        assert "people" in out
        assert "accounts" in out
        with SQLiteAdapter(str(db_path)) as check:
            assert check.fetchone("SELECT COUNT(*) AS c FROM accounts")["c"] == 3

    def test_json_summary(self, db_path, fixtures_root, capsys):
        code = cli.main(
            ["load", "--db", str(db_path), "--fixtures", str(fixtures_root), "--json", "people"]
        )
        summary = json.loads(capsys.readouterr().out)
        assert code == 0
        assert summary["ok"] is True
        assert summary["database"] == str(db_path)
        assert summary["tables"] == [
            {
                "table": "people",
                "source": "yml",
                "fixtures": ["alice", "bob"],
                "columns": ["id", "name", "email"],
            }
        ]

    def test_database_from_environment(self, db_path, fixtures_root, monkeypatch, capsys):
        monkeypatch.setenv("DBFIXTURES_DB", str(db_path))
        assert cli.main(["load", "--fixtures", str(fixtures_root), "people"]) == 0
        assert f"database: {db_path}" in capsys.readouterr().out

    def test_format_error_exit_code(self, db_path, tmp_path, capsys):
        (tmp_path / "people.yaml").write_text("alice:\n  id: 1\n")
        code = cli.main(["load", "--db", str(db_path), "--fixtures", str(tmp_path), "--json", "people"])
        summary = json.loads(capsys.readouterr().out)
        assert code == 1
        assert summary["ok"] is False
        assert ".yml extension required" in summary["error"]

    def test_store_error_exit_code(self, tmp_path, fixtures_root, capsys):
        empty_db = tmp_path / "empty.db"
        code = cli.main(["load", "--db", str(empty_db), "--fixtures", str(fixtures_root), "people"])
        assert code == 1
        assert "no such table" in capsys.readouterr().err


class TestShowCommand:
    """Tests for `dbfixtures show`."""

    def test_show_without_database(self, fixtures_root, capsys):
        code = cli.main(["show", "--fixtures", str(fixtures_root), "web_sites", "topics"])
        out = capsys.readouterr().out
        assert code == 0
        assert "web_sites" in out
        assert "dir" in out
        assert "topics" in out
        assert "database:" not in out

    def test_show_json(self, fixtures_root, capsys):
        cli.main(["show", "--fixtures", str(fixtures_root), "--json", "accounts"])
        summary = json.loads(capsys.readouterr().out)
        assert summary["database"] is None
        assert summary["tables"][0]["fixtures"] == ["account_1", "account_2", "account_3"]

    def test_default_fixture_root_from_environment(self, fixtures_root, monkeypatch, capsys):
        monkeypatch.setenv("DBFIXTURES_PATH", str(fixtures_root))
        assert cli.main(["show", "people"]) == 0
        assert "people" in capsys.readouterr().out

    def test_requires_tables(self):
        with pytest.raises(SystemExit):
            cli.main(["show"])
