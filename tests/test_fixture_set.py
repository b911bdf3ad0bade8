"""
Tests for FixtureSet.

Covers:
- Construction from YAML, CSV and legacy sources
- Entity-type naming (people -> Person, web_sites -> WebSite)
- delete_existing_fixtures / insert_fixtures against SQLite
"""

import sqlite3
from datetime import date

import pytest

from dbfixtures.errors import FormatError
from dbfixtures.fixture import Fixture
from dbfixtures.fixture_set import FixtureSet
from dbfixtures.parsers import FixtureSource


class TestFixtureSetConstruction:
    """Tests for reading fixture sources into a FixtureSet."""

    def test_yaml_set(self, adapter, fixtures_root):
        people = FixtureSet(adapter, "people", fixtures_root / "people")
        assert people.source is FixtureSource.YAML
        assert list(people) == ["alice", "bob"]
        assert people["alice"].to_dict() == {"id": 1, "name": "Alice", "email": "alice@example.com"}
        assert isinstance(people["bob"], Fixture)

    def test_class_name_from_table(self, adapter, fixtures_root):
        assert FixtureSet(adapter, "people", fixtures_root / "people").class_name == "Person"
        assert FixtureSet(adapter, "web_sites", fixtures_root / "web_sites").class_name == "WebSite"

    def test_fixtures_carry_class_name(self, adapter, fixtures_root):
        people = FixtureSet(adapter, "people", fixtures_root / "people")
        assert {f.class_name for f in people.values()} == {"Person"}

    def test_csv_set_names(self, adapter, fixtures_root):
        accounts = FixtureSet(adapter, "accounts", fixtures_root / "accounts")
        assert accounts.source is FixtureSource.CSV
        assert list(accounts) == ["account_1", "account_2", "account_3"]
        assert accounts["account_1"].to_dict() == {
            "id": "1",
            "person_id": "1",
            "balance": "120.50",
            "opened_on": "2024-01-15",
        }
        assert accounts["account_3"]["balance"] == "1,000"

    def test_csv_people_named_after_singular(self, adapter, write_fixture, fixture_dir):
        write_fixture("people.csv", "id,name\n1,Alice\n2,Bob\n")
        people = FixtureSet(adapter, "people", fixture_dir / "people")
        assert list(people) == ["person_1", "person_2"]

    def test_legacy_set(self, adapter, fixtures_root):
        web_sites = FixtureSet(adapter, "web_sites", fixtures_root / "web_sites")
        assert web_sites.source is FixtureSource.LEGACY_DIR
        assert list(web_sites) == ["google", "ruby-on-rails", "yahoo.txt"]
        assert web_sites["ruby-on-rails"]["url"] == "http://www.rubyonrails.org"

    def test_templated_yaml_set(self, adapter, fixtures_root):
        topics = FixtureSet(adapter, "topics", fixtures_root / "topics")
        assert list(topics) == ["topic_1", "topic_2", "topic_3"]
        assert topics["topic_2"]["written_on"] == date(2024, 1, 2)

    def test_empty_yaml_gives_empty_set(self, adapter, write_fixture, fixture_dir):
        write_fixture("people.yml", "")
        assert len(FixtureSet(adapter, "people", fixture_dir / "people")) == 0

    def test_deprecated_extension(self, adapter, write_fixture, fixture_dir):
        write_fixture("people.yaml", "alice:\n  id: 1\n")
        with pytest.raises(FormatError, match="rename"):
            FixtureSet(adapter, "people", fixture_dir / "people")

    def test_unsafe_table_name(self, adapter, fixture_dir):
        with pytest.raises(ValueError):
            FixtureSet(adapter, "people; --", fixture_dir / "people")


class TestFixtureSetStore:
    """Tests for deleting and inserting a set."""

    def test_insert_fixtures(self, adapter, fixtures_root, rows):
        people = FixtureSet(adapter, "people", fixtures_root / "people")
        people.insert_fixtures()
        assert rows("people") == [
            {"id": 1, "name": "Alice", "email": "alice@example.com"},
            {"id": 2, "name": "Bob", "email": "bob@example.com"},
        ]

    def test_delete_existing_always_empties(self, adapter, write_fixture, fixture_dir, rows):
        adapter.execute("INSERT INTO people (id, name) VALUES (9, 'Old')")
        write_fixture("people.yml", "")
        FixtureSet(adapter, "people", fixture_dir / "people").delete_existing_fixtures()
        assert rows("people") == []

    def test_legacy_multiline_value_round_trip(self, adapter, fixtures_root, rows):
        FixtureSet(adapter, "web_sites", fixtures_root / "web_sites").insert_fixtures()
        google = next(r for r in rows("web_sites") if r["name"] == "Google")
        assert google["description"] == "Search\nand then some"

    def test_csv_values_round_trip(self, adapter, fixtures_root, rows):
        FixtureSet(adapter, "people", fixtures_root / "people").insert_fixtures()
        FixtureSet(adapter, "accounts", fixtures_root / "accounts").insert_fixtures()
        assert [r["balance"] for r in rows("accounts")] == ["120.50", "0", "1,000"]

    def test_insert_error_propagates(self, adapter, write_fixture, fixture_dir):
        write_fixture("people.yml", "alice:\n  id: 1\n  nickname: Al\n")
        people = FixtureSet(adapter, "people", fixture_dir / "people")
        with pytest.raises(sqlite3.OperationalError):
            people.insert_fixtures()
