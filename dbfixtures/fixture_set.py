"""
Fixture Set - all fixtures for one table.

Parses the table's fixture source on construction and knows how to empty
the table and insert its fixtures. Nothing is cached between loads.
"""

from __future__ import annotations

import logging
import os
import re
from collections.abc import Iterator, Mapping
from pathlib import Path

from dbfixtures import inflector, safe_sql
from dbfixtures.config import DEFAULT_FILTER_RE
from dbfixtures.db_opt.db_adapter import DatabaseAdapter
from dbfixtures.fixture import Fixture
from dbfixtures.parsers import FixtureSource, read_fixture_source

logger = logging.getLogger(__name__)


class FixtureSet(Mapping):
    """
    Ordered fixture name -> Fixture map for a single table.

    Attributes:
        table_name: Table the fixtures are inserted into.
        class_name: Entity-type name derived from the table (people -> Person).
        fixture_path: Source path without extension.
        source: Which format the fixtures were read from.
    """

    def __init__(
        self,
        connection: DatabaseAdapter,
        table_name: str,
        fixture_path: str | Path,
        file_filter: re.Pattern = DEFAULT_FILTER_RE,
    ):
        self.connection = connection
        self.table_name = safe_sql.validate_identifier(table_name)
        self.fixture_path = os.fspath(fixture_path)
        self.file_filter = file_filter
        self.class_name = inflector.classify(table_name)

        self._fixtures: dict[str, Fixture] = {}
        self.source: FixtureSource = self._read_fixture_files()

    def _read_fixture_files(self) -> FixtureSource:
        source, parsed = read_fixture_source(
            self.fixture_path,
            csv_prefix=inflector.underscore(self.class_name),
            file_filter=self.file_filter,
        )
        for name, data in parsed:
            self._fixtures[name] = Fixture(data, self.class_name)
        logger.debug(
            "Read %d %s fixtures for %s", len(self._fixtures), source.name, self.table_name
        )
        return source

    def __getitem__(self, name: str) -> Fixture:
        return self._fixtures[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._fixtures)

    def __len__(self) -> int:
        return len(self._fixtures)

    def __repr__(self) -> str:
        return f"FixtureSet({self.table_name!r}, {list(self._fixtures)!r})"

    def delete_existing_fixtures(self) -> None:
        """Empty the table, whether or not there is anything to insert."""
        self.connection.delete(safe_sql.delete_all(self.table_name), "Fixture Delete")

    def insert_fixtures(self) -> None:
        """One INSERT per fixture, in file order."""
        for fixture in self._fixtures.values():
            sql = safe_sql.insert_literals(
                self.table_name,
                fixture.key_list(),
                fixture.value_list(self.connection.quote),
            )
            self.connection.execute(sql, "Fixture Insert")
