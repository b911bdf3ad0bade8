"""
Load Coordinator - puts fixture sets into the database and hands them
back to the test.

create_fixtures() parses every requested table first, then in ONE
transaction deletes existing rows in reverse order (children before
parents) and inserts fixtures in the given order (parents before
children). A parse error in any table leaves every table untouched; a
store error rolls the whole load back.

instantiate_fixtures() additionally binds each set, and each fixture's
live record, into a caller namespace:

    ns = {}
    instantiate_fixtures(ns, "tests/fixtures", "people", connection=db, registry=reg)
    ns["people"]["alice"]["name"]   # fixture data
    ns["alice"]                     # row fetched through the registry
"""

from __future__ import annotations

import logging
import os
import re
from collections.abc import Callable, Iterable, MutableMapping
from pathlib import Path
from typing import Any, Union

from dbfixtures import config, inflector, safe_sql
from dbfixtures.config import DEFAULT_FILTER_RE
from dbfixtures.db_opt.db_adapter import DatabaseAdapter, get_default_adapter
from dbfixtures.fixture_set import FixtureSet
from dbfixtures.observability import load_context, suppress_logging
from dbfixtures.registry import EntityRegistry

logger = logging.getLogger(__name__)

ConnectionLike = Union[DatabaseAdapter, Callable[[], DatabaseAdapter], None]

_NON_IDENTIFIER_RE = re.compile(r"\W")


def _flatten(table_names: Iterable[Any]) -> list[str]:
    names: list[str] = []
    for name in table_names:
        if isinstance(name, (list, tuple)):
            names.extend(_flatten(name))
        else:
            names.append(os.fspath(name) if isinstance(name, Path) else str(name))
    return names


def _resolve_connection(connection: ConnectionLike) -> DatabaseAdapter:
    if connection is None:
        return get_default_adapter()
    if isinstance(connection, DatabaseAdapter):
        return connection
    return connection()


def create_fixtures(
    fixtures_directory: str | Path,
    *table_names: Any,
    connection: ConnectionLike = None,
    registry: EntityRegistry | None = None,
    file_filter: re.Pattern = DEFAULT_FILTER_RE,
) -> FixtureSet | list[FixtureSet]:
    """
    Load fixtures for *table_names* from *fixtures_directory*.

    Table names may be nested paths ("admin/users"); the last segment is
    the table, the whole name locates the source under the fixture root.

    Args:
        fixtures_directory: Fixture root
        table_names: One or more table names (lists are flattened)
        connection: Adapter, or a zero-argument callable returning one.
            Defaults to the adapter configured by DBFIXTURES_DB.
        registry: Entity registry consulted for the PostgreSQL sequence reset
        file_filter: Exclusion pattern for legacy fixture directories

    Returns:
        The FixtureSet when one table was requested, otherwise the list
        of sets in request order.
    """
    names = _flatten(table_names)
    if not names:
        raise ValueError("create_fixtures needs at least one table name")
    conn = _resolve_connection(connection)

    with load_context(names, fixtures_directory) as load:
        logger.info("Loading fixtures %s from %s (%s)", names, fixtures_directory, load.load_id)

        with suppress_logging(*config.SUPPRESSED_LOGGERS):
            fixture_sets = [
                FixtureSet(
                    conn,
                    os.path.basename(name),
                    os.path.join(os.fspath(fixtures_directory), name),
                    file_filter,
                )
                for name in names
            ]

            with conn.transaction():
                for fixture_set in reversed(fixture_sets):
                    fixture_set.delete_existing_fixtures()
                for fixture_set in fixture_sets:
                    fixture_set.insert_fixtures()
            logger.info("Committed fixture load %s", load.load_id)

            for fixture_set in fixture_sets:
                logger.info(
                    "Loaded %d fixtures into %s from %s",
                    len(fixture_set),
                    fixture_set.table_name,
                    fixture_set.source.name,
                )

            if conn.dialect == "postgresql":
                with conn.transaction():
                    reset_sequences(conn, names, registry)

    return fixture_sets if len(fixture_sets) > 1 else fixture_sets[0]


def reset_sequences(
    connection: DatabaseAdapter,
    table_names: Iterable[Any],
    registry: EntityRegistry | None,
) -> list[str]:
    """
    Advance ``<table>_id_seq`` past the fixture ids on PostgreSQL.

    Only tables whose registered entity uses the conventional ``id``
    primary key are touched; unregistered tables are skipped.
    Returns the tables whose sequence was reset.
    """
    reset: list[str] = []
    if registry is None:
        return reset

    for name in _flatten(table_names):
        table = os.path.basename(name)
        entity = registry.lookup(inflector.classify(table))
        if entity is None or entity.primary_key != "id":
            continue
        connection.execute(
            safe_sql.setval_max(table, config.SEQUENCE_SCHEMA), "Setting Sequence"
        )
        reset.append(table)

    if reset:
        logger.info("Reset sequences for %s", reset)
    return reset


def _bind(namespace: Any, name: str, value: Any) -> None:
    if isinstance(namespace, MutableMapping):
        namespace[name] = value
    else:
        setattr(namespace, _NON_IDENTIFIER_RE.sub("_", name), value)


def instantiate_fixtures(
    namespace: Any,
    fixtures_directory: str | Path,
    *table_names: Any,
    connection: ConnectionLike = None,
    registry: EntityRegistry | None = None,
    file_filter: re.Pattern = DEFAULT_FILTER_RE,
) -> list[FixtureSet]:
    """
    Load fixtures and bind them into *namespace*.

    Each set is bound under its table name. Each fixture whose live
    record can be found through *registry* is bound under the fixture
    name. Fixtures without a live record are left unbound.

    *namespace* is a dict (item assignment) or any object (attribute
    assignment; names are made identifier-safe).
    """
    names = _flatten(table_names)
    loaded = create_fixtures(
        fixtures_directory,
        names,
        connection=connection,
        registry=registry,
        file_filter=file_filter,
    )
    fixture_sets = loaded if isinstance(loaded, list) else [loaded]

    for name, fixture_set in zip(names, fixture_sets):
        _bind(namespace, os.path.basename(name), fixture_set)
        for fixture_name, fixture in fixture_set.items():
            record = fixture.find(registry)
            if record is not None:
                _bind(namespace, fixture_name, record)

    return fixture_sets
