#!/usr/bin/env python3
"""
dbfixtures command line.

Usage:
    python -m dbfixtures load people accounts         # load into DBFIXTURES_DB
    python -m dbfixtures load --db dev.db --json people
    python -m dbfixtures show people                  # parse only, no database
"""

import argparse
import logging
import os
import sys

from pydantic import BaseModel, Field

from dbfixtures import config, paths
from dbfixtures.db_opt.db_adapter import get_adapter
from dbfixtures.errors import FixtureError
from dbfixtures.fixture_set import FixtureSet
from dbfixtures.loader import create_fixtures
from dbfixtures.observability import configure_logging

logger = logging.getLogger(__name__)


class TableSummary(BaseModel):
    """One loaded (or parsed) table."""

    table: str
    source: str
    fixtures: list[str] = Field(default_factory=list)
    columns: list[str] = Field(default_factory=list)


class LoadSummary(BaseModel):
    """Result of a command line load."""

    ok: bool
    database: str | None = None
    fixtures_path: str
    tables: list[TableSummary] = Field(default_factory=list)
    error: str | None = None


def summarize(fixture_set: FixtureSet) -> TableSummary:
    columns: list[str] = []
    for fixture in fixture_set.values():
        for column in fixture:
            if column not in columns:
                columns.append(column)
    return TableSummary(
        table=fixture_set.table_name,
        source=fixture_set.source.value,
        fixtures=list(fixture_set),
        columns=columns,
    )


def print_summary(summary: LoadSummary) -> None:
    """Print a plain table of what was loaded."""
    if summary.database:
        print(f"database: {summary.database}")
    print(f"fixtures: {summary.fixtures_path}")
    for table in summary.tables:
        print(f"  {table.table:<24} {table.source:<4} {len(table.fixtures):>5} fixtures")
        print(f"    columns: {', '.join(table.columns) or '-'}")
    if summary.error:
        print(f"error: {summary.error}", file=sys.stderr)


def cmd_load(args) -> LoadSummary:
    database = args.db or paths.database_url()
    summary = LoadSummary(ok=False, database=database, fixtures_path=args.fixtures)
    adapter = get_adapter(database)
    try:
        loaded = create_fixtures(args.fixtures, args.tables, connection=adapter)
        sets = loaded if isinstance(loaded, list) else [loaded]
        summary.tables = [summarize(s) for s in sets]
        summary.ok = True
    except (FixtureError, ValueError, *adapter.errors) as e:
        logger.error("Fixture load failed: %s", e)
        summary.error = str(e)
    finally:
        adapter.close()
    return summary


def cmd_show(args) -> LoadSummary:
    summary = LoadSummary(ok=False, fixtures_path=args.fixtures)
    try:
        for name in args.tables:
            fixture_set = FixtureSet(None, os.path.basename(name), os.path.join(args.fixtures, name))
            summary.tables.append(summarize(fixture_set))
        summary.ok = True
    except (FixtureError, ValueError) as e:
        summary.error = str(e)
    return summary


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="dbfixtures", description="Load test fixtures")
    parser.add_argument("--log-level", default=config.LOG_LEVEL)
    sub = parser.add_subparsers(dest="command", required=True)

    for name, help_text in (
        ("load", "delete and insert fixtures for the given tables"),
        ("show", "parse fixtures and list them without touching a database"),
    ):
        p = sub.add_parser(name, help=help_text)
        p.add_argument("tables", nargs="+")
        p.add_argument("--fixtures", default=str(paths.fixtures_dir()))
        p.add_argument("--json", action="store_true", help="print the summary as JSON")
        if name == "load":
            p.add_argument("--db", default=None, help="SQLite path or postgresql:// URL")

    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level)

    summary = cmd_load(args) if args.command == "load" else cmd_show(args)

    if args.json:
        print(summary.model_dump_json(indent=2))
    else:
        print_summary(summary)
    return 0 if summary.ok else 1


if __name__ == "__main__":
    sys.exit(main())
