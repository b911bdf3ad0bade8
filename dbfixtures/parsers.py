"""
Fixture source parsers.

Three formats, one per table, selected by which file exists:

    people.yml     YAML, one top-level key per fixture     (preferred)
    people.csv     CSV, header row + one row per fixture
    people.yaml    always rejected: rename to people.yml
    people/        legacy directory, one "key => value" file per fixture

Every parser returns an ordered list of (fixture name, field map) pairs in
file order. YAML and CSV sources pass through render_template() first.
"""

from __future__ import annotations

import csv
import io
import logging
import os
import re
from enum import Enum
from pathlib import Path
from typing import Any

import yaml

from dbfixtures.config import DEFAULT_FILTER_RE
from dbfixtures.errors import FormatError
from dbfixtures.template import render_template

logger = logging.getLogger(__name__)

ParsedFixtures = list[tuple[str, dict[str, Any]]]

# Same attribute-name rule the column names follow.
_LEGACY_LINE_RE = re.compile(r"^\s*([a-zA-Z][-_\w]*)\s*=>\s*(.+)\s*$", re.ASCII)
_BLANK_LINE_RE = re.compile(r"^\s*$")

YAML_HELP = (
    "Please note that YAML must be consistently indented using spaces "
    "(2, 4 or 8). Tabs are not allowed."
)


class FixtureSource(Enum):
    """Which kind of source backs a fixture path."""

    YAML = "yml"
    CSV = "csv"
    DEPRECATED_YAML = "yaml"
    LEGACY_DIR = "dir"


def yaml_file_path(fixture_path: str | Path) -> str:
    return f"{fixture_path}.yml"


def csv_file_path(fixture_path: str | Path) -> str:
    return f"{fixture_path}.csv"


def deprecated_yaml_file_path(fixture_path: str | Path) -> str:
    return f"{fixture_path}.yaml"


def detect_source(fixture_path: str | Path) -> FixtureSource:
    """Pick the source format for *fixture_path*; first existing file wins."""
    if os.path.isfile(yaml_file_path(fixture_path)):
        return FixtureSource.YAML
    if os.path.isfile(csv_file_path(fixture_path)):
        return FixtureSource.CSV
    if os.path.isfile(deprecated_yaml_file_path(fixture_path)):
        return FixtureSource.DEPRECATED_YAML
    return FixtureSource.LEGACY_DIR


def _read_text(path: str | Path) -> str:
    try:
        with open(path, encoding="utf-8") as f:
            return f.read()
    except UnicodeDecodeError as e:
        raise FormatError(f"{path}: fixture files must be UTF-8 encoded ({e})") from e


# ============================================================
# YAML
# ============================================================


def parse_yaml(text: str, path: str | Path = "<string>") -> ParsedFixtures:
    """Parse a rendered YAML fixture document.

    An empty document yields no fixtures. Each top-level value must itself
    be a mapping of column -> value.
    """
    try:
        document = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise FormatError(f"a YAML error occurred parsing {path}. {YAML_HELP}\n{e}") from e

    if document is None:
        return []
    if not isinstance(document, dict):
        raise FormatError(
            f"a YAML error occurred parsing {path}: expected a mapping of fixture names, "
            f"got {type(document).__name__}. {YAML_HELP}"
        )

    fixtures: ParsedFixtures = []
    for name, data in document.items():
        if not isinstance(data, dict):
            raise FormatError(
                f"a YAML error occurred parsing {path}: fixture '{name}' is not a mapping "
                f"of column: value. {YAML_HELP}"
            )
        fixtures.append((str(name), {str(k): v for k, v in data.items()}))
    return fixtures


# ============================================================
# CSV
# ============================================================


def parse_csv(text: str, path: str | Path = "<string>", prefix: str = "fixture") -> ParsedFixtures:
    """Parse a rendered CSV fixture file.

    Fixtures are named ``<prefix>_1``, ``<prefix>_2``... in row order.
    Headers and cells are stripped strings; blank rows are skipped.
    """
    reader = csv.reader(io.StringIO(text, newline=""), skipinitialspace=True)
    fixtures: ParsedFixtures = []
    try:
        header = next(reader, None)
        if header is None:
            return fixtures
        header = [h.strip() for h in header]
        index = 0
        for row in reader:
            if not row or all(not cell.strip() for cell in row):
                continue
            if len(row) > len(header):
                raise FormatError(
                    f"{path}: row {reader.line_num} has {len(row)} cells "
                    f"but the header has {len(header)} columns"
                )
            index += 1
            cells = [cell.strip() for cell in row]
            cells += [""] * (len(header) - len(cells))
            fixtures.append((f"{prefix}_{index}", dict(zip(header, cells))))
    except csv.Error as e:
        raise FormatError(f"a CSV error occurred parsing {path} at line {reader.line_num}: {e}") from e
    return fixtures


# ============================================================
# Legacy "key => value" files
# ============================================================


def parse_legacy_file(path: str | Path) -> dict[str, str]:
    """Parse one legacy fixture file into a field map."""
    fixture: dict[str, str] = {}
    try:
        with open(path, encoding="utf-8") as f:
            lines = f.readlines()
    except UnicodeDecodeError as e:
        raise FormatError(f"{path}: fixture files must be UTF-8 encoded ({e})") from e

    for line in lines:
        # Mercifully skip empty lines.
        if _BLANK_LINE_RE.match(line):
            continue

        match = _LEGACY_LINE_RE.match(line)
        if not match:
            raise FormatError(
                f"{path}: fixture format error at '{line.rstrip()}'.  Expecting 'key => value'."
            )
        key, value = match.groups()

        # Duplicate keys are almost always typos.
        if key in fixture:
            raise FormatError(f"{path}: duplicate '{key}' in fixture.")
        fixture[key] = value.strip()
    return fixture


def parse_legacy_dir(
    directory: str | Path, file_filter: re.Pattern = DEFAULT_FILTER_RE
) -> ParsedFixtures:
    """Every regular file in *directory* not matching *file_filter* is one fixture."""
    if not os.path.isdir(directory):
        raise FormatError(
            f"no fixtures found for {directory}: expected {directory}.yml, "
            f"{directory}.csv or a {directory}/ directory"
        )

    fixtures: ParsedFixtures = []
    for name in sorted(os.listdir(directory)):
        path = os.path.join(directory, name)
        if os.path.isfile(path) and not file_filter.search(name):
            fixtures.append((name, parse_legacy_file(path)))
    return fixtures


# ============================================================
# Dispatch
# ============================================================


def read_fixture_source(
    fixture_path: str | Path,
    csv_prefix: str,
    file_filter: re.Pattern = DEFAULT_FILTER_RE,
) -> tuple[FixtureSource, ParsedFixtures]:
    """Detect and parse the source behind *fixture_path*."""
    source = detect_source(fixture_path)
    logger.debug("Fixture source for %s: %s", fixture_path, source.name)

    if source is FixtureSource.YAML:
        path = yaml_file_path(fixture_path)
        return source, parse_yaml(render_template(_read_text(path), path), path)
    if source is FixtureSource.CSV:
        path = csv_file_path(fixture_path)
        return source, parse_csv(render_template(_read_text(path), path), path, csv_prefix)
    if source is FixtureSource.DEPRECATED_YAML:
        raise FormatError(
            f".yml extension required: rename {deprecated_yaml_file_path(fixture_path)} "
            f"to {yaml_file_path(fixture_path)}"
        )
    return source, parse_legacy_dir(fixture_path, file_filter)
