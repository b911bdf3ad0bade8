# dbfixtures - test fixture loader
"""
Exports for test suites and the command line loader.
"""

from .errors import FixtureError, FormatError
from .fixture import Fixture
from .fixture_set import FixtureSet
from .loader import create_fixtures, instantiate_fixtures, reset_sequences
from .parsers import FixtureSource, detect_source
from .registry import EntityRegistry, EntityType, TableEntity
from .template import render_template

__version__ = "0.1.0"

__all__ = [
    "create_fixtures",
    "instantiate_fixtures",
    "reset_sequences",
    "Fixture",
    "FixtureSet",
    "FixtureSource",
    "detect_source",
    "render_template",
    "EntityRegistry",
    "EntityType",
    "TableEntity",
    "FixtureError",
    "FormatError",
]
