"""
Observability module: logging setup and the current fixture load.

Usage:
    from dbfixtures.observability import configure_logging, load_context

    configure_logging("DEBUG", json_format=True)

    with load_context(["people"], "tests/fixtures") as load:
        logger.info("Load started")     # JSON lines carry load.load_id and tables
"""

from .context import FixtureLoad, current_load, load_context
from .logging import (
    HumanFormatter,
    JSONFormatter,
    configure_logging,
    suppress_logging,
)

__all__ = [
    # Logging
    "configure_logging",
    "suppress_logging",
    "JSONFormatter",
    "HumanFormatter",
    # Context
    "FixtureLoad",
    "current_load",
    "load_context",
]
