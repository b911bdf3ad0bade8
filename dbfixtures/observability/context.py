"""
The fixture load currently running in this context.

create_fixtures() opens a load_context() around its work; the log
formatters read current_load() so every line emitted during the load,
including adapter and parser logs, carries the load id, the tables and
the fixture root.
"""

from __future__ import annotations

import contextvars
import os
import uuid
from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

_current_load: contextvars.ContextVar[FixtureLoad | None] = contextvars.ContextVar(
    "dbfixtures_load", default=None
)


def _new_load_id() -> str:
    return f"load-{uuid.uuid4().hex[:12]}"


@dataclass(frozen=True)
class FixtureLoad:
    """One call to create_fixtures()."""

    tables: tuple[str, ...]
    fixtures_directory: str
    load_id: str = field(default_factory=_new_load_id)

    def log_fields(self) -> dict[str, Any]:
        return {
            "load_id": self.load_id,
            "tables": list(self.tables),
            "fixtures_directory": self.fixtures_directory,
        }


def current_load() -> FixtureLoad | None:
    return _current_load.get()


@contextmanager
def load_context(
    tables: Iterable[str],
    fixtures_directory: str | Path,
    load_id: str | None = None,
) -> Iterator[FixtureLoad]:
    """Make a FixtureLoad current for the block; nested loads shadow outer ones."""
    kwargs = {"load_id": load_id} if load_id else {}
    load = FixtureLoad(tuple(tables), os.fspath(fixtures_directory), **kwargs)
    token = _current_load.set(load)
    try:
        yield load
    finally:
        _current_load.reset(token)
