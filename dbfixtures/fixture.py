"""
A single fixture: one named row of column -> value data.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping
from typing import TYPE_CHECKING, Any

from dbfixtures import safe_sql

if TYPE_CHECKING:
    from dbfixtures.registry import EntityRegistry


class Fixture(Mapping):
    """
    Read-only, ordered field map for one fixture row.

    Column order is the order of the source file and is what keeps
    key_list() and value_list() aligned.
    """

    def __init__(self, data: Mapping[str, Any], class_name: str):
        self._data: dict[str, Any] = dict(data)
        self.class_name = class_name

    def __getitem__(self, key: str) -> Any:
        return self._data[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"Fixture({self.class_name}, {self._data!r})"

    def to_dict(self) -> dict[str, Any]:
        return dict(self._data)

    def key_list(self) -> str:
        """Column list for an INSERT: ``id, name, url``."""
        return safe_sql.column_list(list(self._data))

    def value_list(self, quote: Callable[[Any], str]) -> str:
        """Quoted values for an INSERT, in key_list() order.

        Legacy files cannot hold raw newlines, so a literal ``\\n`` or ``\\r``
        in a value is turned back into the real character after quoting.
        """
        return ", ".join(
            quote(value).replace("\\n", "\n").replace("\\r", "\r") for value in self._data.values()
        )

    def find(self, registry: EntityRegistry | None) -> Any | None:
        """Live record for this fixture, looked up by primary key.

        None when the entity type is not registered, the fixture has no
        primary key value, or no such row exists.
        """
        if registry is None:
            return None
        entity = registry.lookup(self.class_name)
        if entity is None:
            return None
        pk_value = self.get(entity.primary_key)
        if pk_value is None:
            return None
        return entity.find(pk_value)
