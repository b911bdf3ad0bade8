"""
Entity registry: the lookup side of the ORM.

After a load, each fixture is resolved to its live record through the
entity type registered under the fixture's class name (people -> Person).
Nothing is discovered implicitly; callers register the types they want
bound.

Usage:
    registry = EntityRegistry()
    registry.register_table(adapter, "people")          # Person, pk "id"
    registry.register(EntityType("Account", "uid", Account.get))
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any

from dbfixtures import inflector, safe_sql
from dbfixtures.db_opt.db_adapter import DatabaseAdapter

logger = logging.getLogger(__name__)


class Entity(ABC):
    """An in-process type for rows of one table."""

    name: str
    primary_key: str

    @abstractmethod
    def find(self, key: Any) -> Any | None:
        """Fetch the record with primary key *key*, or None."""


class EntityType(Entity):
    """Entity backed by a caller-supplied finder (an ORM ``get``)."""

    def __init__(self, name: str, primary_key: str, finder: Callable[[Any], Any | None]):
        self.name = name
        self.primary_key = primary_key
        self._finder = finder

    def find(self, key: Any) -> Any | None:
        return self._finder(key)

    def __repr__(self) -> str:
        return f"EntityType({self.name!r}, primary_key={self.primary_key!r})"


class TableEntity(Entity):
    """Entity that reads rows straight from a table as dicts."""

    def __init__(
        self,
        connection: DatabaseAdapter,
        table: str,
        primary_key: str = "id",
        name: str | None = None,
    ):
        self.connection = connection
        self.table = safe_sql.validate_identifier(table)
        self.primary_key = safe_sql.validate_identifier(primary_key)
        self.name = name or inflector.classify(table)

    def find(self, key: Any) -> dict | None:
        sql = safe_sql.select_by_key(self.table, self.primary_key, self.connection.placeholder)
        return self.connection.fetchone(sql, (key,))

    def __repr__(self) -> str:
        return f"TableEntity({self.name!r}, table={self.table!r}, primary_key={self.primary_key!r})"


class EntityRegistry:
    """Maps entity-type names to Entity objects."""

    def __init__(self, entities: list[Entity] | None = None):
        self._entities: dict[str, Entity] = {}
        for entity in entities or []:
            self.register(entity)

    def register(self, entity: Entity) -> Entity:
        if entity.name in self._entities:
            logger.warning("Replacing registered entity type %s", entity.name)
        self._entities[entity.name] = entity
        return entity

    def register_table(
        self, connection: DatabaseAdapter, table: str, primary_key: str = "id"
    ) -> TableEntity:
        """Register a TableEntity named after *table* (people -> Person)."""
        entity = TableEntity(connection, table, primary_key)
        self.register(entity)
        return entity

    def lookup(self, name: str) -> Entity | None:
        return self._entities.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._entities

    def __len__(self) -> int:
        return len(self._entities)
