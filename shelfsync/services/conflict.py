"""Upsert strategies used when a synced row already exists at the destination."""

from collections.abc import Callable, Mapping
from typing import Any

from sqlalchemy import Table
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.sql.dml import Insert

_INSERTS: dict[str, Callable[[Table], Insert]] = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


def _dialect_insert(table: Table, dialect_name: str):
    try:
        return _INSERTS[dialect_name](table)
    except KeyError:
        raise ValueError(f"Upsert is not supported for dialect '{dialect_name}'") from None


def _key_columns(table: Table) -> list[str]:
    return [c.name for c in table.primary_key.columns]


class ConflictPolicy:
    """Turns a source row into an upsert statement against a destination table."""

    name: str = ""

    def upsert(self, table: Table, row: Mapping[str, Any], dialect_name: str):
        raise NotImplementedError


class OverwriteMutableFields(ConflictPolicy):
    """Last writer wins: on a key conflict every column sent in the row replaces
    the stored value, except the key itself and the creation timestamp."""

    name = "overwrite"

    def __init__(self, keep: tuple[str, ...] = ("created_at",)) -> None:
        self.keep = keep

    def upsert(self, table: Table, row: Mapping[str, Any], dialect_name: str):
        stmt = _dialect_insert(table, dialect_name).values(**row)
        keys = _key_columns(table)
        preserved = set(keys) | set(self.keep)
        updates = {
            name: stmt.excluded[name]
            for name in row
            if name not in preserved
        }
        if not updates:
            return stmt.on_conflict_do_nothing(index_elements=keys)
        return stmt.on_conflict_do_update(index_elements=keys, set_=updates)


class KeepExisting(ConflictPolicy):
    """Only insert rows the destination lacks; existing rows are left alone."""

    name = "keep_existing"

    def upsert(self, table: Table, row: Mapping[str, Any], dialect_name: str):
        stmt = _dialect_insert(table, dialect_name).values(**row)
        return stmt.on_conflict_do_nothing(index_elements=_key_columns(table))


OVERWRITE = OverwriteMutableFields()
KEEP_EXISTING = KeepExisting()

POLICIES: dict[str, ConflictPolicy] = {p.name: p for p in (OVERWRITE, KEEP_EXISTING)}


def get_policy(name: str) -> ConflictPolicy:
    try:
        return POLICIES[name]
    except KeyError:
        raise ValueError(f"Unknown conflict policy '{name}'") from None
