"""Copy one user's rows between the primary store and the external store.

A "both" sync is two sequential one-way copies, export then import. Nothing is
merged field by field: whichever copy touches a row last decides its values.
"""

import logging
import time
from dataclasses import asdict, dataclass, replace
from typing import Any, Literal

from sqlalchemy import Table, select
from sqlalchemy.exc import DBAPIError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine

from shelfsync.models import SYNCED_TABLES
from shelfsync.services.conflict import OVERWRITE, ConflictPolicy
from shelfsync.services.external_store import ExternalStore, ExternalStoreError, describe_error

logger = logging.getLogger(__name__)

Direction = Literal["export", "import", "both"]

PHASES: dict[str, tuple[str, ...]] = {
    "export": ("export",),
    "import": ("import",),
    "both": ("export", "import"),
}


@dataclass(frozen=True)
class TableCounts:
    exported: int = 0
    imported: int = 0
    errors: int = 0


@dataclass(frozen=True)
class CopyOutcome:
    copied: int = 0
    errors: int = 0


@dataclass
class SyncResult:
    success: bool
    results: dict[str, TableCounts]
    message: str | None = None
    duration_ms: int | None = None
    error: str | None = None

    @property
    def total_errors(self) -> int:
        return sum(c.errors for c in self.results.values())

    def as_dict(self) -> dict[str, Any]:
        data = asdict(self)
        return {k: v for k, v in data.items() if v is not None}


@dataclass
class ConnectionCheck:
    connected: bool
    message: str | None = None
    error: str | None = None


def empty_results() -> dict[str, TableCounts]:
    return {table.name: TableCounts() for table in SYNCED_TABLES}


def record_outcome(
    results: dict[str, TableCounts], table_name: str, phase: str, outcome: CopyOutcome
) -> dict[str, TableCounts]:
    """Return a new results mapping with one table copy folded in."""
    counts = results[table_name]
    if phase == "export":
        counts = replace(counts, exported=counts.exported + outcome.copied)
    else:
        counts = replace(counts, imported=counts.imported + outcome.copied)
    counts = replace(counts, errors=counts.errors + outcome.errors)
    return {**results, table_name: counts}


async def fetch_user_rows(engine: AsyncEngine, table: Table, user_id: str) -> list[dict[str, Any]]:
    async with engine.connect() as conn:
        result = await conn.execute(select(table).where(table.c.user_id == user_id))
        return [dict(row) for row in result.mappings()]


async def apply_row(
    engine: AsyncEngine, table: Table, row: dict[str, Any], policy: ConflictPolicy
) -> None:
    """Upsert a single row in its own transaction."""
    async with engine.begin() as conn:
        await conn.execute(policy.upsert(table, row, engine.dialect.name))


async def copy_table(
    source: AsyncEngine,
    dest: AsyncEngine,
    table: Table,
    user_id: str,
    policy: ConflictPolicy = OVERWRITE,
) -> CopyOutcome:
    """Upsert every row the user owns in ``table`` from source into dest.

    A failing row is logged and counted as an error; the rest still copy. A
    row failure that invalidated the connection ends the copy instead.
    """
    rows = await fetch_user_rows(source, table, user_id)
    logger.info("Copying %d %s rows", len(rows), table.name)

    outcome = CopyOutcome()
    for row in rows:
        try:
            await apply_row(dest, table, row, policy)
        except SQLAlchemyError as e:
            if isinstance(e, DBAPIError) and e.connection_invalidated:
                raise
            logger.error("Error copying %s row %s: %s", table.name, row.get("id"), describe_error(e))
            outcome = replace(outcome, errors=outcome.errors + 1)
        else:
            outcome = replace(outcome, copied=outcome.copied + 1)
    return outcome


async def run_sync(
    primary: AsyncEngine,
    store: ExternalStore,
    user_id: str,
    direction: Direction,
    policy: ConflictPolicy = OVERWRITE,
) -> SyncResult:
    """Run the export and/or import phases for one user.

    The external store is always closed before returning. Any error that
    escapes a table copy stops the remaining work; the result then carries
    the counts gathered up to that point.
    """
    phases = PHASES.get(direction)
    if phases is None:
        await store.close()
        raise ValueError(f"Unknown sync direction '{direction}'")

    started = time.monotonic()
    results = empty_results()
    try:
        await store.ensure_tables()
        for phase in phases:
            if phase == "export":
                source, dest = primary, store.engine
            else:
                source, dest = store.engine, primary
            logger.info("Starting %s for %s using %s policy", phase, store.label, policy.name)
            for table in SYNCED_TABLES:
                outcome = await copy_table(source, dest, table, user_id, policy)
                results = record_outcome(results, table.name, phase, outcome)
            logger.info("%s completed", phase.capitalize())
    except (SQLAlchemyError, ExternalStoreError, OSError, TimeoutError) as e:
        error = describe_error(e)
        logger.error("Sync error: %s", error)
        return SyncResult(success=False, results=results, error=error)
    finally:
        await store.close()

    duration_ms = int((time.monotonic() - started) * 1000)
    result = SyncResult(success=True, results=results, duration_ms=duration_ms)
    if result.total_errors:
        result.message = "Sync completed with some errors"
    else:
        result.message = "Sync completed successfully"
    logger.info("Sync completed in %dms: %s", duration_ms, results)
    return result


async def check_connection(store: ExternalStore) -> ConnectionCheck:
    """Verify the external store answers without copying anything."""
    try:
        await store.ping()
    except ExternalStoreError as e:
        logger.error("Connection test failed: %s", e)
        return ConnectionCheck(connected=False, error=f"Connection failed: {e}")
    finally:
        await store.close()
    logger.info("Connection test successful")
    return ConnectionCheck(connected=True, message="Connection successful")
