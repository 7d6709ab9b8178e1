"""Connection handling for the user-supplied external Postgres database."""

import logging

from sqlalchemy import text
from sqlalchemy.engine import URL, make_url
from sqlalchemy.exc import ArgumentError, DBAPIError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from shelfsync.config import EXTERNAL_CONNECT_TIMEOUT, EXTERNAL_POOL_SIZE, EXTERNAL_SSL
from shelfsync.database import Base
from shelfsync.models import SYNCED_TABLES

logger = logging.getLogger(__name__)

MISSING_URL_MESSAGE = "External database URL is not configured. Please add the EXTERNAL_DB_URL secret."
INVALID_URL_MESSAGE = "Invalid database URL format. URL must start with postgresql:// or postgres://"


class ExternalStoreError(Exception):
    """The external database could not be reached or provisioned."""


class ExternalStoreConfigError(ExternalStoreError):
    """EXTERNAL_DB_URL is missing or malformed; raised before any connection attempt."""


def describe_error(exc: BaseException) -> str:
    """Driver message without SQLAlchemy's background-link suffix."""
    if isinstance(exc, DBAPIError) and exc.orig is not None:
        return str(exc.orig)
    return str(exc) or exc.__class__.__name__


def validate_external_url(url: str | None) -> URL:
    if not url:
        raise ExternalStoreConfigError(MISSING_URL_MESSAGE)
    if not url.startswith(("postgres://", "postgresql://")):
        raise ExternalStoreConfigError(INVALID_URL_MESSAGE)
    try:
        parsed = make_url(url)
    except (ArgumentError, ValueError):
        raise ExternalStoreConfigError(INVALID_URL_MESSAGE) from None
    if not parsed.host:
        raise ExternalStoreConfigError(INVALID_URL_MESSAGE)
    return parsed


def mask_url(url: str | None) -> str:
    try:
        return make_url(url).render_as_string(hide_password=True)
    except (ArgumentError, TypeError, ValueError):
        return "[invalid-url]"


def build_engine(url: str) -> AsyncEngine:
    """Engine for the external store using the asyncpg driver.

    libpq's ``sslmode`` query parameter is translated to asyncpg's ``ssl``
    argument since asyncpg rejects unknown connect keywords.
    """
    parsed = validate_external_url(url)
    ssl = parsed.query.get("sslmode", EXTERNAL_SSL)
    parsed = parsed.set(drivername="postgresql+asyncpg").difference_update_query(["sslmode"])
    return create_async_engine(
        parsed,
        pool_size=EXTERNAL_POOL_SIZE,
        max_overflow=0,
        connect_args={"ssl": ssl, "timeout": EXTERNAL_CONNECT_TIMEOUT},
    )


class ExternalStore:
    """A live handle on the external database, opened once per sync invocation."""

    def __init__(self, engine: AsyncEngine, label: str = "external") -> None:
        self.engine = engine
        self.label = label
        self.closed = False

    @classmethod
    def from_url(cls, url: str | None) -> "ExternalStore":
        validate_external_url(url)
        label = mask_url(url)
        logger.info("Connecting to external DB: %s", label)
        return cls(build_engine(url), label=label)

    @property
    def dialect_name(self) -> str:
        return self.engine.dialect.name

    async def ping(self) -> None:
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
        except (SQLAlchemyError, OSError, TimeoutError) as e:
            raise ExternalStoreError(describe_error(e)) from e

    async def ensure_tables(self) -> None:
        """Create the mirror tables and their indexes if they do not exist yet."""
        try:
            async with self.engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all, tables=list(SYNCED_TABLES))
        except (SQLAlchemyError, OSError, TimeoutError) as e:
            raise ExternalStoreError(describe_error(e)) from e
        logger.info("External tables verified on %s", self.label)

    async def close(self) -> None:
        if self.closed:
            return
        await self.engine.dispose()
        self.closed = True
