#  Copyright 2026 Canonical Ltd.  This software is licensed under the
#  GNU Affero General Public License version 3 (see the file LICENSE).

from dataclasses import dataclass

from sqlalchemy import event, make_url, text, URL
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool

from ipamservicelayer.db.tables import METADATA

POSTGRESQL_DRIVER = "postgresql+asyncpg"
SQLITE_DRIVER = "sqlite+aiosqlite"


@dataclass
class DatabaseConfig:
    name: str | None
    host: str | None = None
    username: str | None = None
    password: str | None = None
    port: int | None = None
    driver: str = POSTGRESQL_DRIVER

    @classmethod
    def from_url(cls, url: str) -> "DatabaseConfig":
        """Build the configuration from a database URL.

        `postgres://` and `postgresql://` URLs are served by asyncpg, plain
        `sqlite://` URLs by aiosqlite.
        """
        parsed = make_url(url)
        driver = parsed.drivername
        if driver in ("postgres", "postgresql"):
            driver = POSTGRESQL_DRIVER
        elif driver == "sqlite":
            driver = SQLITE_DRIVER
        return cls(
            name=parsed.database,
            host=parsed.host,
            username=parsed.username,
            password=parsed.password,
            port=parsed.port,
            driver=driver,
        )

    @property
    def is_sqlite(self) -> bool:
        return self.driver.startswith("sqlite")

    @property
    def dsn(self) -> URL:
        return URL.create(
            self.driver,
            host=self.host,
            port=self.port,
            database=self.name,
            username=self.username,
            password=self.password,
        )


class Database:
    def __init__(self, config: DatabaseConfig, echo: bool = False):
        self.config = config
        if config.is_sqlite:
            self.engine = create_async_engine(
                config.dsn,
                echo=echo,
                # In-memory databases only live as long as their connection.
                poolclass=(
                    StaticPool
                    if config.name in (None, "", ":memory:")
                    else None
                ),
            )
            self._setup_sqlite_transactions()
        else:
            self.engine = create_async_engine(
                config.dsn,
                echo=echo,
                isolation_level="REPEATABLE READ",
                # Limit the connection pool size to 3 for the time being.
                pool_size=3,
            )

    def _setup_sqlite_transactions(self) -> None:
        """Let SQLAlchemy emit BEGIN itself instead of the sqlite3 module.

        This is required for SAVEPOINTs to work. BEGIN IMMEDIATE takes the
        write lock upfront, so concurrent writers wait on each other instead
        of failing with a lock upgrade deadlock.
        """

        @event.listens_for(self.engine.sync_engine, "connect")
        def do_connect(dbapi_connection, connection_record):
            dbapi_connection.isolation_level = None

        @event.listens_for(self.engine.sync_engine, "begin")
        def do_begin(conn):
            conn.exec_driver_sql("BEGIN IMMEDIATE")

    async def ping(self) -> None:
        async with self.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))

    async def create_schema(self) -> None:
        """Create the tables that don't exist yet."""
        async with self.engine.begin() as conn:
            await conn.run_sync(METADATA.create_all)

    async def dispose(self) -> None:
        await self.engine.dispose()
