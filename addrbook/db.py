"""Engine and session factory for the address book store.

Every store operation opens its own session from ``SessionLocal`` and
commits or rolls back before returning it. SQLite URLs are accepted for
local runs; their connections get foreign keys switched on so child rows
stay tied to a party of the same tenant.
"""

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import DeclarativeBase, sessionmaker

from addrbook.config import settings


class Base(DeclarativeBase):
    pass


def enforce_sqlite_foreign_keys(engine: Engine) -> Engine:
    @event.listens_for(engine, "connect")
    def _foreign_keys_on(dbapi_connection, _connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    return engine


def get_engine(database_url: str | None = None, **engine_kwargs) -> Engine:
    url = make_url(database_url or settings.database_url)
    if url.get_backend_name() == "sqlite":
        connect_args = engine_kwargs.pop("connect_args", {})
        connect_args.setdefault("check_same_thread", False)
        return enforce_sqlite_foreign_keys(
            create_engine(url, connect_args=connect_args, **engine_kwargs)
        )
    options = {
        "pool_pre_ping": True,
        "pool_size": settings.db_pool_size,
        "max_overflow": settings.db_max_overflow,
        "pool_timeout": settings.db_pool_timeout,
        "pool_recycle": settings.db_pool_recycle,
    }
    options.update(engine_kwargs)
    return create_engine(url, **options)


engine = get_engine()
SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)
