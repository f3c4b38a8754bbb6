from contextlib import asynccontextmanager
from pathlib import Path

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.orm import DeclarativeBase
from resume_builder.config import get_settings

settings = get_settings()

# Convert sqlite:/// to sqlite+aiosqlite:///
database_url = settings.database_url.replace("sqlite:///", "sqlite+aiosqlite:///")

_IN_TRANSACTION = "resume_builder.in_transaction"


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    # SQLite ships with FK enforcement off; cascades depend on it
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def _defer_transactions_to_sqlalchemy(dbapi_connection, connection_record):
    # Stop the driver from issuing its own BEGIN so SAVEPOINTs nest correctly
    dbapi_connection.isolation_level = None


def _emit_begin(conn):
    conn.exec_driver_sql("BEGIN")


def create_engine_for(url: str, enforce_foreign_keys: bool = True) -> AsyncEngine:
    """
    Build an async engine for the given URL.

    SQLite connections get foreign key enforcement switched on, which the
    cascade and set-null rules on the join tables rely on. SQLAlchemy emits
    BEGIN itself so that `session.begin_nested()` gets a real SAVEPOINT.
    """
    engine = create_async_engine(url, echo=settings.database_echo)
    if engine.dialect.name == "sqlite":
        if enforce_foreign_keys:
            event.listen(engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
        event.listen(engine.sync_engine, "connect", _defer_transactions_to_sqlalchemy)
        event.listen(engine.sync_engine, "begin", _emit_begin)
    return engine


engine = create_engine_for(database_url)
async_session = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


class Base(DeclarativeBase):
    pass


async def get_db():
    async with async_session() as session:
        yield session


@asynccontextmanager
async def transaction(session: AsyncSession):
    """
    Run a block as one atomic unit of work.

    Commits when the block completes and rolls back on any exception. Nested
    use on the same session joins the outer unit: the inner block only
    flushes, and the outermost block decides commit or rollback.
    """
    if session.info.get(_IN_TRANSACTION):
        yield session
        await session.flush()
        return

    session.info[_IN_TRANSACTION] = True
    try:
        yield session
        await session.commit()
    except Exception:
        await session.rollback()
        raise
    finally:
        session.info.pop(_IN_TRANSACTION, None)


async def init_db(bind: AsyncEngine = engine):
    # Register every table on Base.metadata before create_all
    import resume_builder.models  # noqa: F401

    if bind.url.get_backend_name() == "sqlite" and bind.url.database:
        Path(bind.url.database).parent.mkdir(parents=True, exist_ok=True)

    async with bind.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
