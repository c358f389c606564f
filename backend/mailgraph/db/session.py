"""Engine and session factory construction for the graph store."""

from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from mailgraph.config import get_settings
from mailgraph.services.store import initialize_graph_store


def create_db_engine(database_url: str) -> Engine:
    """Build an engine for the configured store."""

    if not database_url.startswith("sqlite"):
        return create_engine(database_url, future=True, pool_pre_ping=True)

    if ":memory:" in database_url:
        engine = create_engine(
            database_url,
            future=True,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    else:
        engine = create_engine(database_url, future=True, connect_args={"check_same_thread": False})

    # pysqlite defers BEGIN on its own; SAVEPOINTs need SQLAlchemy to own it.
    @event.listens_for(engine, "connect")
    def _disable_pysqlite_transactions(dbapi_connection, _connection_record) -> None:  # noqa: ANN001
        dbapi_connection.isolation_level = None

    @event.listens_for(engine, "begin")
    def _emit_begin(connection) -> None:  # noqa: ANN001
        connection.exec_driver_sql("BEGIN")

    return engine


def create_session_factory(engine: Engine) -> sessionmaker[Session]:
    """Return a session factory bound to the engine."""

    return sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)


@contextmanager
def open_graph_store(
    database_url: str | None = None,
    *,
    initialize: bool = True,
) -> Iterator[sessionmaker[Session]]:
    """Acquire the graph store for the duration of a block and dispose it afterwards."""

    engine = create_db_engine(database_url or get_settings().database_url)
    try:
        if initialize:
            initialize_graph_store(engine)
        yield create_session_factory(engine)
    finally:
        engine.dispose()
