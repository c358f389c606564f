"""FastAPI dependencies for database access."""

from collections.abc import Iterator

from fastapi import Request
from sqlalchemy.orm import Session, sessionmaker


def get_db(request: Request) -> Iterator[Session]:
    """Yield a session from the store handle opened in the app lifespan."""

    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()


def get_session_factory(request: Request) -> sessionmaker[Session]:
    """Return the store handle so long-running routes can open one session per unit of work."""

    return request.app.state.session_factory
