"""Graph store bootstrap."""

import logging

from sqlalchemy import text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from mailgraph.graph.errors import GraphStoreInitializationError
from mailgraph.models.base import Base

logger = logging.getLogger(__name__)


def initialize_graph_store(engine: Engine) -> None:
    """Probe connectivity and create node/edge tables, unique keys and indexes if missing."""

    try:
        with engine.connect() as connection:
            connection.execute(text("SELECT 1"))
        Base.metadata.create_all(engine, checkfirst=True)
    except SQLAlchemyError as exc:
        logger.exception("mailgraph.store_initialization_failed url=%s", engine.url.render_as_string())
        raise GraphStoreInitializationError(f"Failed to initialize graph store: {exc}") from exc
    logger.info("mailgraph.store_initialized url=%s", engine.url.render_as_string())
