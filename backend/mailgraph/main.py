"""FastAPI application entrypoint."""

from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text

from mailgraph.config import get_settings
from mailgraph.db.session import open_graph_store
from mailgraph.routers import emails, graph

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    with open_graph_store(initialize=False) as session_factory:
        app.state.session_factory = session_factory
        try:
            with session_factory() as db:
                db.execute(text("SELECT 1"))
        except Exception:
            logger.exception("Graph store warm-up failed; continuing without startup pre-warm.")
        yield


app = FastAPI(title=get_settings().app_name, version="0.1.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:3000", "http://127.0.0.1:3000"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(emails.router, tags=["emails"])
app.include_router(graph.router, tags=["graph"])


@app.get("/health")
def health() -> dict[str, str]:
    """Simple health check endpoint."""

    return {"status": "ok"}
