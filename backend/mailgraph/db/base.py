"""SQLAlchemy metadata registry import for Alembic."""

from mailgraph.models import Email, EmailMention, Event, ExtractorRun, GraphEdge, Person, Place
from mailgraph.models.base import Base

__all__ = ["Base", "Email", "EmailMention", "Event", "ExtractorRun", "GraphEdge", "Person", "Place"]
