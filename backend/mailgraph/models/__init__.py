"""ORM models package exports."""

from mailgraph.models.email import Email
from mailgraph.models.email_mention import EmailMention
from mailgraph.models.event import Event
from mailgraph.models.extractor_run import ExtractorRun
from mailgraph.models.graph_edge import GraphEdge
from mailgraph.models.person import Person
from mailgraph.models.place import Place

__all__ = [
    "Email",
    "EmailMention",
    "Event",
    "ExtractorRun",
    "GraphEdge",
    "Person",
    "Place",
]
