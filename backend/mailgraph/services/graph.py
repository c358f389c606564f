"""Query services for browsing the merged graph."""

from collections import defaultdict

from sqlalchemy import select
from sqlalchemy.orm import Session

from mailgraph.models.email_mention import EmailMention
from mailgraph.models.event import Event
from mailgraph.models.graph_edge import GraphEdge
from mailgraph.models.person import Person
from mailgraph.models.place import Place
from mailgraph.schemas.graph import GraphEdgeRead, GraphEdgeWithNamesRead

_NAMED_MODELS = {"Person": Person, "Place": Place, "Event": Event}


def list_people(db: Session, *, organization: str | None = None) -> list[Person]:
    """List person nodes, optionally filtered by organization."""

    stmt = select(Person).order_by(Person.name.asc())
    if organization is not None:
        stmt = stmt.where(Person.organization == organization)
    return list(db.scalars(stmt).all())


def list_places(db: Session, *, place_type: str | None = None) -> list[Place]:
    """List place nodes, optionally filtered by type."""

    stmt = select(Place).order_by(Place.name.asc())
    if place_type is not None:
        stmt = stmt.where(Place.type == place_type)
    return list(db.scalars(stmt).all())


def list_events(db: Session, *, name: str | None = None) -> list[Event]:
    """List event nodes, optionally filtered by exact name."""

    stmt = select(Event).order_by(Event.name.asc(), Event.id.asc())
    if name is not None:
        stmt = stmt.where(Event.name == name)
    return list(db.scalars(stmt).all())


def list_edges(db: Session, *, edge_type: str | None = None) -> list[GraphEdgeWithNamesRead]:
    """List edges with source and target names resolved."""

    stmt = select(GraphEdge).order_by(GraphEdge.id.asc())
    if edge_type is not None:
        stmt = stmt.where(GraphEdge.edge_type == edge_type)
    edges = list(db.scalars(stmt).all())

    ids_by_label: dict[str, set[int]] = defaultdict(set)
    for edge in edges:
        ids_by_label[edge.source_label].add(edge.source_node_id)
        ids_by_label[edge.target_label].add(edge.target_node_id)
    names = _node_names(db, ids_by_label)

    return [
        GraphEdgeWithNamesRead(
            **GraphEdgeRead.model_validate(edge).model_dump(),
            source_name=names.get((edge.source_label, edge.source_node_id), ""),
            target_name=names.get((edge.target_label, edge.target_node_id), ""),
        )
        for edge in edges
    ]


def list_email_mentions(db: Session, email_id: str) -> list[EmailMention]:
    """List nodes an email mentioned."""

    stmt = (
        select(EmailMention)
        .where(EmailMention.email_id == email_id)
        .order_by(EmailMention.node_label.asc(), EmailMention.node_id.asc())
    )
    return list(db.scalars(stmt).all())


def _node_names(db: Session, ids_by_label: dict[str, set[int]]) -> dict[tuple[str, int], str]:
    names: dict[tuple[str, int], str] = {}
    for label, node_ids in ids_by_label.items():
        model = _NAMED_MODELS.get(label)
        if model is None or not node_ids:
            continue
        rows = db.execute(select(model.id, model.name).where(model.id.in_(sorted(node_ids)))).all()
        for node_id, name in rows:
            names[(label, node_id)] = name
    return names
