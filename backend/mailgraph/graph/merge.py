"""Idempotent merge of extracted facts into the graph store.

Every write is a single ``INSERT ... ON CONFLICT DO UPDATE`` keyed on the node
or edge identity. On conflict, optional attributes are coalesced so a value
already stored is never replaced by a later null. Each fact runs in its own
SAVEPOINT; a failing fact is logged and recorded on the report while the rest
of the email is still merged. Lost connectivity is the only error that escapes.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from time import perf_counter
from typing import Any, TypeVar

from sqlalchemy import Table, func, select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import DisconnectionError, OperationalError, SQLAlchemyError
from sqlalchemy.orm import Session

from mailgraph.extraction.types import EventFact, ExtractionResult, PersonFact, PlaceFact, RelationshipFact
from mailgraph.graph.errors import GraphStoreError, GraphStoreUnavailableError, MalformedFactError
from mailgraph.graph.identity import NodeLabel, event_identity, node_label_for, normalize_relationship_type
from mailgraph.models.email import Email
from mailgraph.models.email_mention import EmailMention
from mailgraph.models.event import Event
from mailgraph.models.graph_edge import GraphEdge
from mailgraph.models.person import Person
from mailgraph.models.place import Place
from mailgraph.schemas.merge import FactCategory, MergeFailure, MergeReport

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Generic ``Entity`` endpoints have no backing table and never resolve.
_NODE_MODELS: dict[str, type[Person] | type[Place] | type[Event]] = {
    "Person": Person,
    "Place": Place,
    "Event": Event,
}
_EDGE_KEY_COLUMNS = ("source_label", "source_node_id", "target_label", "target_node_id", "edge_type")


class GraphMergeEngine:
    """Applies one email's extraction result to the graph store."""

    def __init__(self, db: Session) -> None:
        self._db = db
        dialect_name = db.get_bind().dialect.name
        if dialect_name == "postgresql":
            self._insert = postgresql.insert
        elif dialect_name == "sqlite":
            self._insert = sqlite.insert
        else:
            raise GraphStoreError(f"Graph store dialect does not support conditional upserts: {dialect_name}")

    def merge(self, email_id: str | None, result: ExtractionResult) -> MergeReport:
        """Merge people, places and events, then relationships between them."""

        started = perf_counter()
        report = MergeReport(email_id=email_id)
        mention_email_id = email_id if email_id and self._db.get(Email, email_id) is not None else None

        for index, person in enumerate(result.people):
            node_id = self._run_isolated(
                report,
                "people",
                index,
                person.name,
                lambda person=person: self._with_mention(mention_email_id, "Person", self.upsert_person(person)),
            )
            if node_id is not None:
                report.people_upserted += 1

        for index, place in enumerate(result.places):
            node_id = self._run_isolated(
                report,
                "places",
                index,
                place.name,
                lambda place=place: self._with_mention(mention_email_id, "Place", self.upsert_place(place)),
            )
            if node_id is not None:
                report.places_upserted += 1

        for index, event in enumerate(result.events):
            node_id = self._run_isolated(
                report,
                "events",
                index,
                event.name,
                lambda event=event: self._with_mention(mention_email_id, "Event", self.upsert_event(event)),
            )
            if node_id is not None:
                report.events_upserted += 1

        for index, relationship in enumerate(result.relationships):
            edge_count = self._run_isolated(
                report,
                "relationships",
                index,
                f"{relationship.source} -[{relationship.relationship}]-> {relationship.target}",
                lambda relationship=relationship: self.merge_relationship(relationship),
            )
            if edge_count is None:
                continue
            if edge_count:
                report.relationships_merged += 1
            else:
                report.relationships_skipped += 1

        logger.info(
            (
                "mailgraph.merge_timing email_id=%s people=%d places=%d events=%d "
                "relationships_merged=%d relationships_skipped=%d failures=%d total_ms=%.2f"
            ),
            email_id,
            report.people_upserted,
            report.places_upserted,
            report.events_upserted,
            report.relationships_merged,
            report.relationships_skipped,
            len(report.failures),
            (perf_counter() - started) * 1000.0,
        )
        return report

    def upsert_person(self, person: PersonFact) -> int:
        """Match-or-create a person by name, coalescing role and organization."""

        name = _require(person.name, "person name")
        return self._coalesce_upsert(
            Person.__table__,
            key_columns=("name",),
            values={
                "name": name,
                "role": _optional(person.role, "person role"),
                "organization": _optional(person.organization, "person organization"),
            },
            coalesce_columns=("role", "organization"),
        )

    def upsert_place(self, place: PlaceFact) -> int:
        """Match-or-create a place by name, coalescing its type."""

        name = _require(place.name, "place name")
        return self._coalesce_upsert(
            Place.__table__,
            key_columns=("name",),
            values={"name": name, "type": _optional(place.type, "place type")},
            coalesce_columns=("type",),
        )

    def upsert_event(self, event: EventFact) -> int:
        """Match-or-create an event by its derived identity key."""

        name = _require(event.name, "event name")
        date = _optional(event.date, "event date")
        location = _optional(event.location, "event location")
        return self._coalesce_upsert(
            Event.__table__,
            key_columns=("event_key",),
            values={
                "event_key": event_identity(name, date, location),
                "name": name,
                "date": date,
                "location": location,
            },
            coalesce_columns=("date", "location"),
        )

    def merge_relationship(self, relationship: RelationshipFact) -> int:
        """Merge edges between existing endpoints; return how many edges were merged.

        Zero means an endpoint did not resolve and nothing was written.
        """

        source_name = _require(relationship.source, "relationship source")
        target_name = _require(relationship.target, "relationship target")
        source_label = node_label_for(_optional(relationship.source_type, "relationship source type"))
        target_label = node_label_for(_optional(relationship.target_type, "relationship target type"))
        edge_type = normalize_relationship_type(_optional(relationship.relationship, "relationship label"))

        source_ids = self.resolve_node_ids(source_label, source_name)
        target_ids = self.resolve_node_ids(target_label, target_name)
        if not source_ids or not target_ids:
            logger.info(
                "mailgraph.relationship_skipped source=%s:%s target=%s:%s edge_type=%s reason=%s",
                source_label,
                source_name,
                target_label,
                target_name,
                edge_type,
                "unresolved_source" if not source_ids else "unresolved_target",
            )
            return 0

        context = _optional(relationship.context, "relationship context")
        merged = 0
        for source_id in source_ids:
            for target_id in target_ids:
                self._coalesce_upsert(
                    GraphEdge.__table__,
                    key_columns=_EDGE_KEY_COLUMNS,
                    values={
                        "source_label": source_label,
                        "source_node_id": source_id,
                        "edge_type": edge_type,
                        "target_label": target_label,
                        "target_node_id": target_id,
                        "context": context,
                    },
                    coalesce_columns=("context",),
                )
                merged += 1
        return merged

    def resolve_node_ids(self, label: NodeLabel, name: str) -> list[int]:
        """Return ids of nodes with this label and name.

        Events match on name alone, so one name can resolve to several events.
        """

        model = _NODE_MODELS.get(label)
        if model is None:
            return []
        return list(self._db.scalars(select(model.id).where(model.name == name).order_by(model.id.asc())))

    def _coalesce_upsert(
        self,
        table: Table,
        *,
        key_columns: tuple[str, ...],
        values: dict[str, Any],
        coalesce_columns: tuple[str, ...],
    ) -> int:
        stmt = self._insert(table).values(**values)
        stmt = stmt.on_conflict_do_update(
            index_elements=[table.c[column] for column in key_columns],
            set_={column: func.coalesce(table.c[column], stmt.excluded[column]) for column in coalesce_columns},
        ).returning(table.c.id)
        return self._db.execute(stmt).scalar_one()

    def _with_mention(self, email_id: str | None, label: NodeLabel, node_id: int) -> int:
        if email_id is not None:
            table = EmailMention.__table__
            stmt = self._insert(table).values(email_id=email_id, node_label=label, node_id=node_id)
            self._db.execute(
                stmt.on_conflict_do_nothing(
                    index_elements=[table.c.email_id, table.c.node_label, table.c.node_id],
                )
            )
        return node_id

    def _run_isolated(
        self,
        report: MergeReport,
        category: FactCategory,
        index: int,
        identity: object,
        operation: Callable[[], T],
    ) -> T | None:
        try:
            with self._db.begin_nested():
                return operation()
        except (OperationalError, DisconnectionError) as exc:
            raise GraphStoreUnavailableError(f"Graph store unavailable while merging {category}: {exc}") from exc
        except (MalformedFactError, SQLAlchemyError) as exc:
            logger.warning(
                "mailgraph.fact_merge_failed email_id=%s category=%s index=%d identity=%r error=%s",
                report.email_id,
                category,
                index,
                identity,
                exc,
            )
            report.failures.append(
                MergeFailure(
                    category=category,
                    index=index,
                    identity="" if identity is None else str(identity),
                    detail=str(exc),
                )
            )
            return None


def _require(value: object, field_name: str) -> str:
    cleaned = _optional(value, field_name)
    if cleaned is None:
        raise MalformedFactError(f"Missing {field_name}")
    return cleaned


def _optional(value: object, field_name: str) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise MalformedFactError(f"Expected text for {field_name}, got {type(value).__name__}")
    return value.strip() or None
