"""Typed extraction outputs independent of persistence."""

from dataclasses import asdict, dataclass, field
from typing import Any


@dataclass(slots=True)
class PersonFact:
    """Person mentioned in an email; ``name`` is the identity key."""

    name: str
    role: str | None = None
    organization: str | None = None


@dataclass(slots=True)
class PlaceFact:
    """Place mentioned in an email; ``name`` is the identity key."""

    name: str
    type: str | None = None


@dataclass(slots=True)
class EventFact:
    """Event mentioned in an email; identity is derived from all three fields."""

    name: str
    date: str | None = None
    location: str | None = None


@dataclass(slots=True)
class RelationshipFact:
    """Directed, labelled assertion between two named entities."""

    source: str
    source_type: str
    relationship: str
    target: str
    target_type: str
    context: str | None = None


@dataclass(slots=True)
class ExtractionResult:
    """Container for one email's extractor output."""

    people: list[PersonFact] = field(default_factory=list)
    places: list[PlaceFact] = field(default_factory=list)
    events: list[EventFact] = field(default_factory=list)
    relationships: list[RelationshipFact] = field(default_factory=list)

    def to_payload(self) -> dict[str, Any]:
        """Serialize using the wire field names of the extraction schema."""

        return {
            "people": [asdict(person) for person in self.people],
            "places": [asdict(place) for place in self.places],
            "events": [asdict(event) for event in self.events],
            "relationships": [
                {
                    "source": rel.source,
                    "sourceType": rel.source_type,
                    "relationship": rel.relationship,
                    "target": rel.target,
                    "targetType": rel.target_type,
                    "context": rel.context,
                }
                for rel in self.relationships
            ],
        }
