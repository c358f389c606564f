"""Graph node and edge response schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class PersonRead(BaseModel):
    """Serialized person node."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    role: str | None
    organization: str | None
    created_at: datetime


class PlaceRead(BaseModel):
    """Serialized place node."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    type: str | None
    created_at: datetime


class EventRead(BaseModel):
    """Serialized event node."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    event_key: str
    name: str
    date: str | None
    location: str | None
    created_at: datetime


class GraphEdgeRead(BaseModel):
    """Serialized edge."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    source_label: str
    source_node_id: int
    edge_type: str
    target_label: str
    target_node_id: int
    context: str | None
    created_at: datetime


class GraphEdgeWithNamesRead(GraphEdgeRead):
    """Edge plus denormalized endpoint names."""

    source_name: str
    target_name: str


class EmailMentionRead(BaseModel):
    """Node mentioned by an email."""

    model_config = ConfigDict(from_attributes=True)

    email_id: str
    node_label: str
    node_id: int
