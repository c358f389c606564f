"""Deterministic identity and label helpers for graph nodes and edges."""

from __future__ import annotations

import re
from typing import Literal

NodeLabel = Literal["Person", "Place", "Event", "Entity"]

EVENT_KEY_SEPARATOR = "-"
EVENT_KEY_PLACEHOLDER = "unknown"
DEFAULT_RELATIONSHIP_TYPE = "RELATED_TO"

_NODE_LABELS: dict[str, NodeLabel] = {
    "person": "Person",
    "place": "Place",
    "event": "Event",
}
_NON_WORD_RUN_RE = re.compile(r"[\W_]+")


def event_identity(name: str, date: str | None = None, location: str | None = None) -> str:
    """Return the event identity key built from name, date and location.

    Absent date or location become ``unknown``, so an event with no location
    and one whose location is literally "unknown" share an identity. Parts are
    joined without escaping, so a ``-`` inside a part can also collide:
    ``("A-B", None, None)`` and ``("A", "B-unknown", None)`` give the same key.
    """

    return EVENT_KEY_SEPARATOR.join(
        (
            name,
            date or EVENT_KEY_PLACEHOLDER,
            location or EVENT_KEY_PLACEHOLDER,
        )
    )


def node_label_for(kind: str | None) -> NodeLabel:
    """Map an extractor entity kind to a node label; unknown kinds map to ``Entity``."""

    return _NODE_LABELS.get((kind or "").strip().lower(), "Entity")


def normalize_relationship_type(label: str | None) -> str:
    """Uppercase a free-text label and join its words with underscores."""

    collapsed = _NON_WORD_RUN_RE.sub("_", (label or "").strip()).strip("_")
    return collapsed.upper() if collapsed else DEFAULT_RELATIONSHIP_TYPE
