"""Typed, directed edge between two graph nodes."""

from sqlalchemy import Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from mailgraph.models.base import Base, CreatedAtMixin, IdMixin


class GraphEdge(Base, IdMixin, CreatedAtMixin):
    """Relationship edge; endpoints are (label, node id) pairs."""

    __tablename__ = "graph_edges"
    __table_args__ = (
        UniqueConstraint(
            "source_label",
            "source_node_id",
            "target_label",
            "target_node_id",
            "edge_type",
            name="uq_graph_edges_endpoints_type",
        ),
    )

    source_label: Mapped[str] = mapped_column(String(32), nullable=False)
    source_node_id: Mapped[int] = mapped_column(Integer, index=True, nullable=False)
    edge_type: Mapped[str] = mapped_column(String(255), index=True, nullable=False)
    target_label: Mapped[str] = mapped_column(String(32), nullable=False)
    target_node_id: Mapped[int] = mapped_column(Integer, index=True, nullable=False)
    context: Mapped[str | None] = mapped_column(Text, nullable=True)
