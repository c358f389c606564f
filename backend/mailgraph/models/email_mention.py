"""Email-to-node provenance links."""

from sqlalchemy import ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from mailgraph.models.base import Base, IdMixin


class EmailMention(Base, IdMixin):
    """Records that an email mentioned a graph node."""

    __tablename__ = "email_mentions"
    __table_args__ = (
        UniqueConstraint("email_id", "node_label", "node_id", name="uq_email_mentions_email_node"),
    )

    email_id: Mapped[str] = mapped_column(
        ForeignKey("emails.id", ondelete="CASCADE"),
        index=True,
        nullable=False,
    )
    node_label: Mapped[str] = mapped_column(String(32), nullable=False)
    node_id: Mapped[int] = mapped_column(Integer, index=True, nullable=False)
