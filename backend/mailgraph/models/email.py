"""Parsed email ORM model."""

from sqlalchemy import JSON, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from mailgraph.models.base import Base, CreatedAtMixin


class Email(Base, CreatedAtMixin):
    """Stored copy of a parsed email chunk."""

    __tablename__ = "emails"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    subject: Mapped[str] = mapped_column(Text, default="", nullable=False)
    sender_name: Mapped[str] = mapped_column(String(512), default="", nullable=False)
    sender_email: Mapped[str] = mapped_column(String(512), default="", nullable=False)
    recipients_json: Mapped[list[dict[str, str]]] = mapped_column(JSON, default=list, nullable=False)
    date: Mapped[str] = mapped_column(String(255), default="", nullable=False)
    body: Mapped[str] = mapped_column(Text, default="", nullable=False)
    raw_content: Mapped[str] = mapped_column(Text, default="", nullable=False)
