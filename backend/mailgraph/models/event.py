"""Event node ORM model."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from mailgraph.models.base import Base, CreatedAtMixin, IdMixin


class Event(Base, IdMixin, CreatedAtMixin):
    """Event node keyed by the derived name/date/location identity."""

    __tablename__ = "events"

    # Fits the longest name, date and location plus both separators.
    event_key: Mapped[str] = mapped_column(String(1281), unique=True, nullable=False)
    name: Mapped[str] = mapped_column(String(512), index=True, nullable=False)
    date: Mapped[str | None] = mapped_column(String(255), index=True, nullable=True)
    location: Mapped[str | None] = mapped_column(String(512), nullable=True)
