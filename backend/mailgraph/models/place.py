"""Place node ORM model."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from mailgraph.models.base import Base, CreatedAtMixin, IdMixin


class Place(Base, IdMixin, CreatedAtMixin):
    """Place node identified by its unique name."""

    __tablename__ = "places"

    name: Mapped[str] = mapped_column(String(512), unique=True, nullable=False)
    type: Mapped[str | None] = mapped_column(String(255), index=True, nullable=True)
