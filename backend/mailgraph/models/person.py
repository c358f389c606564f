"""Person node ORM model."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from mailgraph.models.base import Base, CreatedAtMixin, IdMixin


class Person(Base, IdMixin, CreatedAtMixin):
    """Person node identified by its unique name."""

    __tablename__ = "persons"

    name: Mapped[str] = mapped_column(String(512), unique=True, nullable=False)
    role: Mapped[str | None] = mapped_column(String(512), nullable=True)
    organization: Mapped[str | None] = mapped_column(String(512), index=True, nullable=True)
