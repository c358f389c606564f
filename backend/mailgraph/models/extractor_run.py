"""Extractor run audit log model."""

from sqlalchemy import JSON, String
from sqlalchemy.orm import Mapped, mapped_column

from mailgraph.models.base import Base, CreatedAtMixin, IdMixin


class ExtractorRun(Base, IdMixin, CreatedAtMixin):
    """Stores metadata and payloads for each extraction call."""

    __tablename__ = "extractor_runs"

    email_id: Mapped[str] = mapped_column(String(36), index=True, nullable=False)
    model_name: Mapped[str] = mapped_column(String(128), nullable=False)
    prompt_version: Mapped[str] = mapped_column(String(64), nullable=False)
    raw_output_json: Mapped[dict[str, object]] = mapped_column(JSON, default=dict, nullable=False)
    validated_output_json: Mapped[dict[str, object]] = mapped_column(JSON, default=dict, nullable=False)
