"""initial graph schema

Revision ID: 20261019_0001
Revises:
Create Date: 2026-10-19 00:00:01
"""

from collections.abc import Sequence

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "20261019_0001"
down_revision: str | None = None
branch_labels: Sequence[str] | None = None
depends_on: Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "persons",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(length=512), nullable=False),
        sa.Column("role", sa.String(length=512), nullable=True),
        sa.Column("organization", sa.String(length=512), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("CURRENT_TIMESTAMP"), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name"),
    )
    op.create_index("ix_persons_organization", "persons", ["organization"], unique=False)

    op.create_table(
        "places",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(length=512), nullable=False),
        sa.Column("type", sa.String(length=255), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("CURRENT_TIMESTAMP"), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name"),
    )
    op.create_index("ix_places_type", "places", ["type"], unique=False)

    op.create_table(
        "events",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("event_key", sa.String(length=1281), nullable=False),
        sa.Column("name", sa.String(length=512), nullable=False),
        sa.Column("date", sa.String(length=255), nullable=True),
        sa.Column("location", sa.String(length=512), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("CURRENT_TIMESTAMP"), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("event_key"),
    )
    op.create_index("ix_events_name", "events", ["name"], unique=False)
    op.create_index("ix_events_date", "events", ["date"], unique=False)

    op.create_table(
        "graph_edges",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("source_label", sa.String(length=32), nullable=False),
        sa.Column("source_node_id", sa.Integer(), nullable=False),
        sa.Column("edge_type", sa.String(length=255), nullable=False),
        sa.Column("target_label", sa.String(length=32), nullable=False),
        sa.Column("target_node_id", sa.Integer(), nullable=False),
        sa.Column("context", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("CURRENT_TIMESTAMP"), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint(
            "source_label",
            "source_node_id",
            "target_label",
            "target_node_id",
            "edge_type",
            name="uq_graph_edges_endpoints_type",
        ),
    )
    op.create_index("ix_graph_edges_source_node_id", "graph_edges", ["source_node_id"], unique=False)
    op.create_index("ix_graph_edges_target_node_id", "graph_edges", ["target_node_id"], unique=False)
    op.create_index("ix_graph_edges_edge_type", "graph_edges", ["edge_type"], unique=False)

    op.create_table(
        "emails",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("subject", sa.Text(), nullable=False),
        sa.Column("sender_name", sa.String(length=512), nullable=False),
        sa.Column("sender_email", sa.String(length=512), nullable=False),
        sa.Column("recipients_json", sa.JSON(), nullable=False),
        sa.Column("date", sa.String(length=255), nullable=False),
        sa.Column("body", sa.Text(), nullable=False),
        sa.Column("raw_content", sa.Text(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("CURRENT_TIMESTAMP"), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "email_mentions",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("email_id", sa.String(length=36), nullable=False),
        sa.Column("node_label", sa.String(length=32), nullable=False),
        sa.Column("node_id", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(["email_id"], ["emails.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("email_id", "node_label", "node_id", name="uq_email_mentions_email_node"),
    )
    op.create_index("ix_email_mentions_email_id", "email_mentions", ["email_id"], unique=False)
    op.create_index("ix_email_mentions_node_id", "email_mentions", ["node_id"], unique=False)

    op.create_table(
        "extractor_runs",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("email_id", sa.String(length=36), nullable=False),
        sa.Column("model_name", sa.String(length=128), nullable=False),
        sa.Column("prompt_version", sa.String(length=64), nullable=False),
        sa.Column("raw_output_json", sa.JSON(), nullable=False),
        sa.Column("validated_output_json", sa.JSON(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("CURRENT_TIMESTAMP"), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_extractor_runs_email_id", "extractor_runs", ["email_id"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_extractor_runs_email_id", table_name="extractor_runs")
    op.drop_table("extractor_runs")
    op.drop_index("ix_email_mentions_node_id", table_name="email_mentions")
    op.drop_index("ix_email_mentions_email_id", table_name="email_mentions")
    op.drop_table("email_mentions")
    op.drop_table("emails")
    op.drop_index("ix_graph_edges_edge_type", table_name="graph_edges")
    op.drop_index("ix_graph_edges_target_node_id", table_name="graph_edges")
    op.drop_index("ix_graph_edges_source_node_id", table_name="graph_edges")
    op.drop_table("graph_edges")
    op.drop_index("ix_events_date", table_name="events")
    op.drop_index("ix_events_name", table_name="events")
    op.drop_table("events")
    op.drop_index("ix_places_type", table_name="places")
    op.drop_table("places")
    op.drop_index("ix_persons_organization", table_name="persons")
    op.drop_table("persons")
