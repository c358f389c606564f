"""Email persistence and retrieval services."""

from sqlalchemy import select
from sqlalchemy.orm import Session

from mailgraph.ingestion.types import StructuredEmail
from mailgraph.models.email import Email


def store_email(db: Session, email: StructuredEmail) -> Email:
    """Persist a parsed email so extracted nodes can point back to it."""

    record = Email(
        id=email.id,
        subject=email.subject,
        sender_name=email.sender.name,
        sender_email=email.sender.email,
        recipients_json=[
            {"name": recipient.name, "email": recipient.email, "kind": recipient.kind}
            for recipient in email.recipients
        ],
        date=email.date,
        body=email.body,
        raw_content=email.raw_content,
    )
    db.add(record)
    db.flush()
    return record


def list_emails(db: Session, *, limit: int = 100, offset: int = 0) -> list[Email]:
    """Return stored emails in ingestion order."""

    stmt = select(Email).order_by(Email.created_at.asc(), Email.id.asc()).limit(limit).offset(offset)
    return list(db.scalars(stmt).all())


def get_email(db: Session, email_id: str) -> Email | None:
    """Fetch a single stored email."""

    return db.get(Email, email_id)
