"""Split a flat export of concatenated emails and parse each message.

The export separates messages with a line of underscores. Each chunk is a
loose RFC822-like header block, a blank line, then free text. Parsing never
fails: missing or malformed headers degrade to empty fields and the raw chunk
is always kept on ``raw_content``.
"""

from __future__ import annotations

import json
import logging
import re
import uuid
from pathlib import Path

from mailgraph.ingestion.types import EmailAddress, Recipient, RecipientKind, StructuredEmail

logger = logging.getLogger(__name__)

EMAIL_DELIMITER = "_" * 32

_ANGLE_ADDRESS_RE = re.compile(r"<([^>]+)>")
_DATE_PREFIXES = ("Sent:", "Date:")


def split_corpus(raw_corpus: str) -> list[str]:
    """Split a corpus on the delimiter, dropping blank segments."""

    return [chunk.strip() for chunk in raw_corpus.split(EMAIL_DELIMITER) if chunk.strip()]


def parse_corpus(raw_corpus: str) -> list[StructuredEmail]:
    """Parse every message in a concatenated corpus, preserving corpus order."""

    return [parse_email(chunk) for chunk in split_corpus(raw_corpus)]


def parse_email(raw_email: str) -> StructuredEmail:
    """Parse one message chunk into a structured email."""

    lines = [line.strip() for line in raw_email.split("\n")]
    subject = ""
    from_line = ""
    to_line = ""
    cc_line = ""
    date_line = ""
    body_start: int | None = None

    for index, line in enumerate(lines):
        if line.startswith("Subject:"):
            subject = _header_value(line, "Subject:")
        elif line.startswith("From:"):
            from_line = _header_value(line, "From:")
        elif line.startswith("To:"):
            to_line = _header_value(line, "To:")
        elif line.startswith("Cc:"):
            cc_line = _header_value(line, "Cc:")
        elif line.startswith(_DATE_PREFIXES):
            date_line = line.split(":", 1)[1].strip()
        elif line == "" and index < len(lines) - 1:
            body_start = index + 1
            break

    body = "\n".join(lines[body_start:]) if body_start is not None else ""
    recipients = parse_recipients(to_line, "to") + parse_recipients(cc_line, "cc")

    return StructuredEmail(
        id=str(uuid.uuid4()),
        subject=subject,
        sender=parse_address(from_line),
        recipients=tuple(recipients),
        date=date_line,
        body=body,
        raw_content=raw_email,
    )


def parse_address(value: str) -> EmailAddress:
    """Split ``Name <addr>``; without a bracketed address the whole value is the name."""

    value = value.strip()
    if not value:
        return EmailAddress()
    match = _ANGLE_ADDRESS_RE.search(value)
    if match is None:
        return EmailAddress(name=value, email="")
    return EmailAddress(name=value[: value.index("<")].strip(), email=match.group(1))


def parse_recipients(field_value: str, kind: RecipientKind) -> list[Recipient]:
    """Split a semicolon-separated To/Cc value into tagged recipients."""

    recipients: list[Recipient] = []
    for part in field_value.split(";"):
        part = part.strip()
        if not part:
            continue
        address = parse_address(part)
        recipients.append(Recipient(name=address.name, email=address.email, kind=kind))
    return recipients


def load_corpus_file(path: str | Path) -> list[StructuredEmail]:
    """Read a corpus export from disk and parse it."""

    raw_corpus = Path(path).read_text(encoding="utf-8")
    emails = parse_corpus(raw_corpus)
    logger.info("mailgraph.corpus_parsed path=%s emails=%d", path, len(emails))
    return emails


def save_processed_emails(emails: list[StructuredEmail], output_path: str | Path) -> None:
    """Write parsed emails as indented JSON for inspection."""

    Path(output_path).write_text(
        json.dumps([email.to_dict() for email in emails], indent=2, ensure_ascii=False),
        encoding="utf-8",
    )
    logger.info("mailgraph.processed_emails_saved path=%s emails=%d", output_path, len(emails))


def _header_value(line: str, prefix: str) -> str:
    return line[len(prefix):].strip()
