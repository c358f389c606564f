"""Structured email values produced by the corpus parser."""

from dataclasses import asdict, dataclass, field
from typing import Any, Literal

RecipientKind = Literal["to", "cc"]


@dataclass(frozen=True, slots=True)
class EmailAddress:
    """Display name plus bracketed address; either part may be empty."""

    name: str = ""
    email: str = ""


@dataclass(frozen=True, slots=True)
class Recipient:
    """One To/Cc entry."""

    name: str
    email: str
    kind: RecipientKind


@dataclass(frozen=True, slots=True)
class StructuredEmail:
    """Best-effort decomposition of one delimited message chunk."""

    id: str
    subject: str = ""
    sender: EmailAddress = field(default_factory=EmailAddress)
    recipients: tuple[Recipient, ...] = ()
    date: str = ""
    body: str = ""
    raw_content: str = ""

    def to_dict(self) -> dict[str, Any]:
        payload = asdict(self)
        payload["recipients"] = [asdict(recipient) for recipient in self.recipients]
        return payload
