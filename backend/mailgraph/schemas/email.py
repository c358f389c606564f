"""Email request/response schemas."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class EmailAddressRead(BaseModel):
    """Name and address pair."""

    model_config = ConfigDict(from_attributes=True)

    name: str
    email: str


class RecipientRead(EmailAddressRead):
    """To/Cc recipient."""

    kind: Literal["to", "cc"]


class ParsedEmailRead(BaseModel):
    """Parsed email as returned by the parse preview."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    subject: str
    sender: EmailAddressRead
    recipients: list[RecipientRead]
    date: str
    body: str
    raw_content: str


class CorpusParseRequest(BaseModel):
    """Raw corpus text to split and parse."""

    raw_text: str = Field(min_length=1)


class EmailRead(BaseModel):
    """Stored email."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    subject: str
    sender_name: str
    sender_email: str
    recipients_json: list[RecipientRead]
    date: str
    body: str
    raw_content: str
    created_at: datetime
