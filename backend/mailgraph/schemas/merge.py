"""Merge and corpus-run report schemas."""

from typing import Literal

from pydantic import BaseModel, Field

FactCategory = Literal["people", "places", "events", "relationships"]


class MergeFailure(BaseModel):
    """One fact that could not be merged."""

    category: FactCategory
    index: int
    identity: str
    detail: str


class MergeReport(BaseModel):
    """Per-email merge outcome."""

    email_id: str | None = None
    people_upserted: int = 0
    places_upserted: int = 0
    events_upserted: int = 0
    relationships_merged: int = 0
    relationships_skipped: int = 0
    failures: list[MergeFailure] = Field(default_factory=list)

    @property
    def succeeded(self) -> bool:
        return not self.failures


class EmailFailure(BaseModel):
    """Email whose extraction or merge did not complete."""

    email_id: str
    subject: str
    error: str


class CorpusRunResult(BaseModel):
    """Corpus-level tally of attempted and successful emails."""

    emails_found: int = 0
    emails_succeeded: int = 0
    emails_failed: int = 0
    failures: list[EmailFailure] = Field(default_factory=list)
    reports: list[MergeReport] = Field(default_factory=list)
