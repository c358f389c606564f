"""Email parse preview, ingestion and stored email routes."""

from fastapi import APIRouter, Depends, HTTPException, Path, Query
from sqlalchemy.orm import Session, sessionmaker

from mailgraph.db.dependencies import get_db, get_session_factory
from mailgraph.extraction.extractor_interface import ExtractorInterface
from mailgraph.extraction.llm_extractor import LLMExtractionError
from mailgraph.graph.errors import GraphStoreUnavailableError
from mailgraph.ingestion.email_parser import parse_corpus
from mailgraph.schemas.common import ApiResponse
from mailgraph.schemas.email import CorpusParseRequest, EmailRead, ParsedEmailRead
from mailgraph.schemas.graph import EmailMentionRead
from mailgraph.schemas.merge import CorpusRunResult
from mailgraph.services.emails import get_email, list_emails
from mailgraph.services.extraction import get_default_extractor
from mailgraph.services.graph import list_email_mentions
from mailgraph.services.pipeline import run_corpus


router = APIRouter(prefix="/emails")


def get_extractor() -> ExtractorInterface:
    """Build the configured extractor; an unconfigured oracle is a 503."""

    try:
        return get_default_extractor()
    except LLMExtractionError as exc:
        raise HTTPException(status_code=503, detail=str(exc)) from exc


@router.post("/parse", response_model=ApiResponse[list[ParsedEmailRead]])
def parse_emails(payload: CorpusParseRequest) -> ApiResponse[list[ParsedEmailRead]]:
    """Split and parse raw corpus text without storing anything."""

    return ApiResponse(data=[ParsedEmailRead.model_validate(email) for email in parse_corpus(payload.raw_text)])


@router.post("/ingest", response_model=ApiResponse[CorpusRunResult])
def ingest_emails(
    payload: CorpusParseRequest,
    session_factory: sessionmaker[Session] = Depends(get_session_factory),
    extractor: ExtractorInterface = Depends(get_extractor),
) -> ApiResponse[CorpusRunResult]:
    """Parse raw corpus text and run every email through extraction and merge."""

    try:
        result = run_corpus(session_factory, payload.raw_text, extractor)
    except GraphStoreUnavailableError as exc:
        raise HTTPException(status_code=503, detail=str(exc)) from exc
    return ApiResponse(data=result)


@router.get("", response_model=ApiResponse[list[EmailRead]])
def get_emails(
    limit: int = Query(100, ge=1, le=1000),
    offset: int = Query(0, ge=0),
    db: Session = Depends(get_db),
) -> ApiResponse[list[EmailRead]]:
    """List stored emails."""

    return ApiResponse(data=[EmailRead.model_validate(email) for email in list_emails(db, limit=limit, offset=offset)])


@router.get("/{email_id}", response_model=ApiResponse[EmailRead])
def get_email_record(
    email_id: str = Path(..., min_length=1),
    db: Session = Depends(get_db),
) -> ApiResponse[EmailRead]:
    """Fetch one stored email."""

    email = get_email(db, email_id)
    if email is None:
        raise HTTPException(status_code=404, detail="Email not found")
    return ApiResponse(data=EmailRead.model_validate(email))


@router.get("/{email_id}/mentions", response_model=ApiResponse[list[EmailMentionRead]])
def get_email_mentions(
    email_id: str = Path(..., min_length=1),
    db: Session = Depends(get_db),
) -> ApiResponse[list[EmailMentionRead]]:
    """List graph nodes an email mentioned."""

    if get_email(db, email_id) is None:
        raise HTTPException(status_code=404, detail="Email not found")
    return ApiResponse(data=[EmailMentionRead.model_validate(row) for row in list_email_mentions(db, email_id)])
