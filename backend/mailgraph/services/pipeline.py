"""Corpus orchestration: parse, extract and merge one email at a time."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path
from time import perf_counter

from sqlalchemy.exc import DisconnectionError, OperationalError
from sqlalchemy.orm import Session, sessionmaker

from mailgraph.extraction.extractor_interface import ExtractorInterface
from mailgraph.graph.errors import GraphStoreUnavailableError
from mailgraph.graph.merge import GraphMergeEngine
from mailgraph.ingestion.email_parser import load_corpus_file, parse_corpus
from mailgraph.ingestion.types import StructuredEmail
from mailgraph.schemas.merge import CorpusRunResult, EmailFailure, MergeReport
from mailgraph.services.emails import store_email
from mailgraph.services.extraction import log_extractor_run

logger = logging.getLogger(__name__)


def process_email(db: Session, email: StructuredEmail, extractor: ExtractorInterface) -> MergeReport:
    """Store, extract and merge a single email inside the caller's transaction."""

    store_email(db, email)

    started = perf_counter()
    extraction_result = extractor.extract(email)
    extract_ms = (perf_counter() - started) * 1000.0

    log_extractor_run(db, email_id=email.id, extractor=extractor, extraction_result=extraction_result)
    report = GraphMergeEngine(db).merge(email.id, extraction_result)
    logger.info("mailgraph.extraction_timing email_id=%s extract_ms=%.2f", email.id, extract_ms)
    return report


def run_emails(
    session_factory: sessionmaker[Session],
    emails: Iterable[StructuredEmail],
    extractor: ExtractorInterface,
) -> CorpusRunResult:
    """Process emails sequentially in corpus order, isolating failures per email.

    Each email gets its own session and transaction. Any failure other than a
    lost store connection is logged, rolled back and tallied; the run goes on.
    """

    email_list = list(emails)
    result = CorpusRunResult(emails_found=len(email_list))
    total_started = perf_counter()

    for position, email in enumerate(email_list, start=1):
        logger.info(
            "mailgraph.email_processing position=%d total=%d email_id=%s subject=%r",
            position,
            len(email_list),
            email.id,
            email.subject,
        )
        with session_factory() as db:
            try:
                report = process_email(db, email, extractor)
                db.commit()
            except GraphStoreUnavailableError:
                db.rollback()
                raise
            except (OperationalError, DisconnectionError) as exc:
                db.rollback()
                raise GraphStoreUnavailableError(f"Graph store unavailable: {exc}") from exc
            except Exception as exc:
                db.rollback()
                logger.exception(
                    "mailgraph.email_failed position=%d email_id=%s subject=%r",
                    position,
                    email.id,
                    email.subject,
                )
                result.emails_failed += 1
                result.failures.append(EmailFailure(email_id=email.id, subject=email.subject, error=str(exc)))
                continue
        result.emails_succeeded += 1
        result.reports.append(report)

    logger.info(
        "mailgraph.corpus_complete emails=%d succeeded=%d failed=%d total_ms=%.2f",
        result.emails_found,
        result.emails_succeeded,
        result.emails_failed,
        (perf_counter() - total_started) * 1000.0,
    )
    return result


def run_corpus(
    session_factory: sessionmaker[Session],
    raw_corpus: str,
    extractor: ExtractorInterface,
) -> CorpusRunResult:
    """Parse a raw corpus and run every email through extraction and merge."""

    return run_emails(session_factory, parse_corpus(raw_corpus), extractor)


def run_corpus_file(
    session_factory: sessionmaker[Session],
    path: str | Path,
    extractor: ExtractorInterface,
) -> CorpusRunResult:
    """Load a corpus export from disk and run it."""

    return run_emails(session_factory, load_corpus_file(path), extractor)
