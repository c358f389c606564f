"""Build the knowledge graph from an email corpus export.

Usage (from repository root):
    python backend/scripts/ingest_corpus.py --file resources/email_data.csv

Usage (from backend directory):
    python scripts/ingest_corpus.py
    # or
    python -m scripts.ingest_corpus
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

# Make `mailgraph` imports work whether the script is run from repo root or backend/.
BACKEND_DIR = Path(__file__).resolve().parents[1]
if str(BACKEND_DIR) not in sys.path:
    sys.path.insert(0, str(BACKEND_DIR))

from mailgraph.config import get_settings
from mailgraph.db.session import open_graph_store
from mailgraph.extraction.llm_extractor import LLMExtractionError
from mailgraph.graph.errors import GraphStoreError
from mailgraph.services.extraction import get_default_extractor
from mailgraph.services.pipeline import run_corpus_file

logger = logging.getLogger("mailgraph.ingest")


def parse_args() -> argparse.Namespace:
    """Parse script CLI arguments."""

    settings = get_settings()
    parser = argparse.ArgumentParser(description="Extract people, places and events from an email corpus.")
    parser.add_argument(
        "--file",
        default=settings.email_file_path,
        help=f"Corpus export to ingest (default: {settings.email_file_path})",
    )
    parser.add_argument(
        "--database-url",
        default=None,
        help="Graph store URL (default: DATABASE_URL from settings)",
    )
    return parser.parse_args()


def main() -> int:
    """Ingest the corpus and print an attempted/succeeded summary."""

    args = parse_args()
    logging.basicConfig(
        level=get_settings().log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )

    try:
        extractor = get_default_extractor()
        with open_graph_store(args.database_url) as session_factory:
            result = run_corpus_file(session_factory, args.file, extractor)
    except (LLMExtractionError, GraphStoreError, OSError):
        logger.exception("mailgraph.ingest_fatal file=%s", args.file)
        return 1

    print("Ingest complete")
    print(f"emails_attempted={result.emails_found}")
    print(f"emails_succeeded={result.emails_succeeded}")
    print(f"emails_failed={result.emails_failed}")
    for failure in result.failures:
        print(f"  failed email_id={failure.email_id} subject={failure.subject!r} error={failure.error}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
