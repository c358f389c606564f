"""Parse an email corpus export without extraction and dump it as JSON.

Usage (from repository root):
    python backend/scripts/parse_corpus.py resources/email_data.csv --output processed_emails.json
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

BACKEND_DIR = Path(__file__).resolve().parents[1]
if str(BACKEND_DIR) not in sys.path:
    sys.path.insert(0, str(BACKEND_DIR))

from mailgraph.ingestion.email_parser import load_corpus_file, save_processed_emails


def parse_args() -> argparse.Namespace:
    """Parse script CLI arguments."""

    parser = argparse.ArgumentParser(description="Split and parse an email corpus export.")
    parser.add_argument("path", help="Corpus export to parse")
    parser.add_argument(
        "--output",
        default="processed_emails.json",
        help="Where to write the parsed emails (default: processed_emails.json)",
    )
    return parser.parse_args()


def main() -> None:
    """Parse the corpus and print a sample of the first email."""

    args = parse_args()
    emails = load_corpus_file(args.path)
    save_processed_emails(emails, args.output)

    print(f"emails_parsed={len(emails)}")
    print(f"output={args.output}")
    if emails:
        first = emails[0]
        recipients = ", ".join(f"{r.name} <{r.email}>" for r in first.recipients)
        print()
        print("First email:")
        print(f"  id={first.id}")
        print(f"  subject={first.subject}")
        print(f"  from={first.sender.name} <{first.sender.email}>")
        print(f"  recipients={recipients}")
        print(f"  date={first.date}")
        print(f"  body={first.body[:150]}")


if __name__ == "__main__":
    main()
