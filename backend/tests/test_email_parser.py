"""Unit tests for corpus splitting and per-email header/body parsing."""

from __future__ import annotations

import json
import tempfile
import unittest
from pathlib import Path

from mailgraph.ingestion.email_parser import (
    EMAIL_DELIMITER,
    load_corpus_file,
    parse_address,
    parse_corpus,
    parse_email,
    parse_recipients,
    save_processed_emails,
    split_corpus,
)
from mailgraph.ingestion.types import EmailAddress, Recipient


class ParseEmailTests(unittest.TestCase):
    def test_headers_and_body_are_split_on_first_blank_line(self) -> None:
        email = parse_email("Subject: Hi\nFrom: A <a@x.com>\nTo: B <b@x.com>; C <c@x.com>\n\nHello\nworld")

        self.assertEqual(email.subject, "Hi")
        self.assertEqual(email.sender, EmailAddress(name="A", email="a@x.com"))
        self.assertEqual(
            list(email.recipients),
            [
                Recipient(name="B", email="b@x.com", kind="to"),
                Recipient(name="C", email="c@x.com", kind="to"),
            ],
        )
        self.assertEqual(email.body, "Hello\nworld")

    def test_cc_recipients_follow_to_recipients(self) -> None:
        email = parse_email(
            "From: Lemaire, Jan <jan@yale.edu>\n"
            "To: Meosky, Paul <paul@yale.edu>\n"
            "Cc: Journal <yjlh@yale.edu>; Clerk\n"
            "\n"
            "Body"
        )

        self.assertEqual(email.sender.name, "Lemaire, Jan")
        self.assertEqual(
            [(r.name, r.email, r.kind) for r in email.recipients],
            [
                ("Meosky, Paul", "paul@yale.edu", "to"),
                ("Journal", "yjlh@yale.edu", "cc"),
                ("Clerk", "", "cc"),
            ],
        )

    def test_sent_and_date_are_aliases(self) -> None:
        sent = parse_email("Sent: Monday, April 7, 2025 9:15 AM\n\nBody")
        dated = parse_email("Date: 2025-04-05T10:30:00Z\n\nBody")

        self.assertEqual(sent.date, "Monday, April 7, 2025 9:15 AM")
        self.assertEqual(dated.date, "2025-04-05T10:30:00Z")

    def test_body_keeps_blank_lines_and_quoted_headers(self) -> None:
        email = parse_email("Subject: Re: Draft\n\nSounds good.\n\nFrom: Old <old@x.com>\nSubject: Draft")

        self.assertEqual(email.subject, "Re: Draft")
        self.assertEqual(email.sender, EmailAddress())
        self.assertEqual(email.body, "Sounds good.\n\nFrom: Old <old@x.com>\nSubject: Draft")

    def test_without_blank_line_body_is_empty_and_all_lines_are_scanned(self) -> None:
        email = parse_email("Subject: Only headers\nnoise line\nFrom: Jane <jane@x.com>")

        self.assertEqual(email.subject, "Only headers")
        self.assertEqual(email.sender.email, "jane@x.com")
        self.assertEqual(email.body, "")

    def test_blank_final_line_does_not_start_body(self) -> None:
        email = parse_email("Subject: Trailing\n")

        self.assertEqual(email.subject, "Trailing")
        self.assertEqual(email.body, "")

    def test_header_prefixes_are_case_sensitive(self) -> None:
        email = parse_email("subject: lower\nFROM: Shout <s@x.com>\n\nBody")

        self.assertEqual(email.subject, "")
        self.assertEqual(email.sender, EmailAddress())

    def test_missing_headers_default_to_empty_and_raw_content_is_kept(self) -> None:
        raw = "just some text\nwith no headers"
        email = parse_email(raw)

        self.assertEqual(email.subject, "")
        self.assertEqual(email.date, "")
        self.assertEqual(email.recipients, ())
        self.assertEqual(email.raw_content, raw)
        self.assertTrue(email.id)

    def test_parsing_same_text_twice_gives_distinct_ids(self) -> None:
        raw = "Subject: Same\n\nBody"

        self.assertNotEqual(parse_email(raw).id, parse_email(raw).id)


class AddressParsingTests(unittest.TestCase):
    def test_name_only_when_no_bracketed_address(self) -> None:
        self.assertEqual(parse_address("Jane Doe"), EmailAddress(name="Jane Doe", email=""))

    def test_unclosed_bracket_degrades_to_name(self) -> None:
        self.assertEqual(parse_address("Jane <jane@x"), EmailAddress(name="Jane <jane@x", email=""))

    def test_bare_bracketed_address_has_empty_name(self) -> None:
        self.assertEqual(parse_address("<c@x.com>"), EmailAddress(name="", email="c@x.com"))

    def test_empty_recipient_entries_are_dropped(self) -> None:
        recipients = parse_recipients("B <b@x.com>;; ;C", "to")

        self.assertEqual(
            recipients,
            [Recipient(name="B", email="b@x.com", kind="to"), Recipient(name="C", email="", kind="to")],
        )


class CorpusSplitTests(unittest.TestCase):
    def test_two_messages_split_into_two_emails(self) -> None:
        corpus = (
            "Subject: One\nFrom: A <a@x.com>\n\nFirst body\n"
            f"{EMAIL_DELIMITER}\n"
            "Subject: Two\nFrom: B <b@x.com>\n\nSecond body\n"
        )

        emails = parse_corpus(corpus)

        self.assertEqual([email.subject for email in emails], ["One", "Two"])
        self.assertEqual([email.body for email in emails], ["First body", "Second body"])
        self.assertNotEqual(emails[0].id, emails[1].id)
        for email in emails:
            self.assertNotIn("_", email.body)
            self.assertNotIn(EMAIL_DELIMITER, email.raw_content)

    def test_blank_segments_are_discarded(self) -> None:
        corpus = f"\n{EMAIL_DELIMITER}\n   \n{EMAIL_DELIMITER}\nSubject: Kept\n\nBody\n{EMAIL_DELIMITER}\n"

        self.assertEqual(len(split_corpus(corpus)), 1)
        self.assertEqual(parse_corpus(corpus)[0].subject, "Kept")

    def test_empty_corpus_yields_no_emails(self) -> None:
        self.assertEqual(parse_corpus(""), [])
        self.assertEqual(parse_corpus("  \n\n"), [])

    def test_windows_line_endings_are_tolerated(self) -> None:
        email = parse_corpus("Subject: CRLF\r\nFrom: A <a@x.com>\r\n\r\nLine one\r\nLine two")[0]

        self.assertEqual(email.subject, "CRLF")
        self.assertEqual(email.sender.email, "a@x.com")
        self.assertEqual(email.body, "Line one\nLine two")


class CorpusFileTests(unittest.TestCase):
    def test_load_and_save_round_trip_through_files(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            corpus_path = Path(tmp) / "email_data.csv"
            output_path = Path(tmp) / "processed.json"
            corpus_path.write_text(
                f"Subject: A\nTo: X <x@x.com>\n\nBody A\n{EMAIL_DELIMITER}\nSubject: B\n\nBody B\n",
                encoding="utf-8",
            )

            emails = load_corpus_file(corpus_path)
            save_processed_emails(emails, output_path)
            saved = json.loads(output_path.read_text(encoding="utf-8"))

        self.assertEqual(len(saved), 2)
        self.assertEqual(saved[0]["subject"], "A")
        self.assertEqual(saved[0]["recipients"], [{"name": "X", "email": "x@x.com", "kind": "to"}])
        self.assertEqual(saved[1]["body"], "Body B")
        self.assertEqual(saved[0]["id"], emails[0].id)


if __name__ == "__main__":
    unittest.main()
