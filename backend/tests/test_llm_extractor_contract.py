"""Unit tests for LLM extractor output contract behavior."""

from __future__ import annotations

import json
import unittest
from unittest import mock

from mailgraph.extraction.llm_extractor import LLMExtractionError, LLMExtractor, OpenAIChatCompletionsClient
from mailgraph.extraction.types import EventFact, PersonFact, PlaceFact, RelationshipFact
from mailgraph.ingestion.email_parser import parse_email

_SAMPLE_EMAIL = parse_email(
    "Subject: Meeting to discuss Smith v. Johnson case\n"
    "From: Jane Doe <jane.doe@lawfirm.com>\n"
    "To: John Smith <john.smith@client.com>; Legal Team <legal@lawfirm.com>\n"
    "Date: 2025-04-05T10:30:00Z\n"
    "\n"
    "I'd like to schedule a meeting next Thursday at our New York office.\n"
    "Our associate Sarah Williams will present."
)

_VALID_PAYLOAD = {
    "people": [
        {"name": "Jane Doe", "role": "Senior Partner", "organization": "Wilson & Associates"},
        {"name": " Sarah Williams ", "role": "", "organization": None},
    ],
    "places": [{"name": "New York office", "type": "Office"}],
    "events": [{"name": "Smith v. Johnson meeting", "date": "next Thursday", "location": None}],
    "relationships": [
        {
            "source": "Sarah Williams",
            "sourceType": "person",
            "relationship": "works_for",
            "target": "Jane Doe",
            "targetType": "person",
            "context": "Our associate Sarah Williams",
        }
    ],
}


class _StubClient:
    model = "stub-model"

    def __init__(self, payload) -> None:  # noqa: ANN001
        self.payload = payload
        self.prompts: list[str] = []

    def extract_structured(self, prompt: str):  # noqa: ANN201
        self.prompts.append(prompt)
        return self.payload


class LLMExtractorContractTests(unittest.TestCase):
    def test_payload_is_mapped_to_typed_facts(self) -> None:
        extractor = LLMExtractor(_StubClient(_VALID_PAYLOAD))

        result = extractor.extract(_SAMPLE_EMAIL)

        self.assertEqual(
            result.people,
            [
                PersonFact(name="Jane Doe", role="Senior Partner", organization="Wilson & Associates"),
                PersonFact(name="Sarah Williams", role=None, organization=None),
            ],
        )
        self.assertEqual(result.places, [PlaceFact(name="New York office", type="Office")])
        self.assertEqual(result.events, [EventFact(name="Smith v. Johnson meeting", date="next Thursday")])
        self.assertEqual(
            result.relationships,
            [
                RelationshipFact(
                    source="Sarah Williams",
                    source_type="person",
                    relationship="works_for",
                    target="Jane Doe",
                    target_type="person",
                    context="Our associate Sarah Williams",
                )
            ],
        )

    def test_json_text_payload_is_decoded(self) -> None:
        extractor = LLMExtractor(_StubClient(json.dumps(_VALID_PAYLOAD)))

        result = extractor.extract(_SAMPLE_EMAIL)

        self.assertEqual(len(result.people), 2)
        self.assertEqual(extractor.last_raw_output, _VALID_PAYLOAD)

    def test_validated_output_keeps_wire_field_names(self) -> None:
        extractor = LLMExtractor(_StubClient(_VALID_PAYLOAD))
        extractor.extract(_SAMPLE_EMAIL)

        validated = extractor.last_validated_output
        assert validated is not None
        self.assertEqual(validated["relationships"][0]["sourceType"], "person")
        self.assertEqual(extractor.model_name, "stub-model")
        self.assertEqual(extractor.prompt_version, "email.v1")

    def test_missing_top_level_key_is_rejected(self) -> None:
        payload = {key: value for key, value in _VALID_PAYLOAD.items() if key != "relationships"}
        extractor = LLMExtractor(_StubClient(payload))

        with self.assertRaises(LLMExtractionError):
            extractor.extract(_SAMPLE_EMAIL)

    def test_missing_required_relationship_field_is_rejected(self) -> None:
        payload = dict(_VALID_PAYLOAD)
        payload["relationships"] = [{"source": "A", "relationship": "knows", "target": "B", "targetType": "person"}]

        with self.assertRaises(LLMExtractionError):
            LLMExtractor(_StubClient(payload)).extract(_SAMPLE_EMAIL)

    def test_non_json_text_is_rejected(self) -> None:
        with self.assertRaises(LLMExtractionError):
            LLMExtractor(_StubClient("not json")).extract(_SAMPLE_EMAIL)

    def test_prompt_includes_headers_and_body(self) -> None:
        client = _StubClient(_VALID_PAYLOAD)
        LLMExtractor(client).extract(_SAMPLE_EMAIL)

        prompt = client.prompts[0]
        self.assertIn("EMAIL SUBJECT: Meeting to discuss Smith v. Johnson case", prompt)
        self.assertIn("FROM: Jane Doe <jane.doe@lawfirm.com>", prompt)
        self.assertIn("TO: John Smith <john.smith@client.com>, Legal Team <legal@lawfirm.com>", prompt)
        self.assertIn("DATE: 2025-04-05T10:30:00Z", prompt)
        self.assertIn("Our associate Sarah Williams will present.", prompt)


class OpenAIClientTests(unittest.TestCase):
    def _mock_response(self, urlopen: mock.MagicMock, body: dict) -> None:
        urlopen.return_value.__enter__.return_value.read.return_value = json.dumps(body).encode("utf-8")

    def test_structured_content_is_parsed(self) -> None:
        client = OpenAIChatCompletionsClient(api_key="sk-test", model="gpt-test", base_url="https://llm.local/v1/")
        with mock.patch("mailgraph.extraction.llm_extractor.urllib_request.urlopen") as urlopen:
            self._mock_response(
                urlopen,
                {"choices": [{"message": {"content": json.dumps(_VALID_PAYLOAD), "refusal": None}}]},
            )
            payload = client.extract_structured("prompt text")

        self.assertEqual(payload, _VALID_PAYLOAD)
        request = urlopen.call_args.args[0]
        self.assertEqual(request.full_url, "https://llm.local/v1/chat/completions")
        sent = json.loads(request.data.decode("utf-8"))
        self.assertEqual(sent["model"], "gpt-test")
        self.assertEqual(sent["response_format"]["type"], "json_schema")
        self.assertEqual(
            sent["response_format"]["json_schema"]["schema"]["required"],
            ["people", "places", "events", "relationships"],
        )
        self.assertEqual(sent["messages"][1], {"role": "user", "content": "prompt text"})

    def test_refusal_raises(self) -> None:
        client = OpenAIChatCompletionsClient(api_key="sk-test", model="gpt-test")
        with mock.patch("mailgraph.extraction.llm_extractor.urllib_request.urlopen") as urlopen:
            self._mock_response(urlopen, {"choices": [{"message": {"content": None, "refusal": "no"}}]})
            with self.assertRaises(LLMExtractionError):
                client.extract_structured("prompt text")

    def test_unexpected_shape_raises(self) -> None:
        client = OpenAIChatCompletionsClient(api_key="sk-test", model="gpt-test")
        with mock.patch("mailgraph.extraction.llm_extractor.urllib_request.urlopen") as urlopen:
            self._mock_response(urlopen, {"error": "nope"})
            with self.assertRaises(LLMExtractionError):
                client.extract_structured("prompt text")


if __name__ == "__main__":
    unittest.main()
