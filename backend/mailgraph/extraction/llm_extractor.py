"""LLM-backed extractor for people, places, events, and relationships."""

from __future__ import annotations

import json
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any, Protocol
from urllib import error as urllib_error
from urllib import request as urllib_request

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from mailgraph.extraction.extractor_interface import ExtractorInterface
from mailgraph.extraction.types import EventFact, ExtractionResult, PersonFact, PlaceFact, RelationshipFact
from mailgraph.ingestion.types import StructuredEmail

LLM_EXTRACTION_PROMPT_VERSION = "email.v1"
_SYSTEM_PROMPT_PATH = Path(__file__).resolve().parent / "prompts" / "email_v1.txt"


def _strict_object(**fields: tuple[str, str]) -> dict[str, Any]:
    # Strict structured output wants every key listed as required; optional ones are nullable.
    return {
        "type": "object",
        "additionalProperties": False,
        "properties": {
            field_name: {"type": json_type if json_type == "string" else ["string", "null"], "description": hint}
            for field_name, (json_type, hint) in fields.items()
        },
        "required": list(fields),
    }


def _array_of(item_schema: dict[str, Any]) -> dict[str, Any]:
    return {"type": "array", "items": item_schema}


_EXTRACTION_JSON_SCHEMA: dict[str, Any] = {
    "name": "email_entity_extraction",
    "strict": True,
    "schema": {
        "type": "object",
        "additionalProperties": False,
        "properties": {
            "people": _array_of(
                _strict_object(
                    name=("string", "Full name of the person"),
                    role=("nullable", "Position/Role if mentioned"),
                    organization=("nullable", "Organization if mentioned"),
                )
            ),
            "places": _array_of(
                _strict_object(
                    name=("string", "Location name"),
                    type=("nullable", "Type of location (Office/City/Country/etc)"),
                )
            ),
            "events": _array_of(
                _strict_object(
                    name=("string", "Event description"),
                    date=("nullable", "Date if mentioned"),
                    location=("nullable", "Location if mentioned"),
                )
            ),
            "relationships": _array_of(
                _strict_object(
                    source=("string", "Entity1 name"),
                    sourceType=("string", "person, place, or event"),
                    relationship=("string", "Relationship type, words joined with underscores (works_for, located_in)"),
                    target=("string", "Entity2 name"),
                    targetType=("string", "person, place, or event"),
                    context=("nullable", "Brief explanation from the email"),
                )
            ),
        },
        "required": ["people", "places", "events", "relationships"],
    },
}


class LLMExtractionError(RuntimeError):
    """The extraction oracle is unconfigured, unreachable, or answered with something unusable."""


class LLMClient(Protocol):
    """Anything that turns an email prompt into the extraction JSON object."""

    def extract_structured(self, prompt: str) -> dict[str, Any] | str:
        """Return a structured extraction payload, decoded or as JSON text."""


@dataclass(slots=True)
class OpenAIChatCompletionsClient:
    """OpenAI-compatible Chat Completions client with strict JSON-schema output."""

    api_key: str
    model: str
    base_url: str = "https://api.openai.com/v1"
    timeout_seconds: int = 60

    def extract_structured(self, prompt: str) -> dict[str, Any]:
        """Send one prompt and return the decoded extraction object."""

        body = {
            "model": self.model,
            "temperature": 0,
            "response_format": {"type": "json_schema", "json_schema": _EXTRACTION_JSON_SCHEMA},
            "messages": [
                {"role": "system", "content": _load_system_prompt()},
                {"role": "user", "content": prompt},
            ],
        }
        return _read_structured_content(self._post_chat_completion(body))

    def _post_chat_completion(self, body: dict[str, Any]) -> str:
        http_request = urllib_request.Request(
            url=f"{self.base_url.rstrip('/')}/chat/completions",
            data=json.dumps(body).encode("utf-8"),
            method="POST",
            headers={"Authorization": f"Bearer {self.api_key}", "Content-Type": "application/json"},
        )
        try:
            with urllib_request.urlopen(http_request, timeout=self.timeout_seconds) as response:
                return response.read().decode("utf-8")
        except urllib_error.HTTPError as exc:
            raise LLMExtractionError(
                f"Extraction endpoint answered HTTP {exc.code}: {exc.read().decode('utf-8', errors='replace')}"
            ) from exc
        except urllib_error.URLError as exc:
            raise LLMExtractionError(f"Extraction endpoint unreachable: {exc.reason}") from exc
        except TimeoutError as exc:
            raise LLMExtractionError(f"Extraction call exceeded {self.timeout_seconds}s") from exc


def _read_structured_content(response_text: str) -> dict[str, Any]:
    try:
        message = json.loads(response_text)["choices"][0]["message"]
        refusal = (message.get("refusal") or "").strip()
        content = message["content"]
    except (KeyError, IndexError, TypeError, AttributeError, json.JSONDecodeError) as exc:
        raise LLMExtractionError("Chat completion response has no message content") from exc
    if refusal:
        raise LLMExtractionError(f"Model declined to extract: {refusal}")
    if not isinstance(content, str):
        raise LLMExtractionError("Chat completion message content is not text")
    try:
        return json.loads(content)
    except json.JSONDecodeError as exc:
        raise LLMExtractionError("Model content is not valid JSON") from exc


@lru_cache(maxsize=1)
def _load_system_prompt() -> str:
    try:
        prompt_text = _SYSTEM_PROMPT_PATH.read_text(encoding="utf-8").strip()
    except OSError as exc:
        raise LLMExtractionError(f"Cannot read extraction prompt {_SYSTEM_PROMPT_PATH}") from exc
    if not prompt_text:
        raise LLMExtractionError(f"Extraction prompt {_SYSTEM_PROMPT_PATH} is empty")
    return prompt_text


def render_email_prompt(email: StructuredEmail) -> str:
    """Render the user prompt for one email."""

    recipients = ", ".join(f"{r.name} <{r.email}>" for r in email.recipients)
    return (
        "Extract all people, places, events, and their relationships from the following email:\n\n"
        f"EMAIL SUBJECT: {email.subject}\n"
        f"FROM: {email.sender.name} <{email.sender.email}>\n"
        f"TO: {recipients}\n"
        f"DATE: {email.date}\n"
        "BODY:\n"
        f"{email.body}\n"
    )


class _RawPerson(BaseModel):
    name: str
    role: str | None = None
    organization: str | None = None


class _RawPlace(BaseModel):
    name: str
    type: str | None = None


class _RawEvent(BaseModel):
    name: str
    date: str | None = None
    location: str | None = None


class _RawRelationship(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    source: str
    source_type: str = Field(alias="sourceType")
    relationship: str
    target: str
    target_type: str = Field(alias="targetType")
    context: str | None = None


class _RawExtractionPayload(BaseModel):
    people: list[_RawPerson]
    places: list[_RawPlace]
    events: list[_RawEvent]
    relationships: list[_RawRelationship]


class LLMExtractor(ExtractorInterface):
    """Extractor that prompts a model per email and validates its answer before use.

    The last raw and validated payloads are kept so the caller can audit the run.
    """

    def __init__(self, client: LLMClient) -> None:
        self._client = client
        self._last_raw_output: dict[str, Any] | None = None
        self._last_validated_output: dict[str, Any] | None = None

    def extract(self, email: StructuredEmail) -> ExtractionResult:
        self._last_raw_output = None
        self._last_validated_output = None

        answer = self._client.extract_structured(render_email_prompt(email))
        payload = _decode_answer(answer)
        self._last_raw_output = payload if isinstance(payload, dict) else {}
        try:
            validated = _RawExtractionPayload.model_validate(payload)
        except ValidationError as exc:
            raise LLMExtractionError(f"Extraction answer does not match the schema: {exc}") from exc
        self._last_validated_output = validated.model_dump(mode="json", by_alias=True)
        return _to_result(validated)

    @property
    def prompt_version(self) -> str:
        return LLM_EXTRACTION_PROMPT_VERSION

    @property
    def model_name(self) -> str:
        return str(getattr(self._client, "model", self._client.__class__.__name__))

    @property
    def last_raw_output(self) -> dict[str, Any] | None:
        return self._last_raw_output

    @property
    def last_validated_output(self) -> dict[str, Any] | None:
        return self._last_validated_output


def _decode_answer(answer: dict[str, Any] | str) -> Any:
    if not isinstance(answer, str):
        return answer
    try:
        return json.loads(answer)
    except json.JSONDecodeError as exc:
        raise LLMExtractionError("Extraction answer is not valid JSON") from exc


def _to_result(payload: _RawExtractionPayload) -> ExtractionResult:
    return ExtractionResult(
        people=[
            PersonFact(name=p.name.strip(), role=_blank_to_none(p.role), organization=_blank_to_none(p.organization))
            for p in payload.people
        ],
        places=[PlaceFact(name=p.name.strip(), type=_blank_to_none(p.type)) for p in payload.places],
        events=[
            EventFact(name=e.name.strip(), date=_blank_to_none(e.date), location=_blank_to_none(e.location))
            for e in payload.events
        ],
        relationships=[
            RelationshipFact(
                source=r.source.strip(),
                source_type=r.source_type.strip(),
                relationship=r.relationship.strip(),
                target=r.target.strip(),
                target_type=r.target_type.strip(),
                context=_blank_to_none(r.context),
            )
            for r in payload.relationships
        ],
    )


def _blank_to_none(value: str | None) -> str | None:
    if value is None:
        return None
    return value.strip() or None
