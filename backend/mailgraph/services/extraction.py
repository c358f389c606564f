"""Extractor construction and extraction audit logging."""

from typing import Any

from sqlalchemy.orm import Session

from mailgraph.config import get_settings
from mailgraph.extraction.extractor_interface import ExtractorInterface
from mailgraph.extraction.llm_extractor import LLMExtractionError, LLMExtractor, OpenAIChatCompletionsClient
from mailgraph.extraction.types import ExtractionResult
from mailgraph.models.extractor_run import ExtractorRun


def get_default_extractor() -> ExtractorInterface:
    """Build the LLM extractor from settings."""

    settings = get_settings()
    if not settings.openai_api_key:
        raise LLMExtractionError(
            "OPENAI_API_KEY is not configured; set it in backend/.env to ingest emails."
        )
    return LLMExtractor(
        OpenAIChatCompletionsClient(
            api_key=settings.openai_api_key,
            model=settings.openai_model,
            base_url=settings.openai_base_url,
            timeout_seconds=settings.openai_timeout_seconds,
        )
    )


def log_extractor_run(
    db: Session,
    *,
    email_id: str,
    extractor: ExtractorInterface,
    extraction_result: ExtractionResult,
) -> ExtractorRun:
    """Record which extractor produced a result, with its raw and validated payloads."""

    serialized_result = extraction_result.to_payload()
    raw_output = _json_object_or_none(getattr(extractor, "last_raw_output", None))
    validated_output = _json_object_or_none(getattr(extractor, "last_validated_output", None))
    run = ExtractorRun(
        email_id=email_id,
        model_name=str(getattr(extractor, "model_name", extractor.__class__.__name__)),
        prompt_version=str(getattr(extractor, "prompt_version", "unknown")),
        raw_output_json=raw_output if raw_output is not None else serialized_result,
        validated_output_json=validated_output if validated_output is not None else serialized_result,
    )
    db.add(run)
    db.flush()
    return run


def _json_object_or_none(value: Any) -> dict[str, Any] | None:
    return value if isinstance(value, dict) else None
