"""Extractor interface for pluggable extraction implementations."""

from abc import ABC, abstractmethod

from mailgraph.extraction.types import ExtractionResult
from mailgraph.ingestion.types import StructuredEmail


class ExtractorInterface(ABC):
    """Abstract extractor interface."""

    @abstractmethod
    def extract(self, email: StructuredEmail) -> ExtractionResult:
        """Extract people, places, events, and relationships from one email."""
