"""Email corpus to knowledge-graph ingestion backend."""
