"""Domain logic: ingestion, retrieval, sessions and tools."""
