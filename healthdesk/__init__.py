"""HealthDesk backend: healthcare document ingestion, retrieval and tool calls."""
