"""
Retrieval response models.

Dependencies: pydantic
System role: Result of RetrievalOrchestrator.retrieve()
"""

from pydantic import BaseModel, ConfigDict, Field


class Source(BaseModel):
    """Citation for one retrieved chunk."""

    id: str = Field(description="Vector or document identifier")
    title: str = Field(description="Display title")
    snippet: str = Field(description="Chunk text")
    url: str = Field(default="", description="Source location, if known")
    similarity: float = Field(description="Backend similarity score")


class RetrievalResult(BaseModel):
    """Formatted context plus the sources it came from."""

    model_config = ConfigDict(populate_by_name=True)

    context_documents: str = Field(alias="contextDocuments", description="Context text for the LLM")
    sources: list[Source] = Field(default_factory=list)
    backend: str | None = Field(default=None, description="Backend that answered")
    attempted: list[str] = Field(default_factory=list, description="Backends tried, in order")
