"""
Document processing pipeline for ingestion.

Dependencies: pypdf, langchain_text_splitters, pydantic
System role: Document ingestion pipeline entrypoint
"""

from .entrypoint import DocumentPipeline
from .models import Chunk, ChunkMetadata, IngestionResult, UploadedDocument

__all__ = [
    "DocumentPipeline",
    "Chunk",
    "ChunkMetadata",
    "IngestionResult",
    "UploadedDocument",
]
