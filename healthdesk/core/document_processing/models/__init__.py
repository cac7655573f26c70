"""
Models for document processing pipeline.

Exports: Chunk, ChunkMetadata, UploadedDocument, IngestionResult
"""

from .chunk import Chunk, ChunkMetadata, chunk_id_for
from .pipeline_result import IngestionResult, UploadedDocument

__all__ = [
    "Chunk",
    "ChunkMetadata",
    "chunk_id_for",
    "IngestionResult",
    "UploadedDocument",
]
