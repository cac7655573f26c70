"""
Task modules for document processing pipeline.

Exports: TextExtractionTask, WindowChunkingTask, WordChunkingTask,
VectorStoreSink, VectorizeSink
"""

from .chunking_task import ChunkingTask, WindowChunkingTask, WordChunkingTask
from .extraction_task import TextExtractionTask
from .vector_store_task import DocumentSink, VectorizeSink, VectorStoreSink

__all__ = [
    "ChunkingTask",
    "WindowChunkingTask",
    "WordChunkingTask",
    "TextExtractionTask",
    "DocumentSink",
    "VectorizeSink",
    "VectorStoreSink",
]
