"""
Text chunking tasks.

WindowChunkingTask slides a fixed-size character window with overlap and
feeds the Vectorize.io upload. WordChunkingTask packs whole words without
overlap (CharacterTextSplitter) and is used for the embedding vector index.

Both emit contiguous chunk indices and a total_chunks equal to the number of
chunks actually emitted.

Dependencies: langchain_text_splitters, pydantic
System role: Second stage of document ingestion pipeline
"""

import logging
from typing import Protocol

from langchain_text_splitters import CharacterTextSplitter

from healthdesk.core.document_processing.models import Chunk, ChunkMetadata, chunk_id_for
from healthdesk.core.exceptions import ValidationError

logger = logging.getLogger(__name__)

# (start, end, trimmed text)
_Span = tuple[int, int, str]


class ChunkingTask(Protocol):
    """Splits extracted text into chunks for one document."""

    def chunk(self, text: str, filename: str) -> list[Chunk]: ...


def _build_chunks(spans: list[_Span], filename: str) -> list[Chunk]:
    """Attach ids and metadata once the emitted count is known."""
    total = len(spans)
    chunks = []
    for index, (start, end, text) in enumerate(spans):
        metadata = ChunkMetadata(
            source=filename,
            source_display_name=filename,
            filename=filename,
            chunk_index=index,
            total_chunks=total,
        )
        chunks.append(
            Chunk(
                id=chunk_id_for(filename, index),
                text=text,
                start=start,
                end=end,
                metadata=metadata,
            )
        )
    return chunks


class WindowChunkingTask:
    """Split text with a sliding character window."""

    def __init__(
        self,
        chunk_size: int = 1000,
        chunk_overlap: int = 200,
        min_chunk_chars: int = 50,
    ) -> None:
        """
        Initialize window chunker.

        Args:
            chunk_size: Window size in characters
            chunk_overlap: Characters shared by consecutive windows
            min_chunk_chars: Trimmed windows shorter than this are dropped,
                unless the document would otherwise have no chunk at all

        Raises:
            ValidationError: Overlap is not smaller than the window
        """
        if chunk_size <= 0:
            raise ValidationError("chunk_size must be positive", field="chunk_size")
        if chunk_overlap < 0 or chunk_overlap >= chunk_size:
            raise ValidationError(
                "chunk_overlap must be non-negative and smaller than chunk_size",
                field="chunk_overlap",
                details={"chunk_size": chunk_size, "chunk_overlap": chunk_overlap},
            )
        self._chunk_size = chunk_size
        self._chunk_overlap = chunk_overlap
        self._min_chunk_chars = min_chunk_chars

    @property
    def step(self) -> int:
        return self._chunk_size - self._chunk_overlap

    def chunk(self, text: str, filename: str) -> list[Chunk]:
        """
        Split text into overlapping windows.

        Args:
            text: Extracted document text
            filename: Source filename (used for ids and metadata)

        Returns:
            list[Chunk]: Chunks with contiguous indices; empty for blank text
        """
        candidates: list[_Span] = []
        for start in range(0, len(text), self.step):
            end = min(start + self._chunk_size, len(text))
            trimmed = text[start:end].strip()
            if trimmed:
                candidates.append((start, end, trimmed))

        spans = [span for span in candidates if len(span[2]) >= self._min_chunk_chars]
        if not spans and candidates:
            # Short document: keep its first non-blank window as the sole chunk
            spans = candidates[:1]

        dropped = len(candidates) - len(spans)
        if dropped:
            logger.debug(
                "Dropped short windows",
                extra={"document_name": filename, "dropped": dropped},
            )

        return _build_chunks(spans, filename)


class WordChunkingTask:
    """Pack whole space-separated words into chunks without overlap."""

    def __init__(self, chunk_size: int = 1000) -> None:
        if chunk_size <= 0:
            raise ValidationError("chunk_size must be positive", field="chunk_size")
        self._splitter = CharacterTextSplitter(
            separator=" ",
            chunk_size=chunk_size,
            chunk_overlap=0,
            add_start_index=True,
            length_function=len,
        )

    def chunk(self, text: str, filename: str) -> list[Chunk]:
        """Split text on word boundaries; the last partial chunk is always kept."""
        if not text.strip():
            return []

        documents = self._splitter.create_documents([text])
        spans: list[_Span] = []
        for document in documents:
            start = max(document.metadata.get("start_index", 0), 0)
            spans.append((start, start + len(document.page_content), document.page_content))

        return _build_chunks(spans, filename)
