"""Vectorize.io boundary."""

from .client import VectorizeClient, VectorizeRetrievalBackend

__all__ = ["VectorizeClient", "VectorizeRetrievalBackend"]
