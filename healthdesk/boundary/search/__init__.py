"""Web search boundary."""

from .google_search import GoogleSearchClient, SearchResult

__all__ = ["GoogleSearchClient", "SearchResult"]
