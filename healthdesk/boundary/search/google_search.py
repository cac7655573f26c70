"""
Google Programmable Search client.

Dependencies: google-api-python-client
System role: Web search for medical cost lookups
"""

import logging
from typing import Any

from googleapiclient.discovery import build
from googleapiclient.errors import HttpError
from pydantic import BaseModel

from healthdesk.configs.search import SearchSettings

logger = logging.getLogger(__name__)


class SearchResult(BaseModel):
    """Single web search hit."""

    title: str = ""
    snippet: str = ""
    link: str = ""


class GoogleSearchClient:
    """Custom Search JSON API client; failures read as no results."""

    def __init__(self, settings: SearchSettings, service: Any | None = None) -> None:
        """
        Initialize client.

        Args:
            settings: Search settings (API key and engine id)
            service: Prebuilt customsearch service (built lazily otherwise)
        """
        self._settings = settings
        self._service = service

    @property
    def is_configured(self) -> bool:
        return bool(self._settings.api_key and self._settings.engine_id)

    def _get_service(self) -> Any:
        if self._service is None:
            self._service = build(
                "customsearch",
                "v1",
                developerKey=self._settings.api_key,
                cache_discovery=False,
            )
        return self._service

    def search(self, query: str) -> list[SearchResult]:
        """
        Run a web search.

        Returns:
            list[SearchResult]: Hits; empty when unconfigured or the API fails
        """
        if not self.is_configured:
            logger.warning("Google search credentials not configured")
            return []

        try:
            response = (
                self._get_service()
                .cse()
                .list(q=query, cx=self._settings.engine_id, num=self._settings.num_results)
                .execute()
            )
        except HttpError as e:
            logger.error("Google search failed", extra={"status": e.status_code, "error": str(e)})
            return []

        return [
            SearchResult(
                title=item.get("title") or "",
                snippet=item.get("snippet") or "",
                link=item.get("link") or "",
            )
            for item in response.get("items", [])
        ]
