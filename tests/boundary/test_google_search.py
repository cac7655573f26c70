"""Tests for GoogleSearchClient with a mocked customsearch service."""

from unittest.mock import MagicMock

import httplib2
from googleapiclient.errors import HttpError

from healthdesk.boundary.search.google_search import GoogleSearchClient
from healthdesk.configs.search import SearchSettings


def _service(payload=None, error: Exception | None = None) -> MagicMock:
    service = MagicMock()
    request = service.cse.return_value.list.return_value
    if error is not None:
        request.execute.side_effect = error
    else:
        request.execute.return_value = payload or {}
    return service


class TestGoogleSearchClient:
    """Search result mapping and failure handling."""

    def test_maps_items(self) -> None:
        service = _service(
            {"items": [{"title": "MRI cost", "snippet": "$400", "link": "https://example.org/mri"}]}
        )
        client = GoogleSearchClient(SearchSettings(api_key="k", engine_id="cx", num_results=3), service)

        results = client.search("MRI cost")

        assert results[0].title == "MRI cost"
        assert results[0].link == "https://example.org/mri"
        service.cse.return_value.list.assert_called_once_with(q="MRI cost", cx="cx", num=3)

    def test_unconfigured_returns_no_results(self) -> None:
        service = _service()
        client = GoogleSearchClient(SearchSettings(api_key="", engine_id=""), service)

        assert client.search("MRI") == []
        service.cse.assert_not_called()

    def test_http_error_returns_no_results(self) -> None:
        error = HttpError(httplib2.Response({"status": "429"}), b"quota exceeded")
        client = GoogleSearchClient(SearchSettings(api_key="k", engine_id="cx"), _service(error=error))

        assert client.search("MRI") == []

    def test_missing_items(self) -> None:
        client = GoogleSearchClient(SearchSettings(api_key="k", engine_id="cx"), _service({}))

        assert client.search("MRI") == []
