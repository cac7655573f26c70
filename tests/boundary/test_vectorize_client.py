"""Tests for the Vectorize.io client and retrieval backend."""

import json
from datetime import datetime
from unittest.mock import MagicMock

import pytest
import requests

from healthdesk.boundary.vectorize import VectorizeClient, VectorizeRetrievalBackend
from healthdesk.configs.vectorize import VectorizeSettings
from healthdesk.core.exceptions import FailureKind, IngestionStep, RetrievalError, UpsertError

BASE = "https://api.vectorize.io/v1/org/org-1"


@pytest.fixture
def vectorize_settings() -> VectorizeSettings:
    return VectorizeSettings(
        organization_id="org-1",
        pipeline_id="pipe-1",
        access_token="token-1",
        upload_connector_id="medical_insurance_booklet",
    )


@pytest.fixture
def http_session() -> MagicMock:
    return MagicMock(spec=requests.Session)


def _response(payload=None, status_code: int = 200) -> MagicMock:
    response = MagicMock()
    response.status_code = status_code
    response.json.return_value = payload or {}
    if status_code >= 400:
        response.raise_for_status.side_effect = requests.HTTPError(
            f"{status_code} error", response=response
        )
    return response


class TestRetrieve:
    """Pipeline retrieval."""

    def test_posts_question(self, vectorize_settings, http_session) -> None:
        # Arrange
        http_session.post.return_value = _response({"documents": [{"id": "d1", "text": "t"}]})
        client = VectorizeClient(vectorize_settings, session=http_session)

        # Act
        documents = client.retrieve("Is therapy covered?", num_results=3)

        # Assert
        assert documents == [{"id": "d1", "text": "t"}]
        args, kwargs = http_session.post.call_args
        assert args[0] == f"{BASE}/pipelines/pipe-1/retrieval"
        assert kwargs["json"] == {"question": "Is therapy covered?", "numResults": 3}
        assert kwargs["headers"]["Authorization"] == "Bearer token-1"

    def test_unconfigured_pipeline_fails(self, http_session) -> None:
        unconfigured = VectorizeSettings(organization_id="", pipeline_id="", access_token="")
        client = VectorizeClient(unconfigured, session=http_session)

        with pytest.raises(RetrievalError) as exc_info:
            client.retrieve("q")

        assert exc_info.value.kind == FailureKind.CREDENTIALS
        http_session.post.assert_not_called()

    def test_timeout_is_classified(self, vectorize_settings, http_session) -> None:
        http_session.post.side_effect = requests.Timeout("read timed out")

        with pytest.raises(RetrievalError) as exc_info:
            VectorizeClient(vectorize_settings, session=http_session).retrieve("q")

        assert exc_info.value.kind == FailureKind.TIMEOUT

    def test_forbidden_is_credentials(self, vectorize_settings, http_session) -> None:
        http_session.post.return_value = _response(status_code=403)

        with pytest.raises(RetrievalError) as exc_info:
            VectorizeClient(vectorize_settings, session=http_session).retrieve("q")

        assert exc_info.value.kind == FailureKind.CREDENTIALS

    def test_server_error_is_backend(self, vectorize_settings, http_session) -> None:
        http_session.post.return_value = _response(status_code=500)

        with pytest.raises(RetrievalError) as exc_info:
            VectorizeClient(vectorize_settings, session=http_session).retrieve("q")

        assert exc_info.value.kind == FailureKind.BACKEND


class TestUploadTextFile:
    """Two-step signed-URL upload."""

    def test_requests_url_then_puts_content(self, vectorize_settings, http_session) -> None:
        # Arrange
        http_session.put.side_effect = [
            _response({"uploadUrl": "https://uploads.example.com/signed"}),
            _response(),
        ]
        client = VectorizeClient(vectorize_settings, session=http_session)

        # Act
        client.upload_text_file("eob.txt", "Source: eob.txt\n", chunk_count=3)

        # Assert
        first, second = http_session.put.call_args_list
        assert first.args[0] == f"{BASE}/uploads/medical_insurance_booklet/files"
        body = first.kwargs["json"]
        assert body["name"] == "eob.txt"
        assert body["contentType"] == "text/plain"
        metadata = json.loads(body["metadata"])
        assert metadata["source"] == "eob.txt"
        assert metadata["chunks_count"] == 3
        assert metadata["document_type"] == "user_upload"
        assert datetime.fromisoformat(metadata["upload_date"]).tzinfo is not None
        assert first.kwargs["headers"]["Authorization"] == "Bearer token-1"
        assert second.args[0] == "https://uploads.example.com/signed"
        assert second.kwargs["data"] == b"Source: eob.txt\n"

    def test_failed_upload_is_upsert_error(self, vectorize_settings, http_session) -> None:
        http_session.put.return_value = _response(status_code=502)

        with pytest.raises(UpsertError) as exc_info:
            VectorizeClient(vectorize_settings, session=http_session).upload_text_file("a.txt", "x")

        assert exc_info.value.step == IngestionStep.UPSERT

    def test_missing_upload_url(self, vectorize_settings, http_session) -> None:
        http_session.put.return_value = _response({})

        with pytest.raises(UpsertError):
            VectorizeClient(vectorize_settings, session=http_session).upload_text_file("a.txt", "x")


class TestVectorizeRetrievalBackend:
    """Document -> VectorMatch mapping."""

    def test_maps_documents(self) -> None:
        client = MagicMock()
        client.retrieve.return_value = [
            {
                "id": "doc-9",
                "text": "Preventive care is covered at 100%.",
                "source": "booklet.pdf",
                "source_display_name": "Member Booklet",
                "similarity": 0.81,
                "relevancy": 0.77,
            },
            {"text": "No id here"},
        ]

        matches = VectorizeRetrievalBackend(client).search("preventive care", top_k=2)

        client.retrieve.assert_called_once_with("preventive care", num_results=2)
        assert matches[0].id == "doc-9"
        assert matches[0].score == pytest.approx(0.81)
        assert matches[0].metadata["source_display_name"] == "Member Booklet"
        assert matches[0].text == "Preventive care is covered at 100%."
        assert matches[1].id == "vectorize_1"
        assert matches[1].score == 0.0
