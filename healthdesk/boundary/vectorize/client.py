"""
Vectorize.io REST client.

Retrieval against a managed Vectorize.io pipeline and two-step file upload
to its file-upload connector (request a signed URL, then PUT the content).

Dependencies: requests
System role: Secondary retrieval backend and alternate ingestion sink
"""

import json
import logging
from datetime import datetime, timezone
from typing import Any

import requests

from healthdesk.boundary.vdb.vector_schemas import VectorMatch
from healthdesk.configs.vectorize import VectorizeSettings
from healthdesk.core.exceptions import FailureKind, RetrievalError, UpsertError

logger = logging.getLogger(__name__)


def _classify(error: requests.RequestException) -> FailureKind:
    if isinstance(error, requests.Timeout):
        return FailureKind.TIMEOUT
    response = getattr(error, "response", None)
    if response is not None and response.status_code in (401, 403):
        return FailureKind.CREDENTIALS
    return FailureKind.BACKEND


class VectorizeClient:
    """Thin Vectorize.io API client."""

    def __init__(
        self,
        settings: VectorizeSettings,
        session: requests.Session | None = None,
    ) -> None:
        """
        Initialize client.

        Args:
            settings: Vectorize.io settings
            session: Optional requests session (shared connection pool)
        """
        self._settings = settings
        self._session = session or requests.Session()

    @property
    def _org_url(self) -> str:
        return f"{self._settings.base_url.rstrip('/')}/org/{self._settings.organization_id}"

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self._settings.access_token}",
            "Content-Type": "application/json",
        }

    def retrieve(self, question: str, num_results: int | None = None) -> list[dict[str, Any]]:
        """
        Retrieve documents for a question.

        Returns:
            list[dict]: Raw documents (id, text, source, source_display_name,
                similarity, relevancy)

        Raises:
            RetrievalError: Request failed or pipeline not configured
        """
        if not self._settings.is_configured:
            raise RetrievalError(
                "Vectorize.io pipeline is not configured",
                backend="vectorize",
                kind=FailureKind.CREDENTIALS,
            )

        url = f"{self._org_url}/pipelines/{self._settings.pipeline_id}/retrieval"
        payload = {"question": question, "numResults": num_results or self._settings.num_results}
        try:
            response = self._session.post(
                url,
                json=payload,
                headers=self._headers(),
                timeout=self._settings.request_timeout,
            )
            response.raise_for_status()
        except requests.RequestException as e:
            raise RetrievalError(
                f"Vectorize.io retrieval failed: {e}",
                backend="vectorize",
                kind=_classify(e),
            ) from e

        return response.json().get("documents", [])

    def upload_text_file(self, filename: str, content: str, chunk_count: int = 1) -> None:
        """
        Upload text to the file-upload connector.

        The upload-URL request carries the document metadata (source,
        upload date, chunk count) as a JSON string.

        Raises:
            UpsertError: Either request failed
        """
        url = f"{self._org_url}/uploads/{self._settings.upload_connector_id}/files"
        try:
            response = self._session.put(
                url,
                json={
                    "name": filename,
                    "contentType": "text/plain",
                    "metadata": json.dumps(
                        {
                            "source": filename,
                            "upload_date": datetime.now(timezone.utc).isoformat(),
                            "chunks_count": chunk_count,
                            "document_type": "user_upload",
                        }
                    ),
                },
                headers=self._headers(),
                timeout=self._settings.request_timeout,
            )
            response.raise_for_status()
            upload_url = response.json()["uploadUrl"]

            upload = self._session.put(
                upload_url,
                data=content.encode("utf-8"),
                headers={"Content-Type": "text/plain"},
                timeout=self._settings.request_timeout,
            )
            upload.raise_for_status()
        except requests.RequestException as e:
            raise UpsertError(
                f"Vectorize.io upload failed: {e}",
                batch_index=0,
                kind=_classify(e),
            ) from e
        except KeyError as e:
            raise UpsertError("Vectorize.io upload URL missing from response", batch_index=0) from e

        logger.info(
            "Uploaded document to Vectorize.io",
            extra={"document_name": filename, "connector": self._settings.upload_connector_id},
        )


class VectorizeRetrievalBackend:
    """Adapts VectorizeClient to the retrieval backend interface."""

    name = "vectorize"

    def __init__(self, client: VectorizeClient) -> None:
        self._client = client

    def search(self, question: str, top_k: int) -> list[VectorMatch]:
        documents = self._client.retrieve(question, num_results=top_k)
        matches = []
        for position, doc in enumerate(documents):
            metadata = {
                "text": doc.get("text", ""),
                "source": doc.get("source", ""),
                "source_display_name": doc.get("source_display_name", ""),
                "relevancy": doc.get("relevancy"),
            }
            matches.append(
                VectorMatch(
                    id=str(doc.get("id") or f"vectorize_{position}"),
                    score=float(doc.get("similarity") or 0.0),
                    metadata=metadata,
                )
            )
        return matches
