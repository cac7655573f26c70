"""
Healthcare tools exposed to the chat agent.

searchDocuments wraps retrieval context in fixed LLM instructions,
getMedicalTestCost returns the cost lookup text verbatim, and
uploadDocument ingests base64 content after a healthcare keyword gate.
Each handler catches its own errors and returns a failure ToolResult.

Dependencies: healthdesk.core.retriever, healthdesk.core.document_processing
System role: Tool handlers registered in the ToolRegistry
"""

import base64
import binascii
import logging
import time
from typing import Any

from healthdesk.core.document_processing import DocumentPipeline, UploadedDocument
from healthdesk.core.exceptions import HealthDeskException
from healthdesk.core.retriever import RetrievalOrchestrator
from healthdesk.core.tools.cost_lookup import CostLookupService
from healthdesk.core.tools.registry import ToolRegistry, ToolSpec
from healthdesk.models.tools import ToolResult

logger = logging.getLogger(__name__)

SEARCH_RESULTS_TEMPLATE = (
    "DOCUMENT SEARCH RESULTS:\n\n{context}\n\n"
    "IMPORTANT: Base your answer ONLY on the information above. Format with proper "
    "bullet points (•), bold important terms, and NO disclaimers or hedge words."
)

UPLOAD_MIME_TYPES = ("text/plain", "application/pdf")

HEALTHCARE_KEYWORDS = (
    # Insurance terms
    "insurance", "policy", "premium", "deductible", "copay", "coinsurance", "coverage",
    "benefit", "claim", "eob", "explanation of benefits", "medicare", "medicaid", "hmo",
    "ppo", "fep",
    # Medical terms
    "medical", "health", "healthcare", "physician", "doctor", "hospital", "clinic",
    "prescription", "medication", "treatment", "diagnosis", "procedure", "surgery",
    "therapy", "preventive",
    # Document types
    "medical record", "discharge summary", "lab result", "radiology", "pathology",
    "immunization", "vaccination", "physical exam", "wellness", "screening", "mammogram",
    "colonoscopy",
    # Conditions
    "diabetes", "hypertension", "cancer", "heart", "mental health", "depression", "anxiety",
    # Insurers
    "blue cross", "blue shield", "aetna", "cigna", "humana", "kaiser", "unitedhealth",
    "bcbs", "anthem", "molina", "centene",
)


def is_healthcare_document(filename: str, text: str) -> bool:
    """True when the filename or the text mentions a healthcare keyword."""
    haystacks = (filename.lower(), text.lower())
    return any(keyword in haystack for haystack in haystacks for keyword in HEALTHCARE_KEYWORDS)


def _rejection_message(filename: str) -> str:
    return (
        "**Document Upload Rejected**\n\n"
        f"**File**: {filename}\n"
        "**Reason**: This document does not appear to be healthcare-related\n\n"
        "**Healthcare Content Required**:\n"
        "The upload tool is specifically designed for healthcare documents such as:\n"
        "• Insurance policies and cards\n"
        "• Medical records and reports\n"
        "• Explanation of Benefits (EOB)\n"
        "• Prescription information\n"
        "• Lab results and test reports\n"
        "• Healthcare provider documents\n\n"
        "**Suggestion**: Please upload healthcare-related documents only."
    )


def _success_message(filename: str, size_bytes: int, mime_type: str, chunk_count: int) -> str:
    return (
        "**Document Upload Successful**\n\n"
        f"**File**: {filename}\n"
        f"**Size**: {size_bytes / 1024:.1f} KB\n"
        f"**Type**: {mime_type}\n"
        f"**Chunks**: {chunk_count}\n\n"
        "**Processing Results**:\n"
        "• Text extracted and chunked for search\n"
        "• Vectors generated and stored in the document index\n"
        "• Document is now searchable via the searchDocuments tool"
    )


def _failure_message(filename: str, error: str) -> str:
    return (
        "**Document Upload Failed**\n\n"
        f"**File**: {filename}\n"
        f"**Error**: {error}\n\n"
        "**Troubleshooting Tips**:\n"
        "• Ensure the file is a supported format (PDF, TXT)\n"
        "• Check that the file size is under 10MB\n"
        "• Verify the document content is properly encoded"
    )


def make_search_documents_handler(retriever: RetrievalOrchestrator):
    def handle(arguments: dict[str, Any]) -> ToolResult:
        try:
            result = retriever.retrieve(str(arguments["query"]))
        except Exception as e:
            return ToolResult(success=False, error=f"Error searching documents: {e}")
        return ToolResult(
            success=True,
            data=SEARCH_RESULTS_TEMPLATE.format(context=result.context_documents),
        )

    return handle


def make_cost_lookup_handler(cost_lookup: CostLookupService):
    def handle(arguments: dict[str, Any]) -> ToolResult:
        try:
            return ToolResult(success=True, data=cost_lookup.lookup(str(arguments["testName"])))
        except Exception as e:
            return ToolResult(success=False, error=f"Error getting medical test cost: {e}")

    return handle


def make_upload_document_handler(pipeline: DocumentPipeline):
    def handle(arguments: dict[str, Any]) -> ToolResult:
        filename = str(arguments["filename"])
        mime_type = str(arguments["mimeType"])

        if mime_type not in UPLOAD_MIME_TYPES:
            return ToolResult(
                success=False,
                error=_failure_message(
                    filename,
                    f"Unsupported file type: {mime_type}. Only PDF and TXT files are supported.",
                ),
            )

        try:
            content = base64.b64decode(str(arguments["content"]), validate=True)
        except (binascii.Error, ValueError):
            return ToolResult(
                success=False,
                error=_failure_message(filename, "Content is not valid base64"),
            )

        started_at = time.perf_counter()
        document = UploadedDocument(filename=filename, content=content, mime_type=mime_type)
        try:
            text = pipeline.extract(document)
            if not is_healthcare_document(filename, text):
                logger.info("Rejected non-healthcare upload", extra={"document_name": filename})
                return ToolResult(success=False, error=_rejection_message(filename))
            result = pipeline.ingest_text(text, filename, started_at=started_at)
        except HealthDeskException as e:
            return ToolResult(success=False, error=_failure_message(filename, e.message))

        return ToolResult(
            success=True,
            data=_success_message(filename, len(content), mime_type, result.chunk_count),
        )

    return handle


def build_tool_registry(
    retriever: RetrievalOrchestrator,
    cost_lookup: CostLookupService,
    upload_pipeline: DocumentPipeline,
) -> ToolRegistry:
    """Register the healthcare tools."""
    return ToolRegistry(
        [
            ToolSpec(
                name="searchDocuments",
                description=(
                    "Search through vectorized documents to find relevant information based "
                    "on questions regarding Health Insurance and Medical procedures"
                ),
                handler=make_search_documents_handler(retriever),
                input_schema={
                    "type": "object",
                    "properties": {
                        "query": {
                            "type": "string",
                            "description": "The search query to find relevant documents",
                        }
                    },
                    "required": ["query"],
                },
            ),
            ToolSpec(
                name="getMedicalTestCost",
                description=(
                    "Search for cost estimates of medical tests and procedures using web search"
                ),
                handler=make_cost_lookup_handler(cost_lookup),
                input_schema={
                    "type": "object",
                    "properties": {
                        "testName": {
                            "type": "string",
                            "description": (
                                "The name of the medical test or procedure to search for "
                                "cost information"
                            ),
                        }
                    },
                    "required": ["testName"],
                },
            ),
            ToolSpec(
                name="uploadDocument",
                description=(
                    "Upload and process HEALTHCARE-ONLY documents (PDF, TXT) to the medical "
                    "knowledge base. Documents without medical, insurance, or healthcare "
                    "content are rejected."
                ),
                handler=make_upload_document_handler(upload_pipeline),
                input_schema={
                    "type": "object",
                    "properties": {
                        "content": {
                            "type": "string",
                            "description": "Base64 encoded content of the document",
                        },
                        "filename": {
                            "type": "string",
                            "description": "Name of the file including extension",
                        },
                        "mimeType": {
                            "type": "string",
                            "description": "MIME type ('application/pdf' or 'text/plain')",
                        },
                    },
                    "required": ["content", "filename", "mimeType"],
                },
            ),
        ]
    )
