"""
Medical test cost lookup.

Searches the web for a test or procedure and pulls dollar amounts out of
result titles and snippets. Always returns display text; when nothing is
found it falls back to neutral guidance.

Dependencies: healthdesk.boundary.search
System role: Backing service for the getMedicalTestCost tool
"""

import logging
import re

from healthdesk.boundary.search.google_search import GoogleSearchClient, SearchResult

logger = logging.getLogger(__name__)

COST_PATTERNS = [
    re.compile(r"\$[\d,]+(?:\s*-\s*\$[\d,]+)?"),
    re.compile(r"[\d,]+\s*(?:to|-)?\s*[\d,]+\s*dollars?", re.IGNORECASE),
    re.compile(r"costs?\s+(?:range|between|from)?\s*\$?[\d,]+", re.IGNORECASE),
    re.compile(r"average\s+(?:cost|price)\s*:?\s*\$?[\d,]+", re.IGNORECASE),
]
_COST_PREFIX = re.compile(r"costs?\s+(?:range|between|from)?\s*", re.IGNORECASE)
MAX_COSTS = 3


def extract_costs(results: list[SearchResult]) -> list[str]:
    """First three distinct cost mentions across results, in order found."""
    found: list[str] = []
    for result in results:
        text = f"{result.title} {result.snippet}".lower()
        for pattern in COST_PATTERNS:
            found.extend(pattern.findall(text))

    unique = list(dict.fromkeys(found))[:MAX_COSTS]
    return [_COST_PREFIX.sub("", cost).strip() for cost in unique]


class CostLookupService:
    """Web-search-backed cost estimates."""

    def __init__(self, search_client: GoogleSearchClient) -> None:
        self._search_client = search_client

    def lookup(self, test_name: str) -> str:
        """
        Build a cost summary for a medical test.

        Args:
            test_name: Test or procedure name

        Returns:
            str: Formatted estimate or a fallback message
        """
        query = f'{test_name} cost price medical test procedure "average cost" "$"'
        try:
            results = self._search_client.search(query)
        except Exception as e:
            logger.error("Cost lookup failed", extra={"test_name": test_name, "error": str(e)})
            return (
                f"Unable to retrieve cost information for {test_name} at this time. "
                "Please try again later."
            )

        if not results:
            return (
                f"Unable to find current cost information for {test_name}. "
                "Please consult with healthcare providers for accurate pricing."
            )

        costs = extract_costs(results)
        if costs:
            return (
                f"{test_name} Cost Estimate:\n\n"
                f"Based on current data: {', '.join(costs)}\n\n"
                "Note: Costs vary significantly by location, insurance coverage, and "
                "healthcare provider. Always verify with your specific provider."
            )

        return (
            f"{test_name} costs vary widely based on location and provider. "
            f"Typical ranges are $200-$3,000+ depending on the type of {test_name.lower()}, "
            "location, and insurance coverage. Contact your healthcare provider for specific pricing."
        )
