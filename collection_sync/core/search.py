"""Search request construction and result normalization."""

import logging
from typing import Any

from ..errors import ResponseSchemaError, SearchError
from ..models.documents import DocumentDescriptor
from .client import GleanAPIError, GleanClient
from .filters import parse_filters, to_facet_filters

logger = logging.getLogger(__name__)

# The search is a single page; results past this are not synced.
DEFAULT_PAGE_SIZE = 1000


def build_search_payload(query: str, filters: str, page_size: int = DEFAULT_PAGE_SIZE) -> dict[str, Any]:
    """Build a search request body.

    An empty query is left out of the payload entirely, and an empty filter
    expression yields an empty facet filter list.

    Raises:
        FilterParseError: If the filter expression is malformed
    """
    payload: dict[str, Any] = {
        "pageSize": page_size,
        "requestOptions": {"facetFilters": to_facet_filters(parse_filters(filters))},
    }
    if query:
        payload["query"] = query
    return payload


def extract_documents(response: dict[str, Any]) -> list[DocumentDescriptor]:
    """Normalize a search response into document descriptors.

    A missing ``results`` list means zero matches.
    """
    results = response.get("results") or []
    if not isinstance(results, list):
        raise ResponseSchemaError("Search response 'results' is not a list")
    return [DocumentDescriptor.from_item(item) for item in results]


class QueryExecutor:
    """Runs a saved search and returns the matching documents."""

    def __init__(self, client: GleanClient, page_size: int = DEFAULT_PAGE_SIZE) -> None:
        self.client = client
        self.page_size = page_size

    def run(self, query: str, filters: str) -> list[DocumentDescriptor]:
        """Execute the search for a query and filter expression.

        Raises:
            FilterParseError: If the filter expression is malformed
            SearchError: If the search call fails
        """
        payload = build_search_payload(query, filters, self.page_size)

        try:
            response = self.client.search(payload)
        except GleanAPIError as e:
            raise SearchError(f"Search failed: {e}") from e

        documents = extract_documents(response)
        if len(documents) >= self.page_size:
            logger.warning(
                "Search returned %d results, the page size limit; further matches are not synced",
                len(documents),
            )
        return documents
