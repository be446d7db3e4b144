"""HTTP client wrapper for the Glean client API."""

import json
import logging
from typing import Any

import requests

from ..models.documents import Collection
from ..errors import ResponseSchemaError
from .auth import GleanAuth

logger = logging.getLogger(__name__)

NAME_EXISTS = "NAME_EXISTS"


class GleanAPIError(Exception):
    """Exception raised for Glean API errors."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        error_code: str | None = None,
        response: Any = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.error_code = error_code
        self.response = response

    @property
    def name_exists(self) -> bool:
        """True when the error reports a collection name clash."""
        return self.error_code == NAME_EXISTS


def _error_code(response: requests.Response) -> str | None:
    """Pull ``error.errorCode`` out of a structured error body, if any."""
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict) and isinstance(body.get("error"), dict):
        return body["error"].get("errorCode")
    return None


class GleanClient:
    """HTTP client for the Glean collections and search endpoints."""

    def __init__(self, auth: GleanAuth, timeout: int = 30) -> None:
        """Initialize client with authentication.

        Args:
            auth: GleanAuth instance
            timeout: Seconds to wait for each request
        """
        self.auth = auth
        self.timeout = timeout
        self.session = requests.Session()
        self.session.headers.update(auth.get_headers())

    def close(self) -> None:
        """Close the underlying HTTP session."""
        self.session.close()

    def _log_request(self, response: requests.Response, json_data: dict[str, Any] | None) -> None:
        """Log request and response details at debug level."""
        if not logger.isEnabledFor(logging.DEBUG):
            return
        headers = {
            key: ("Bearer ***" if key.lower() == "authorization" else value)
            for key, value in self.session.headers.items()
        }
        logger.debug("Endpoint: %s", response.url)
        logger.debug("Method: %s", response.request.method if response.request else "POST")
        logger.debug("Headers: %s", headers)
        if json_data is not None:
            logger.debug("Body: %s", json.dumps(json_data))
        logger.debug("Response Status Code: %s", response.status_code)
        logger.debug("Response Body: %s", response.text[:2000])

    def post(self, endpoint: str, json_data: dict[str, Any] | None = None) -> dict[str, Any]:
        """Make an authenticated POST request.

        Args:
            endpoint: Endpoint name (e.g. "search")
            json_data: Optional JSON body data

        Returns:
            Parsed JSON response

        Raises:
            GleanAPIError: On API errors
        """
        url = self.auth.get_full_url(endpoint)

        try:
            response = self.session.post(url, json=json_data, timeout=self.timeout)
        except requests.RequestException as e:
            raise GleanAPIError(f"Request to {endpoint} failed: {e}") from e

        self._log_request(response, json_data)

        if response.status_code >= 400:
            error_msg = f"API error {response.status_code} from {endpoint}: {response.text[:500]}"
            raise GleanAPIError(error_msg, response.status_code, _error_code(response), response)

        # Handle empty responses
        if not response.content:
            return {}

        try:
            data = response.json()
        except ValueError as e:
            raise ResponseSchemaError(f"Response from {endpoint} is not JSON: {e}") from e

        if not isinstance(data, dict):
            raise ResponseSchemaError(f"Response from {endpoint} is not a JSON object")
        return data

    # -------------------------------------------------------------------------
    # Search
    # -------------------------------------------------------------------------

    def search(self, payload: dict[str, Any]) -> dict[str, Any]:
        """Run a search request and return the raw response."""
        return self.post("search", payload)

    # -------------------------------------------------------------------------
    # Collection Operations
    # -------------------------------------------------------------------------

    def create_collection(self, name: str) -> dict[str, Any]:
        """Create a collection.

        Returns:
            Created collection payload (contains ``id``)

        Raises:
            GleanAPIError: With ``name_exists`` set when the name is taken
        """
        return self.post("createcollection", {"name": name})

    def list_collections(self) -> list[Collection]:
        """List every collection visible to the acting user."""
        response = self.post("listcollections")
        return [Collection.from_dict(entry) for entry in response.get("collections") or []]

    def get_collection_items(self, collection_id: str | int) -> list[dict[str, Any]]:
        """Get the raw items currently in a collection."""
        response = self.post("getcollection", {"id": collection_id, "withItems": True})
        collection = response.get("collection")
        if isinstance(collection, dict) and "items" in collection:
            return collection.get("items") or []
        return response.get("items") or []

    def add_collection_item(self, collection_id: str | int, item: dict[str, Any]) -> dict[str, Any]:
        """Add a single item descriptor to a collection."""
        payload = {"collectionId": collection_id, "addedCollectionItemDescriptors": [item]}
        return self.post("addcollectionitems", payload)

    def delete_collection_item(
        self,
        collection_id: str | int,
        document_id: str,
        item_id: str | None = None,
    ) -> dict[str, Any]:
        """Remove a document from a collection, addressed by document id."""
        payload = {"collectionId": collection_id, "itemId": item_id, "documentId": document_id}
        return self.post("deletecollectionitem", payload)

    # -------------------------------------------------------------------------
    # Health Check
    # -------------------------------------------------------------------------

    def verify_connection(self) -> bool:
        """Verify API connectivity and authentication.

        Raises:
            GleanAPIError: On connection or auth failure
        """
        self.post("listcollections")
        return True
