"""Find or create a collection by name."""

import logging

from ..errors import CollectionCreationError, CollectionNotFoundError, ResponseSchemaError
from ..models.documents import Collection
from .client import GleanAPIError, GleanClient

logger = logging.getLogger(__name__)


class CollectionLocator:
    """Resolves a collection name to an id, creating the collection if needed."""

    def __init__(self, client: GleanClient) -> None:
        self.client = client

    def find(self, name: str) -> Collection | None:
        """Find a collection whose name matches exactly (case-sensitive)."""
        for collection in self.client.list_collections():
            if collection.name == name:
                return collection
        return None

    def ensure(self, name: str) -> tuple[str | int, bool]:
        """Create the named collection, or locate it if the name is taken.

        Args:
            name: Collection name

        Returns:
            Tuple of (collection id, True if the collection was just created)

        Raises:
            CollectionNotFoundError: If the name is taken but no listed collection has it
            CollectionCreationError: On any other creation failure
        """
        try:
            response = self.client.create_collection(name)
        except GleanAPIError as e:
            if not e.name_exists:
                raise CollectionCreationError(f"Error creating collection '{name}': {e}") from e
            logger.info("Collection '%s' already exists, looking it up", name)
        else:
            collection_id = response.get("id")
            if collection_id is None and isinstance(response.get("collection"), dict):
                collection_id = response["collection"].get("id")
            if collection_id is None:
                raise ResponseSchemaError(f"Create response for '{name}' has no collection id")
            logger.info("Created collection '%s' (id %s)", name, collection_id)
            return collection_id, True

        try:
            existing = self.find(name)
        except GleanAPIError as e:
            raise CollectionCreationError(f"Error listing collections for '{name}': {e}") from e

        if existing is None:
            raise CollectionNotFoundError(name)
        return existing.id, False
