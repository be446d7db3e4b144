"""Typed shapes for documents, filters and collections exchanged with Glean."""

from dataclasses import dataclass
from typing import Any

from ..errors import ResponseSchemaError

DEFAULT_ITEM_TYPE = "DOCUMENT"
EQUALS = "EQUALS"


@dataclass(frozen=True)
class FilterClause:
    """A single field-equality constraint within a facet filter."""

    value: str
    relation: str = EQUALS

    def to_dict(self) -> dict[str, str]:
        """Convert to the request shape used by the search API."""
        return {"value": self.value, "relationType": self.relation}


@dataclass(frozen=True)
class DocumentDescriptor:
    """Normalized view of a search result or collection item."""

    document_id: str
    name: str
    title: str
    url: str
    item_type: str = DEFAULT_ITEM_TYPE

    @classmethod
    def from_item(cls, item: Any) -> "DocumentDescriptor":
        """Create from a raw search result or collection item.

        Both shapes wrap the document under a ``document`` key and may carry
        an ``itemType`` next to it. The document title is used for both the
        name and the title.

        Raises:
            ResponseSchemaError: If the item has no document or document id
        """
        if not isinstance(item, dict):
            raise ResponseSchemaError(f"Expected an object for result item, got {type(item).__name__}")

        document = item.get("document")
        if not isinstance(document, dict):
            raise ResponseSchemaError("Result item has no 'document' object")

        document_id = document.get("id")
        if not isinstance(document_id, str) or not document_id:
            raise ResponseSchemaError("Result document has no 'id'")

        title = document.get("title") or ""
        return cls(
            document_id=document_id,
            name=title,
            title=title,
            url=document.get("url") or "",
            item_type=item.get("itemType") or DEFAULT_ITEM_TYPE,
        )

    def to_item(self) -> dict[str, str]:
        """Convert to an added collection item descriptor."""
        return {
            "documentId": self.document_id,
            "name": self.name,
            "title": self.title,
            "url": self.url,
            "itemType": self.item_type,
        }


@dataclass(frozen=True)
class Collection:
    """A named collection as listed by the platform."""

    id: str | int
    name: str

    @classmethod
    def from_dict(cls, data: Any) -> "Collection":
        """Create from a listed collection.

        Raises:
            ResponseSchemaError: If id or name is missing
        """
        if not isinstance(data, dict) or "id" not in data or "name" not in data:
            raise ResponseSchemaError(f"Collection entry is missing 'id' or 'name': {data!r}")
        return cls(id=data["id"], name=data["name"])
