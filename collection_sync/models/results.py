"""Per-configuration sync outcomes."""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class CreatedResult:
    """A collection was created and filled with the search results."""

    collection_id: str | int | None
    collection_name: str
    added_document_ids: list[str] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return True

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON output."""
        return {
            "status": "created",
            "message": f"Created new collection '{self.collection_name}'",
            "collection_id": self.collection_id,
            "collection_name": self.collection_name,
            "added_documents": list(self.added_document_ids),
        }


@dataclass(frozen=True)
class UpdatedResult:
    """An existing collection was brought in line with the search results."""

    collection_id: str | int
    collection_name: str
    added_document_ids: list[str] = field(default_factory=list)
    removed_document_ids: list[str] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return True

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON output."""
        return {
            "status": "updated",
            "message": f"Updated existing collection '{self.collection_name}'",
            "collection_id": self.collection_id,
            "collection_name": self.collection_name,
            "added_documents": list(self.added_document_ids),
            "removed_documents": list(self.removed_document_ids),
        }


@dataclass(frozen=True)
class ErrorResult:
    """A configuration failed; siblings are unaffected."""

    collection_name: str
    message: str

    @property
    def success(self) -> bool:
        return False

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON output."""
        return {
            "status": "error",
            "collection_name": self.collection_name,
            "error": self.message,
        }


SyncResult = CreatedResult | UpdatedResult | ErrorResult
