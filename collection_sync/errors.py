"""Error types raised while syncing collections."""

from typing import Any


class SyncError(Exception):
    """Base class for errors that fail a single collection sync."""


class ConfigurationError(SyncError):
    """Raised when batch input or credentials are malformed or missing."""


class FilterParseError(ConfigurationError):
    """Raised when a filter expression contains a malformed token."""

    def __init__(self, message: str, token: str) -> None:
        super().__init__(message)
        self.token = token


class ResponseSchemaError(SyncError):
    """Raised when a remote payload does not have the expected shape."""


class SearchError(SyncError):
    """Raised when the search call fails."""


class CollectionCreationError(SyncError):
    """Raised when a collection cannot be created for a reason other than a name clash."""


class CollectionNotFoundError(SyncError):
    """Raised when a name clash is reported but no collection has that name."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Collection '{name}' not found.")
        self.name = name


class PartialApplyError(SyncError):
    """Raised when an add or remove call fails partway through a sync.

    Carries the document ids that were applied before the failing call so
    the caller can report how far the collection got.
    """

    def __init__(
        self,
        message: str,
        added: list[str],
        removed: list[str],
        planned_adds: int,
        planned_removes: int,
    ) -> None:
        super().__init__(message)
        self.added = added
        self.removed = removed
        self.planned_adds = planned_adds
        self.planned_removes = planned_removes


class BatchFailedError(SyncError):
    """Raised in fail-fast mode when any configuration in a batch failed."""

    def __init__(self, message: str, results: list[Any]) -> None:
        super().__init__(message)
        self.results = results
