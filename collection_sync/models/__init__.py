"""Data models for the collection sync system."""

from .config import SyncBatch, SyncConfig, SyncSettings
from .documents import Collection, DocumentDescriptor, FilterClause
from .results import CreatedResult, ErrorResult, SyncResult, UpdatedResult

__all__ = [
    "Collection",
    "CreatedResult",
    "DocumentDescriptor",
    "ErrorResult",
    "FilterClause",
    "SyncBatch",
    "SyncConfig",
    "SyncResult",
    "SyncSettings",
    "UpdatedResult",
]
