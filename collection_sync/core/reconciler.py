"""Reconcile a collection's contents with a target set of documents.

The reconciler works in two steps. ``plan_sync`` is a pure diff of the
target documents against the ids already in the collection. The plan is
then applied one document per call, additions first and removals second,
so a document is never missing from the collection because of ordering.
There is no rollback: a failed call leaves the collection partly updated
and the next run converges it.
"""

import logging
from dataclasses import dataclass, field

from ..errors import PartialApplyError
from ..models.documents import DocumentDescriptor
from ..models.results import CreatedResult, UpdatedResult
from .client import GleanAPIError, GleanClient

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SyncPlan:
    """Delta between a collection's contents and the target documents."""

    to_add: list[DocumentDescriptor] = field(default_factory=list)
    to_remove: list[str] = field(default_factory=list)
    unchanged: frozenset[str] = frozenset()

    @property
    def added_ids(self) -> list[str]:
        """Sorted ids of documents to add."""
        return sorted(doc.document_id for doc in self.to_add)

    @property
    def removed_ids(self) -> list[str]:
        """Sorted ids of documents to remove."""
        return sorted(self.to_remove)

    @property
    def is_empty(self) -> bool:
        return not self.to_add and not self.to_remove


def dedupe_documents(documents: list[DocumentDescriptor]) -> list[DocumentDescriptor]:
    """Drop repeated document ids, keeping the first occurrence."""
    seen: set[str] = set()
    unique: list[DocumentDescriptor] = []
    for doc in documents:
        if doc.document_id in seen:
            continue
        seen.add(doc.document_id)
        unique.append(doc)

    if len(unique) < len(documents):
        logger.warning("Dropped %d duplicate document(s) from search results", len(documents) - len(unique))
    return unique


def plan_sync(
    target_docs: list[DocumentDescriptor],
    existing_ids: set[str],
    is_new: bool = False,
) -> SyncPlan:
    """Compute which documents to add and remove.

    A new collection has no prior content, so every target document is
    added and nothing is removed.
    """
    targets = dedupe_documents(target_docs)
    if is_new:
        return SyncPlan(to_add=targets)

    target_ids = {doc.document_id for doc in targets}
    return SyncPlan(
        to_add=[doc for doc in targets if doc.document_id not in existing_ids],
        to_remove=sorted(existing_ids - target_ids),
        unchanged=frozenset(target_ids & existing_ids),
    )


class CollectionReconciler:
    """Applies sync plans to a remote collection."""

    def __init__(self, client: GleanClient, dry_run: bool = False) -> None:
        """Initialize the reconciler.

        Args:
            client: GleanClient used for item calls
            dry_run: If True, compute plans without changing the collection
        """
        self.client = client
        self.dry_run = dry_run

    def existing_document_ids(self, collection_id: str | int) -> set[str]:
        """Fetch the ids of the documents currently in a collection."""
        items = self.client.get_collection_items(collection_id)
        return {DocumentDescriptor.from_item(item).document_id for item in items}

    def _apply(self, collection_id: str | int, collection_name: str, plan: SyncPlan) -> None:
        """Add then remove documents, one call per document.

        Raises:
            PartialApplyError: If a call fails; carries what was applied so far
        """
        added: list[str] = []
        removed: list[str] = []

        try:
            for doc in plan.to_add:
                self.client.add_collection_item(collection_id, doc.to_item())
                added.append(doc.document_id)
                logger.debug("Added %s to '%s'", doc.document_id, collection_name)

            for document_id in plan.to_remove:
                self.client.delete_collection_item(collection_id, document_id, item_id=None)
                removed.append(document_id)
                logger.debug("Removed %s from '%s'", document_id, collection_name)
        except GleanAPIError as e:
            logger.error(
                "Sync of '%s' stopped after adding %d/%d and removing %d/%d document(s)",
                collection_name,
                len(added),
                len(plan.to_add),
                len(removed),
                len(plan.to_remove),
            )
            raise PartialApplyError(
                f"Collection '{collection_name}' partially updated "
                f"(added {len(added)}/{len(plan.to_add)}, "
                f"removed {len(removed)}/{len(plan.to_remove)}): {e}",
                added=added,
                removed=removed,
                planned_adds=len(plan.to_add),
                planned_removes=len(plan.to_remove),
            ) from e

    def reconcile(
        self,
        collection_id: str | int | None,
        collection_name: str,
        is_new: bool,
        target_docs: list[DocumentDescriptor],
        existing_ids: set[str] | None = None,
    ) -> CreatedResult | UpdatedResult:
        """Bring a collection in line with the target documents.

        Args:
            collection_id: Collection id (None only for a dry-run new collection)
            collection_name: Collection name, used in the result
            is_new: True if the collection was just created
            target_docs: Documents the collection should contain
            existing_ids: Current document ids (fetched if not given)

        Returns:
            CreatedResult for a new collection, UpdatedResult otherwise

        Raises:
            PartialApplyError: If an add or remove call fails
        """
        if not is_new and existing_ids is None:
            existing_ids = self.existing_document_ids(collection_id)  # type: ignore[arg-type]

        plan = plan_sync(target_docs, existing_ids or set(), is_new=is_new)
        logger.info(
            "Collection '%s': %d to add, %d to remove, %d unchanged",
            collection_name,
            len(plan.to_add),
            len(plan.to_remove),
            len(plan.unchanged),
        )

        if self.dry_run:
            logger.info("[DRY RUN] Not applying changes to '%s'", collection_name)
        elif not plan.is_empty:
            self._apply(collection_id, collection_name, plan)  # type: ignore[arg-type]

        if is_new:
            return CreatedResult(
                collection_id=collection_id,
                collection_name=collection_name,
                added_document_ids=plan.added_ids,
            )
        return UpdatedResult(
            collection_id=collection_id,  # type: ignore[arg-type]
            collection_name=collection_name,
            added_document_ids=plan.added_ids,
            removed_document_ids=plan.removed_ids,
        )
