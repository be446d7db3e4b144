"""Run a batch of collection syncs concurrently."""

import logging
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor

from ..errors import BatchFailedError, SyncError
from ..models.config import SyncConfig, SyncSettings
from ..models.results import ErrorResult, SyncResult
from .auth import GleanAuth
from .client import GleanAPIError, GleanClient
from .locator import CollectionLocator
from .reconciler import CollectionReconciler
from .search import QueryExecutor

logger = logging.getLogger(__name__)

ClientFactory = Callable[[], GleanClient]


class SyncOrchestrator:
    """Syncs each configuration of a batch independently.

    Configurations run concurrently on a thread pool, each with its own
    client. Steps within one configuration (search, create or locate,
    list items, add, remove) are strictly sequential.
    """

    def __init__(self, settings: SyncSettings, client_factory: ClientFactory) -> None:
        """Initialize the orchestrator.

        Args:
            settings: Batch settings (workers, page size, failure mode, dry run)
            client_factory: Returns a fresh client for each configuration
        """
        self.settings = settings
        self.client_factory = client_factory

    @classmethod
    def from_auth(cls, settings: SyncSettings, auth: GleanAuth) -> "SyncOrchestrator":
        """Create an orchestrator whose clients share the given credentials."""
        return cls(settings, lambda: GleanClient(auth, timeout=settings.timeout))

    def sync_collection(self, client: GleanClient, config: SyncConfig) -> SyncResult:
        """Sync one configuration.

        Raises:
            SyncError: On search, creation, lookup or apply failures
            GleanAPIError: If listing the collection's items fails
        """
        documents = QueryExecutor(client, self.settings.page_size).run(config.query, config.filters)
        logger.info("Search for '%s' matched %d document(s)", config.name, len(documents))

        locator = CollectionLocator(client)
        reconciler = CollectionReconciler(client, dry_run=self.settings.dry_run)

        if self.settings.dry_run:
            existing = locator.find(config.name)
            if existing is None:
                return reconciler.reconcile(None, config.name, True, documents)
            return reconciler.reconcile(existing.id, config.name, False, documents)

        collection_id, is_new = locator.ensure(config.name)
        return reconciler.reconcile(collection_id, config.name, is_new, documents)

    def _run_one(self, config: SyncConfig) -> SyncResult:
        client: GleanClient | None = None
        try:
            client = self.client_factory()
            return self.sync_collection(client, config)
        except (SyncError, GleanAPIError) as e:
            logger.error("Sync of '%s' failed: %s", config.name, e)
            return ErrorResult(collection_name=config.name, message=str(e))
        finally:
            if client is not None:
                client.close()

    def run(self, configs: list[SyncConfig]) -> list[SyncResult]:
        """Sync every configuration and return results in input order.

        Raises:
            BatchFailedError: In fail-fast mode, once all configurations have
                finished, if any of them failed
        """
        if not configs:
            return []

        workers = min(self.settings.max_workers, len(configs))
        with ThreadPoolExecutor(max_workers=workers) as executor:
            futures = [executor.submit(self._run_one, config) for config in configs]
            results = [future.result() for future in futures]

        failed = [r for r in results if isinstance(r, ErrorResult)]
        if failed and self.settings.fail_fast:
            names = ", ".join(f"'{r.collection_name}'" for r in failed)
            raise BatchFailedError(f"{len(failed)} of {len(results)} collection sync(s) failed: {names}", results)
        return results
