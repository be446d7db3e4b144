#!/usr/bin/env python3
"""CLI entry point for the collection sync system."""

import argparse
import json
import sys
from dataclasses import replace
from pathlib import Path

from rich.console import Console
from rich.table import Table

from .core.auth import GleanAuth
from .core.client import GleanAPIError, GleanClient
from .core.orchestrator import SyncOrchestrator
from .errors import BatchFailedError, ConfigurationError
from .log_setup import configure_logging
from .models.config import SyncBatch
from .models.results import CreatedResult, ErrorResult, SyncResult

console = Console()


def _load_batch(args: argparse.Namespace) -> SyncBatch:
    """Load the batch from --config or --configs and apply CLI overrides."""
    if args.config:
        batch = SyncBatch.load(Path(args.config))
    elif args.configs:
        batch = SyncBatch.from_json(args.configs)
    else:
        raise ConfigurationError("Specify --config PATH or --configs JSON")

    overrides: dict = {}
    if args.dry_run:
        overrides["dry_run"] = True
    if args.fail_fast:
        overrides["fail_fast"] = True
    if args.max_workers is not None:
        overrides["max_workers"] = args.max_workers
    if args.api_url:
        overrides["api_url"] = args.api_url
    if args.user_email:
        overrides["user_email"] = args.user_email

    if overrides:
        batch.settings = replace(batch.settings, **overrides)
    return batch


def _build_auth(args: argparse.Namespace, api_url: str = "", user_email: str = "") -> GleanAuth:
    return GleanAuth.from_env(
        api_url=getattr(args, "api_url", None) or api_url or None,
        api_token=getattr(args, "api_token", None),
        user_email=getattr(args, "user_email", None) or user_email or None,
    )


def _render_results(results: list[SyncResult]) -> None:
    """Render sync results as a table."""
    table = Table(title="Collection Sync Results")
    table.add_column("Collection")
    table.add_column("Status")
    table.add_column("ID")
    table.add_column("Added", justify="right")
    table.add_column("Removed", justify="right")
    table.add_column("Details")

    for result in results:
        if isinstance(result, ErrorResult):
            table.add_row(result.collection_name, "[red]error", "", "", "", result.message)
        elif isinstance(result, CreatedResult):
            table.add_row(
                result.collection_name,
                "[green]created",
                str(result.collection_id or "-"),
                str(len(result.added_document_ids)),
                "0",
                "",
            )
        else:
            table.add_row(
                result.collection_name,
                "[green]updated",
                str(result.collection_id),
                str(len(result.added_document_ids)),
                str(len(result.removed_document_ids)),
                "",
            )

    console.print(table)


def cmd_sync(args: argparse.Namespace) -> int:
    """Sync collections with their saved searches."""
    try:
        batch = _load_batch(args)
        auth = _build_auth(args, batch.settings.api_url, batch.settings.user_email)
    except ConfigurationError as e:
        console.print(f"[red]Configuration error: {e}")
        return 1

    if not batch.configs:
        console.print("[yellow]No collections configured")
        return 0

    if batch.settings.dry_run and not args.json:
        console.print("[yellow](DRY RUN - no changes will be made)")

    orchestrator = SyncOrchestrator.from_auth(batch.settings, auth)

    try:
        results = orchestrator.run(batch.configs)
    except BatchFailedError as e:
        # Fail-fast replaces the per-collection report with the abort
        if args.json:
            print(json.dumps({"error": str(e), "results": [r.to_dict() for r in e.results]}, indent=2))
            return 1
        console.print(f"[red]Batch aborted: {e}")
        for result in e.results:
            if isinstance(result, ErrorResult):
                console.print(f"  [red]{result.collection_name}:[/red] {result.message}", highlight=False)
        return 1

    failed_count = sum(1 for r in results if not r.success)

    if args.json:
        print(json.dumps([r.to_dict() for r in results], indent=2))
        return 0 if failed_count == 0 else 1

    _render_results(results)

    created_count = sum(1 for r in results if isinstance(r, CreatedResult))
    updated_count = len(results) - failed_count - created_count
    console.print(
        f"\n[bold]Summary:[/bold] {created_count} created, {updated_count} updated, {failed_count} failed",
        highlight=False,
    )

    return 0 if failed_count == 0 else 1


def cmd_collections(args: argparse.Namespace) -> int:
    """List collections visible to the acting user."""
    try:
        client = GleanClient(_build_auth(args))
    except ConfigurationError as e:
        console.print(f"[red]Configuration error: {e}")
        return 1

    try:
        collections = client.list_collections()
    except GleanAPIError as e:
        console.print(f"[red]Failed to list collections: {e}")
        return 1
    finally:
        client.close()

    if not collections:
        console.print("[yellow]No collections found")
        return 0

    table = Table(title="Collections")
    table.add_column("ID")
    table.add_column("Name")
    for collection in collections:
        table.add_row(str(collection.id), collection.name)
    console.print(table)
    return 0


def cmd_verify_auth(args: argparse.Namespace) -> int:
    """Verify API authentication."""
    console.print("Verifying Glean API credentials...", style="blue")

    try:
        client = GleanClient(_build_auth(args))
    except ConfigurationError as e:
        console.print(f"[red]Configuration error: {e}")
        return 1

    try:
        client.verify_connection()
    except GleanAPIError as e:
        console.print(f"[red]Authentication failed: {e}")
        if e.status_code == 401:
            console.print("Check your API token.")
        elif e.status_code == 403:
            console.print("Check the token's permissions and the acting user.")
        return 1
    finally:
        client.close()

    console.print("[green]Authentication successful!")
    return 0


def _add_credential_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--api-url", help="Glean client API URL (or GLEAN_API_URL)")
    parser.add_argument("--api-token", help="Glean client API token (or GLEAN_API_TOKEN)")
    parser.add_argument("--user-email", help="User to act on behalf of (or GLEAN_USER_EMAIL)")


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Keep Glean collections in sync with saved searches",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log request details")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # sync
    sync_parser = subparsers.add_parser("sync", help="Sync collections with their searches")
    source = sync_parser.add_mutually_exclusive_group()
    source.add_argument("--config", help="YAML file with collections and settings")
    source.add_argument("--configs", help="JSON list of {name, query, filters} objects")
    _add_credential_args(sync_parser)
    sync_parser.add_argument("--dry-run", action="store_true", help="Show changes without applying them")
    sync_parser.add_argument("--fail-fast", action="store_true", help="Fail the whole batch if any sync fails")
    sync_parser.add_argument("--max-workers", type=int, help="Collections to sync concurrently")
    sync_parser.add_argument("--json", action="store_true", help="Print results as JSON")

    # collections
    collections_parser = subparsers.add_parser("collections", help="List collections")
    _add_credential_args(collections_parser)

    # verify-auth
    verify_parser = subparsers.add_parser("verify-auth", help="Verify API authentication")
    _add_credential_args(verify_parser)

    args = parser.parse_args(argv)

    configure_logging(verbose=args.verbose)

    if args.command == "sync":
        return cmd_sync(args)
    elif args.command == "collections":
        return cmd_collections(args)
    elif args.command == "verify-auth":
        return cmd_verify_auth(args)
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
