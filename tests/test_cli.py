"""Tests for the command line interface."""

import json
import os
from collections.abc import Iterator
from unittest.mock import patch

import pytest

from collection_sync import main as cli
from collection_sync.core.client import GleanAPIError
from collection_sync.core.orchestrator import SyncOrchestrator
from tests.fakes import FakeGleanState, result_item

ENV = {
    "GLEAN_API_URL": "https://glean.example/rest/api/v1",
    "GLEAN_API_TOKEN": "tok",
    "GLEAN_USER_EMAIL": "bot@example.com",
}


@pytest.fixture
def wired(glean_state: FakeGleanState) -> Iterator[FakeGleanState]:
    """Route the CLI's orchestrator to the in-memory API."""
    with patch.dict(os.environ, ENV, clear=True), \
            patch("collection_sync.core.auth.load_dotenv"), \
            patch.object(
                SyncOrchestrator,
                "from_auth",
                side_effect=lambda settings, auth: SyncOrchestrator(settings, glean_state.client),
            ):
        yield glean_state


class TestSyncCommand:
    """Tests for the sync command."""

    def test_sync_json_output(self, wired: FakeGleanState, capsys: pytest.CaptureFixture[str]) -> None:
        wired.search_results["launch"] = [result_item("d2"), result_item("d1")]
        configs = json.dumps([{"name": "Launch", "query": "launch", "filters": ""}])

        exit_code = cli.main(["sync", "--configs", configs, "--json"])

        assert exit_code == 0
        payload = json.loads(capsys.readouterr().out)
        assert payload[0]["status"] == "created"
        assert payload[0]["added_documents"] == ["d1", "d2"]

    def test_sync_table_output(self, wired: FakeGleanState, capsys: pytest.CaptureFixture[str]) -> None:
        wired.add_collection("Launch", ["d1"])
        configs = json.dumps([{"name": "Launch", "query": "launch"}])

        exit_code = cli.main(["sync", "--configs", configs])

        assert exit_code == 0
        out = capsys.readouterr().out
        assert "updated" in out
        assert "0 created, 1 updated, 0 failed" in out

    def test_sync_reports_failures(self, wired: FakeGleanState, capsys: pytest.CaptureFixture[str]) -> None:
        configs = json.dumps([{"name": "A", "filters": "broken"}, {"name": "B"}])

        exit_code = cli.main(["sync", "--configs", configs])

        assert exit_code == 1
        assert "1 created, 0 updated, 1 failed" in capsys.readouterr().out

    def test_sync_fail_fast(self, wired: FakeGleanState, capsys: pytest.CaptureFixture[str]) -> None:
        wired.phantom_names.add("A")
        configs = json.dumps([{"name": "A"}, {"name": "B"}])

        exit_code = cli.main(["sync", "--configs", configs, "--fail-fast"])

        assert exit_code == 1
        assert "Batch aborted" in capsys.readouterr().out

    def test_sync_fail_fast_json(self, wired: FakeGleanState, capsys: pytest.CaptureFixture[str]) -> None:
        wired.phantom_names.add("A")
        configs = json.dumps([{"name": "A"}, {"name": "B"}])

        exit_code = cli.main(["sync", "--configs", configs, "--json", "--fail-fast"])

        assert exit_code == 1
        payload = json.loads(capsys.readouterr().out)
        assert "1 of 2" in payload["error"]
        assert [r["status"] for r in payload["results"]] == ["error", "created"]

    def test_sync_fail_fast_skips_results_table(
        self, wired: FakeGleanState, capsys: pytest.CaptureFixture[str]
    ) -> None:
        wired.phantom_names.add("A")
        configs = json.dumps([{"name": "A"}, {"name": "B"}])

        cli.main(["sync", "--configs", configs, "--fail-fast"])

        out = capsys.readouterr().out
        assert "Collection 'A' not found." in out
        assert "Collection Sync Results" not in out
        assert "Summary" not in out

    def test_sync_rejects_zero_workers(self, wired: FakeGleanState, capsys: pytest.CaptureFixture[str]) -> None:
        exit_code = cli.main(["sync", "--configs", '[{"name": "A"}]', "--max-workers", "0"])

        assert exit_code == 1
        assert "Configuration error" in capsys.readouterr().out
        assert wired.calls == []

    def test_sync_dry_run(self, wired: FakeGleanState) -> None:
        configs = json.dumps([{"name": "A"}])

        exit_code = cli.main(["sync", "--configs", configs, "--dry-run"])

        assert exit_code == 0
        assert wired.collections == {}

    def test_sync_invalid_json(self, wired: FakeGleanState, capsys: pytest.CaptureFixture[str]) -> None:
        exit_code = cli.main(["sync", "--configs", "not json"])

        assert exit_code == 1
        assert "Configuration error" in capsys.readouterr().out
        assert wired.calls == []

    def test_sync_requires_source(self, wired: FakeGleanState, capsys: pytest.CaptureFixture[str]) -> None:
        assert cli.main(["sync"]) == 1
        assert "--config" in capsys.readouterr().out

    def test_sync_missing_credentials(self, capsys: pytest.CaptureFixture[str]) -> None:
        with patch.dict(os.environ, {}, clear=True), patch("collection_sync.core.auth.load_dotenv"):
            exit_code = cli.main(["sync", "--configs", "[]"])

        assert exit_code == 1
        assert "Missing Glean API credentials" in capsys.readouterr().out


class TestMain:
    """Tests for argument handling."""

    def test_no_command_prints_help(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert cli.main([]) == 1
        assert "usage" in capsys.readouterr().out


class TestCollectionsCommand:
    """Tests for the collections and verify-auth commands."""

    def test_lists_collections(self, wired: FakeGleanState, capsys: pytest.CaptureFixture[str]) -> None:
        wired.add_collection("Launch docs", [])

        with patch("collection_sync.main.GleanClient", side_effect=lambda auth: wired.client()):
            exit_code = cli.main(["collections"])

        assert exit_code == 0
        assert "Launch docs" in capsys.readouterr().out

    def test_verify_auth(self, wired: FakeGleanState, capsys: pytest.CaptureFixture[str]) -> None:
        with patch("collection_sync.main.GleanClient", side_effect=lambda auth: wired.client()):
            exit_code = cli.main(["verify-auth"])

        assert exit_code == 0
        assert "Authentication successful" in capsys.readouterr().out

    def test_verify_auth_unauthorized(self, wired: FakeGleanState, capsys: pytest.CaptureFixture[str]) -> None:
        wired.failures["list_collections"] = (0, GleanAPIError("API error 401", 401))
        with patch("collection_sync.main.GleanClient", side_effect=lambda auth: wired.client()):
            exit_code = cli.main(["verify-auth"])

        assert exit_code == 1
        assert "Check your API token" in capsys.readouterr().out
