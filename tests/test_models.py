"""Tests for data models."""

import json
import tempfile
from pathlib import Path

import pytest

from collection_sync.errors import ConfigurationError, ResponseSchemaError
from collection_sync.models import (
    Collection,
    CreatedResult,
    DocumentDescriptor,
    ErrorResult,
    SyncBatch,
    SyncConfig,
    SyncSettings,
    UpdatedResult,
)
from tests.fakes import result_item


class TestDocumentDescriptor:
    """Tests for DocumentDescriptor model."""

    def test_from_item(self) -> None:
        doc = DocumentDescriptor.from_item(result_item("d1", title="Roadmap"))

        assert doc.document_id == "d1"
        assert doc.name == "Roadmap"
        assert doc.title == "Roadmap"
        assert doc.url == "https://docs.example.com/d1"
        assert doc.item_type == "DOCUMENT"

    def test_from_item_keeps_item_type(self) -> None:
        doc = DocumentDescriptor.from_item(result_item("d1", item_type="URL"))

        assert doc.item_type == "URL"

    def test_from_item_missing_document(self) -> None:
        with pytest.raises(ResponseSchemaError, match="document"):
            DocumentDescriptor.from_item({"itemType": "DOCUMENT"})

    def test_from_item_missing_id(self) -> None:
        with pytest.raises(ResponseSchemaError, match="id"):
            DocumentDescriptor.from_item({"document": {"title": "No id"}})

    def test_to_item(self) -> None:
        doc = DocumentDescriptor("d1", "T", "T", "https://x", "DOCUMENT")

        assert doc.to_item() == {
            "documentId": "d1",
            "name": "T",
            "title": "T",
            "url": "https://x",
            "itemType": "DOCUMENT",
        }


class TestCollection:
    """Tests for Collection model."""

    def test_from_dict(self) -> None:
        collection = Collection.from_dict({"id": 7, "name": "Docs", "description": ""})

        assert collection == Collection(id=7, name="Docs")

    def test_from_dict_missing_name(self) -> None:
        with pytest.raises(ResponseSchemaError):
            Collection.from_dict({"id": 7})


class TestSyncConfig:
    """Tests for SyncConfig model."""

    def test_from_dict_defaults(self) -> None:
        config = SyncConfig.from_dict({"name": "News", "query": None})

        assert config == SyncConfig(name="News", query="", filters="")

    def test_from_dict_requires_name(self) -> None:
        with pytest.raises(ConfigurationError, match="name"):
            SyncConfig.from_dict({"query": "x"})

    def test_from_dict_rejects_non_string_filters(self) -> None:
        with pytest.raises(ConfigurationError, match="strings"):
            SyncConfig.from_dict({"name": "A", "filters": ["status:active"]})


class TestSyncBatch:
    """Tests for SyncBatch loading."""

    def test_from_json(self) -> None:
        text = json.dumps([
            {"name": "A", "query": "launch", "filters": "type:doc"},
            {"name": "B", "filters": "app:jira"},
        ])

        batch = SyncBatch.from_json(text)

        assert [c.name for c in batch.configs] == ["A", "B"]
        assert batch.configs[1].query == ""
        assert batch.settings == SyncSettings()

    def test_from_json_invalid(self) -> None:
        with pytest.raises(ConfigurationError, match="not valid JSON"):
            SyncBatch.from_json("[{name: A}]")

    def test_from_json_not_a_list(self) -> None:
        with pytest.raises(ConfigurationError, match="must be a list"):
            SyncBatch.from_json('{"name": "A"}')

    def test_load_yaml(self) -> None:
        yaml_content = """
collections:
  - name: "Launch docs"
    query: "launch"
    filters: "type:document app:confluence"
  - name: "Open incidents"
    filters: "status:open"

settings:
  api_url: "https://acme-be.glean.com/rest/api/v1/"
  user_email: "bot@example.com"
  max_workers: 2
  fail_fast: true
"""
        with tempfile.NamedTemporaryFile(mode="w", suffix=".yaml", delete=False) as f:
            f.write(yaml_content)
            config_path = Path(f.name)

        try:
            batch = SyncBatch.load(config_path)
            assert len(batch.configs) == 2
            assert batch.configs[0].filters == "type:document app:confluence"
            assert batch.settings.api_url == "https://acme-be.glean.com/rest/api/v1"
            assert batch.settings.max_workers == 2
            assert batch.settings.fail_fast is True
            assert batch.settings.page_size == 1000
        finally:
            config_path.unlink()

    def test_load_empty_file(self) -> None:
        with tempfile.NamedTemporaryFile(mode="w", suffix=".yaml", delete=False) as f:
            config_path = Path(f.name)

        try:
            batch = SyncBatch.load(config_path)
            assert batch.configs == []
        finally:
            config_path.unlink()

    def test_load_blank_settings_values(self) -> None:
        yaml_content = """
collections:
  - name: "Docs"
settings:
  api_url:
  user_email:
  page_size:
  fail_fast:
"""
        with tempfile.NamedTemporaryFile(mode="w", suffix=".yaml", delete=False) as f:
            f.write(yaml_content)
            config_path = Path(f.name)

        try:
            batch = SyncBatch.load(config_path)
            assert batch.settings.api_url == ""
            assert batch.settings.user_email == ""
            assert batch.settings.page_size == 1000
            assert batch.settings.fail_fast is False
        finally:
            config_path.unlink()

    def test_settings_reject_non_bool_flags(self) -> None:
        with pytest.raises(ConfigurationError, match="fail_fast"):
            SyncSettings.from_dict({"fail_fast": "false"})

        with pytest.raises(ConfigurationError, match="dry_run"):
            SyncSettings.from_dict({"dry_run": 1})

    def test_settings_must_be_positive(self) -> None:
        with pytest.raises(ConfigurationError):
            SyncSettings(max_workers=0)


class TestResults:
    """Tests for result serialization."""

    def test_created_to_dict(self) -> None:
        result = CreatedResult(collection_id=5, collection_name="C", added_document_ids=["d1", "d2"])

        assert result.to_dict() == {
            "status": "created",
            "message": "Created new collection 'C'",
            "collection_id": 5,
            "collection_name": "C",
            "added_documents": ["d1", "d2"],
        }

    def test_updated_to_dict(self) -> None:
        result = UpdatedResult(5, "C", ["d3"], ["d1"])

        data = result.to_dict()
        assert data["message"] == "Updated existing collection 'C'"
        assert data["added_documents"] == ["d3"]
        assert data["removed_documents"] == ["d1"]

    def test_error_to_dict(self) -> None:
        result = ErrorResult(collection_name="C", message="Collection 'C' not found.")

        assert result.success is False
        assert result.to_dict()["error"] == "Collection 'C' not found."
