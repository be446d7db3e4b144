"""Configuration models for collection sync batches."""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from ..errors import ConfigurationError


@dataclass
class SyncConfig:
    """One collection to keep in sync with a saved search."""

    name: str  # Collection name, matched exactly
    query: str = ""  # Empty query means filters only
    filters: str = ""  # Space-separated field:value tokens

    @classmethod
    def from_dict(cls, data: Any) -> "SyncConfig":
        """Create from dictionary.

        Raises:
            ConfigurationError: If the entry is not a mapping or has bad fields
        """
        if not isinstance(data, dict):
            raise ConfigurationError(f"Collection config must be an object, got: {data!r}")

        name = data.get("name")
        if not isinstance(name, str) or not name:
            raise ConfigurationError(f"Collection config needs a non-empty 'name': {data!r}")

        query = data.get("query") or ""
        filters = data.get("filters") or ""
        if not isinstance(query, str) or not isinstance(filters, str):
            raise ConfigurationError(f"'query' and 'filters' must be strings for collection '{name}'")

        return cls(name=name, query=query, filters=filters)

    def to_dict(self) -> dict[str, str]:
        """Convert to dictionary."""
        return {"name": self.name, "query": self.query, "filters": self.filters}


@dataclass
class SyncSettings:
    """Settings shared by every configuration in a batch."""

    api_url: str = ""
    user_email: str = ""
    page_size: int = 1000
    timeout: int = 30
    max_workers: int = 4
    # Raise after the batch completes if any configuration failed
    fail_fast: bool = False
    dry_run: bool = False

    def __post_init__(self) -> None:
        self.api_url = self.api_url.rstrip("/")
        if self.page_size < 1 or self.max_workers < 1 or self.timeout < 1:
            raise ConfigurationError("page_size, max_workers and timeout must be positive")

    @classmethod
    def from_dict(cls, data: Any) -> "SyncSettings":
        """Create from dictionary.

        Blank (null) values fall back to their defaults.
        """
        if not isinstance(data, dict):
            raise ConfigurationError(f"'settings' must be a mapping, got: {data!r}")

        def value(key: str, default: Any) -> Any:
            found = data.get(key)
            return default if found is None else found

        for flag in ("fail_fast", "dry_run"):
            if not isinstance(value(flag, False), bool):
                raise ConfigurationError(f"'{flag}' must be true or false, got: {data[flag]!r}")

        try:
            return cls(
                api_url=str(value("api_url", "")),
                user_email=str(value("user_email", "")),
                page_size=int(value("page_size", 1000)),
                timeout=int(value("timeout", 30)),
                max_workers=int(value("max_workers", 4)),
                fail_fast=value("fail_fast", False),
                dry_run=value("dry_run", False),
            )
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f"Invalid settings: {e}") from e


@dataclass
class SyncBatch:
    """A batch of independent sync configurations plus shared settings."""

    configs: list[SyncConfig] = field(default_factory=list)
    settings: SyncSettings = field(default_factory=SyncSettings)

    @staticmethod
    def _parse_configs(entries: Any) -> list[SyncConfig]:
        if not isinstance(entries, list):
            raise ConfigurationError(f"Collection configs must be a list, got {type(entries).__name__}")
        return [SyncConfig.from_dict(entry) for entry in entries]

    @classmethod
    def from_json(cls, text: str, settings: SyncSettings | None = None) -> "SyncBatch":
        """Create from a JSON list of ``{name, query, filters}`` objects.

        Raises:
            ConfigurationError: If the text is not valid JSON or has bad entries
        """
        try:
            entries = json.loads(text)
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"Collection configs are not valid JSON: {e}") from e

        return cls(configs=cls._parse_configs(entries), settings=settings or SyncSettings())

    @classmethod
    def load(cls, config_path: Path) -> "SyncBatch":
        """Load a batch from a YAML file.

        The file holds a ``collections`` list and an optional ``settings``
        mapping.
        """
        try:
            with open(config_path) as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigurationError(f"Cannot read config {config_path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigurationError(f"Config {config_path} must be a mapping")

        return cls(
            configs=cls._parse_configs(data.get("collections") or []),
            settings=SyncSettings.from_dict(data.get("settings") or {}),
        )
