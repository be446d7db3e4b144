"""Sync Glean collections with the live results of saved searches."""

__version__ = "0.1.0"
