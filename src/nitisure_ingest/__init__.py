"""Nitisure ingest — embed Thai law sections into a vector index for semantic search."""

__version__ = "0.1.0"
