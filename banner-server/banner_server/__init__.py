"""Timed banner ingestion and lifecycle service."""

__version__ = "0.3.0"
