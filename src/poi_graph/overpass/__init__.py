"""Overpass API ingestion."""

from .client import BBox, OverpassClient, OverpassError, build_query

__all__ = ["BBox", "OverpassClient", "OverpassError", "build_query"]
