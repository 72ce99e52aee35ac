"""Geospatial POI ontology graph.

Derives a small typed graph (hotels, subway stations, attractions) from raw
OpenStreetMap elements and ranks hotels under weighted traversal modes.
"""

__version__ = "0.1.0"
