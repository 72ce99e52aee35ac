"""Ontology pipeline.

This module provides:
- Classification of raw OSM tags into taxonomy leaves
- Entity building with dedup and coordinate resolution
- Proximity edge generation and degree centrality
- Weighted hotel ranking across query modes
"""

from .config import DEFAULT_CONFIG, OntologyConfig
from .models import EdgeLabel, Entity, GraphSnapshot, NodeClass, RawElement, Relation
from .pipeline import DeriveStats, GraphDeriver, derive_graph
from .ranking import GraphQueryEngine, QueryMode, RankedHotel, rank_hotels

__all__ = [
    "DEFAULT_CONFIG",
    "OntologyConfig",
    "EdgeLabel",
    "Entity",
    "GraphSnapshot",
    "NodeClass",
    "RawElement",
    "Relation",
    "DeriveStats",
    "GraphDeriver",
    "derive_graph",
    "GraphQueryEngine",
    "QueryMode",
    "RankedHotel",
    "rank_hotels",
]
