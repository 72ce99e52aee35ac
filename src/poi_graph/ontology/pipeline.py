from __future__ import annotations

import logging
import time
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from .builder import build_entities
from .centrality import apply_degrees, check_endpoints
from .config import DEFAULT_CONFIG, OntologyConfig
from .edges import generate_relations
from .models import GraphSnapshot, RawElement

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class DeriveStats:
    entities: int
    relations: int
    build_ms: float
    edges_ms: float


class GraphDeriver:
    """Runs one full ingestion cycle: build, link, check, compute degree.

    Each call produces a fresh snapshot; nothing is carried over between runs.
    """

    def __init__(self, config: OntologyConfig | None = None, *, indexed: bool = False):
        self.config = config or DEFAULT_CONFIG
        self.indexed = indexed

    def derive(
        self, elements: Iterable[RawElement | Mapping[str, Any]]
    ) -> tuple[GraphSnapshot, DeriveStats]:
        t0 = time.perf_counter()
        entities = build_entities(elements)
        t1 = time.perf_counter()
        relations = generate_relations(entities, self.config, indexed=self.indexed)
        check_endpoints(entities, relations)
        entities = apply_degrees(entities, relations)
        t2 = time.perf_counter()

        snapshot = GraphSnapshot(entities=tuple(entities), relations=tuple(relations))
        stats = DeriveStats(
            entities=len(entities),
            relations=len(relations),
            build_ms=(t1 - t0) * 1000.0,
            edges_ms=(t2 - t1) * 1000.0,
        )
        logger.info(
            "derived graph: %d entities, %d relations (build %.1f ms, edges %.1f ms)",
            stats.entities,
            stats.relations,
            stats.build_ms,
            stats.edges_ms,
        )
        return snapshot, stats


def derive_graph(
    elements: Iterable[RawElement | Mapping[str, Any]],
    config: OntologyConfig | None = None,
) -> GraphSnapshot:
    snapshot, _ = GraphDeriver(config).derive(elements)
    return snapshot
