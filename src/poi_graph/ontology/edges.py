from __future__ import annotations

import logging
import math
from collections import defaultdict
from collections.abc import Iterable, Sequence

from .config import OntologyConfig
from .geo import haversine_m
from .models import EdgeLabel, Entity, NodeClass, Relation

logger = logging.getLogger(__name__)

# (source class, target class, label); nothing else is ever linked.
RULES: tuple[tuple[NodeClass, NodeClass, EdgeLabel], ...] = (
    (NodeClass.HOTEL, NodeClass.SUBWAY, EdgeLabel.TRANSIT_ACCESS),
    (NodeClass.HOTEL, NodeClass.ATTRACTION, EdgeLabel.WALKABLE_TO),
)


def threshold_for(label: EdgeLabel, config: OntologyConfig) -> float:
    if label is EdgeLabel.TRANSIT_ACCESS:
        return config.transit_access_m
    return config.walkable_to_m


class LatitudeBands:
    """Buckets entities into latitude bands one threshold tall.

    Great-circle distance is never shorter than the meridional separation, so
    a pair more than one band apart is always farther than the threshold.
    Pruning with this index yields the same edges as the full scan.
    """

    def __init__(self, entities: Iterable[Entity], *, threshold_m: float, radius_m: float):
        # Slightly taller than the exact angular size; a taller band only prunes less.
        self.height_deg = math.degrees(threshold_m / radius_m) * (1 + 1e-9)
        self._bands: dict[int, list[Entity]] = defaultdict(list)
        for e in entities:
            self._bands[self._band(e.lat)].append(e)

    def _band(self, lat: float) -> int:
        return math.floor(lat / self.height_deg)

    def candidates(self, lat: float) -> list[Entity]:
        b = self._band(lat)
        out: list[Entity] = []
        for i in (b - 1, b, b + 1):
            out.extend(self._bands.get(i, ()))
        return out


def generate_relations(
    entities: Sequence[Entity],
    config: OntologyConfig,
    *,
    indexed: bool = False,
) -> list[Relation]:
    """Apply the proximity rules to every hotel.

    Both bounds are inclusive. With `indexed=True` candidate pairs are pruned by
    `LatitudeBands`; the emitted edge set is the same either way.
    """
    by_class: dict[NodeClass, list[Entity]] = defaultdict(list)
    for e in entities:
        by_class[e.node_class].append(e)

    relations: list[Relation] = []
    seen: set[tuple[str, str, EdgeLabel]] = set()

    for src_class, dst_class, label in RULES:
        limit = threshold_for(label, config)
        targets = by_class.get(dst_class, [])
        index = (
            LatitudeBands(targets, threshold_m=limit, radius_m=config.earth_radius_m)
            if indexed and targets
            else None
        )
        for src in by_class.get(src_class, []):
            pool = index.candidates(src.lat) if index is not None else targets
            for dst in pool:
                d = haversine_m(src.lat, src.lon, dst.lat, dst.lon, radius_m=config.earth_radius_m)
                if d > limit:
                    continue
                rel = Relation(source_id=src.id, target_id=dst.id, label=label)
                if rel.key in seen:
                    continue
                seen.add(rel.key)
                relations.append(rel)

    logger.debug("generated %d relations from %d entities", len(relations), len(entities))
    return relations
