from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from enum import Enum

from .config import DEFAULT_CONFIG, OntologyConfig
from .models import EdgeLabel, Entity, GraphSnapshot, NodeClass, Relation


class QueryMode(str, Enum):
    TRANSIT = "transit"
    CULTURE = "culture"
    BALANCED = "balanced"
    CONNECTED = "connected"
    HUB = "hub"
    CORRIDOR = "corridor"


@dataclass(frozen=True)
class ModeInfo:
    label: str
    description: str


MODE_INFO: dict[QueryMode, ModeInfo] = {
    QueryMode.TRANSIT: ModeInfo("Transit Priority", "Hotels ranked by subway reachability (TRANSIT_ACCESS x 2)"),
    QueryMode.CULTURE: ModeInfo("Culture First", "Hotels ranked by walkable attractions (WALKABLE_TO x 2)"),
    QueryMode.BALANCED: ModeInfo("Balanced", "Equal weight on transit and cultural access"),
    QueryMode.CONNECTED: ModeInfo("Fully Connected", "Only hotels that have BOTH subway and attraction edges"),
    QueryMode.HUB: ModeInfo("Transit Hub", "Maximum subway connectivity (TRANSIT_ACCESS x 3)"),
    QueryMode.CORRIDOR: ModeInfo("Art Corridor", "Maximum cultural immersion (WALKABLE_TO x 3)"),
}


@dataclass(frozen=True)
class RankedHotel:
    hotel: Entity
    transit_count: int
    culture_count: int
    score: int

    def to_dict(self) -> dict:
        return {
            "id": self.hotel.id,
            "name": self.hotel.name,
            "transit_count": self.transit_count,
            "culture_count": self.culture_count,
            "score": self.score,
        }


def _mode_key(mode: QueryMode | str) -> str:
    return mode.value if isinstance(mode, QueryMode) else str(mode)


def score_hotel(
    transit_count: int,
    culture_count: int,
    mode: QueryMode | str,
    config: OntologyConfig = DEFAULT_CONFIG,
) -> int:
    key = _mode_key(mode)
    wt, wc = config.weights_for(key)
    if key in config.gated_modes and (transit_count == 0 or culture_count == 0):
        return 0
    return wt * transit_count + wc * culture_count


def label_counts(hotel_id: str, relations: Iterable[Relation]) -> tuple[int, int]:
    """(TRANSIT_ACCESS, WALKABLE_TO) edges incident to `hotel_id`."""
    t = c = 0
    for r in relations:
        if not r.touches(hotel_id):
            continue
        if r.label is EdgeLabel.TRANSIT_ACCESS:
            t += 1
        elif r.label is EdgeLabel.WALKABLE_TO:
            c += 1
    return t, c


def rank_hotels(
    entities: Sequence[Entity],
    relations: Sequence[Relation],
    mode: QueryMode | str,
    config: OntologyConfig = DEFAULT_CONFIG,
) -> list[RankedHotel]:
    """Top hotels by score under `mode`.

    Counts come from the relations, not from `degree`, which mixes labels.
    Non-positive scores are dropped; ties break on ascending entity id.
    """
    key = _mode_key(mode)
    config.weights_for(key)  # reject unknown modes even when there are no hotels

    ranked: list[RankedHotel] = []
    for hotel in entities:
        if hotel.node_class != NodeClass.HOTEL:
            continue
        t, c = label_counts(hotel.id, relations)
        score = score_hotel(t, c, key, config)
        if score <= 0:
            continue
        ranked.append(RankedHotel(hotel=hotel, transit_count=t, culture_count=c, score=score))

    ranked.sort(key=lambda r: (-r.score, r.hotel.id))
    return ranked[: config.result_cap]


def _mode_title(key: str) -> str:
    try:
        return MODE_INFO[QueryMode(key)].label
    except ValueError:
        return key


def cypher_for(mode: QueryMode | str, config: OntologyConfig = DEFAULT_CONFIG) -> str:
    """Cypher-style rendering of what `rank_hotels` computes for `mode`."""
    key = _mode_key(mode)
    wt, wc = config.weights_for(key)
    limit = config.result_cap
    if key in config.gated_modes:
        return (
            f"// {_mode_title(key)}, both edge types required\n"
            "MATCH (h:Hotel)-[:TRANSIT_ACCESS]->(s:Subway)\n"
            "MATCH (h)-[:WALKABLE_TO]->(a:Attraction)\n"
            f"WITH h, {wt}*COUNT(DISTINCT s) + {wc}*COUNT(DISTINCT a) AS score\n"
            "RETURN h.name, score\n"
            f"ORDER BY score DESC, h.id LIMIT {limit}"
        )
    return (
        f"// {_mode_title(key)}\n"
        "MATCH (h:Hotel)\n"
        "OPTIONAL MATCH (h)-[:TRANSIT_ACCESS]->(s:Subway)\n"
        "OPTIONAL MATCH (h)-[:WALKABLE_TO]->(a:Attraction)\n"
        f"WITH h, {wt}*COUNT(DISTINCT s) + {wc}*COUNT(DISTINCT a) AS score\n"
        "WHERE score > 0\n"
        "RETURN h.name, score\n"
        f"ORDER BY score DESC, h.id LIMIT {limit}"
    )


@dataclass(frozen=True)
class GraphQueryEngine:
    """Stateless query helpers over one snapshot."""

    snapshot: GraphSnapshot
    config: OntologyConfig = DEFAULT_CONFIG

    def rank(self, mode: QueryMode | str) -> list[RankedHotel]:
        return rank_hotels(self.snapshot.entities, self.snapshot.relations, mode, self.config)

    def neighbors(self, entity_id: str) -> list[tuple[Entity, EdgeLabel]]:
        out: list[tuple[Entity, EdgeLabel]] = []
        for r in self.snapshot.relations:
            if not r.touches(entity_id):
                continue
            other_id = r.target_id if r.source_id == entity_id else r.source_id
            other = self.snapshot.get(other_id)
            if other is not None:
                out.append((other, r.label))
        return out

    def summary(self) -> dict[str, int]:
        counts = {c.value: 0 for c in NodeClass}
        for e in self.snapshot.entities:
            counts[e.node_class.value] += 1
        counts["relations"] = len(self.snapshot.relations)
        return counts
