from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict


class NodeClass(str, Enum):
    """Closed set of taxonomy leaves an entity can be classified into."""

    HOTEL = "Hotel"
    SUBWAY = "Subway"
    ATTRACTION = "Attraction"


class EdgeLabel(str, Enum):
    TRANSIT_ACCESS = "TRANSIT_ACCESS"
    WALKABLE_TO = "WALKABLE_TO"


@dataclass(frozen=True, slots=True)
class Entity:
    """A classified point of interest.

    `id` combines the OSM element kind and numeric id (`node-42`, `way-42`) so
    points and areal features never collide. `degree` is owned by the
    centrality step and is zero until it runs.
    """

    id: str
    name: str
    node_class: NodeClass
    lat: float
    lon: float
    degree: int = 0


@dataclass(frozen=True, slots=True)
class Relation:
    """A labeled edge. Stored directed (hotel first), counted undirected."""

    source_id: str
    target_id: str
    label: EdgeLabel

    @property
    def key(self) -> tuple[str, str, EdgeLabel]:
        return (self.source_id, self.target_id, self.label)

    def touches(self, entity_id: str) -> bool:
        return self.source_id == entity_id or self.target_id == entity_id


@dataclass(frozen=True)
class GraphSnapshot:
    """Immutable result of one derivation run.

    Consumers that need to mutate edge endpoints (force layouts do) must work
    from `copy_relations()`, never from `relations`.
    """

    entities: tuple[Entity, ...] = ()
    relations: tuple[Relation, ...] = ()

    def by_class(self, node_class: NodeClass) -> list[Entity]:
        return [e for e in self.entities if e.node_class == node_class]

    def get(self, entity_id: str) -> Entity | None:
        for e in self.entities:
            if e.id == entity_id:
                return e
        return None

    def copy_relations(self) -> list[dict[str, Any]]:
        return [
            {"source": r.source_id, "target": r.target_id, "label": r.label.value}
            for r in self.relations
        ]

    def to_dict(self) -> dict[str, Any]:
        return {
            "entities": [
                {
                    "id": e.id,
                    "name": e.name,
                    "class": e.node_class.value,
                    "lat": e.lat,
                    "lon": e.lon,
                    "degree": e.degree,
                }
                for e in self.entities
            ],
            "relations": self.copy_relations(),
        }


class LatLon(BaseModel):
    lat: float
    lon: float


class RawElement(BaseModel):
    """One element of an Overpass `out center;` response."""

    model_config = ConfigDict(extra="ignore")

    type: Literal["node", "way", "relation"]
    id: int
    lat: float | None = None
    lon: float | None = None
    center: LatLon | None = None
    tags: dict[str, str] | None = None

    @property
    def key(self) -> str:
        return f"{self.type}-{self.id}"

    def coordinates(self) -> tuple[float, float] | None:
        """Direct point first, then the precomputed centroid."""
        lat = self.lat if self.lat is not None else (self.center.lat if self.center else None)
        lon = self.lon if self.lon is not None else (self.center.lon if self.center else None)
        if lat is None or lon is None:
            return None
        if not (math.isfinite(lat) and math.isfinite(lon)):
            return None
        return lat, lon
