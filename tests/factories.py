from __future__ import annotations

import math

from poi_graph.ontology.geo import EARTH_RADIUS_M
from poi_graph.ontology.models import Entity, NodeClass

HOTEL = {"tourism": "hotel"}
SUBWAY = {"railway": "station", "station": "subway"}
MUSEUM = {"tourism": "museum"}


def node(osm_id: int, lat: float | None, lon: float | None, **tags: str) -> dict:
    el: dict = {"type": "node", "id": osm_id, "tags": dict(tags)}
    if lat is not None:
        el["lat"] = lat
    if lon is not None:
        el["lon"] = lon
    return el


def entity(eid: str, cls: NodeClass, lat: float, lon: float) -> Entity:
    return Entity(id=eid, name=eid, node_class=cls, lat=lat, lon=lon)


def north_of(lat: float, meters: float) -> float:
    # Along a meridian the haversine distance is exactly R * dlat.
    return lat + math.degrees(meters / EARTH_RADIUS_M)
