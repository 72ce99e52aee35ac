from __future__ import annotations

from collections.abc import Mapping

from .models import NodeClass

# Hierarchy the leaves hang from. Informational only; entities store the leaf.
TAXONOMY: dict[NodeClass, tuple[str, ...]] = {
    NodeClass.HOTEL: ("Commercial", "Hospitality", "Hotel"),
    NodeClass.SUBWAY: ("Infrastructure", "Transit", "Subway"),
    NodeClass.ATTRACTION: ("Cultural", "Attraction"),
}


def classify_tags(tags: Mapping[str, str] | None) -> NodeClass:
    """Map raw OSM tags to exactly one taxonomy leaf.

    Rules are checked in priority order; the last one is a catch-all, so an
    empty or unexpected tag set is an Attraction. Callers that need strictness
    should filter with the same predicates the Overpass query uses.
    """
    tags = tags or {}
    if tags.get("tourism") == "hotel":
        return NodeClass.HOTEL
    if tags.get("railway") == "station" and tags.get("station") == "subway":
        return NodeClass.SUBWAY
    return NodeClass.ATTRACTION
