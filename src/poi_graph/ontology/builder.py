from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from pydantic import ValidationError

from .classify import classify_tags
from .models import Entity, RawElement

logger = logging.getLogger(__name__)


def coerce_elements(items: Iterable[RawElement | Mapping[str, Any]]) -> list[RawElement]:
    """Validate raw dicts into `RawElement`s, dropping the ones that don't fit."""
    out: list[RawElement] = []
    dropped = 0
    for item in items:
        if isinstance(item, RawElement):
            out.append(item)
            continue
        try:
            out.append(RawElement.model_validate(item))
        except ValidationError:
            dropped += 1
    if dropped:
        logger.debug("dropped %d structurally invalid elements", dropped)
    return out


def resolve_name(tags: Mapping[str, str], osm_id: int) -> str:
    # name -> name:en -> synthetic
    for key in ("name", "name:en"):
        value = tags.get(key)
        if value is not None:
            return value
    return f"OSM {osm_id}"


def build_entities(elements: Iterable[RawElement | Mapping[str, Any]]) -> list[Entity]:
    """Turn raw elements into deduplicated, classified entities.

    First occurrence of a `{type}-{id}` key wins. Elements with no usable
    coordinate (neither point nor centroid) never become entities.
    """
    seen: set[str] = set()
    entities: list[Entity] = []
    no_coords = 0
    duplicates = 0

    for el in coerce_elements(elements):
        coords = el.coordinates()
        if coords is None:
            no_coords += 1
            continue
        key = el.key
        if key in seen:
            duplicates += 1
            continue
        seen.add(key)

        tags = el.tags or {}
        lat, lon = coords
        entities.append(
            Entity(
                id=key,
                name=resolve_name(tags, el.id),
                node_class=classify_tags(tags),
                lat=lat,
                lon=lon,
            )
        )

    logger.debug(
        "built %d entities (skipped %d without coordinates, %d duplicates)",
        len(entities),
        no_coords,
        duplicates,
    )
    return entities
