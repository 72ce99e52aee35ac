from __future__ import annotations

from collections import Counter
from collections.abc import Iterable, Sequence
from dataclasses import replace

from .models import Entity, Relation


def degree_map(relations: Iterable[Relation]) -> dict[str, int]:
    counts: Counter[str] = Counter()
    for r in relations:
        counts[r.source_id] += 1
        counts[r.target_id] += 1
    return dict(counts)


def apply_degrees(entities: Sequence[Entity], relations: Iterable[Relation]) -> list[Entity]:
    """Return copies of `entities` with `degree` recomputed from scratch."""
    degrees = degree_map(relations)
    return [replace(e, degree=degrees.get(e.id, 0)) for e in entities]


def check_endpoints(entities: Iterable[Entity], relations: Iterable[Relation]) -> None:
    """Fail loudly on an edge pointing at an entity outside the run."""
    ids = {e.id for e in entities}
    for r in relations:
        for endpoint in (r.source_id, r.target_id):
            if endpoint not in ids:
                raise AssertionError(f"dangling relation endpoint: {endpoint} ({r.label.value})")
